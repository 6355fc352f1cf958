"""
RawTap CLI

Command-line interface for replaying a raw HTTP request file.

Examples:
    # Replay over HTTP, print the status line
    rawtap --file login.txt

    # Replay over HTTPS with substitutions and print the full response
    rawtap --file upload.txt --https -R infile=./test.txt -R user=alice --resp

    # Route through an intercepting proxy and keep a copy of what was sent
    rawtap --file login.txt --proxy http://127.0.0.1:8080 --save-request sent.txt
"""

import argparse
import logging
import sys
from typing import List, Optional

import requests
import yaml

from .common import RawTapError, parse_replacements
from .replay import RawRequestReplayer, ReplayConfig
from .replay.printer import format_response, format_status


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='rawtap',
        description="RawTap - replay a captured raw HTTP request file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Replay a request file over HTTP
  %(prog)s --file request.txt

  # Replace {{infile}} with ./test.txt and print the full response
  %(prog)s --file request.txt -R infile=./test.txt --resp

  # HTTPS through a proxy
  %(prog)s --file request.txt --https --proxy http://127.0.0.1:8080
        """
    )

    parser.add_argument('-file', '--file', dest='file', help='The request file to replay')
    parser.add_argument('-R', '--replace', dest='replacements', action='append', metavar='NAME=VALUE',
                        help='Replace {{NAME}} in the request file with VALUE. Use multiple times '
                             '(-R infile=./test.txt will replace {{infile}} with ./test.txt)')
    parser.add_argument('-https', '--https', dest='https', action='store_true',
                        help='HTTPS request, defaults to HTTP')
    parser.add_argument('-resp', '--resp', dest='resp', action='store_true',
                        help='Print the full response')
    parser.add_argument('--proxy', help='Proxy URL (e.g., http://127.0.0.1:8080)')
    parser.add_argument('--timeout', type=int, help='Request timeout in seconds (default: 30)')
    parser.add_argument('--verify-ssl', action='store_true', help='Verify TLS certificates (off by default)')
    parser.add_argument('--config', help='YAML config file with defaults and variables')
    parser.add_argument('--save-request', metavar='PATH', help='Write the outgoing request to PATH')
    parser.add_argument('-o', '--output', help='Save the replay result to a JSON file')
    parser.add_argument('--log-level', choices=['debug', 'info', 'warning', 'error'],
                        help='Log level (default: warning)')

    return parser


def load_config(args: argparse.Namespace) -> ReplayConfig:
    """Build the effective config from the optional file and the CLI."""
    config = ReplayConfig.from_yaml(args.config) if args.config else ReplayConfig()
    return config.merge_cli(
        https=args.https,
        variables=parse_replacements(args.replacements),
        proxy=args.proxy,
        timeout=args.timeout,
        verify_ssl=args.verify_ssl,
        dump_response=args.resp,
        log_level=args.log_level
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit status: 0 on success, 1 on any error
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.file:
        print()
        print("❌ Nothing to replay: --file is required")
        print()
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except (RawTapError, ValueError, TypeError, OSError, yaml.YAMLError) as e:
        print(f"❌ Invalid configuration: {e}")
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format='%(asctime)s %(name)s %(levelname)s %(message)s'
    )

    replayer = RawRequestReplayer(config)
    try:
        result = replayer.replay(args.file, save_request=args.save_request)
    except RawTapError as e:
        print(f"❌ Failed to load request: {e}")
        return 1
    except requests.exceptions.RequestException as e:
        print(f"❌ Request failed: {e}")
        return 1
    except OSError as e:
        print(f"❌ Failed to save request: {e}")
        return 1
    finally:
        replayer.transport.close()

    if config.dump_response:
        print(format_response(result.response))
    else:
        print(format_status(result.response))

    if args.output:
        try:
            replayer.save_result(result, args.output)
        except OSError as e:
            print(f"❌ Failed to save result: {e}")
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
