#!/usr/bin/env python3
"""
RawTap - replay a captured raw HTTP request file

This is a convenience wrapper that calls the packaged implementation.
The actual implementation is in src/rawtap/cli.py

Usage:
    python rawtap.py --file request.txt -R user=alice --resp

For more information, run with --help
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from rawtap.cli import main

if __name__ == '__main__':
    sys.exit(main())
