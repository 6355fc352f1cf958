"""
RawTap Raw Request Parser

Parses a captured HTTP request stored as plain text into a RequestConfig.

File format:
    <METHOD> <PATH-or-absolute-URL> <PROTOCOL>
    <Header-Name>: <Header-Value>
    ...
    <blank line>
    <body>
"""

import logging
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Tuple
from urllib.parse import urlsplit

from ..common import RequestFileError, RequestFormatError, split_pairs, strip_line_ending
from .body import ContentBodyDecoder
from .models import RequestConfig
from .variables import VariableSubstitutor

ENCODING = 'utf-8'
# Undecodable bytes survive the str round trip and are sent back verbatim
ENCODING_ERRORS = 'surrogateescape'


class RawRequestParser:
    """
    Tokenize a raw request file into a RequestConfig.

    Template tokens are substituted into every line of the request head and
    into the whole body before anything is interpreted, so tokens may appear
    in the method, the URL, header names or values, and the body.

    Example:
        parser = RawRequestParser(scheme='https', variables={'id': '42'})
        config = parser.parse_file('request.txt')
        print(config.method, config.url)
    """

    def __init__(
        self,
        scheme: str = 'http',
        variables: Optional[Dict[str, str]] = None,
        body_decoder: Optional[ContentBodyDecoder] = None
    ):
        """
        Initialize parser.

        Args:
            scheme: 'http' or 'https', used when the request line holds a path
            variables: Optional template substitutions
            body_decoder: Optional ContentBodyDecoder (will create if None)
        """
        self.scheme = scheme
        self.substitutor = VariableSubstitutor(variables)
        self.body_decoder = body_decoder or ContentBodyDecoder()
        self.logger = logging.getLogger("rawtap.parser")

    def parse_file(self, path: str) -> RequestConfig:
        """
        Parse a request file from disk.

        Raises:
            RequestFileError: If the file cannot be opened or read
            RequestFormatError: If the content is malformed
        """
        file_path = Path(path)
        try:
            with open(file_path, 'rb') as f:
                return self.parse(f)
        except OSError as e:
            raise RequestFileError(str(file_path), e.strerror or str(e)) from e

    def parse(self, stream: BinaryIO) -> RequestConfig:
        """
        Parse a request from a binary stream.

        Args:
            stream: Stream positioned at the request line

        Returns:
            Fully decoded RequestConfig

        Raises:
            RequestFormatError: If the content is malformed
        """
        config = RequestConfig(scheme=self.scheme)

        method, target = self._read_request_line(stream)
        config.method = method

        self._read_headers(stream, config)
        self._resolve_url(target, config)

        body = self.substitutor.substitute(self._decode(stream.read()))
        config.raw_body = strip_line_ending(body)

        self.body_decoder.decode(config)

        self.logger.debug(f"Parsed {config.method} {config.url} "
                          f"({len(config.headers)} headers, {len(config.raw_body)} body chars)")
        return config

    def _decode(self, data: bytes) -> str:
        return data.decode(ENCODING, ENCODING_ERRORS)

    def _read_request_line(self, stream: BinaryIO) -> Tuple[str, str]:
        """Return (method, path-or-URL) from the first line."""
        raw = stream.readline()
        if not raw:
            raise RequestFormatError("could not read request line")

        line = strip_line_ending(self.substitutor.substitute(self._decode(raw)))
        parts = line.split(' ')
        if len(parts) < 3:
            raise RequestFormatError("malformed request supplied", line)

        return parts[0], parts[1]

    def _read_headers(self, stream: BinaryIO, config: RequestConfig):
        """Read header lines up to the first blank line or end of stream."""
        content_type_seen = False

        while True:
            raw = stream.readline()
            if not raw:
                break

            line = self.substitutor.substitute(self._decode(raw)).strip()
            if not line:
                break

            name, sep, value = line.partition(':')
            if not sep:
                self.logger.debug(f"Skipping header line without colon: {line!r}")
                continue

            name = name.strip()
            value = value.strip()

            if name.lower() == 'content-length':
                self.logger.debug("Dropping Content-Length header, length is derived from the body")
                continue

            if name.lower() == 'content-type' and not content_type_seen:
                config.content_type = value
                content_type_seen = True

            config.headers[name] = value

    def _resolve_url(self, target: str, config: RequestConfig):
        """Compose the absolute URL and split off its query string."""
        if target.startswith('http'):
            try:
                parsed = urlsplit(target)
            except ValueError as e:
                raise RequestFormatError(f"could not parse request URL ({e})", target) from e
            # An absolute URL in the request line wins over any Host header
            config.headers['Host'] = parsed.netloc.rpartition('@')[2]
            full_url = target
        else:
            host = config.headers.get('Host', '')
            if not host:
                self.logger.warning(f"No Host header for path {target!r}, URL will have an empty host")
            full_url = f"{config.scheme}://{host}{target}"

        base, sep, query = full_url.partition('?')
        config.url = base
        if sep:
            config.query = split_pairs(query)
