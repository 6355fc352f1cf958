"""
RawTap Request Builder

Converts a parsed RequestConfig into a requests.Request for the transport.
"""

import logging
from typing import Dict
from urllib.parse import urlencode

import requests

from ..common import RequestFormatError
from ..template.models import RequestConfig
from ..template.parser import ENCODING, ENCODING_ERRORS


class RequestBuilder:
    """
    Build executable requests from RequestConfig objects.

    The outgoing query string is encoded from ``params`` only. The
    ``query`` mapping parsed from the request line is not re-attached, so a
    query string in the request file is dropped from the sent URL.
    """

    def __init__(self):
        self.logger = logging.getLogger("rawtap.builder")

    def build_url(self, config: RequestConfig) -> str:
        """Combine the base URL with the encoded form params."""
        if not config.params:
            return config.url
        return f"{config.url}?{urlencode(sorted(config.params.items()))}"

    def build_headers(self, config: RequestConfig) -> Dict[str, bytes]:
        """
        Copy headers and force Content-Type to the parsed content type.

        Values are encoded back to the bytes they were read from, so non
        Latin-1 text and undecodable bytes are sent unchanged. Every
        Content-Type header, in any case, is replaced by a single one. When
        no content type was parsed, no Content-Type header is added rather
        than an empty one.

        Raises:
            RequestFormatError: If a header name is not ASCII
        """
        headers = {}
        for name, value in config.headers.items():
            if config.content_type and name.lower() == 'content-type':
                continue
            if not name.isascii():
                raise RequestFormatError("header name must be ASCII", name)
            headers[name] = value.encode(ENCODING, ENCODING_ERRORS)

        if config.content_type:
            headers['Content-Type'] = config.content_type.encode(ENCODING, ENCODING_ERRORS)
        return headers

    def build(self, config: RequestConfig) -> requests.Request:
        """
        Create an unprepared request. No network I/O is done here.

        Args:
            config: Fully decoded RequestConfig

        Returns:
            requests.Request with method, URL, headers and raw body bytes
        """
        url = self.build_url(config)
        self.logger.debug(f"Building {config.method} {url}")

        return requests.Request(
            method=config.method,
            url=url,
            headers=self.build_headers(config),
            data=config.raw_body.encode(ENCODING, ENCODING_ERRORS)
        )
