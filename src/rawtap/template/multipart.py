"""
RawTap Multipart Decomposer

Splits a multipart/form-data body into sections using the boundary
declared in the Content-Type header.
"""

import logging
import re
from typing import List

from ..common import RequestFormatError
from .models import Section

BLANK_LINE = re.compile(r'\r?\n\r?\n')


class MultipartDecomposer:
    """
    Decompose a multipart/form-data body into a list of sections.

    This is a simplified splitter rather than a MIME parser:
    - The boundary is taken from ``boundary=`` with every '-' removed, so a
      boundary with embedded dashes will not match the body
    - Delimiters are any run of dashes followed by the boundary
    - Content-Disposition parameters are flattened into the section
    - Header names and values are whitespace-trimmed, and parameter values
      lose one pair of surrounding double quotes

    Example:
        decomposer = MultipartDecomposer()
        sections = decomposer.decompose(body, 'multipart/form-data; boundary=----abc')
        sections[0]['name'], sections[0]['body']
    """

    def __init__(self):
        self.logger = logging.getLogger("rawtap.multipart")

    def extract_boundary(self, content_type: str) -> str:
        """
        Get the working boundary token from a Content-Type value.

        Raises:
            RequestFormatError: If the value is not exactly 'type; boundary=...'
        """
        segments = content_type.strip().split(';')
        if len(segments) != 2:
            raise RequestFormatError("failed to parse form boundary", content_type)

        _, marker, token = segments[1].partition('boundary=')
        boundary = token.strip().replace('-', '')
        if not marker or not boundary:
            raise RequestFormatError("failed to parse form boundary", content_type)

        return boundary

    def decompose(self, body: str, content_type: str) -> List[Section]:
        """
        Split a multipart body into sections in body order.

        Args:
            body: Raw request body
            content_type: Content-Type value carrying the boundary parameter

        Returns:
            List of sections, each with a 'body' key

        Raises:
            RequestFormatError: If the boundary or a section is malformed
        """
        boundary = re.escape(self.extract_boundary(content_type))

        closing = re.compile(r'-+' + boundary + r'--\Z')
        delimiter = re.compile(r'-+' + boundary + r'\r?\n')

        remaining = closing.sub('', body)
        sections = [self._build_section(segment)
                    for segment in delimiter.split(remaining) if segment]

        self.logger.debug(f"Decomposed multipart body into {len(sections)} sections")
        return sections

    def _build_section(self, segment: str) -> Section:
        """Turn one delimited segment into a section mapping."""
        parts = BLANK_LINE.split(segment, maxsplit=1)
        if len(parts) != 2:
            raise RequestFormatError("multipart section has no blank line after its headers",
                                     segment[:80])

        header_block, payload = parts
        section = {'body': payload}

        for line in header_block.splitlines():
            name, sep, value = line.partition(':')
            if not sep:
                raise RequestFormatError("malformed multipart section header", line)
            name = name.strip()

            if '; ' not in value:
                section[name] = value.strip()
                continue

            fragments = value.split('; ')
            section[name] = fragments[0].strip()
            for fragment in fragments[1:]:
                key, _, param = fragment.partition('=')
                section[key.strip()] = _unquote(param.strip())

        return section


def _unquote(value: str) -> str:
    """Remove one pair of surrounding double quotes."""
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value
