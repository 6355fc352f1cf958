"""
RawTap Output Helpers

Formats responses for the terminal and writes prepared requests back out in
raw request file format.
"""

from pathlib import Path
from urllib.parse import urlsplit

import requests

HTTP_VERSIONS = {9: 'HTTP/0.9', 10: 'HTTP/1.0', 11: 'HTTP/1.1', 20: 'HTTP/2'}


def response_protocol(response: requests.Response) -> str:
    """Protocol label of a response, e.g. 'HTTP/1.1'."""
    version = getattr(response.raw, 'version', None)
    return HTTP_VERSIONS.get(version, 'HTTP/1.1')


def format_status(response: requests.Response) -> str:
    """Status line without protocol, e.g. '200 OK'."""
    return f"{response.status_code} {response.reason or ''}".rstrip()


def format_response(response: requests.Response) -> str:
    """
    Render a full response: status line, headers, blank line, body.

    Args:
        response: Response returned by the transport

    Returns:
        Multi-line string ready for printing
    """
    lines = [f"{response_protocol(response)} {format_status(response)}"]
    for name, value in response.headers.items():
        lines.append(f"{name}: {value}")
    lines.append('')
    lines.append(response.text)
    return '\n'.join(lines)


def format_raw_request(prepared: requests.PreparedRequest) -> str:
    """
    Render a prepared request in raw request file format.

    The body is only written for methods other than GET, matching how
    captured GET requests are stored.
    """
    parts = urlsplit(prepared.url)
    target = parts.path or '/'
    if parts.query:
        target = f"{target}?{parts.query}"

    host = _header_text(prepared.headers.get('Host')) or parts.netloc
    headers = [(name, _header_text(value)) for name, value in prepared.headers.items()
               if name.lower() != 'host']

    lines = [f"{prepared.method} {target} HTTP/1.1", f"Host: {host}"]
    lines.extend(f"{name}: {value}" for name, value in headers)
    text = '\n'.join(lines) + '\n'

    if prepared.method != 'GET':
        body = prepared.body or b''
        if isinstance(body, bytes):
            body = body.decode('utf-8', 'surrogateescape')
        text += '\n' + body + '\n'

    return text


def dump_raw_request(prepared: requests.PreparedRequest, path: str) -> Path:
    """Write a prepared request to ``path`` in raw request file format."""
    output = Path(path)
    with open(output, 'w', encoding='utf-8', errors='surrogateescape', newline='\n') as f:
        f.write(format_raw_request(prepared))
    return output


def _header_text(value) -> str:
    """Header value as text; outgoing values may be raw bytes."""
    if isinstance(value, bytes):
        return value.decode('utf-8', 'surrogateescape')
    return value or ''
