"""
RawTap Errors

Exception hierarchy shared by the template engine, the request builder
and the CLI.
"""

from typing import Optional


class RawTapError(Exception):
    """Base class for all RawTap errors."""


class RequestFileError(RawTapError):
    """The request file could not be opened or read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"could not read request file {path}: {reason}")


class RequestFormatError(RawTapError, ValueError):
    """
    The request text does not follow the raw request format.

    Args:
        message: Description of what failed
        fragment: The offending piece of input, if known
    """

    def __init__(self, message: str, fragment: Optional[str] = None):
        self.message = message
        self.fragment = fragment
        if fragment is not None:
            message = f"{message}: {fragment!r}"
        super().__init__(message)


class ReplacementError(RequestFormatError):
    """A command-line replacement pair is not of the form name=value."""

    def __init__(self, pair: str):
        super().__init__("bad replacement string", pair)
