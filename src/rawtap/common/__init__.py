"""
RawTap Common Utilities

Shared errors and helpers used across RawTap modules.
"""

from .errors import RawTapError, RequestFileError, RequestFormatError, ReplacementError
from .utils import parse_replacements, split_pairs, strip_line_ending

__all__ = [
    'RawTapError',
    'RequestFileError',
    'RequestFormatError',
    'ReplacementError',
    'parse_replacements',
    'split_pairs',
    'strip_line_ending',
]
