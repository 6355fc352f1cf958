"""
RawTap Common Utilities

Small helpers shared by the parser and the CLI.
"""

from typing import Dict, Iterable, Optional

from .errors import ReplacementError


def parse_replacements(pairs: Optional[Iterable[str]]) -> Dict[str, str]:
    """
    Turn ``name=value`` strings into a substitution mapping.

    Only the first '=' separates name from value, so values may contain '='.
    A later pair with the same name overrides an earlier one.

    Args:
        pairs: Strings collected from repeated -R options

    Returns:
        Dict mapping token names to replacement values

    Raises:
        ReplacementError: If a pair has no '='

    Example:
        parse_replacements(['infile=./test.txt'])  # {'infile': './test.txt'}
    """
    replacements = {}
    for pair in pairs or []:
        name, sep, value = pair.partition('=')
        if not sep:
            raise ReplacementError(pair)
        replacements[name] = value
    return replacements


def split_pairs(text: str) -> Dict[str, str]:
    """
    Split an ``a=1&b=2`` string into a dict.

    Each pair is split on its first '=' only. Pairs without '=' and pairs
    with an empty name are skipped. Values are kept exactly as written,
    without URL decoding. A repeated name keeps the last value.
    """
    result = {}
    for pair in text.split('&'):
        key, sep, value = pair.partition('=')
        if not sep or not key:
            continue
        result[key] = value
    return result


def strip_line_ending(text: str) -> str:
    """Remove exactly one trailing CRLF or LF, if present."""
    if text.endswith('\r\n'):
        return text[:-2]
    if text.endswith('\n'):
        return text[:-1]
    return text
