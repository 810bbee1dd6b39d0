"""
Small, focused text cleaning utilities.
"""

import re


_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_NON_BREAKING_SPACES = re.compile("[\u00a0\u202f]")


def normalize_whitespace(value: str) -> str:
    """Collapse unusual whitespace into single ASCII spaces.

    Example:
        >>> normalize_whitespace("a\\u00a0b\\u200bb\\t c ")
        'a bb c'
    """

    clean = _NON_BREAKING_SPACES.sub(" ", value)
    clean = _ZERO_WIDTH.sub("", clean)
    clean = re.sub(r"[ \t\r\f\v]+", " ", clean)
    return clean.strip()
