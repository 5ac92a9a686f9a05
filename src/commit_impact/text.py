"""ASCII-only string helpers.

Commit messages are matched the same way whatever their encoding: only ASCII
letters are case-folded and only ASCII whitespace is trimmed, so characters
such as U+212A KELVIN SIGN or a non-breaking space are left alone.
"""

import string

TRIM_CHARS = " \t\n\r\0\x0b"

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(value: str) -> str:
    return value.translate(_ASCII_LOWER)


def ascii_strip(value: str) -> str:
    return value.strip(TRIM_CHARS)
