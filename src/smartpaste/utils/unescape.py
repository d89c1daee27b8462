"""Decode backslash escapes in model output.

Models frequently return literal ``\\n`` sequences instead of line breaks.
``unescape_text`` turns them back into the characters they stand for. Escaped
punctuation decodes to itself; an escaped letter or digit that is not a known
sequence, or a dangling trailing backslash, raises ``UnescapeError``.
"""

from __future__ import annotations

import re

from ..errors import UnescapeError

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

_ESCAPE_RE = re.compile(
    r"\\(?:([0-7]{1,3})|x([0-9A-Fa-f]{2})|u([0-9A-Fa-f]{4})|c([A-Za-z@\[\\\]^_])|(.?))",
    re.DOTALL,
)


def _decode(match: re.Match) -> str:
    octal, hex2, hex4, control, other = match.groups()
    if octal is not None:
        return chr(int(octal, 8) & 0xFF)
    if hex2 is not None:
        return chr(int(hex2, 16))
    if hex4 is not None:
        return chr(int(hex4, 16))
    if control is not None:
        return chr(ord(control.upper()) ^ 0x40)
    if other == "":
        raise UnescapeError("Illegal \\ at end of text")
    if other in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[other]
    if other.isalnum() or other == "_":
        raise UnescapeError(f"Unrecognized escape sequence \\{other}")
    return other


def unescape_text(text: str) -> str:
    """Return ``text`` with backslash escape sequences decoded."""
    if "\\" not in text:
        return text
    return _ESCAPE_RE.sub(_decode, text)
