"""
utils/zero_width.py
-------------------
Encodes text as invisible characters so it can ride along inside
visible text (e.g. an embed title) without being shown to users.

Every UTF-8 byte becomes two code points, one per nibble. Nibble ``n``
is written as ``U+2060 + n``; ``U+2065`` is unassigned so nibble 5
uses ``U+200B`` instead.
"""

from typing import Optional

_BASE = 0x2060
_FIVE = "\u200b"
# separates the visible part from the encoded part
MARKER = "\u200f"


def _nibble_char(nibble: int) -> str:
    return _FIVE if nibble == 5 else chr(_BASE + nibble)


def _char_nibble(char: str) -> int:
    if char == _FIVE:
        return 5
    nibble = ord(char) - _BASE
    if not 0 <= nibble <= 0xF or nibble == 5:
        raise ValueError(f"Not a zero-width nibble: U+{ord(char):04X}")
    return nibble


def encode(text: str) -> str:
    """Encode ``text`` as a string of zero-width characters."""
    return "".join(
        _nibble_char(byte >> 4) + _nibble_char(byte & 0xF)
        for byte in text.encode("utf-8")
    )


def decode(encoded: str) -> str:
    """
    Decode a string produced by :func:`encode`.

    Raises:
        ValueError: On odd length, foreign characters or invalid UTF-8.
    """
    if len(encoded) % 2:
        raise ValueError("Encoded text must have an even length")
    data = bytes(
        (_char_nibble(encoded[i]) << 4) | _char_nibble(encoded[i + 1])
        for i in range(0, len(encoded), 2)
    )
    return data.decode("utf-8")


def append(visible: str, hidden: str) -> str:
    """Return ``visible`` followed by the marker and the encoded ``hidden``."""
    return visible + MARKER + encode(hidden)


def decode_appended(text: str) -> Optional[str]:
    """Recover the hidden part of a string built by :func:`append`."""
    index = text.rfind(MARKER)
    if index < 0:
        return None
    try:
        return decode(text[index + 1:])
    except ValueError:
        return None
