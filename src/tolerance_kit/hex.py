"""Lenient hexadecimal encoding used for printing and reading seeds."""

from __future__ import annotations

_HEX_DIGITS = "0123456789abcdef"
_DECODE_TABLE: dict[str, int] = {
    **{digit: value for value, digit in enumerate(_HEX_DIGITS)},
    **{digit: value for value, digit in enumerate(_HEX_DIGITS.upper()) if value >= 10},
}


def encode(data: bytes | bytearray | None) -> str:
    """Encode bytes as lower-case hex; ``None`` and empty input give ``""``."""
    if not data:
        return ""
    return "".join(_HEX_DIGITS[byte >> 4] + _HEX_DIGITS[byte & 0xF] for byte in data)


def decode(text: str | None) -> bytes:
    """Decode hex text (either case) to bytes.

    An odd-length string is treated as if padded with a trailing ``0`` so the last
    digit fills the high nibble of the final byte. Any character that is not a hex
    digit makes the whole result empty.
    """
    if not text:
        return b""
    nibbles: list[int] = []
    for char in text:
        nibble = _DECODE_TABLE.get(char)
        if nibble is None:
            return b""
        nibbles.append(nibble)
    if len(nibbles) % 2:
        nibbles.append(0)
    return bytes((nibbles[i] << 4) | nibbles[i + 1] for i in range(0, len(nibbles), 2))
