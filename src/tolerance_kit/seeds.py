"""Random seed generation and conversion between byte and integer forms."""

from __future__ import annotations

import random
import secrets
from dataclasses import dataclass

import numpy as np

from tolerance_kit import hex as hex_codec

_LONG_BYTES = 8
_INT_BYTES = 4


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def zero_bytes(data: bytes | None) -> bool:
    """True when ``data`` is ``None`` or contains only zero bytes."""
    return data is None or not any(data)


def null_or_empty(data: bytes | None) -> bool:
    return data is None or len(data) == 0


def generate_seed(size: int, *, secure: bool = True) -> bytes:
    """Generate ``size`` random bytes, from the OS entropy source when ``secure``."""
    if size < 0:
        raise ValueError(f"Seed size must not be negative: {size}")
    if secure:
        return secrets.token_bytes(size)
    return random.randbytes(size)


def make_byte_array_from_longs(*values: int) -> bytes:
    """Pack 64-bit values big-endian."""
    return b"".join((value & 0xFFFFFFFFFFFFFFFF).to_bytes(_LONG_BYTES, "big") for value in values)


def make_byte_array_from_ints(*values: int) -> bytes:
    """Pack 32-bit values big-endian."""
    return b"".join((value & 0xFFFFFFFF).to_bytes(_INT_BYTES, "big") for value in values)


def _unpack(data: bytes, width: int) -> list[int]:
    remainder = len(data) % width
    padded = bytes(data) + bytes(width - remainder if remainder else 0)
    return [
        int.from_bytes(padded[start : start + width], "big", signed=True)
        for start in range(0, len(padded), width)
    ]


def make_long_array(data: bytes) -> list[int]:
    """Unpack big-endian signed 64-bit values; a short final chunk is zero-filled."""
    return _unpack(data, _LONG_BYTES)


def make_int_array(data: bytes) -> list[int]:
    """Unpack big-endian signed 32-bit values; a short final chunk is zero-filled."""
    return _unpack(data, _INT_BYTES)


def make_long(data: bytes) -> int:
    """Fold bytes into a signed 64-bit value by XOR of the packed longs."""
    result = 0
    for value in make_long_array(data):
        result ^= value
    return _to_signed(result, 64)


@dataclass(frozen=True)
class RandomSeed:
    """Immutable seed bytes with integer and hex views."""

    data: bytes

    @classmethod
    def of(cls, data: bytes | bytearray) -> RandomSeed:
        if data is None:
            raise TypeError("The seed must not be None")
        return cls(bytes(data))

    @classmethod
    def from_hex(cls, text: str) -> RandomSeed:
        return cls(hex_codec.decode(text))

    def as_bytes(self) -> bytes:
        return self.data

    def as_long(self) -> int:
        return make_long(self.data)

    def as_hex(self) -> str:
        return hex_codec.encode(self.data)

    def generator(self) -> np.random.Generator:
        """Return a PCG64 generator seeded from the seed bytes.

        A leading marker byte keeps seeds that differ only in leading zeros apart.
        """
        entropy = int.from_bytes(b"\x01" + self.data, "big")
        return np.random.Generator(np.random.PCG64(np.random.SeedSequence(entropy)))

    def equal_bytes(self, other: bytes | None) -> bool:
        if other is None:
            return len(self.data) == 0
        return self.data == bytes(other)

    def __str__(self) -> str:
        return self.as_hex()
