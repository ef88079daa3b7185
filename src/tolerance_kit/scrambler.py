"""Deterministic scrambling of seed bytes into a stream of new seeds.

Each 16-byte block of the seed drives its own 128-bit Weyl sequence whose state is
mixed with Stafford's variant 13 of the 64-bit finalizer. The same seed always
produces the same sequence of outputs.
"""

from __future__ import annotations

_MASK64 = 0xFFFFFFFFFFFFFFFF
_GOLDEN_RATIO = 0x9E3779B97F4A7C15
_GOLDEN_RATIO_128_LOWER = 0xF39CC0605CEDC835
BLOCK_BYTES = 16


def stafford13(value: int) -> int:
    value &= _MASK64
    value = ((value ^ (value >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    value = ((value ^ (value >> 27)) * 0x94D049BB133111EB) & _MASK64
    return value ^ (value >> 31)


class _BitScrambler128:
    __slots__ = ("lower", "upper")

    def __init__(self, block: bytes) -> None:
        block = block.ljust(BLOCK_BYTES, b"\0")
        self.lower = int.from_bytes(block[:8], "little")
        self.upper = int.from_bytes(block[8:BLOCK_BYTES], "little")

    def next_block(self) -> bytes:
        lower = (self.lower + _GOLDEN_RATIO_128_LOWER) & _MASK64
        carry = 1 if lower < self.lower else 0
        self.lower = lower
        self.upper = (self.upper + carry + _GOLDEN_RATIO) & _MASK64
        return stafford13(self.upper).to_bytes(8, "big") + stafford13(self.lower).to_bytes(8, "big")


class ByteScrambler:
    """Produce a new pseudo-random byte string of the seed's length on each call."""

    def __init__(self, seed: bytes) -> None:
        self._length = len(seed)
        self._blocks = [
            _BitScrambler128(bytes(seed[start : start + BLOCK_BYTES]))
            for start in range(0, self._length, BLOCK_BYTES)
        ]

    @classmethod
    def of(cls, seed: bytes | bytearray) -> ByteScrambler:
        return cls(bytes(seed))

    def scramble(self) -> bytes:
        output = b"".join(block.next_block() for block in self._blocks)
        return output[: self._length]
