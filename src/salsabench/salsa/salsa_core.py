import struct
from typing import List, Sequence, Tuple

from .salsa_constants import (
    WORD_MASK,
    BLOCK_SIZE,
    DOUBLEROUNDS,
    ROTATIONS,
    ROWROUND_GROUPS,
    COLUMNROUND_GROUPS,
)

# 16 little-endian 32-bit words
_BLOCK_STRUCT = struct.Struct("<16I")


def add32(a: int, b: int) -> int:
    # addition modulo 2^32
    return (a + b) & WORD_MASK


def xor32(a: int, b: int) -> int:
    return (a ^ b) & WORD_MASK


def rotl32(value: int, shift: int) -> int:
    # rotate a 32-bit integer left by shift bits
    shift &= 31
    return ((value << shift) | (value >> (32 - shift))) & WORD_MASK


def word_from_le(b0: int, b1: int, b2: int, b3: int) -> int:
    # b0 is the least significant byte
    return b0 | (b1 << 8) | (b2 << 16) | (b3 << 24)


def bytes_from_le(word: int) -> bytes:
    # inverse of word_from_le
    return struct.pack("<I", word & WORD_MASK)


def littleendian_words(block: bytes) -> List[int]:
    # deserialize a 64-byte block into 16 words
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Salsa20 block must be {BLOCK_SIZE} bytes, got {len(block)}")
    return list(_BLOCK_STRUCT.unpack(block))


def words_to_bytes(words: Sequence[int]) -> bytes:
    # serialize 16 words back into a 64-byte block
    return _BLOCK_STRUCT.pack(*words)


def quarterround(y0: int, y1: int, y2: int, y3: int) -> Tuple[int, int, int, int]:
    # z1, z2, z3 are computed before z0
    r1, r2, r3, r0 = ROTATIONS
    z1 = y1 ^ rotl32(add32(y0, y3), r1)
    z2 = y2 ^ rotl32(add32(z1, y0), r2)
    z3 = y3 ^ rotl32(add32(z2, z1), r3)
    z0 = y0 ^ rotl32(add32(z3, z2), r0)
    return z0, z1, z2, z3


def _apply_groups(state: Sequence[int], groups) -> List[int]:
    # run quarterround over each index group, writing results back in place
    if len(state) != 16:
        raise ValueError(f"Salsa20 state must have 16 words, got {len(state)}")

    out = list(state)
    for a, b, c, d in groups:
        out[a], out[b], out[c], out[d] = quarterround(state[a], state[b], state[c], state[d])
    return out


def rowround(state: Sequence[int]) -> List[int]:
    return _apply_groups(state, ROWROUND_GROUPS)


def columnround(state: Sequence[int]) -> List[int]:
    return _apply_groups(state, COLUMNROUND_GROUPS)


def doubleround(state: Sequence[int]) -> List[int]:
    # column pass first, then row pass
    return rowround(columnround(state))


def salsa20_hash(block: bytes) -> bytes:
    """
    Salsa20 hash function: ten doublerounds over the block followed by a
    word-wise feed-forward addition of the original input.

    Args:
        block: 64 input bytes

    Returns:
        64 output bytes
    """
    x = littleendian_words(bytes(block))

    z = x
    for _ in range(DOUBLEROUNDS):
        z = doubleround(z)

    # feed-forward is addition, not xor
    return words_to_bytes([add32(xi, zi) for xi, zi in zip(x, z)])
