#!/usr/bin/env python3
"""
Salsa20 Constants
Expansion constants, rotation amounts and the quarterround index tables
used by the Salsa20/20 core.
"""

# 32-bit word mask
WORD_MASK = 0xFFFFFFFF

# sizes in bytes
BLOCK_SIZE = 64
NONCE_SIZE = 8
COUNTER_SIZE = 8
INPUT_SIZE = NONCE_SIZE + COUNTER_SIZE
KEY_SIZES = (16, 32)

# 20 rounds = 10 doublerounds
DOUBLEROUNDS = 10
NUM_ROUNDS = DOUBLEROUNDS * 2

# largest message a single (key, nonce) pair may cover
MAX_MESSAGE_LENGTH = 2 ** 70
MAX_COUNTER = 2 ** 64 - 1

# "expand 32-byte k", used with 32-byte keys
SIGMA = (b"expa", b"nd 3", b"2-by", b"te k")

# "expand 16-byte k", used with 16-byte keys
TAU = (b"expa", b"nd 1", b"6-by", b"te k")

# quarterround rotation amounts, in the order z1, z2, z3, z0
ROTATIONS = (7, 9, 13, 18)

# each tuple is fed to quarterround as (y0, y1, y2, y3) and written back
# to the same positions
ROWROUND_GROUPS = (
    (0, 1, 2, 3),
    (5, 6, 7, 4),
    (10, 11, 8, 9),
    (15, 12, 13, 14),
)

COLUMNROUND_GROUPS = (
    (0, 4, 8, 12),
    (5, 9, 13, 1),
    (10, 14, 2, 6),
    (15, 3, 7, 11),
)
