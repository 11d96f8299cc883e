#!/usr/bin/env python3
"""
Salsa20 Known-Answer Vectors
Worked examples from Bernstein's Salsa20 paper and the eSTREAM test
vectors, used as a self-check before benchmarking and by the test suite.
"""

import logging

from .salsa_core import quarterround, rowround, columnround, doubleround, salsa20_hash
from .custom_salsa20 import salsa20_expand, salsa20_encrypt

logger = logging.getLogger("PythonCore")

QUARTERROUND_VECTORS = [
    ((0x00000000, 0x00000000, 0x00000000, 0x00000000),
     (0x00000000, 0x00000000, 0x00000000, 0x00000000)),
    ((0x00000001, 0x00000000, 0x00000000, 0x00000000),
     (0x08008145, 0x00000080, 0x00010200, 0x20500000)),
    ((0xd3917c5b, 0x55f1c407, 0x52a58a7a, 0x8f887a3b),
     (0x3e2f308c, 0xd90a8f36, 0x6ab2a923, 0x2883524c)),
]

ROUND_INPUT = [
    0x08521bd6, 0x1fe88837, 0xbb2aa576, 0x3aa26365,
    0xc54c6a5b, 0x2fc74c2f, 0x6dd39cc3, 0xda0a64f6,
    0x90a2f23d, 0x067f95a6, 0x06b35f61, 0x41e4732e,
    0xe859c100, 0xea4d84b7, 0x0f619bff, 0xbc6e965a,
]

ROWROUND_OUTPUT = [
    0xa890d39d, 0x65d71596, 0xe9487daa, 0xc8ca6a86,
    0x949d2192, 0x764b7754, 0xe408d9b9, 0x7a41b4d1,
    0x3402e183, 0x3c3af432, 0x50669f96, 0xd89ef0a8,
    0x0040ede5, 0xb545fbce, 0xd257ed4f, 0x1818882d,
]

COLUMNROUND_OUTPUT = [
    0x8c9d190a, 0xce8e4c90, 0x1ef8e9d3, 0x1326a71a,
    0x90a20123, 0xead3c4f3, 0x63a091a0, 0xf0708d69,
    0x789b010c, 0xd195a681, 0xeb7d5504, 0xa774135c,
    0x481c2027, 0x53a8e4b5, 0x4c1f89c5, 0x3f78c9c8,
]

DOUBLEROUND_INPUT = [
    0x00000001, 0x00000000, 0x00000000, 0x00000000,
    0x00000000, 0x00000000, 0x00000000, 0x00000000,
    0x00000000, 0x00000000, 0x00000000, 0x00000000,
    0x00000000, 0x00000000, 0x00000000, 0x00000000,
]

DOUBLEROUND_OUTPUT = [
    0x8186a22d, 0x0040a284, 0x82479210, 0x06929051,
    0x08000090, 0x02402200, 0x00004000, 0x00800000,
    0x00010200, 0x20400000, 0x08008104, 0x00000000,
    0x20500000, 0xa0000040, 0x0008180a, 0x612a8020,
]

HASH_INPUT = bytes([
    211, 159, 13, 115, 76, 55, 82, 183, 3, 117, 222, 37, 191, 187, 234, 136,
    49, 237, 179, 48, 1, 106, 178, 219, 175, 199, 166, 48, 86, 16, 179, 207,
    31, 240, 32, 63, 15, 83, 93, 161, 116, 147, 48, 113, 238, 55, 204, 36,
    79, 201, 235, 79, 3, 81, 156, 47, 203, 26, 244, 243, 88, 118, 104, 54,
])

HASH_OUTPUT = bytes([
    109, 42, 178, 168, 156, 240, 248, 238, 168, 196, 190, 203, 26, 110, 170, 154,
    29, 29, 150, 26, 150, 30, 235, 249, 190, 163, 251, 48, 69, 144, 51, 57,
    118, 40, 152, 157, 180, 57, 27, 94, 107, 42, 236, 35, 27, 111, 114, 114,
    219, 236, 232, 135, 111, 155, 110, 18, 24, 232, 95, 158, 179, 19, 48, 202,
])

EXPAND_KEY_32 = bytes(range(1, 17)) + bytes(range(201, 217))
EXPAND_KEY_16 = bytes(range(1, 17))
EXPAND_INPUT = bytes(range(101, 117))

EXPAND_OUTPUT_32 = bytes([
    69, 37, 68, 39, 41, 15, 107, 193, 255, 139, 122, 6, 170, 233, 217, 98,
    89, 144, 182, 106, 21, 51, 200, 65, 239, 49, 222, 34, 215, 114, 40, 126,
    104, 197, 7, 225, 197, 153, 31, 2, 102, 78, 76, 176, 84, 245, 246, 184,
    177, 160, 133, 130, 6, 72, 149, 119, 192, 195, 132, 236, 234, 103, 246, 74,
])

EXPAND_OUTPUT_16 = bytes([
    39, 173, 46, 248, 30, 200, 82, 17, 48, 67, 254, 239, 37, 18, 13, 247,
    241, 200, 61, 144, 10, 55, 50, 185, 6, 47, 246, 253, 143, 86, 187, 225,
    134, 85, 110, 246, 161, 163, 43, 235, 231, 94, 171, 51, 145, 214, 112, 29,
    14, 232, 5, 16, 151, 140, 183, 141, 171, 9, 122, 181, 104, 182, 177, 193,
])

# eSTREAM Salsa20 set 1, vector 0: a 512-byte all-zero message under a
# 256-bit key with only the top bit set and an all-zero nonce
STREAM_KEY_256 = bytes.fromhex("80" + "00" * 31)
STREAM_KEY_128 = bytes.fromhex("80" + "00" * 15)
STREAM_NONCE = bytes(8)
STREAM_LENGTH = 512

STREAM_256_FIRST_BLOCK = bytes.fromhex(
    "E3BE8FDD8BECA2E3EA8EF9475B29A6E7"
    "003951E1097A5C38D23B7A5FAD9F6844"
    "B22C97559E2723C7CBBD3FE4FC8D9A07"
    "44652A83E72A9C461876AF4D7EF1A117"
)

STREAM_256_LAST_BLOCK = bytes.fromhex(
    "696AFCFD0CDDCC83C7E77F11A649D79A"
    "CDC3354E9635FF137E929933A0BD6F53"
    "77EFA105A3A4266B7C0D089D08F1E855"
    "CC32B15B93784A36E56A76CC64BC8477"
)

# same vector with a 128-bit key, bytes 0..63 and 192..255
STREAM_128_FIRST_BLOCK = bytes.fromhex(
    "4DFA5E481DA23EA09A31022050859936"
    "DA52FCEE218005164F267CB65F5CFD7F"
    "2B4F97E0FF16924A52DF269515110A07"
    "F9E460BC65EF95DA58F740B7D1DBB0AA"
)

STREAM_128_FOURTH_BLOCK = bytes.fromhex(
    "DA9C1581F429E0A00F7D67E23B730676"
    "783B262E8EB43A25F55FB90B3E753AEF"
    "8C6713EC66C51881111593CCB3E8CB8F"
    "8DE124080501EEEB389C4BCB6977CF95"
)

# expansion blocks for the all-zero 256-bit key and nonce, counters 0 and 7
ZERO_KEY_BLOCK_0 = b"expa" + bytes(16) + b"nd 3" + bytes(16) + b"2-by" + bytes(16) + b"te k"
ZERO_KEY_BLOCK_7 = (
    b"expa" + bytes(16) + b"nd 3" + bytes(8) + b"\x07" + bytes(7) + b"2-by" + bytes(16) + b"te k"
)


def verify_known_answers():
    # run every vector through the core, returning {vector name: passed}
    results = {}

    results["quarterround"] = all(
        quarterround(*given) == expected for given, expected in QUARTERROUND_VECTORS
    )
    results["rowround"] = rowround(ROUND_INPUT) == ROWROUND_OUTPUT
    results["columnround"] = columnround(ROUND_INPUT) == COLUMNROUND_OUTPUT
    results["doubleround"] = doubleround(DOUBLEROUND_INPUT) == DOUBLEROUND_OUTPUT
    results["hash"] = salsa20_hash(HASH_INPUT) == HASH_OUTPUT
    results["expand_32"] = salsa20_expand(EXPAND_KEY_32, EXPAND_INPUT) == EXPAND_OUTPUT_32
    results["expand_16"] = salsa20_expand(EXPAND_KEY_16, EXPAND_INPUT) == EXPAND_OUTPUT_16

    stream_256 = salsa20_encrypt(bytes(STREAM_LENGTH), STREAM_KEY_256, STREAM_NONCE)
    results["stream_256"] = (
        stream_256[:64] == STREAM_256_FIRST_BLOCK and stream_256[-64:] == STREAM_256_LAST_BLOCK
    )
    stream_128 = salsa20_encrypt(bytes(256), STREAM_KEY_128, STREAM_NONCE)
    results["stream_128"] = (
        stream_128[:64] == STREAM_128_FIRST_BLOCK and stream_128[192:] == STREAM_128_FOURTH_BLOCK
    )

    for name, passed in results.items():
        if not passed:
            logger.error(f"Salsa20 known-answer check failed: {name}")

    return results
