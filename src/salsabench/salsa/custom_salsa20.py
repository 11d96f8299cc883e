import struct
from typing import Iterator, Optional, Tuple

from .salsa_constants import SIGMA, TAU, BLOCK_SIZE, INPUT_SIZE, MAX_COUNTER
from .salsa_core import salsa20_hash
from .key_utils import (
    MessageTooLong,
    validate_key,
    validate_nonce,
    validate_counter,
    check_message_length,
)


def salsa20_expand(key: bytes, n: bytes) -> bytes:
    # build the 64-byte expansion block and hash it into one keystream block
    key = validate_key(key)
    if len(n) != INPUT_SIZE:
        raise ValueError(f"Salsa20 expansion input must be {INPUT_SIZE} bytes, got {len(n)}")

    if len(key) == 32:
        k0, k1 = key[:16], key[16:]
        c0, c1, c2, c3 = SIGMA
    else:
        # 16-byte keys fill both halves
        k0 = k1 = key
        c0, c1, c2, c3 = TAU

    return salsa20_hash(c0 + k0 + c1 + bytes(n) + c2 + k1 + c3)


def salsa20_block(key: bytes, nonce: bytes, counter: int) -> bytes:
    # one keystream block for a single counter value
    nonce = validate_nonce(nonce)
    validate_counter(counter)
    return salsa20_expand(key, nonce + struct.pack("<Q", counter))


def _keystream_blocks(key: bytes, nonce: bytes, counter: int) -> Iterator[bytes]:
    while True:
        if counter > MAX_COUNTER:
            raise MessageTooLong(f"Salsa20 block counter exhausted after {MAX_COUNTER:#x}")
        yield salsa20_expand(key, nonce + struct.pack("<Q", counter))
        counter += 1


def salsa20_keystream(key: bytes, nonce: bytes, initial_counter: int = 0) -> Iterator[bytes]:
    """
    Lazy Salsa20 keystream.

    Inputs are validated immediately, so a bad key or nonce raises here rather
    than on the first next(). Stop iterating to cancel; call again to restart.
    Asking for a block past counter 2^64-1 raises MessageTooLong.

    Args:
        key: 16 or 32 byte key
        nonce: 8 byte nonce
        initial_counter: block counter of the first yielded block

    Yields:
        64-byte keystream blocks
    """
    key = validate_key(key)
    nonce = validate_nonce(nonce)
    validate_counter(initial_counter)
    return _keystream_blocks(key, nonce, initial_counter)


def _xor_bytes(data, keystream) -> bytes:
    # xor two equal-length byte strings
    size = len(data)
    if not size:
        return b""
    a = int.from_bytes(data, "little")
    b = int.from_bytes(keystream, "little")
    return (a ^ b).to_bytes(size, "little")


def salsa20_encrypt(plaintext: bytes, key: bytes, nonce: bytes, initial_counter: int = 0) -> bytes:
    # encrypt plaintext using salsa20
    key = validate_key(key)
    nonce = validate_nonce(nonce)
    validate_counter(initial_counter)
    check_message_length(len(plaintext), initial_counter)

    view = memoryview(plaintext)
    output = bytearray()
    blocks = _keystream_blocks(key, nonce, initial_counter)

    for i in range(0, len(view), BLOCK_SIZE):
        chunk = view[i:i + BLOCK_SIZE]
        # the final block may be only partially used
        block = next(blocks)[:len(chunk)]
        output += _xor_bytes(chunk, block)

    return bytes(output)


def salsa20_decrypt(ciphertext: bytes, key: bytes, nonce: bytes, initial_counter: int = 0) -> bytes:
    # decrypt using salsa20 (same as encryption)
    return salsa20_encrypt(ciphertext, key, nonce, initial_counter)


class Salsa20Stream:
    # incremental salsa20 xor over a message delivered in chunks

    def __init__(self, key: bytes, nonce: bytes, initial_counter: int = 0):
        self._blocks = salsa20_keystream(key, nonce, initial_counter)
        self._initial_counter = initial_counter
        self._buffer = b""
        self.position = 0

    def process(self, data: bytes) -> bytes:
        # encrypt or decrypt the next chunk of the message
        size = len(data)
        end = self.position + size
        check_message_length(end, self._initial_counter)

        # only as many blocks as the chunk needs
        keystream = bytearray(self._buffer)
        while len(keystream) < size:
            keystream += next(self._blocks)

        self._buffer = bytes(keystream[size:])
        self.position = end
        return _xor_bytes(data, keystream[:size])

    encrypt = process
    decrypt = process


class CustomSalsa20:
    # custom implementation of the salsa20 algorithm

    def __init__(self, nonce: Optional[bytes] = None):
        # nonce is supplied by the caller and reused for every message
        self.nonce = validate_nonce(nonce) if nonce is not None else None

    def _require_nonce(self, nonce: Optional[bytes]) -> bytes:
        nonce = nonce if nonce is not None else self.nonce
        if nonce is None:
            raise ValueError("Salsa20 requires a caller-supplied nonce")
        return nonce

    def encrypt(self, plaintext: bytes, key: bytes, nonce: Optional[bytes] = None) -> Tuple[bytes, None]:
        # encrypt plaintext, returning the ciphertext and None for tag (salsa20 is unauthenticated)
        return salsa20_encrypt(plaintext, key, self._require_nonce(nonce)), None

    def decrypt(self, ciphertext: bytes, key: bytes, nonce: Optional[bytes] = None) -> bytes:
        return salsa20_decrypt(ciphertext, key, self._require_nonce(nonce))

    def stream(self, key: bytes, nonce: Optional[bytes] = None) -> Salsa20Stream:
        return Salsa20Stream(key, self._require_nonce(nonce))
