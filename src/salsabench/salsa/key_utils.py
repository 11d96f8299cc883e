import os
import secrets

from .salsa_constants import (
    KEY_SIZES,
    NONCE_SIZE,
    BLOCK_SIZE,
    MAX_MESSAGE_LENGTH,
    MAX_COUNTER,
)


class Salsa20Error(ValueError):
    # base class for rejected Salsa20 inputs
    pass


class InvalidKeyLength(Salsa20Error):
    pass


class InvalidNonceLength(Salsa20Error):
    pass


class MessageTooLong(Salsa20Error):
    pass


def format_key_size(size_bits):
    # convert key size from bits to bytes
    return int(size_bits) // 8


def validate_key(key):
    # key must be exactly 16 or 32 bytes, returned as immutable bytes
    if len(key) not in KEY_SIZES:
        raise InvalidKeyLength(f"Salsa20 key must be 16 or 32 bytes, got {len(key)}")
    return bytes(key)


def validate_nonce(nonce):
    if len(nonce) != NONCE_SIZE:
        raise InvalidNonceLength(f"Salsa20 nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    return bytes(nonce)


def validate_counter(initial_counter):
    if initial_counter < 0 or initial_counter > MAX_COUNTER:
        raise ValueError(f"Salsa20 block counter must fit in 64 bits, got {initial_counter}")
    return initial_counter


def check_message_length(length, initial_counter=0):
    # reject messages past the 2^70 bound or that would wrap the block counter
    if length > MAX_MESSAGE_LENGTH:
        raise MessageTooLong(f"Salsa20 message of {length} bytes exceeds the 2^70 byte limit")

    blocks_needed = (length + BLOCK_SIZE - 1) // BLOCK_SIZE
    if blocks_needed and initial_counter + blocks_needed - 1 > MAX_COUNTER:
        raise MessageTooLong(
            f"Salsa20 message of {length} bytes starting at block {initial_counter} "
            f"would overflow the 64-bit block counter"
        )


def generate_key(key_size=256):
    key_bytes = format_key_size(key_size)

    if key_bytes not in KEY_SIZES:
        raise InvalidKeyLength(f"Invalid key size: {key_size} bits. Must be 128 or 256 bits.")

    return os.urandom(key_bytes)


def generate_custom_key(key_size=256):
    key_bytes = format_key_size(key_size)

    if key_bytes not in KEY_SIZES:
        raise InvalidKeyLength(f"Invalid key size: {key_size} bits. Must be 128 or 256 bits.")

    return secrets.token_bytes(key_bytes)


def parse_nonce(value):
    # accept raw bytes or a hex string from a JSON config
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = bytes.fromhex(value)
        except ValueError as e:
            raise InvalidNonceLength(f"Salsa20 nonce is not valid hex: {value!r}") from e
    return validate_nonce(value)
