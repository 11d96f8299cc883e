import logging

from Crypto.Cipher import Salsa20 as CryptoSalsa20

from .base import Salsa20ImplementationBase
from .custom_salsa20 import CustomSalsa20
from .key_utils import generate_custom_key, validate_key, check_message_length
from .salsa_constants import NUM_ROUNDS, BLOCK_SIZE, NONCE_SIZE

logger = logging.getLogger("PythonCore")

# dictionary to track implementations
SALSA_IMPLEMENTATIONS = {}

# default chunk size for stream processing
DEFAULT_CHUNK_SIZE = 8192


def register_salsa_variant(name):
    # register a salsa20 implementation variant
    def decorator(impl_class):
        SALSA_IMPLEMENTATIONS[name] = impl_class
        return impl_class
    return decorator


@register_salsa_variant("salsa20")
class Salsa20Implementation(Salsa20ImplementationBase):
    # salsa20 implementation with both pycryptodome and custom options

    num_rounds = NUM_ROUNDS
    block_size_bytes = BLOCK_SIZE
    nonce_size_bytes = NONCE_SIZE

    def __init__(self, key_size="256", **kwargs):
        super().__init__(key_size=key_size, **kwargs)
        self.is_custom = kwargs.get("is_custom", False)
        if self.is_custom:
            self.description = f"Custom Salsa20 Implementation ({self.key_size}-bit key)"
            self.impl = CustomSalsa20(self.nonce)
        else:
            self.description = f"PyCryptodome Salsa20 Implementation ({self.key_size}-bit key)"
            self.impl = None

    def generate_key(self):
        if self.is_custom:
            self.key = generate_custom_key(self.key_size)
            return self.key
        return super().generate_key()

    def encrypt(self, data, key):
        # encrypt data using salsa20
        if self.is_custom:
            return self._custom_encrypt(data, key)
        return self._lib_process(data, key)

    def decrypt(self, ciphertext, key):
        # decrypt ciphertext using salsa20
        if self.is_custom:
            return self._custom_decrypt(ciphertext, key)
        return self._lib_process(ciphertext, key)

    def _lib_cipher(self, key):
        # same key/nonce validation as the custom path so both reject identically
        key = validate_key(key)
        return CryptoSalsa20.new(key=key, nonce=self.nonce)

    def _lib_process(self, data, key):
        # pycryptodome salsa20 (encryption and decryption are the same xor)
        cipher = self._lib_cipher(key)
        check_message_length(len(data))
        return cipher.encrypt(data)

    def _custom_encrypt(self, data, key):
        encrypted, _ = self.impl.encrypt(data, key)
        return encrypted

    def _custom_decrypt(self, ciphertext, key):
        return self.impl.decrypt(ciphertext, key)

    def _new_stream(self, key):
        # an object with a process-style method that continues the keystream across calls
        if self.is_custom:
            return self.impl.stream(key).process
        return self._lib_cipher(key).encrypt

    def encrypt_stream(self, data, key, chunk_size=DEFAULT_CHUNK_SIZE):
        # encrypt in fixed-size chunks over one continuous keystream
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive, got {chunk_size}")

        check_message_length(len(data))
        process = self._new_stream(key)

        result = bytearray()
        for i in range(0, len(data), chunk_size):
            result += process(data[i:i + chunk_size])

        logger.debug(f"Processed {len(data)} bytes in chunks of {chunk_size} bytes")
        return bytes(result)

    def decrypt_stream(self, data, key, chunk_size=DEFAULT_CHUNK_SIZE):
        # stream decryption is the same operation
        return self.encrypt_stream(data, key, chunk_size)


def create_custom_salsa20_implementation(key_size="256", nonce=None):
    return Salsa20Implementation(key_size=key_size, is_custom=True, nonce=nonce)


def create_stdlib_salsa20_implementation(key_size="256", nonce=None):
    # pycryptodome-backed reference implementation
    return Salsa20Implementation(key_size=key_size, is_custom=False, nonce=nonce)


def register_all_salsa20_variants():
    SALSA_IMPLEMENTATIONS["salsa20_std"] = lambda **kwargs: create_stdlib_salsa20_implementation(
        key_size=kwargs.get("key_size", "256"),
        nonce=kwargs.get("nonce"),
    )

    SALSA_IMPLEMENTATIONS["salsa20_custom"] = lambda **kwargs: create_custom_salsa20_implementation(
        key_size=kwargs.get("key_size", "256"),
        nonce=kwargs.get("nonce"),
    )
    return SALSA_IMPLEMENTATIONS
