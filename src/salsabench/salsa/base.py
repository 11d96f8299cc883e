import logging

from .key_utils import generate_key, format_key_size, parse_nonce, InvalidKeyLength
from .salsa_constants import KEY_SIZES, NONCE_SIZE

logger = logging.getLogger("PythonCore")

# fixed nonce used when a benchmark config does not supply one
DEFAULT_BENCHMARK_NONCE = bytes(NONCE_SIZE)


class Salsa20ImplementationBase:
    # base class for salsa20

    def __init__(self, key_size="256", nonce=None, **kwargs):
        self.key_size = int(key_size)
        if format_key_size(self.key_size) not in KEY_SIZES:
            raise InvalidKeyLength(f"Invalid key size: {key_size} bits. Must be 128 or 256 bits.")

        self.name = "Salsa20"
        self.description = f"Salsa20 with {self.key_size}-bit key"
        self.key = None

        self.nonce = parse_nonce(nonce)
        if self.nonce is None:
            logger.warning("No Salsa20 nonce configured, using the fixed all-zero benchmark nonce")
            self.nonce = DEFAULT_BENCHMARK_NONCE

    def generate_key(self):
        # generate a random key of the configured size
        self.key = generate_key(self.key_size)
        return self.key

    def encrypt(self, data, key):
        # encrypt data using the specified key
        raise NotImplementedError("Subclasses must implement this method")

    def decrypt(self, ciphertext, key):
        # decrypt data using the specified key
        raise NotImplementedError("Subclasses must implement this method")
