from .base import Salsa20ImplementationBase, DEFAULT_BENCHMARK_NONCE
from .key_utils import Salsa20Error, InvalidKeyLength, InvalidNonceLength, MessageTooLong
from .salsa_core import (
    add32,
    xor32,
    rotl32,
    word_from_le,
    bytes_from_le,
    quarterround,
    rowround,
    columnround,
    doubleround,
    salsa20_hash,
)
from .custom_salsa20 import (
    salsa20_expand,
    salsa20_block,
    salsa20_keystream,
    salsa20_encrypt,
    salsa20_decrypt,
    Salsa20Stream,
    CustomSalsa20,
)
from .implementation import (
    Salsa20Implementation,
    create_custom_salsa20_implementation,
    create_stdlib_salsa20_implementation,
    register_all_salsa20_variants,
    SALSA_IMPLEMENTATIONS,
    register_salsa_variant
)
from .known_answers import verify_known_answers

register_all_salsa20_variants()
