# import core modules
from salsabench.core.registry import register_all_implementations, list_implementations, get_implementation

# import Salsa20 implementations
from salsabench.salsa import (
    Salsa20Implementation,
    create_custom_salsa20_implementation,
    create_stdlib_salsa20_implementation,
    salsa20_encrypt,
    salsa20_decrypt,
    verify_known_answers,
)

__all__ = [
    'register_all_implementations',
    'list_implementations',
    'get_implementation',
    'Salsa20Implementation',
    'create_custom_salsa20_implementation',
    'create_stdlib_salsa20_implementation',
    'salsa20_encrypt',
    'salsa20_decrypt',
    'verify_known_answers',
]
