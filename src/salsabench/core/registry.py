import logging

# setup logging
logger = logging.getLogger("PythonCore")

# dictionary to store implementations
ENCRYPTION_IMPLEMENTATIONS = {}


def register_implementation(name):
    # register an encryption implementation
    def decorator(impl_class):
        ENCRYPTION_IMPLEMENTATIONS[name] = impl_class
        return impl_class
    return decorator


def get_implementation(name):
    # get an implementation by name
    return ENCRYPTION_IMPLEMENTATIONS.get(name)


def list_implementations():
    # list all registered implementations
    return list(ENCRYPTION_IMPLEMENTATIONS.keys())


def register_all_implementations():
    # import here to avoid circular imports
    from salsabench.salsa.implementation import (
        SALSA_IMPLEMENTATIONS,
        Salsa20Implementation,
        register_all_salsa20_variants,
    )

    register_implementation("salsa20")(Salsa20Implementation)

    # register the pycryptodome and custom variants
    for name, impl in register_all_salsa20_variants().items():
        if name != "salsa20":
            register_implementation(name)(impl)

    logger.info(f"Registered Salsa20 implementations: {', '.join(SALSA_IMPLEMENTATIONS.keys())}")
    logger.info(f"Total registered implementations: {len(ENCRYPTION_IMPLEMENTATIONS)}")
    return ENCRYPTION_IMPLEMENTATIONS
