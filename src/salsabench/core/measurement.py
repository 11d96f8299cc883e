import logging

# setup logging
logger = logging.getLogger("PythonCore")


def measure_encryption_metrics(metrics, process_func, data, key, original_plaintext=None):
    # dispatch on the wrapped function name so stream wrappers measure the same way
    if process_func.__name__ == 'encrypt':
        return metrics.measure_encrypt(process_func, data, key)

    elif process_func.__name__ == 'decrypt':
        return metrics.measure_decrypt(process_func, data, key, original_plaintext or data)

    else:
        logger.warning(f"Unexpected function name: {process_func.__name__}")
        return process_func(data, key)
