import os
import gc
import logging
import traceback
from datetime import datetime

from .metrics import BenchmarkMetrics
from .results import calculate_aggregated_metrics, save_results
from .measurement import measure_encryption_metrics
from salsabench.salsa.known_answers import verify_known_answers

logger = logging.getLogger("PythonCore")

DEFAULT_DATA_SIZE = 1024 * 1024
DEFAULT_CHUNK_SIZE = 64 * 1024


def parse_size(size_text, default):
    # parse "64KB" / "1MB" / "4096" into a byte count
    if size_text is None:
        return default
    if isinstance(size_text, int):
        return size_text

    size_text = str(size_text).strip().upper()
    try:
        if size_text.endswith("KB"):
            return int(size_text[:-2]) * 1024
        if size_text.endswith("MB"):
            return int(size_text[:-2]) * 1024 * 1024
        if size_text.endswith("B"):
            return int(size_text[:-1])
        return int(size_text)
    except ValueError:
        logger.warning(f"Could not parse size '{size_text}', using {default} bytes")
        return default


def get_enabled_methods(config, use_stdlib, use_custom):
    # expand each enabled method into its pycryptodome and custom variants
    enabled_methods = []
    for method_name, settings in config.get("encryption_methods", {}).items():
        if not settings.get("enabled", False):
            continue

        if method_name != "salsa20":
            logger.warning(f"Unsupported encryption method '{method_name}'. Skipping.")
            continue

        method_settings = {k: v for k, v in settings.items() if k != "enabled"}
        if use_stdlib:
            enabled_methods.append(("salsa20_std", dict(method_settings, is_custom=False)))
        if use_custom:
            enabled_methods.append(("salsa20_custom", dict(method_settings, is_custom=True)))

    return enabled_methods


def _run_iteration(implementation, data, metrics, processing_strategy, chunk_size, reference):
    key = metrics.measure_keygen(implementation.generate_key)
    metrics.set_algorithm_metadata(implementation, len(key))

    if processing_strategy == "Stream":
        # continuous keystream over fixed-size chunks
        def encrypt(data, key):
            return implementation.encrypt_stream(data, key, chunk_size)

        def decrypt(data, key):
            return implementation.decrypt_stream(data, key, chunk_size)
    else:
        encrypt = implementation.encrypt
        decrypt = implementation.decrypt

    ciphertext = measure_encryption_metrics(metrics, encrypt, data, key)
    measure_encryption_metrics(metrics, decrypt, ciphertext, key, data)

    # cross-check the custom cipher against pycryptodome with the same key and nonce
    if reference is not None:
        metrics.matches_reference = reference.encrypt(data, key) == ciphertext
        if not metrics.matches_reference:
            logger.error("Custom Salsa20 ciphertext differs from the PyCryptodome reference")

    if not metrics.correctness_passed:
        logger.error("Correctness check failed: decrypted data does not match the original")

    del ciphertext


def run_benchmarks(config, implementations):
    # get session information
    session_info = config.get("session_info", {})
    session_dir = session_info.get("session_dir", ".")
    session_id = session_info.get("session_id", os.path.basename(os.path.abspath(session_dir)))

    logger.info(f"Starting Python benchmarks for session {session_id}")

    # refuse to benchmark a core that fails its known answers
    known_answers = verify_known_answers()
    if not all(known_answers.values()):
        failed = [name for name, passed in known_answers.items() if not passed]
        logger.error(f"Known-answer checks failed ({', '.join(failed)}). Aborting.")
        return False
    logger.info(f"All {len(known_answers)} Salsa20 known-answer checks passed")

    test_parameters = config.get("test_parameters", {})
    iterations = int(test_parameters.get("iterations", 1))
    use_stdlib = test_parameters.get("use_stdlib", True)
    use_custom = test_parameters.get("use_custom", True)
    processing_strategy = test_parameters.get("processing_strategy", "Memory")
    data_size = parse_size(test_parameters.get("data_size"), DEFAULT_DATA_SIZE)
    chunk_size = parse_size(test_parameters.get("chunk_size"), DEFAULT_CHUNK_SIZE)

    if processing_strategy not in ("Memory", "Stream"):
        logger.warning(f"Unknown processing strategy '{processing_strategy}', defaulting to Memory")
        processing_strategy = "Memory"

    logger.info(f"PyCryptodome implementations: {'enabled' if use_stdlib else 'disabled'}")
    logger.info(f"Custom implementations: {'enabled' if use_custom else 'disabled'}")
    logger.info(f"Using processing strategy: {processing_strategy}")
    if processing_strategy == "Stream":
        logger.info(f"Using chunk size: {chunk_size} bytes")

    enabled_methods = get_enabled_methods(config, use_stdlib, use_custom)
    if not enabled_methods:
        logger.error("No encryption methods enabled in configuration. Aborting.")
        return False

    logger.info(f"Enabled methods for benchmarking: {[method for method, _ in enabled_methods]}")

    # plaintext is generated in memory rather than read from a dataset file
    data = os.urandom(data_size)
    logger.info(f"Generated {data_size / (1024 * 1024):.2f} MB of benchmark data")

    results = {
        "timestamp": datetime.now().isoformat(),
        "session_id": session_id,
        "language": "python",
        "known_answer_checks": known_answers,
        "dataset": {"size_bytes": data_size},
        "test_configuration": {
            "iterations": iterations,
            "processing_strategy": processing_strategy,
            "use_stdlib_implementations": use_stdlib,
            "use_custom_implementations": use_custom,
        },
        "encryption_results": {},
    }
    if processing_strategy == "Stream":
        results["test_configuration"]["chunk_size"] = chunk_size

    for method_name, settings in enabled_methods:
        is_custom = settings.get("is_custom", False)
        impl_description = f"{'Custom' if is_custom else 'Standard'} {method_name.upper()} Implementation"

        if method_name not in implementations:
            logger.warning(f"No implementation found for {method_name}. Skipping.")
            continue

        logger.info(f"Running benchmark for {impl_description}")

        try:
            implementation_factory = implementations[method_name]
            implementation = implementation_factory(**settings)
            reference = None
            if is_custom and "salsa20_std" in implementations:
                reference = implementations["salsa20_std"](
                    key_size=settings.get("key_size", "256"),
                    nonce=settings.get("nonce"),
                )
        except ValueError as e:
            logger.error(f"Invalid configuration for {impl_description}: {str(e)}")
            return False

        iteration_results = []
        for i in range(iterations):
            logger.info(f"Running iteration {i + 1}/{iterations} for {impl_description}")
            metrics = BenchmarkMetrics()

            try:
                _run_iteration(implementation, data, metrics, processing_strategy, chunk_size, reference)
                iteration_results.append(metrics.to_dict(i + 1))
                logger.info(f"Iteration {i + 1} completed successfully")
            except Exception as e:
                logger.error(f"Error in iteration {i + 1}: {str(e)}")
                traceback.print_exc()

            # force GC between iterations
            gc.collect()

        results["encryption_results"][method_name] = {
            "iterations": iteration_results,
            "aggregated_metrics": calculate_aggregated_metrics(iteration_results, data_size),
            "configuration": settings,
            "implementation_type": "custom" if is_custom else "stdlib",
            "description": implementation.description,
        }

        logger.info(f"Benchmark completed for {impl_description}")

    success = save_results(results, session_dir)
    gc.collect()

    return success or False
