import json
import os

import pytest

from salsabench.core import (
    BenchmarkMetrics,
    calculate_aggregated_metrics,
    save_results,
    measure_encryption_metrics,
    register_implementation,
    register_all_implementations,
    get_implementation,
    list_implementations,
    run_benchmarks,
)
from salsabench.core import registry
from salsabench.core.benchmark_runner import parse_size, get_enabled_methods
from salsabench import python_core


def make_config(tmp_path, **test_parameters):
    params = {
        "iterations": 2,
        "data_size": "4KB",
        "processing_strategy": "Memory",
        "use_stdlib": True,
        "use_custom": True,
    }
    params.update(test_parameters)
    return {
        "session_info": {"session_dir": str(tmp_path), "session_id": "test-session"},
        "test_parameters": params,
        "encryption_methods": {
            "salsa20": {"enabled": True, "key_size": "256", "nonce": "0001020304050607"},
        },
    }


def load_results(path):
    with open(path) as f:
        return json.load(f)


@pytest.mark.parametrize("text,expected", [
    ("64KB", 64 * 1024),
    ("1MB", 1024 * 1024),
    ("100B", 100),
    ("4096", 4096),
    (512, 512),
    (None, 7),
    ("lots", 7),
])
def test_parse_size(text, expected):
    assert parse_size(text, 7) == expected


def test_registry_lists_salsa20_variants():
    implementations = register_all_implementations()
    for name in ("salsa20", "salsa20_std", "salsa20_custom"):
        assert name in implementations
        assert name in list_implementations()
    assert get_implementation("salsa20_custom") is implementations["salsa20_custom"]
    assert get_implementation("missing") is None


def test_register_implementation_decorator(monkeypatch):
    monkeypatch.setattr(registry, "ENCRYPTION_IMPLEMENTATIONS", {})

    @register_implementation("salsa20_test")
    class DummyImplementation:
        pass

    assert get_implementation("salsa20_test") is DummyImplementation
    assert list_implementations() == ["salsa20_test"]

    register_all_implementations()
    assert list_implementations() == ["salsa20_test", "salsa20", "salsa20_std", "salsa20_custom"]


def test_get_enabled_methods_respects_flags():
    config = {"encryption_methods": {
        "salsa20": {"enabled": True, "key_size": "128"},
        "rc4": {"enabled": True},
    }}
    methods = get_enabled_methods(config, use_stdlib=False, use_custom=True)
    assert methods == [("salsa20_custom", {"key_size": "128", "is_custom": True})]


def test_metrics_measure_round_trip():
    implementations = register_all_implementations()
    impl = implementations["salsa20_custom"](key_size="256", nonce=bytes(8))
    metrics = BenchmarkMetrics()

    key = metrics.measure_keygen(impl.generate_key)
    metrics.set_algorithm_metadata(impl, len(key))
    data = os.urandom(1000)

    ciphertext = measure_encryption_metrics(metrics, impl.encrypt, data, key)
    plaintext = measure_encryption_metrics(metrics, impl.decrypt, ciphertext, key, data)

    assert plaintext == data
    result = metrics.to_dict(3)
    assert result["iteration"] == 3
    assert result["correctness_passed"] is True
    assert result["input_size_bytes"] == 1000
    assert result["ciphertext_size_bytes"] == 1000
    assert result["key_size_bits"] == 256
    assert result["num_rounds"] == 20
    assert result["block_size_bytes"] == 64
    assert result["nonce_size_bytes"] == 8
    assert result["is_custom_implementation"] is True
    assert result["library_version"] == "custom"
    assert result["encrypt_time_ns"] > 0


def test_metrics_detect_wrong_plaintext():
    metrics = BenchmarkMetrics()
    metrics.measure_decrypt(lambda data, key: b"wrong", b"ct", b"key", b"right")
    assert metrics.correctness_passed is False


def test_aggregated_metrics():
    iterations = [
        {"encrypt_time_ns": 1_000_000_000, "decrypt_time_ns": 500_000_000,
         "ciphertext_size_bytes": 100, "key_size_bytes": 32,
         "correctness_passed": True, "matches_reference": True, "num_rounds": 20},
        {"encrypt_time_ns": 3_000_000_000, "decrypt_time_ns": 1_500_000_000,
         "ciphertext_size_bytes": 100, "key_size_bytes": 32,
         "correctness_passed": False, "matches_reference": True, "num_rounds": 20},
    ]
    result = calculate_aggregated_metrics(iterations, 100)

    assert result["iterations_completed"] == 2
    assert result["all_correctness_checks_passed"] is False
    assert result["correctness_failures"] == 1
    assert result["avg_encrypt_time_s"] == 2.0
    assert result["avg_encrypt_throughput_bps"] == 50
    assert result["avg_decrypt_throughput_bps"] == 100
    assert result["avg_ciphertext_overhead_percent"] == 0
    assert result["total_num_keys"] == 2
    assert result["all_reference_checks_passed"] is True
    assert result["num_rounds"] == 20


def test_aggregated_metrics_empty():
    assert calculate_aggregated_metrics([], 100) == {}


def test_save_results(tmp_path):
    path = save_results({"hello": "world"}, str(tmp_path))
    assert path == os.path.join(str(tmp_path), "results", "python_results.json")
    assert load_results(path) == {"hello": "world"}


@pytest.mark.parametrize("strategy", ["Memory", "Stream"])
def test_run_benchmarks(tmp_path, strategy):
    config = make_config(tmp_path, processing_strategy=strategy, chunk_size="1KB")
    path = run_benchmarks(config, register_all_implementations())
    assert path

    results = load_results(path)
    assert results["session_id"] == "test-session"
    assert all(results["known_answer_checks"].values())
    assert results["test_configuration"]["processing_strategy"] == strategy

    custom = results["encryption_results"]["salsa20_custom"]
    stdlib = results["encryption_results"]["salsa20_std"]
    assert custom["implementation_type"] == "custom"
    assert stdlib["implementation_type"] == "stdlib"
    assert custom["aggregated_metrics"]["iterations_completed"] == 2
    assert custom["aggregated_metrics"]["all_correctness_checks_passed"] is True
    assert custom["aggregated_metrics"]["all_reference_checks_passed"] is True
    assert stdlib["aggregated_metrics"]["all_correctness_checks_passed"] is True


def test_run_benchmarks_without_methods(tmp_path):
    config = make_config(tmp_path)
    config["encryption_methods"]["salsa20"]["enabled"] = False
    assert run_benchmarks(config, register_all_implementations()) is False


def test_run_benchmarks_bad_nonce(tmp_path):
    config = make_config(tmp_path)
    config["encryption_methods"]["salsa20"]["nonce"] = "00"
    assert run_benchmarks(config, register_all_implementations()) is False


def test_main_reads_config_file(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(make_config(tmp_path, iterations=1, use_stdlib=False)))

    path = python_core.main(argv=[str(config_file)])
    assert path
    assert list(load_results(path)["encryption_results"]) == ["salsa20_custom"]


def test_main_missing_config(tmp_path):
    assert python_core.main(argv=[str(tmp_path / "missing.json")]) is False
