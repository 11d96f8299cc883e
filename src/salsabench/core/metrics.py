import time
import logging
import psutil

# setup logging
logger = logging.getLogger("PythonCore")

# psutil raises these when a counter is unsupported or not permitted
_PSUTIL_ERRORS = (psutil.AccessDenied, AttributeError, OSError)

PHASES = ("keygen", "encrypt", "decrypt")


class BenchmarkMetrics:
    def __init__(self, process=None):
        # initialize with optional psutil process object
        self.process = process or psutil.Process()

        # check if context switches are available
        try:
            self.has_ctx_switches = self.process.num_ctx_switches() is not None
        except _PSUTIL_ERRORS:
            self.has_ctx_switches = False
            logger.warning("Context switch counters are not available - context switch metrics will not be collected")

        self.reset()

    def reset(self):
        # reset all metrics
        for phase in PHASES:
            setattr(self, f"{phase}_time_ns", 0)
            setattr(self, f"{phase}_cpu_time_ns", 0)
            setattr(self, f"{phase}_cpu_percent", 100)
            setattr(self, f"{phase}_peak_memory_bytes", 0)
            setattr(self, f"{phase}_allocated_memory_bytes", 0)
            setattr(self, f"{phase}_ctx_switches_voluntary", 0)
            setattr(self, f"{phase}_ctx_switches_involuntary", 0)

        self.input_size_bytes = 0
        self.ciphertext_size_bytes = 0
        self.decrypted_size_bytes = 0

        # additional metrics
        self.correctness_passed = True
        self.matches_reference = None
        self.key_size_bytes = 0
        self.key_size_bits = 0
        self.thread_count = 1
        self.process_priority = 0

        # algorithm-specific metrics
        self.block_size_bytes = None
        self.nonce_size_bytes = None
        self.num_rounds = None
        self.is_custom_implementation = False
        self.library_version = "PyCryptodome"

    def set_algorithm_metadata(self, implementation, key_size_bytes):
        # set algorithm-specific metadata based on the implementation
        self.key_size_bytes = key_size_bytes
        self.key_size_bits = key_size_bytes * 8

        self.is_custom_implementation = getattr(implementation, 'is_custom', False)
        self.library_version = "custom" if self.is_custom_implementation else "PyCryptodome"

        # stream cipher parameters published by the implementation
        self.num_rounds = getattr(implementation, 'num_rounds', None)
        self.block_size_bytes = getattr(implementation, 'block_size_bytes', None)
        self.nonce_size_bytes = getattr(implementation, 'nonce_size_bytes', None)

        try:
            self.thread_count = self.process.num_threads()
        except _PSUTIL_ERRORS:
            self.thread_count = 1

        try:
            # nice value on Unix systems
            self.process_priority = self.process.nice()
        except _PSUTIL_ERRORS:
            self.process_priority = 0

    def _snapshot(self):
        # capture cpu times, memory and context switches, any of which may be missing
        snapshot = {"cpu": None, "memory": None, "ctx": None}

        try:
            snapshot["cpu"] = self.process.cpu_times()
        except _PSUTIL_ERRORS:
            logger.warning("CPU time metrics are not available - CPU metrics will not be collected")

        try:
            snapshot["memory"] = self.process.memory_info()
        except _PSUTIL_ERRORS:
            pass

        if self.has_ctx_switches:
            try:
                snapshot["ctx"] = self.process.num_ctx_switches()
            except _PSUTIL_ERRORS:
                self.has_ctx_switches = False

        return snapshot

    def _record(self, phase, wall_time_ns, initial, final):
        setattr(self, f"{phase}_time_ns", wall_time_ns)

        if initial["cpu"] is not None and final["cpu"] is not None:
            cpu_user_diff = final["cpu"].user - initial["cpu"].user
            cpu_system_diff = final["cpu"].system - initial["cpu"].system
            total_cpu_time = cpu_user_diff + cpu_system_diff

            setattr(self, f"{phase}_cpu_time_ns", int(total_cpu_time * 1_000_000_000))

            wall_time_s = wall_time_ns / 1_000_000_000
            if wall_time_s > 0:
                setattr(self, f"{phase}_cpu_percent", (total_cpu_time / wall_time_s) * 100)

        if initial["ctx"] is not None and final["ctx"] is not None:
            setattr(self, f"{phase}_ctx_switches_voluntary",
                    max(0, final["ctx"].voluntary - initial["ctx"].voluntary))
            setattr(self, f"{phase}_ctx_switches_involuntary",
                    max(0, final["ctx"].involuntary - initial["ctx"].involuntary))

        if final["memory"] is not None:
            setattr(self, f"{phase}_peak_memory_bytes", final["memory"].rss)
            if initial["memory"] is not None:
                setattr(self, f"{phase}_allocated_memory_bytes",
                        max(0, final["memory"].rss - initial["memory"].rss))

    def _measure(self, phase, func, *args, **kwargs):
        initial = self._snapshot()

        # measure wall time with nanosecond precision
        start_time = time.perf_counter_ns()
        result = func(*args, **kwargs)
        end_time = time.perf_counter_ns()

        self._record(phase, end_time - start_time, initial, self._snapshot())
        return result

    def measure_keygen(self, key_gen_func, *args, **kwargs):
        return self._measure("keygen", key_gen_func, *args, **kwargs)

    def measure_encrypt(self, encrypt_func, plaintext, key, *args, **kwargs):
        self.input_size_bytes = len(plaintext)
        ciphertext = self._measure("encrypt", encrypt_func, plaintext, key, *args, **kwargs)
        self.ciphertext_size_bytes = len(ciphertext)
        return ciphertext

    def measure_decrypt(self, decrypt_func, ciphertext, key, original_plaintext, *args, **kwargs):
        decrypted_text = self._measure("decrypt", decrypt_func, ciphertext, key, *args, **kwargs)
        self.decrypted_size_bytes = len(decrypted_text)
        self.correctness_passed = decrypted_text == original_plaintext
        return decrypted_text

    def to_dict(self, iteration_number=1):
        result = {"iteration": iteration_number}

        for phase in PHASES:
            for field in ("time_ns", "cpu_time_ns", "cpu_percent", "peak_memory_bytes",
                          "allocated_memory_bytes", "ctx_switches_voluntary",
                          "ctx_switches_involuntary"):
                name = f"{phase}_{field}"
                result[name] = getattr(self, name)

        result.update({
            "key_size_bytes": self.key_size_bytes,
            "key_size_bits": self.key_size_bits,
            "thread_count": self.thread_count,
            "process_priority": self.process_priority,
            "input_size_bytes": self.input_size_bytes,
            "ciphertext_size_bytes": self.ciphertext_size_bytes,
            "decrypted_size_bytes": self.decrypted_size_bytes,
            "correctness_passed": self.correctness_passed,
            "is_custom_implementation": self.is_custom_implementation,
            "library_version": self.library_version,
        })

        if self.matches_reference is not None:
            result["matches_reference"] = self.matches_reference

        # add algorithm-specific fields if available
        if self.block_size_bytes is not None:
            result["block_size_bytes"] = self.block_size_bytes
        if self.nonce_size_bytes is not None:
            result["nonce_size_bytes"] = self.nonce_size_bytes
        if self.num_rounds is not None:
            result["num_rounds"] = self.num_rounds

        return result
