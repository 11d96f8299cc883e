import sys
import gc
import json
import logging
import argparse
import traceback

# setup logging
logger = logging.getLogger("PythonCore")
logger.setLevel(logging.INFO)

if not logger.handlers:
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    ch.setFormatter(formatter)
    logger.addHandler(ch)

from salsabench.core.registry import register_all_implementations
from salsabench.core.benchmark_runner import run_benchmarks


def load_config(config_file):
    # load a JSON session configuration
    with open(config_file, 'r') as f:
        return json.load(f)


def main(config=None, argv=None):
    # main entry point
    if not config:
        parser = argparse.ArgumentParser(description="Salsa20 Encryption Benchmarking")
        parser.add_argument("config_file", help="Path to the test configuration JSON file")
        args = parser.parse_args(argv)

        try:
            config = load_config(args.config_file)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading configuration: {str(e)}")
            return False

    gc_was_enabled = gc.isenabled()

    try:
        implementations = register_all_implementations()
        return run_benchmarks(config, implementations)
    except Exception as e:
        logger.error(f"Error in main function: {str(e)}")
        traceback.print_exc()
        return False
    finally:
        # restore original garbage collection state
        if gc_was_enabled:
            gc.enable()
        else:
            gc.disable()
        gc.collect()


def run():
    # console entry point, exit status reflects success
    sys.exit(0 if main() else 1)


if __name__ == "__main__":
    run()
