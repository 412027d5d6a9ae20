"""
hashdict Command-Line Interface (CLI)

Exposes the benchmark harness as a subcommand.

Usage examples:
    python -m hashdict.cli bench
    python -m hashdict.cli bench --output results.csv --base-input 50 --rounds 6
    hashdict bench --iterations 3 --verbose
"""

import argparse
import logging
import sys

from . import bench
from .config import BENCH_BASE_INPUT, BENCH_ITERATIONS, BENCH_OUTPUT_CSV, BENCH_ROUNDS
from .logger_config import configure_logger


# -------------------------------------------------------------------
# Command handlers
# -------------------------------------------------------------------

def cmd_bench(args):
    """Run the benchmark suite and write the CSV report."""
    rows = bench.run_benchmarks(
        args.output,
        base_input=args.base_input,
        rounds=args.rounds,
        iterations=args.iterations,
    )
    print(f"Benchmark completed: {len(rows)} rows written to {args.output}")


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="hashdict", description="hashdict hash table tools")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging (resize events)")
    p.add_argument("--log-file", default=None, help="Also write log records to this file")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("bench", help="Benchmark HashTable / StringDictionary operations")
    s.add_argument("--output", default=BENCH_OUTPUT_CSV)
    s.add_argument("--base-input", type=int, default=BENCH_BASE_INPUT)
    s.add_argument("--rounds", type=int, default=BENCH_ROUNDS)
    s.add_argument("--iterations", type=int, default=BENCH_ITERATIONS)
    s.set_defaults(func=cmd_bench)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `hashdict` or `python -m hashdict.cli`."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logger(
        "hashdict",
        level=logging.DEBUG if args.verbose else logging.INFO,
        output="both" if args.log_file else "console",
        log_file=args.log_file,
    )
    try:
        args.func(args)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
