"""
Timing and space benchmarks for HashTable and StringDictionary.

Each operation receives a freshly generated list of pairs, builds its
container, exercises one operation on it and returns the container so its
footprint can be measured. Input sizes grow exponentially
(``base_input * 2**i``) and results are written to a CSV file.
"""

from __future__ import annotations

import csv
import logging
import random
import statistics
import sys
import time
from typing import Any, Callable, Dict, List, Tuple

from .config import BENCH_BASE_INPUT, BENCH_ITERATIONS, BENCH_ROUNDS
from .datastructures import HashTable, StringDictionary

logger = logging.getLogger(__name__)

PairFactory = Callable[[int], list]

CSV_HEADER = [
    "Input Size",
    "Operation",
    "Average Time (ms)",
    "Std Dev Time (ms)",
    "Average Space (bytes)",
]

# ----------------------------
# Helper Functions
# ----------------------------

def generate_random_pairs(size: int) -> List[Tuple[int, int]]:
    """Generate a list of random integer key-value pairs (keys may repeat)."""
    return [(random.randint(0, size * 10), random.randint(0, 1000000)) for _ in range(size)]


def generate_random_string_pairs(size: int) -> List[Tuple[str, str]]:
    """Same as :func:`generate_random_pairs`, with keys and values as strings."""
    return [(f"k{k}", str(v)) for k, v in generate_random_pairs(size)]


def measure_operation_time(
    operation: Callable[[list], Any],
    input_size: int,
    iterations: int = 5,
    generate: PairFactory = generate_random_pairs,
) -> Tuple[float, float]:
    """Time *operation* on fresh data of *input_size* pairs.

    Returns (mean, standard deviation) in milliseconds over *iterations* runs;
    data generation is not timed.
    """
    elapsed_ms = []
    for _ in range(iterations):
        data = generate(input_size)
        started = time.perf_counter()
        operation(data)
        elapsed_ms.append((time.perf_counter() - started) * 1000)

    spread = statistics.stdev(elapsed_ms) if len(elapsed_ms) > 1 else 0.0
    return statistics.mean(elapsed_ms), spread


def measure_space(
    operation: Callable[[list], Any],
    input_size: int,
    iterations: int = 3,
    generate: PairFactory = generate_random_pairs,
) -> float:
    """Return the average footprint (bytes) of the container built by *operation*.

    Counts the container object, its bucket list, each bucket, and every
    stored key and value.
    """
    sizes = []
    for _ in range(iterations):
        container = operation(generate(input_size))
        table = container._table if isinstance(container, StringDictionary) else container
        total = sys.getsizeof(container) + sys.getsizeof(table._buckets)
        for bucket in table._buckets:
            total += sys.getsizeof(bucket)
        for k, v in table.items():
            total += sys.getsizeof(k)
            total += sys.getsizeof(v)
        sizes.append(total)
    return statistics.mean(sizes)


# ----------------------------
# Operations to Benchmark
# ----------------------------

def _filled(data: list) -> HashTable:
    table: HashTable = HashTable()
    for k, v in data:
        table[k] = v
    return table


def bench_insert(data: list) -> HashTable:
    table: HashTable = HashTable()
    for k, v in data:
        table.insert(k, v)
    return table


def bench_at(data: list) -> HashTable:
    table = _filled(data)
    for k, _ in data:
        table.at(k)
    return table


def bench_contains_key(data: list) -> HashTable:
    table = _filled(data)
    for k, _ in data:
        table.contains_key(k)
    return table


def bench_erase(data: list) -> HashTable:
    table = _filled(data)
    # Drain half of the keys so the shrink path runs too.
    for k, _ in data[: len(data) // 2]:
        table.erase(k)
    return table


def bench_iterate(data: list) -> HashTable:
    table = _filled(data)
    for _ in table.items():
        pass
    return table


def bench_dictionary_update(data: list) -> StringDictionary:
    d = StringDictionary()
    d.update(data)
    return d


# name -> (operation, input generator)
OPERATIONS: Dict[str, Tuple[Callable[[list], Any], PairFactory]] = {
    "insert": (bench_insert, generate_random_pairs),
    "at": (bench_at, generate_random_pairs),
    "contains_key": (bench_contains_key, generate_random_pairs),
    "erase": (bench_erase, generate_random_pairs),
    "iterate": (bench_iterate, generate_random_pairs),
    "dictionary_update": (bench_dictionary_update, generate_random_string_pairs),
}

# ----------------------------
# Benchmark Runner
# ----------------------------

def run_benchmarks(
    output_file: str,
    base_input: int = BENCH_BASE_INPUT,
    rounds: int = BENCH_ROUNDS,
    iterations: int = BENCH_ITERATIONS,
) -> List[List[str]]:
    """Run exponential performance tests and write them to *output_file*.

    Returns the data rows written (header excluded).
    """
    if base_input < 1 or rounds < 1 or iterations < 1:
        raise ValueError("base_input, rounds and iterations must all be positive")

    input_sizes = [base_input * (2 ** i) for i in range(rounds)]
    rows: List[List[str]] = []

    with open(output_file, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(CSV_HEADER)

        for op_name, (op_func, generate) in OPERATIONS.items():
            for size in input_sizes:
                avg_time, std_time = measure_operation_time(op_func, size, iterations, generate)
                avg_space = measure_space(op_func, size, min(iterations, 3), generate)
                row = [str(size), op_name, f"{avg_time:.3f}", f"{std_time:.3f}", f"{avg_space:.0f}"]
                writer.writerow(row)
                rows.append(row)
                logger.info(
                    "%-18s | Size: %-8d | Avg Time: %.3f ms | Std: %.3f ms | Avg Space: %.0f bytes",
                    op_name, size, avg_time, std_time, avg_space,
                )

    logger.info("Benchmark completed. Results saved to %s", output_file)
    return rows
