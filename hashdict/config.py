"""
Fixed capacity policy for the hash table, plus benchmark defaults.

The thresholds are expressed as integer fractions so the table can compare
``count`` against ``capacity`` exactly:
- grow  when count / capacity > GROW_NUMERATOR / GROW_DENOMINATOR
- shrink when count / capacity < SHRINK_NUMERATOR / SHRINK_DENOMINATOR
"""

# Bucket count of a freshly constructed table.
MIN_CAPACITY = 16

# Upper load factor (3/4): exceeding it doubles the capacity.
GROW_NUMERATOR = 3
GROW_DENOMINATOR = 4

# Lower load factor (1/4): dropping below it halves the capacity (repeatedly).
SHRINK_NUMERATOR = 1
SHRINK_DENOMINATOR = 4

GROWTH_FACTOR = 2

# Benchmark harness defaults
BENCH_BASE_INPUT = 100
BENCH_ROUNDS = 12
BENCH_ITERATIONS = 5
BENCH_OUTPUT_CSV = "hash_table_performance_with_space.csv"
