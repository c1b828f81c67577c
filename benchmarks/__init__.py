"""
Benchmark suite for millijson parsing performance.

Compares millijson against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing and validation speed and memory usage across different
data types.
"""
