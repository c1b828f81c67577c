"""
Test data generators for JSON parsing benchmarks.

Creates various JSON structures optimized for performance testing:
- Different sizes (small/large)
- Different complexity levels (simple/nested/mixed)
- String-heavy content with escape sequences
- Number-heavy and very deeply nested documents
"""

import json
import random
import string
from pathlib import Path
from typing import Any

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3
_SEED = 20240115


def generate_test_data(data_type: str) -> str:
    """Generates JSON test data based on specified type."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
        "number_heavy": _generate_number_heavy,
        "deep_array": _generate_deep_array,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    random.seed(_SEED)
    return generators[data_type]()


def write_test_file(data_type: str, directory: Path) -> Path:
    """Writes generated data to a file for the file-reading benchmarks."""
    path = directory / f"{data_type}.json"
    path.write_text(generate_test_data(data_type), encoding="utf-8")
    return path


def _generate_small_object() -> str:
    """Generates a small JSON object (< 1KB) with basic key-value pairs."""
    data = {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }
    return json.dumps(data)


def _timestamp() -> str:
    month = random.randint(1, 12)
    day = random.randint(1, 28)
    hour = random.randint(0, 23)
    minute = random.randint(0, 59)
    return f"2024-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:00Z"


def _generate_large_object() -> str:
    """Generates a large JSON object (> 10KB) with many fields."""
    data = {
        "user_id": random.randint(1000000, 9999999),
        "profile": {
            "first_name": _random_string(10),
            "last_name": _random_string(12),
            "email": f"{_random_string(8)}@{_random_string(6)}.com",
            "address": {
                "street": f"{random.randint(1, 9999)} {_random_string(8)} St",
                "city": _random_string(12),
                "zip": f"{random.randint(10000, 99999)}",
                "country": "US",
            },
            "notifications": {
                "email": random.choice([True, False]),
                "sms": random.choice([True, False]),
                "push": random.choice([True, False]),
            },
        },
        # Generate transaction history
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "currency": random.choice(["USD", "EUR", "GBP", "JPY"]),
                "timestamp": _timestamp(),
                "description": f"Payment for {_random_string(20)}",
                "status": random.choice(["completed", "pending", "failed"]),
            }
            for i in range(50)
        ],
        # Generate activity log
        "activity_log": [
            {
                "timestamp": _timestamp(),
                "action": random.choice(
                    ["login", "logout", "purchase", "view", "update"]
                ),
                "ip_address": ".".join(
                    str(random.randint(1, 255)) for _ in range(4)
                ),
                "user_agent": f"Mozilla/5.0 ({_random_string(20)})",
            }
            for _ in range(30)
        ],
    }
    return json.dumps(data)


def _generate_mixed_array() -> str:
    """Generates a large array with mixed data types."""
    array: list[Any] = []

    for i in range(200):
        choice = random.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(random.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(random.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            # Nested object
            array.append(
                {
                    "index": i,
                    "value": _random_string(10),
                    "score": round(random.uniform(0, 100), 2),
                }
            )

    return json.dumps(array)


def _generate_nested_structure() -> str:
    """Generates deeply nested JSON structure."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
            "nested": create_nested_dict(depth - 1),
        }

    data = create_nested_dict(6)
    return json.dumps(data)


def _generate_string_heavy() -> str:
    """Generates JSON with many string escape sequences."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(
                    random.choice(
                        ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\t"]
                    )
                )
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    strings = [create_escaped_string() for _ in range(100)]
    unicode = [
        f"Unicode: \\u{random.randint(0x00A0, 0x2FFF):04x}" for _ in range(50)
    ]
    # Escapes are already spelled out, so the document is assembled by hand
    body = ", ".join(f'"{s}"' for s in strings)
    escapes = ", ".join(f'"{s}"' for s in unicode)
    return f'{{"strings": [{body}], "unicode": [{escapes}]}}'


def _generate_number_heavy() -> str:
    """Generates a matrix of integers, fractions and exponents."""
    rows = [
        [
            random.choice(
                [
                    random.randint(-(10**9), 10**9),
                    round(random.uniform(-1e6, 1e6), 6),
                    random.uniform(-1.0, 1.0)
                    * 10.0 ** random.randint(-30, 30),
                ]
            )
            for _ in range(50)
        ]
        for _ in range(40)
    ]
    return json.dumps({"matrix": rows})


def _generate_deep_array() -> str:
    """Generates arrays nested well past the interpreter recursion limit."""
    depth = 20_000
    return "[" * depth + "0" + "]" * depth


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
