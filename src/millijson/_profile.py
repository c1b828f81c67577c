"""
Opt-in timing of the parser's hot paths.

Set MILLIJSON_PROFILE in the environment before import to record how often
the literal decoders and the engine run, how long they take and how many
input bytes they consume. When the variable is absent ProfileContext is a
context that records nothing.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "MILLIJSON_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated calls, time and consumed input for one hot path."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        """Adds one call's duration and consumed byte count."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += nbytes

    @property
    def mean_time_ns(self) -> float:
        if not self.call_count:
            return 0.0
        return self.total_time_ns / self.call_count


_hot_path_stats: dict[str, HotPathStats] = {}


class TimedContext:
    """
    Times the enclosed block and charges it to ``func_name``.

    The block sets ``nbytes`` to the number of input bytes it consumed once
    that is known; a block that raises is recorded with whatever was set.
    """

    def __init__(self, func_name: str) -> None:
        self.func_name = func_name
        self.nbytes = 0
        self.start_time = 0

    def __enter__(self) -> "TimedContext":
        self.start_time = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        duration = time.perf_counter_ns() - self.start_time
        stats = _hot_path_stats.get(self.func_name)
        if stats is None:
            stats = _hot_path_stats[self.func_name] = HotPathStats(
                self.func_name
            )
        stats.record_call(duration, self.nbytes)


class NullContext:
    """Accepts the same calls as TimedContext and records nothing."""

    def __init__(self, func_name: str) -> None:
        self.nbytes = 0

    def __enter__(self) -> "NullContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass


ProfileContext: type[TimedContext | NullContext] = (
    TimedContext if PROFILE_HOT_PATHS else NullContext
)


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the statistics recorded so far."""
    return dict(_hot_path_stats)


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()
