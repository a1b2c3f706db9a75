"""Collecting execution times of functions and summarising them."""

from __future__ import annotations

import atexit
import functools
import math
import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

_NS_PER_SEC = 1_000_000_000


@dataclass(frozen=True)
class Timestamp:
    """Wall-clock time split into seconds and nanoseconds."""

    sec: int = 0
    nsec: int = 0


def to_timestamp(time_ns: int) -> Timestamp:
    """Split a nanosecond count since the epoch into a Timestamp."""
    sec = abs(time_ns) // _NS_PER_SEC
    if time_ns < 0:
        sec = -sec
    return Timestamp(sec, time_ns - sec * _NS_PER_SEC)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def compute_sum(times: Sequence[int]) -> int:
    """Total of the elapsed times."""
    return sum(times)


def compute_mean(times: Sequence[int]) -> int:
    """Integer mean of the elapsed times, 0 when there are none."""
    if not times:
        return 0
    return _trunc_div(compute_sum(times), len(times))


def compute_median(times: Sequence[int]) -> int:
    """Upper median of the elapsed times."""
    if not times:
        raise ValueError("median of an empty list of times")
    return sorted(times)[len(times) // 2]


def compute_standard_deviation(times: Sequence[int]) -> int:
    """Integer standard deviation of the elapsed times, 0 for fewer than two."""
    if len(times) <= 1:
        return 0
    squared_sum = sum(t * t for t in times)
    mean = compute_mean(times)
    variance = _trunc_div(squared_sum, len(times)) - mean * mean
    return math.isqrt(max(variance, 0))


@dataclass(frozen=True)
class FunctionStatistics:
    """Summary of the times recorded for one function, in nanoseconds."""

    function_name: str
    calls: int
    min_ns: int
    max_ns: int
    mean_ns: int
    median_ns: int
    std_ns: int
    total_ns: int


class TimeMonitorManager:
    """Thread-safe store of function timings with a printable summary."""

    _instance: Optional["TimeMonitorManager"] = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._times: Dict[str, List[Tuple[Timestamp, int]]] = {}

    @classmethod
    def instance(cls) -> "TimeMonitorManager":
        """Return the shared manager, which prints its report at exit."""
        with cls._instance_lock:
            if cls._instance is None:
                manager = cls()
                atexit.register(lambda: sys.stderr.write(manager.report()))
                cls._instance = manager
            return cls._instance

    def register(self, name: str, start_timestamp: Timestamp, elapsed_ns: int) -> None:
        """Record one call of ``name``."""
        with self._lock:
            self._times.setdefault(name, []).append((start_timestamp, elapsed_ns))

    def statistics(self) -> List[FunctionStatistics]:
        """Per-function statistics, largest total time first."""
        with self._lock:
            snapshot = {name: [e for _, e in entries] for name, entries in self._times.items()}
        result = []
        for name in sorted(snapshot):
            times = sorted(snapshot[name])
            if not times:
                continue
            result.append(
                FunctionStatistics(
                    function_name=name,
                    calls=len(times),
                    min_ns=times[0],
                    max_ns=times[-1],
                    mean_ns=compute_mean(times),
                    median_ns=compute_median(times),
                    std_ns=compute_standard_deviation(times),
                    total_ns=compute_sum(times),
                )
            )
        result.sort(key=lambda s: s.total_ns, reverse=True)
        return result

    def report(self) -> str:
        """Human-readable summary of all recorded timings."""
        lines = [
            "============== Function Time Statistics ==============",
            'Time is sorted by "total time" of the function.',
        ]
        for s in self.statistics():
            lines.append(s.function_name)
            lines.append(f"# Calls   : {s.calls}")
            for label, value in (
                ("Time Min. ", s.min_ns),
                ("Time Max. ", s.max_ns),
                ("Time Avg. ", s.mean_ns),
                ("Time Med. ", s.median_ns),
                ("Time Std. ", s.std_ns),
                ("Time Total", s.total_ns),
            ):
                lines.append(f"{label}: {value * 1e-6:.6f} [ms]")
            lines.append("___________________________________________")
        return "\n".join(lines) + "\n"


class TimeMonitor:
    """Context manager that records how long its block took."""

    def __init__(
        self,
        file_name: str,
        function_name: str,
        manager: Optional[TimeMonitorManager] = None,
    ) -> None:
        self.name = f"{file_name}/{function_name}"
        self._manager = manager
        self._start_timestamp = Timestamp()
        self._start_counter = 0

    def __enter__(self) -> "TimeMonitor":
        self._start_timestamp = to_timestamp(time.time_ns())
        self._start_counter = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        elapsed = time.perf_counter_ns() - self._start_counter
        manager = self._manager or TimeMonitorManager.instance()
        manager.register(self.name, self._start_timestamp, elapsed)
        return False


def monitor_time(activate: bool = True) -> Callable[[Callable], Callable]:
    """Decorator that times every call of a function when ``activate`` is true."""

    def decorator(func: Callable) -> Callable:
        if not activate:
            return func

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with TimeMonitor(func.__code__.co_filename, func.__name__):
                return func(*args, **kwargs)

        return wrapper

    return decorator