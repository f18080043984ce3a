"""Timing helpers and human-readable number formatting.

These only give a general idea of generator throughput; they are not a
rigorous benchmark.  Times are CPU time of the current process, not wall
clock.
"""

from __future__ import annotations

import math
import time
from typing import Sequence

import numpy as np

from mtwister import MT19937

__all__ = [
    "Timer",
    "digits",
    "estimate_calls_per_second",
    "numbers_per_second",
    "sscale",
    "summarize",
]

_SHORT_SCALE = (
    "",
    "thousand",
    "million",
    "billion",
    "trillion",
    "quadrillion",
    "quintillion",
    "sextillion",
    "septillion",
)


class Timer:
    """CPU-time stopwatch started on creation."""

    def __init__(self) -> None:
        self._mark = time.process_time()

    def elapsed_secs(self) -> float:
        return time.process_time() - self._mark

    def reset(self) -> None:
        self._mark = time.process_time()


def digits(n: float) -> int:
    """Number of digits in the integer part of *n*."""

    d = 1
    n = math.floor(n) / 10
    while n >= 1.0:
        d += 1
        n /= 10
    return d


def sscale(n: float, decimals: int = 1) -> str:
    """Format *n* using short-scale names, e.g. ``12345 -> "12.3 thousand"``.

    Numbers with at most four integer digits are printed without a suffix.
    """

    if not math.isfinite(n):
        return f"{n} "
    width = digits(n)
    exp = 0 if width <= 4 else 3 * ((width - 1) // 3)
    exp = min(exp, 3 * (len(_SHORT_SCALE) - 1))
    return f"{n / 10**exp:.{decimals}f} {_SHORT_SCALE[exp // 3]}"


def estimate_calls_per_second(
    generator: MT19937, run_secs: float = 1.0, limit: int = 10_000_000
) -> float:
    """Estimate how many draws per second *generator* sustains."""

    count = 0
    timer = Timer()
    while count < limit:
        generator.next_u32()
        count += 1
        if count % 10_000 == 0 and timer.elapsed_secs() >= run_secs:
            break

    elapsed = timer.elapsed_secs()
    if elapsed <= 0.0:
        return float("inf")
    return count / elapsed


def numbers_per_second(generator: MT19937, count: int) -> float:
    """Time *count* draws and return the achieved rate."""

    draw = generator.next_u32
    timer = Timer()
    for _ in range(count):
        draw()
    secs = timer.elapsed_secs()
    if secs <= 0.0:
        return float("inf")
    return count / secs


def summarize(samples: Sequence[float]) -> dict[str, float]:
    """Return mean, population standard deviation, minimum and maximum."""

    data = np.asarray(samples, dtype=float)
    if data.size == 0:
        raise ValueError("Cannot summarise an empty sample")
    return {
        "mean": float(np.mean(data)),
        "std": float(np.std(data)),
        "min": float(np.min(data)),
        "max": float(np.max(data)),
    }
