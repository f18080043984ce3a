"""Throughput benchmarks for :class:`mtwister.MT19937`.

Run times are not a random variable fluctuating around an average, so the
comparison against the reference keeps the *best* time of several passes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np
import xarray as xr

from mtwister import MT19937

from .reference import ReferenceMT19937
from .timing import Timer, estimate_calls_per_second, numbers_per_second, sscale, summarize

LOGGER = logging.getLogger(__name__)

_CHUNK = 1 << 20

__all__ = [
    "BatchResult",
    "BenchmarkResult",
    "batch_benchmark",
    "benchmark_against_reference",
    "speed_sweep",
    "timed_draws",
    "xor_hash",
]


@dataclass(slots=True)
class BenchmarkResult:
    """Best times of our generator and of the reference over all passes."""

    iterations: int
    passes: int
    reference_secs: float
    ours_secs: float
    hashes_match: bool

    @property
    def ratio(self) -> float:
        """``reference_secs / ours_secs``; above one means we are faster."""

        if self.ours_secs <= 0.0:
            return float("inf")
        return self.reference_secs / self.ours_secs


@dataclass(slots=True)
class BatchResult:
    """Per-batch throughput collected by :func:`batch_benchmark`."""

    estimated_speed: float
    total: int
    total_speed: float
    per_second: list[float] = field(default_factory=list)

    @property
    def summary(self) -> dict[str, float]:
        return summarize(self.per_second)


def xor_hash(values: Iterable[int]) -> int:
    """Fold *values* into ``0xFFFFFFFF`` with xor."""

    result = 0xFFFFFFFF
    for value in values:
        result ^= int(value)
    return result


def _hash_ours(generator: MT19937, seed: int, iterations: int) -> int:
    generator.seed(seed)
    draw = generator.next_u32
    result = 0xFFFFFFFF
    for _ in range(iterations):
        result ^= draw()
    return result


def _hash_reference(reference: ReferenceMT19937, seed: int, iterations: int) -> int:
    reference.seed(seed)
    result = 0xFFFFFFFF
    remaining = iterations
    while remaining > 0:
        take = min(remaining, _CHUNK)
        result ^= int(np.bitwise_xor.reduce(reference.draw(take)))
        remaining -= take
    return result


def benchmark_against_reference(
    iterations: int = 2_000_000, passes: int = 10, seed: int = 0
) -> BenchmarkResult:
    """Time hashing *iterations* draws with both generators, best of *passes*.

    The hashes keep the work observable and must agree on every pass.
    """

    if iterations < 1 or passes < 1:
        raise ValueError("Iterations and passes must be positive")

    LOGGER.info("Benchmarking against the reference implementation, best of %d passes", passes)
    ours = MT19937()
    reference = ReferenceMT19937()
    ref_best = float("inf")
    our_best = float("inf")

    for _ in range(passes):
        timer = Timer()
        ref_hash = _hash_reference(reference, seed, iterations)
        elapsed = timer.elapsed_secs()
        if elapsed < ref_best:
            ref_best = elapsed
            LOGGER.info("  * %9.7f secs (reference)", ref_best)
        else:
            LOGGER.info("  * no improvement (reference)")

        timer.reset()
        our_hash = _hash_ours(ours, seed, iterations)
        elapsed = timer.elapsed_secs()
        if elapsed < our_best:
            our_best = elapsed
            LOGGER.info("  * %9.7f secs (ours)", our_best)
        else:
            LOGGER.info("  * no improvement (ours)")

        if ref_hash != our_hash:
            LOGGER.error("Hashes do not match: reference %#010x, ours %#010x", ref_hash, our_hash)
            return BenchmarkResult(iterations, passes, ref_best, our_best, False)

    result = BenchmarkResult(iterations, passes, ref_best, our_best, True)
    LOGGER.info(
        "  * %9.7f x %s (higher is better)",
        result.ratio,
        "faster" if result.ratio > 1 else "slower",
    )
    return result


def batch_benchmark(generator: MT19937, *, part: int = 40, run_secs: float = 1.0) -> BatchResult:
    """Measure throughput over small, normal and large batches of draws.

    The batch size is derived from a priming estimate of calls per second:
    ``part - 30`` batches of ``count / (2 * part)`` draws, ``part - 30`` of
    ``count / part`` and ten of ``2 * count / part``, where
    ``count = part * speed * run_secs``.
    """

    if part <= 30:
        raise ValueError("part must be larger than 30")

    speed = estimate_calls_per_second(generator, run_secs)
    LOGGER.info("Priming system performance: ca. %s / second", sscale(speed, 2))
    count = int(part * speed * run_secs)
    sizes = (
        [count // (2 * part)] * (part - 30)
        + [count // part] * (part - 30)
        + [2 * count // part] * 10
    )
    LOGGER.info("Will generate %d batches of numbers", len(sizes))

    per_second: list[float] = []
    total = 0
    timer = Timer()
    for size in sizes:
        rate = numbers_per_second(generator, size)
        LOGGER.debug("Generated %s numbers at %s / second", sscale(size), sscale(rate))
        per_second.append(rate)
        total += size

    elapsed = timer.elapsed_secs()
    total_speed = total / elapsed if elapsed > 0.0 else float("inf")
    return BatchResult(speed, total, total_speed, per_second)


def timed_draws(generator: MT19937, n: int) -> float:
    """Seconds of CPU time needed for *n* draws."""

    draw = generator.next_u32
    timer = Timer()
    for _ in range(n):
        draw()
    return timer.elapsed_secs()


def speed_sweep(counts: Sequence[int], *, seed: int = 5769) -> xr.Dataset:
    """Time a freshly seeded generator for every entry of *counts*."""

    if len(counts) == 0:
        raise ValueError("At least one count is required")
    if any(count < 0 for count in counts):
        raise ValueError("Counts must be non-negative")

    generator = MT19937(seed)
    seconds = []
    for count in counts:
        generator.seed(seed)
        secs = timed_draws(generator, count)
        LOGGER.info("%d %f", count, secs)
        seconds.append(secs)

    count_index = np.asarray(counts, dtype=np.int64)
    secs_array = np.asarray(seconds, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        rate = np.where(secs_array > 0.0, count_index / secs_array, np.nan)

    dataset = xr.Dataset(
        {
            "seconds": ("count", secs_array, {"units": "s", "long_name": "CPU time"}),
            "numbers_per_second": ("count", rate, {"units": "1/s"}),
        },
        coords={"count": count_index},
        attrs={"generator": "MT19937", "seed": seed},
    )
    return dataset
