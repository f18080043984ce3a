"""Tooling around :mod:`mtwister`: reference checks, benchmarks and a CLI."""

from .bench import benchmark_against_reference, batch_benchmark, speed_sweep, xor_hash
from .check import CheckResult, Mismatch, check_against_reference
from .io import load_metadata, save_results
from .reference import ReferenceMT19937

__all__ = [
    "CheckResult",
    "Mismatch",
    "ReferenceMT19937",
    "batch_benchmark",
    "benchmark_against_reference",
    "check_against_reference",
    "load_metadata",
    "save_results",
    "speed_sweep",
    "xor_hash",
]
