"""Module-level API mimicking the reference ``mt19937ar`` C code and libc.

All functions operate on the default generator from
:mod:`mtwister.random_utils`.  ``rand`` keeps the legacy 31-bit masked output
of a libc ``rand()`` replacement; use :func:`rand_u32` for the full word.
"""

from __future__ import annotations

from .random_utils import (
    default_generator,
    genrand_int31,
    genrand_int32,
    genrand_real1,
    genrand_real2,
    genrand_real3,
    genrand_res53,
    init_gen_rand,
)

RAND_MAX = 0x7FFFFFFF

__all__ = [
    "RAND_MAX",
    "init_genrand",
    "genrand_int31",
    "genrand_int32",
    "genrand_real1",
    "genrand_real2",
    "genrand_real3",
    "genrand_res53",
    "rand",
    "rand_u32",
    "srand",
]


def init_genrand(s: int) -> None:
    """Seed the default generator with the 32-bit value *s*."""

    init_gen_rand(s)


srand = init_genrand


def rand_u32() -> int:
    """Unsigned 32-bit draw in ``[0, 2**32)``."""

    return default_generator().next_u32()


def rand() -> int:
    """Draw in ``[0, RAND_MAX]``: the full word with its top bit cleared."""

    return rand_u32() & RAND_MAX
