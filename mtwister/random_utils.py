"""Derived draws layered on top of :class:`~mtwister.generator.MT19937`.

The conversions follow the routines historically shipped with the reference
``mt19937ar`` code (``genrand_real1`` and friends).  Every helper consumes
values from :meth:`MT19937.next_u32` or :meth:`MT19937.fill` and
post-processes them; none of them reaches into the generator state.

A module-level default generator backs the helpers when no explicit
*generator* is passed.  It is plain shared state, so concurrent callers must
serialise access themselves.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .generator import MT19937
from .state import DEFAULT_SEED

_INV_2_32_MINUS_1 = 1.0 / 4294967295.0
_INV_2_32 = 1.0 / 4294967296.0
_INV_2_53 = 1.0 / 9007199254740992.0


@dataclass
class _DefaultGenerator:
    """Container holding the shared generator."""

    rng: MT19937 = field(default_factory=MT19937)

    def reseed(self, seed: Optional[int] = None) -> None:
        self.rng.seed(DEFAULT_SEED if seed is None else seed)


_STATE = _DefaultGenerator()


def default_generator() -> MT19937:
    """Return the generator used when no explicit one is supplied."""

    return _STATE.rng


def init_gen_rand(seed: Optional[int] = None) -> None:
    """Reseed the default generator.

    Parameters
    ----------
    seed:
        32-bit seed.  When *None* the reference default seed ``5489`` is used,
        so results stay reproducible.
    """

    _STATE.reseed(seed)


def _pick(generator: Optional[MT19937]) -> MT19937:
    return _STATE.rng if generator is None else generator


def genrand_int32(size: Optional[int] = None, *, generator: Optional[MT19937] = None):
    """Return unsigned 32-bit integers in ``[0, 2**32)``."""

    rng = _pick(generator)
    if size is None:
        return rng.next_u32()
    return rng.fill(size)


def genrand_int31(size: Optional[int] = None, *, generator: Optional[MT19937] = None):
    """Return 31-bit integers in ``[0, 2**31)`` built from the upper bits."""

    rng = _pick(generator)
    if size is None:
        return rng.next_u32() >> 1
    return rng.fill(size) >> 1


def genrand_real1(size: Optional[int] = None, *, generator: Optional[MT19937] = None):
    """Draws scaled by ``1 / (2**32 - 1)``, in the closed interval ``[0, 1]``."""

    rng = _pick(generator)
    if size is None:
        return rng.next_u32() * _INV_2_32_MINUS_1
    return rng.fill(size).astype(float) * _INV_2_32_MINUS_1


def genrand_real2(size: Optional[int] = None, *, generator: Optional[MT19937] = None):
    """Draws scaled by ``1 / 2**32``, in the half-open interval ``[0, 1)``."""

    rng = _pick(generator)
    if size is None:
        return rng.next_u32() * _INV_2_32
    return rng.fill(size).astype(float) * _INV_2_32


def genrand_real3(size: Optional[int] = None, *, generator: Optional[MT19937] = None):
    """Draws offset by one half and scaled by ``1 / 2**32``, in ``(0, 1)``."""

    rng = _pick(generator)
    if size is None:
        return (rng.next_u32() + 0.5) * _INV_2_32
    return (rng.fill(size).astype(float) + 0.5) * _INV_2_32


def genrand_res53(size: Optional[int] = None, *, generator: Optional[MT19937] = None):
    """Two draws joined as ``(a * 2**26 + b) / 2**53``, a 53-bit value in ``[0, 1)``.

    Each value consumes two consecutive 32-bit draws: the first supplies the
    top 27 bits and the second the low 26 bits.
    """

    rng = _pick(generator)
    if size is None:
        a = rng.next_u32() >> 5
        b = rng.next_u32() >> 6
        return (a * 67108864.0 + b) * _INV_2_53

    raw = rng.fill(2 * operator.index(size)).reshape(-1, 2)
    a = (raw[:, 0] >> 5).astype(float)
    b = (raw[:, 1] >> 6).astype(float)
    return (a * 67108864.0 + b) * _INV_2_53


def randbelow(n: int, *, generator: Optional[MT19937] = None) -> int:
    """Return an unbiased integer in ``[0, n)`` for ``1 <= n <= 2**32``.

    Draws are masked to the bit length of ``n - 1`` and rejected while they
    fall outside the range.
    """

    n = operator.index(n)
    if n < 1 or n > 1 << 32:
        raise ValueError("n must satisfy 1 <= n <= 2**32")

    rng = _pick(generator)
    mask = (1 << (n - 1).bit_length()) - 1
    while True:
        value = rng.next_u32() & mask
        if value < n:
            return value


def rand(size: int) -> np.ndarray:
    """Return a vector of uniformly distributed numbers in ``[0, 1)``."""

    return genrand_real2(size)


__all__ = [
    "default_generator",
    "init_gen_rand",
    "genrand_int31",
    "genrand_int32",
    "genrand_real1",
    "genrand_real2",
    "genrand_real3",
    "genrand_res53",
    "rand",
    "randbelow",
]
