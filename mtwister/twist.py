"""Batch regeneration ("twist") of the MT19937 word array.

Every function here rewrites the 624 words in place as a single left-to-right
pass: index ``i`` combines the top bit of ``words[i]`` with the low 31 bits of
``words[i + 1]`` and mixes in ``words[i + 397]``, all indices modulo 624.  From
``i = 227`` onwards ``words[i + 397]`` wraps to a word that has already been
rewritten during the same pass, and the final index reads the fresh
``words[0]``.  The variants below differ only in how they get there:

``twist_reference``
    Direct modulo-indexed loop with a plain parity test.
``twist``
    Loop split into three ranges so no modulo is needed.
``twist_branchless``
    Same split, selecting the magic constant by sign extension.
``twist_array``
    Vectorised over a ``uint32`` :class:`numpy.ndarray`.

None of them touch the cursor; the generator resets it after twisting.
"""

from __future__ import annotations

from typing import Callable, MutableSequence

import numpy as np

from .state import LOWER_MASK, M, MATRIX_A, N, UPPER_MASK

__all__ = [
    "TWISTERS",
    "twist",
    "twist_array",
    "twist_branchless",
    "twist_reference",
]

_MAG01 = (0, MATRIX_A)
_SPLIT = N - M


def twist_reference(words: MutableSequence[int]) -> None:
    """Regenerate *words* with the textbook modulo-indexed recurrence."""

    for i in range(N):
        y = (words[i] & UPPER_MASK) | (words[(i + 1) % N] & LOWER_MASK)
        words[i] = words[(i + M) % N] ^ (y >> 1)
        if y & 1:
            words[i] ^= MATRIX_A


def twist(words: MutableSequence[int]) -> None:
    """Regenerate *words* without modulo arithmetic."""

    mag01 = _MAG01
    for i in range(_SPLIT):
        y = (words[i] & UPPER_MASK) | (words[i + 1] & LOWER_MASK)
        words[i] = words[i + M] ^ (y >> 1) ^ mag01[y & 1]
    for i in range(_SPLIT, N - 1):
        y = (words[i] & UPPER_MASK) | (words[i + 1] & LOWER_MASK)
        words[i] = words[i - _SPLIT] ^ (y >> 1) ^ mag01[y & 1]
    y = (words[N - 1] & UPPER_MASK) | (words[0] & LOWER_MASK)
    words[N - 1] = words[M - 1] ^ (y >> 1) ^ mag01[y & 1]


def twist_branchless(words: MutableSequence[int]) -> None:
    """Regenerate *words* choosing ``MATRIX_A`` through ``-(y & 1) & MATRIX_A``.

    ``-(y & 1)`` is either ``0`` or ``-1`` (all bits set), so the mask selects
    the constant exactly when ``y`` is odd.
    """

    for i in range(_SPLIT):
        y = (words[i] & UPPER_MASK) | (words[i + 1] & LOWER_MASK)
        words[i] = words[i + M] ^ (y >> 1) ^ (-(y & 1) & MATRIX_A)
    for i in range(_SPLIT, N - 1):
        y = (words[i] & UPPER_MASK) | (words[i + 1] & LOWER_MASK)
        words[i] = words[i - _SPLIT] ^ (y >> 1) ^ (-(y & 1) & MATRIX_A)
    y = (words[N - 1] & UPPER_MASK) | (words[0] & LOWER_MASK)
    words[N - 1] = words[M - 1] ^ (y >> 1) ^ (-(y & 1) & MATRIX_A)


def _mix(upper: np.ndarray, lower: np.ndarray, far: np.ndarray) -> np.ndarray:
    y = (upper & UPPER_MASK) | (lower & LOWER_MASK)
    return far ^ (y >> 1) ^ ((y & 1) * MATRIX_A)


def twist_array(words: np.ndarray) -> None:
    """Regenerate a ``uint32`` array of 624 words in place.

    The pass is cut into chunks of ``N - M`` words.  Inside a chunk every read
    either targets a word the sequential loop has not reached yet or one
    rewritten by an earlier chunk, so each chunk can be evaluated at once.
    """

    if words.dtype != np.uint32 or words.shape != (N,):
        raise ValueError(f"Expected a one dimensional uint32 array of {N} words")

    s = _SPLIT
    words[0:s] = _mix(words[0:s], words[1 : s + 1], words[M:N])
    words[s : 2 * s] = _mix(words[s : 2 * s], words[s + 1 : 2 * s + 1], words[0:s])
    words[2 * s : N - 1] = _mix(words[2 * s : N - 1], words[2 * s + 1 : N], words[s : M - 1])

    y = (int(words[N - 1]) & UPPER_MASK) | (int(words[0]) & LOWER_MASK)
    words[N - 1] = int(words[M - 1]) ^ (y >> 1) ^ _MAG01[y & 1]


TWISTERS: dict[str, Callable[[MutableSequence[int]], None]] = {
    "reference": twist_reference,
    "split": twist,
    "branchless": twist_branchless,
}
