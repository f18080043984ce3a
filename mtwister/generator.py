"""The MT19937 generator: lazy twisting plus output tempering."""

from __future__ import annotations

import logging
import operator
from typing import Callable, MutableSequence, SupportsIndex

import numpy as np

from .state import DEFAULT_SEED, N, GeneratorState, seed_state
from .twist import twist, twist_array

LOGGER = logging.getLogger(__name__)

__all__ = ["MT19937", "temper", "temper_array"]


def temper(y: int) -> int:
    """Apply the fixed MT19937 output tempering to the raw word *y*."""

    y ^= y >> 11
    y ^= (y << 7) & 0x9D2C5680
    y ^= (y << 15) & 0xEFC60000
    y ^= y >> 18
    return y


def temper_array(words: np.ndarray) -> np.ndarray:
    """Vectorised :func:`temper` for ``uint32`` arrays."""

    y = np.array(words, dtype=np.uint32)
    y ^= y >> 11
    y ^= (y << 7) & 0x9D2C5680
    y ^= (y << 15) & 0xEFC60000
    y ^= y >> 18
    return y


class MT19937:
    """Mersenne Twister producing unsigned 32-bit integers.

    Parameters
    ----------
    seed:
        Initial 32-bit seed, defaults to ``5489`` as in the reference code.
    twister:
        Pure-Python twist routine used by :meth:`next_u32`.  Every routine in
        :mod:`mtwister.twist` yields the same sequence.

    An instance is not safe to share between threads without external
    locking.
    """

    __slots__ = ("_state", "_twist")

    def __init__(
        self,
        seed: SupportsIndex = DEFAULT_SEED,
        *,
        twister: Callable[[MutableSequence[int]], None] = twist,
    ) -> None:
        self._twist = twister
        self._state = seed_state(seed)
        if twister is not twist:
            LOGGER.debug("Using twist routine %s", getattr(twister, "__name__", twister))

    def seed(self, value: SupportsIndex) -> None:
        """Reinitialise the state from *value*; the next draw twists first."""

        LOGGER.debug("Seeding MT19937 with %s", value)
        self._state = seed_state(value)

    def next_u32(self) -> int:
        """Return the next tempered 32-bit value."""

        state = self._state
        if state.cursor == N:
            self._twist(state.words)
            state.cursor = 0
        y = state.words[state.cursor]
        state.cursor += 1

        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y

    def __iter__(self) -> MT19937:
        return self

    def __next__(self) -> int:
        return self.next_u32()

    def fill(self, size: int) -> np.ndarray:
        """Draw *size* values at once as a ``uint32`` array.

        The state afterwards is identical to the one reached by calling
        :meth:`next_u32` *size* times.
        """

        size = operator.index(size)
        if size < 0:
            raise ValueError("size must be non-negative")

        out = np.empty(size, dtype=np.uint32)
        if size == 0:
            return out

        state = self._state
        words = np.array(state.words, dtype=np.uint32)
        cursor = state.cursor
        filled = 0
        while filled < size:
            if cursor == N:
                twist_array(words)
                cursor = 0
            take = min(N - cursor, size - filled)
            out[filled : filled + take] = temper_array(words[cursor : cursor + take])
            cursor += take
            filled += take

        state.words = words.tolist()
        state.cursor = cursor
        return out

    def getstate(self) -> GeneratorState:
        """Return a snapshot of the internal state."""

        return self._state.copy()

    def setstate(self, state: GeneratorState) -> None:
        """Restore a snapshot previously obtained from :meth:`getstate`."""

        self._state = state.normalized()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cursor={self._state.cursor})"
