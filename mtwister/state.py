"""Internal state of the MT19937 generator and its seeding routine."""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Any, Mapping, SupportsIndex

import numpy as np

N = 624
M = 397
MATRIX_A = 0x9908B0DF
UPPER_MASK = 0x80000000
LOWER_MASK = 0x7FFFFFFF
INIT_MULTIPLIER = 0x6C078965
WORD_MASK = 0xFFFFFFFF
DEFAULT_SEED = 5489

__all__ = [
    "DEFAULT_SEED",
    "INIT_MULTIPLIER",
    "LOWER_MASK",
    "M",
    "MATRIX_A",
    "N",
    "UPPER_MASK",
    "WORD_MASK",
    "GeneratorState",
    "seed_state",
    "validate_seed",
]


def validate_seed(value: Any) -> int:
    """Return *value* as a Python int in ``[0, 2**32)``.

    Anything accepted by :func:`operator.index` is allowed, which includes
    numpy integer scalars.
    """

    try:
        seed = operator.index(value)
    except TypeError:
        raise TypeError(f"Seed must be an integer, not {type(value).__name__}") from None
    if seed < 0 or seed > WORD_MASK:
        raise ValueError("Seed must be between 0 and 2**32 - 1")
    return seed


@dataclass(slots=True)
class GeneratorState:
    """The 624-word array together with the read cursor.

    ``cursor == N`` means the words have all been consumed and must be twisted
    before the next read.
    """

    words: list[int] = field(default_factory=lambda: [0] * N)
    cursor: int = N

    @property
    def needs_twist(self) -> bool:
        return self.cursor == N

    def copy(self) -> GeneratorState:
        return GeneratorState(list(self.words), self.cursor)

    def normalized(self) -> GeneratorState:
        """Return a well formed copy holding plain Python ints.

        Words and cursor go through :func:`operator.index`, so numpy integer
        scalars are accepted and anything else raises :class:`TypeError`.
        Lengths and ranges are checked with :class:`ValueError`.
        """

        if len(self.words) != N:
            raise ValueError(f"State must hold exactly {N} words, got {len(self.words)}")
        try:
            words = [operator.index(word) for word in self.words]
            cursor = operator.index(self.cursor)
        except TypeError:
            raise TypeError("State words and cursor must be integers") from None
        if any(word < 0 or word > WORD_MASK for word in words):
            raise ValueError("State words must be unsigned 32-bit integers")
        if not 0 <= cursor <= N:
            raise ValueError(f"Cursor must lie in [0, {N}], got {cursor}")
        return GeneratorState(words, cursor)

    def to_numpy_state(self) -> dict[str, Any]:
        """Return the state in the layout of :attr:`numpy.random.MT19937.state`."""

        return {
            "bit_generator": "MT19937",
            "state": {"key": np.array(self.words, dtype=np.uint32), "pos": self.cursor},
        }

    @classmethod
    def from_numpy_state(cls, state: Mapping[str, Any]) -> GeneratorState:
        """Build a state from a :class:`numpy.random.MT19937` state dictionary."""

        name = state.get("bit_generator")
        if name != "MT19937":
            raise ValueError(f"Expected an MT19937 state, got {name!r}")
        inner = state["state"]
        key = np.asarray(inner["key"])
        if key.shape != (N,):
            raise ValueError(f"State key must hold exactly {N} words, got shape {key.shape}")
        return cls(list(key), inner["pos"]).normalized()


def seed_state(value: SupportsIndex) -> GeneratorState:
    """Initialise a fresh state from a 32-bit seed.

    ``words[i] = 0x6C078965 * (words[i-1] ^ (words[i-1] >> 30)) + i`` taken
    modulo ``2**32``.  The cursor is left at ``N`` so that the first draw
    twists before reading.
    """

    prev = validate_seed(value)
    words = [prev] + [0] * (N - 1)
    for i in range(1, N):
        prev = words[i] = (INIT_MULTIPLIER * (prev ^ (prev >> 30)) + i) & WORD_MASK
    return GeneratorState(words, N)
