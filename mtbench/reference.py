"""Known-correct MT19937 built on :mod:`numpy.random`.

``numpy.random.RandomState`` seeds integer seeds with the reference
``init_genrand`` routine.  Its key is loaded into a
:class:`numpy.random.MT19937` bit generator whose ``random_raw`` returns the
raw tempered 32-bit outputs.
"""

from __future__ import annotations

import numpy as np

__all__ = ["ReferenceMT19937", "initial_words"]


def initial_words(seed: int) -> np.ndarray:
    """Return the 624 seeded words the reference generator starts from."""

    _, key, _, _, _ = np.random.RandomState(seed).get_state(legacy=True)
    return np.asarray(key, dtype=np.uint32)


class ReferenceMT19937:
    """Reference generator with the same ``seed``/``next_u32`` surface."""

    def __init__(self, seed: int = 5489) -> None:
        self._bitgen = np.random.MT19937()
        self.seed(seed)

    def seed(self, value: int) -> None:
        _, key, pos, _, _ = np.random.RandomState(value).get_state(legacy=True)
        self._bitgen.state = {
            "bit_generator": "MT19937",
            "state": {"key": np.asarray(key, dtype=np.uint32), "pos": int(pos)},
        }

    def next_u32(self) -> int:
        return int(self._bitgen.random_raw())

    def draw(self, n: int) -> np.ndarray:
        """Return the next *n* outputs as a ``uint32`` array."""

        return self._bitgen.random_raw(n).astype(np.uint32)

    @property
    def state(self) -> dict:
        return self._bitgen.state
