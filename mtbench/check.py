"""Differential check of :class:`mtwister.MT19937` against the numpy reference."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, MutableSequence

from mtwister import MT19937, twist

from .reference import ReferenceMT19937

LOGGER = logging.getLogger(__name__)

__all__ = ["CheckResult", "Mismatch", "check_against_reference"]


@dataclass(slots=True, frozen=True)
class Mismatch:
    """First draw where the two generators disagreed."""

    seed: int
    index: int
    expected: int
    got: int


@dataclass(slots=True)
class CheckResult:
    """Outcome of :func:`check_against_reference`."""

    passes: int
    seeds_checked: int
    draws: int
    mismatch: Mismatch | None = None

    @property
    def ok(self) -> bool:
        return self.mismatch is None


def check_against_reference(
    *,
    seeds: Iterable[int] = range(5000),
    draws: int = 5000,
    passes: int = 1,
    twister: Callable[[MutableSequence[int]], None] = twist,
) -> CheckResult:
    """Compare the first *draws* outputs for every seed in *seeds*.

    The comparison stops at the first mismatching word.  *seeds* is
    materialised once so that every pass visits the same values.
    """

    seed_list = list(seeds)
    if not seed_list:
        raise ValueError("At least one seed is required")
    if draws < 1:
        raise ValueError("The number of draws must be positive")
    if passes < 1:
        raise ValueError("The number of passes must be positive")

    ours = MT19937(twister=twister)
    reference = ReferenceMT19937()
    checked = 0

    for pass_index in range(passes):
        for position, seed in enumerate(seed_list):
            ours.seed(seed)
            reference.seed(seed)
            if position % 100 == 0:
                LOGGER.info(
                    "Pass %d/%d: %3d%% of seeds checked",
                    pass_index + 1,
                    passes,
                    100 * position // len(seed_list),
                )

            expected = reference.draw(draws)
            for n in range(draws):
                got = ours.next_u32()
                if got != expected[n]:
                    mismatch = Mismatch(seed, n, int(expected[n]), got)
                    LOGGER.error(
                        "Mismatch on pass %d/%d: seed=%d n=%d expected %d got %d",
                        pass_index + 1,
                        passes,
                        seed,
                        n,
                        mismatch.expected,
                        got,
                    )
                    return CheckResult(pass_index + 1, checked, draws, mismatch)
            checked += 1

        LOGGER.info("Pass %d/%d OK", pass_index + 1, passes)

    return CheckResult(passes, checked, draws)
