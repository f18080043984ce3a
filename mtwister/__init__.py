"""MT19937 Mersenne Twister pseudo-random number generator.

The core is :class:`MT19937`, which owns a :class:`GeneratorState` and exposes
``seed`` and ``next_u32``.  :mod:`mtwister.random_utils` and
:mod:`mtwister.mt19937ar` layer derived draws and a module-level default
generator on top of it.  The generator is not suitable for cryptographic use:
624 consecutive outputs reveal its whole state.
"""

from .generator import MT19937, temper, temper_array
from .random_utils import (
    default_generator,
    genrand_int31,
    genrand_int32,
    genrand_real1,
    genrand_real2,
    genrand_real3,
    genrand_res53,
    init_gen_rand,
    rand,
    randbelow,
)
from .state import DEFAULT_SEED, M, MATRIX_A, N, GeneratorState, seed_state
from .twist import TWISTERS, twist, twist_array, twist_branchless, twist_reference

__all__ = [
    "DEFAULT_SEED",
    "M",
    "MATRIX_A",
    "N",
    "TWISTERS",
    "GeneratorState",
    "MT19937",
    "default_generator",
    "genrand_int31",
    "genrand_int32",
    "genrand_real1",
    "genrand_real2",
    "genrand_real3",
    "genrand_res53",
    "init_gen_rand",
    "rand",
    "randbelow",
    "seed_state",
    "temper",
    "temper_array",
    "twist",
    "twist_array",
    "twist_branchless",
    "twist_reference",
]
