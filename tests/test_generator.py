import random
import typing

import numpy as np
import pytest

from mtbench.reference import ReferenceMT19937
from mtwister import MT19937, GeneratorState, temper, temper_array
from mtwister.state import N, seed_state
from mtwister.twist import TWISTERS


def draws(generator, n):
    return [generator.next_u32() for _ in range(n)]


def test_first_values_for_seed_one():
    generator = MT19937(1)

    assert generator.next_u32() == 1791095845
    assert generator.next_u32() == 4282876139


def test_default_seed_sequence():
    generator = MT19937()

    assert generator.next_u32() == 3499211612
    values = generator.fill(9999)
    assert int(values[-1]) == 4123659995


def test_625th_value_matches_reference_across_the_twist():
    generator = MT19937(1)
    reference = ReferenceMT19937(1)

    ours = draws(generator, 625)
    expected = reference.draw(625).tolist()

    assert ours[623] == expected[623]
    assert ours[624] == expected[624]
    assert ours == expected


def test_cursor_wraps_exactly_every_624_draws():
    generator = MT19937(9)
    assert generator.getstate().cursor == N

    generator.next_u32()
    assert generator.getstate().cursor == 1

    draws(generator, N - 1)
    assert generator.getstate().cursor == N

    generator.next_u32()
    assert generator.getstate().cursor == 1


@pytest.mark.parametrize("seed", list(range(0, 40)) + [2**31 - 1, 2**31, 2**32 - 1])
@pytest.mark.parametrize("twister", sorted(TWISTERS))
def test_matches_reference_across_several_twists(seed, twister):
    generator = MT19937(seed, twister=TWISTERS[twister])
    reference = ReferenceMT19937(seed)

    assert draws(generator, 2 * N + 5) == reference.draw(2 * N + 5).tolist()


def test_matches_reference_for_a_broad_seed_range():
    generator = MT19937()
    reference = ReferenceMT19937()

    for seed in range(10_001):
        generator.seed(seed)
        reference.seed(seed)
        np.testing.assert_array_equal(generator.fill(10_000), reference.draw(10_000))


def test_scalar_draws_match_reference_for_many_seeds():
    generator = MT19937()
    reference = ReferenceMT19937()

    for seed in range(0, 10_001, 97):
        generator.seed(seed)
        reference.seed(seed)
        assert draws(generator, 10_000) == reference.draw(10_000).tolist()


def test_long_run_matches_reference():
    generator = MT19937(4357)
    reference = ReferenceMT19937(4357)

    np.testing.assert_array_equal(generator.fill(10_000), reference.draw(10_000))


def test_matches_standard_library_mersenne_twister():
    generator = MT19937(20240101)
    state = generator.getstate()
    oracle = random.Random()
    oracle.setstate((3, tuple(state.words) + (state.cursor,), None))

    assert draws(generator, 1500) == [oracle.getrandbits(32) for _ in range(1500)]


def test_two_generators_with_the_same_seed_agree():
    first = MT19937(123456789)
    second = MT19937(123456789)

    assert draws(first, 2000) == draws(second, 2000)


def test_reseeding_resets_state():
    generator = MT19937(77)
    first_run = draws(generator, 1000)
    draws(generator, 313)

    generator.seed(77)

    assert draws(generator, 1000) == first_run


def test_first_output_not_repeated_in_early_window():
    generator = MT19937(5)
    values = draws(generator, 800)

    assert values[0] not in values[1:]


def test_high_bit_is_balanced():
    values = MT19937(2023).fill(1_000_000)
    high = int(np.count_nonzero(values & 0x80000000))

    assert 0.49 < high / values.size < 0.51


def test_outputs_stay_within_32_bits():
    generator = MT19937(0)

    assert all(0 <= value < 2**32 for value in draws(generator, 3 * N))


def test_temper_array_matches_scalar_temper():
    words = MT19937(8).getstate().words

    assert temper_array(np.array(words, dtype=np.uint32)).tolist() == [temper(word) for word in words]


@pytest.mark.parametrize("offset", [0, 1, 623, 624, 625])
@pytest.mark.parametrize("size", [0, 1, 100, 624, 1500])
def test_fill_is_equivalent_to_next_u32(offset, size):
    bulk = MT19937(31)
    single = MT19937(31)
    draws(bulk, offset)
    draws(single, offset)

    values = bulk.fill(size)

    assert values.dtype == np.uint32
    assert values.tolist() == draws(single, size)
    assert bulk.getstate() == single.getstate()
    assert bulk.next_u32() == single.next_u32()


def test_fill_rejects_negative_size():
    with pytest.raises(ValueError, match="non-negative"):
        MT19937().fill(-1)


def test_iteration_yields_next_u32_values():
    iterated = MT19937(3)
    direct = MT19937(3)

    assert [next(iterated) for _ in range(700)] == draws(direct, 700)
    assert iter(iterated) is iterated


def test_getstate_setstate_round_trip():
    generator = MT19937(99)
    draws(generator, 400)
    snapshot = generator.getstate()
    expected = draws(generator, 1000)

    generator.setstate(snapshot)

    assert draws(generator, 1000) == expected


def test_getstate_returns_a_copy():
    generator = MT19937(99)
    snapshot = generator.getstate()
    snapshot.words[0] ^= 0xFFFF
    fresh = MT19937(99)

    assert generator.next_u32() == fresh.next_u32()


def test_setstate_accepts_numpy_state():
    bitgen = np.random.MT19937(2024)
    generator = MT19937()
    generator.setstate(GeneratorState.from_numpy_state(bitgen.state))

    assert draws(generator, 1000) == bitgen.random_raw(1000).tolist()


def test_setstate_rejects_malformed_state():
    generator = MT19937()

    with pytest.raises(ValueError):
        generator.setstate(GeneratorState([0] * 10, 0))


def test_setstate_rejects_fractional_words_and_cursor():
    generator = MT19937(1)
    fractional = GeneratorState([word + 0.5 for word in seed_state(1).words], 3.9)

    with pytest.raises(TypeError):
        generator.setstate(fractional)
    assert generator.getstate() == seed_state(1)

    with pytest.raises(TypeError):
        generator.setstate(GeneratorState(seed_state(1).words, 3.9))


def test_seed_validation_is_applied():
    generator = MT19937()

    with pytest.raises(ValueError):
        generator.seed(2**32)
    with pytest.raises(TypeError):
        generator.seed(1.0)


def test_seed_accepts_index_like_integers():
    hints = typing.get_type_hints(MT19937.seed)

    assert hints["value"] is typing.SupportsIndex
    assert MT19937(np.uint32(1)).next_u32() == 1791095845

    generator = MT19937()
    generator.seed(np.int64(1))
    assert generator.next_u32() == 1791095845
