import numpy as np
import pytest

from mtwister import MT19937, random_utils
from mtwister import mt19937ar


@pytest.fixture(autouse=True)
def reset_default_generator():
    random_utils.init_gen_rand()
    yield
    random_utils.init_gen_rand()


def test_int32_scalar_and_array():
    assert random_utils.genrand_int32(generator=MT19937(1)) == 1791095845

    values = random_utils.genrand_int32(3, generator=MT19937(1))
    assert values.dtype == np.uint32
    assert values[:2].tolist() == [1791095845, 4282876139]


def test_int31_drops_the_lowest_bit():
    raw = MT19937(10).fill(50)

    assert random_utils.genrand_int31(50, generator=MT19937(10)).tolist() == (raw >> 1).tolist()
    assert random_utils.genrand_int31(generator=MT19937(10)) == int(raw[0]) >> 1


def test_real_conversions_follow_reference_formulas():
    raw = MT19937(4).fill(20).astype(float)

    np.testing.assert_allclose(
        random_utils.genrand_real1(20, generator=MT19937(4)), raw / 4294967295.0, rtol=1e-15
    )
    np.testing.assert_allclose(
        random_utils.genrand_real2(20, generator=MT19937(4)), raw / 4294967296.0, rtol=1e-15
    )
    np.testing.assert_allclose(
        random_utils.genrand_real3(20, generator=MT19937(4)), (raw + 0.5) / 4294967296.0, rtol=1e-15
    )


def test_scalar_and_array_real_draws_agree():
    generator = MT19937(12)
    scalars = [random_utils.genrand_real3(generator=generator) for _ in range(10)]

    np.testing.assert_array_equal(random_utils.genrand_real3(10, generator=MT19937(12)), scalars)


def test_real_ranges():
    generator = MT19937(6)

    real1 = random_utils.genrand_real1(5000, generator=generator)
    real2 = random_utils.genrand_real2(5000, generator=generator)
    real3 = random_utils.genrand_real3(5000, generator=generator)
    res53 = random_utils.genrand_res53(5000, generator=generator)

    assert real1.min() >= 0.0 and real1.max() <= 1.0
    assert real2.min() >= 0.0 and real2.max() < 1.0
    assert real3.min() > 0.0 and real3.max() < 1.0
    assert res53.min() >= 0.0 and res53.max() < 1.0


def test_res53_consumes_two_words_per_value():
    generator = MT19937(5489)
    a = generator.next_u32() >> 5
    b = generator.next_u32() >> 6
    expected = (a * 67108864.0 + b) * (1.0 / 9007199254740992.0)

    assert random_utils.genrand_res53(generator=MT19937(5489)) == expected

    pair = random_utils.genrand_res53(2, generator=MT19937(5489))
    assert pair[0] == expected

    stepped = MT19937(5489)
    random_utils.genrand_res53(3, generator=stepped)
    reference = MT19937(5489)
    reference.fill(6)
    assert stepped.getstate() == reference.getstate()


def test_randbelow_is_in_range_and_covers_it():
    generator = MT19937(2)
    values = {random_utils.randbelow(6, generator=generator) for _ in range(600)}

    assert values == set(range(6))


def test_randbelow_edges():
    generator = MT19937(2)

    assert random_utils.randbelow(1, generator=generator) == 0
    assert 0 <= random_utils.randbelow(2**32, generator=generator) < 2**32
    with pytest.raises(ValueError):
        random_utils.randbelow(0)
    with pytest.raises(ValueError):
        random_utils.randbelow(2**32 + 1)


def test_default_generator_reseeding():
    random_utils.init_gen_rand(1)
    assert random_utils.genrand_int32() == 1791095845

    random_utils.init_gen_rand()
    assert random_utils.genrand_int32() == 3499211612


def test_rand_returns_half_open_floats():
    values = random_utils.rand(100)

    assert values.shape == (100,)
    assert values.dtype == float
    assert np.all((values >= 0.0) & (values < 1.0))


def test_legacy_module_api():
    mt19937ar.srand(1)
    assert mt19937ar.rand_u32() == 1791095845

    mt19937ar.init_genrand(1)
    assert mt19937ar.genrand_int32() == 1791095845
    assert mt19937ar.rand() == 4282876139 & 0x7FFFFFFF


def test_legacy_rand_never_exceeds_rand_max():
    mt19937ar.srand(321)
    values = [mt19937ar.rand() for _ in range(2000)]

    assert max(values) <= mt19937ar.RAND_MAX
    assert min(values) >= 0


def test_legacy_reals_use_default_generator():
    mt19937ar.init_genrand(8)
    expected = MT19937(8).next_u32() * (1.0 / 4294967296.0)

    assert mt19937ar.genrand_real2() == expected
