import logging
import warnings

import numpy as np
import pytest

from aerolift.errors import DegradedPrecisionWarning, DivisionByZero, InvalidParameter
from aerolift.stats import constant, from_samples, gaussian, sampling, uniform


def test_sum_of_independent_gaussians_is_exact():
    a = gaussian(1.0, 3.0)
    b = gaussian(2.0, 4.0)
    total = a + b
    assert total.family == "gaussian"
    assert total.mean() == 3.0
    assert total.variance() == 25.0

    diff = a - b
    assert diff.family == "gaussian"
    assert diff.mean() == -1.0
    assert diff.std() == 5.0


def test_value_minus_itself_is_exactly_zero():
    x = gaussian(5.0, 2.0)
    d = x - x
    assert d.family == "gaussian"
    assert d.mean() == 0.0
    assert d.std() == 0.0


def test_shared_draws_combine_linearly():
    x = gaussian(1.0, 2.0)
    y = x * 3 + x
    assert y.mean() == 4.0
    assert y.std() == 8.0


def test_gaussian_with_constants_stays_closed_form():
    x = gaussian(2.0, 1.0)
    y = x * 3 + 1
    assert y.family == "gaussian"
    assert (y.mean(), y.std()) == (7.0, 3.0)

    z = 10 - x
    assert (z.mean(), z.std()) == (8.0, 1.0)

    w = x / 4
    assert (w.mean(), w.std()) == (0.5, 0.25)


def test_uniform_scaled_by_negative_constant():
    y = uniform(1.0, 3.0) * -2
    assert y.family == "uniform"
    assert y.quantile(0.0) == -6.0
    assert y.quantile(1.0) == -2.0
    assert y.mean() == -4.0


def test_affine_images_keep_the_underlying_draw():
    with sampling(seed=3, sample_size=1000):
        rho = gaussian(0.6, 0.2)
        u = uniform(1.0, 3.0)
    np.testing.assert_allclose((rho / 2).samples(), rho.samples() / 2)
    np.testing.assert_allclose((-rho).samples(), -rho.samples())
    np.testing.assert_allclose((5 - 2 * u).samples(), 5 - 2 * u.samples())


def test_empirical_with_constant_is_pointwise():
    y = from_samples([1.0, 2.0, 3.0]) * 2 + 1
    assert y.sample_count == 3
    np.testing.assert_array_equal(y.samples(), [3.0, 5.0, 7.0])


def test_empirical_pair_with_same_count_is_elementwise():
    y = from_samples([1.0, 2.0, 3.0]) + from_samples([10.0, 20.0, 30.0])
    assert y.sample_count == 3
    np.testing.assert_array_equal(y.samples(), [11.0, 22.0, 33.0])


def test_division_skips_zero_divisor_pairs():
    with pytest.warns(DegradedPrecisionWarning, match="zero divisor"):
        ratio = from_samples([1, 2]) / from_samples([0, 2])
    assert ratio.sample_count == 1
    assert ratio.mean() == 1.0


def test_division_below_threshold_is_logged_without_warning(caplog):
    caplog.set_level(logging.INFO)
    divisor = from_samples([0.0] + [1.0] * 999)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        ratio = from_samples(np.ones(1000)) / divisor
    assert ratio.sample_count == 999
    assert any("Skipped 1 of 1000" in rec.message for rec in caplog.records)


def test_skip_warning_threshold_is_configurable():
    with sampling(skip_warn_fraction=0.6):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            ratio = from_samples([1, 2]) / from_samples([0, 2])
    assert ratio.sample_count == 1


def test_division_by_constant_zero_raises():
    with pytest.raises(DivisionByZero):
        gaussian(1.0, 1.0) / 0
    with pytest.raises(ZeroDivisionError):
        from_samples([1.0, 2.0]) / 0.0
    with pytest.raises(DivisionByZero):
        uniform(1.0, 2.0) / constant(0.0)


def test_division_with_every_divisor_zero_raises():
    with pytest.raises(DivisionByZero):
        from_samples([1.0, 2.0]) / from_samples([0.0, 0.0])


def test_constant_divided_by_empirical_skips_zeros():
    with pytest.warns(DegradedPrecisionWarning):
        inverse = 1.0 / from_samples([0.0, 0.5, 2.0])
    np.testing.assert_array_equal(inverse.samples(), [2.0, 0.5])


def test_square_of_gaussian_falls_back_to_sampling():
    with sampling(seed=11, sample_size=20_000):
        v = gaussian(3.0, 1.0)
        sq = v**2
    assert sq.family == "empirical"
    assert sq.sample_count == 20_000
    np.testing.assert_allclose(sq.samples(), v.samples() ** 2)
    # E[X^2] = mean^2 + stddev^2
    assert abs(sq.mean() - 10.0) < 0.15


def test_power_identity_and_point_mass():
    v = gaussian(3.0, 1.0)
    assert v**1 is v
    sq = constant(3.0) ** 2
    assert (sq.mean(), sq.std()) == (9.0, 0.0)


def test_fractional_power_of_negative_sample_is_skipped():
    with pytest.warns(DegradedPrecisionWarning, match="undefined result"):
        roots = from_samples([-4.0, 4.0, 9.0]) ** 0.5
    np.testing.assert_array_equal(roots.samples(), [2.0, 3.0])


def test_mixed_families_pair_by_index():
    with sampling(seed=5, sample_size=1000):
        a = gaussian(0.0, 1.0)
        b = uniform(0.0, 1.0)
        product = a * b
    assert product.sample_count == 1000
    np.testing.assert_allclose(product.samples(), a.samples() * b.samples())


def test_empirical_is_resampled_to_canonical_size():
    with sampling(seed=2, sample_size=500):
        area = from_samples([10.0, 20.0, 30.0])
        speed = gaussian(1.0, 0.1)
        force = area * speed
    assert force.sample_count == 500
    drawn_areas = np.round(force.samples() / speed.samples(), 6)
    assert np.isin(drawn_areas, [10.0, 20.0, 30.0]).all()


def test_repeated_input_stays_correlated():
    with sampling(seed=9, sample_size=2000):
        x = gaussian(2.0, 0.5)
        y = uniform(1.0, 2.0)
        expr = x * y - y * x
    assert np.all(expr.samples() == 0.0)


def test_larger_sample_size_wins():
    a = gaussian(0.0, 1.0, sample_size=100)
    b = uniform(0.0, 1.0, sample_size=300)
    assert (a * b).sample_count == 300


def test_same_seed_reproduces_expression():
    def build():
        with sampling(seed=123, sample_size=400):
            return (gaussian(1.0, 0.5) * uniform(2.0, 3.0)) ** 2

    np.testing.assert_array_equal(build().samples(), build().samples())


def test_unsupported_operands():
    with pytest.raises(TypeError):
        gaussian(0.0, 1.0) + "lift"
    with pytest.raises(InvalidParameter):
        gaussian(0.0, 1.0) + float("nan")


def test_constant_raised_to_uncertain_power():
    with sampling(seed=14, sample_size=800):
        x = uniform(0.0, 1.0)
        y = 2.0**x
    np.testing.assert_allclose(y.samples(), 2.0 ** x.samples())
    assert 1.0 <= y.samples().min() <= y.samples().max() <= 2.0


def test_gaussian_sum_remembers_its_inputs():
    with sampling(seed=1, sample_size=20_000):
        a = gaussian(0.0, 3.0)
        b = gaussian(0.0, 4.0)
        total = a + b
        back = total - a
    assert total.std() == 5.0
    assert back.family == "gaussian"
    assert back.std() == 4.0
    np.testing.assert_allclose(back.samples(), b.samples(), atol=1e-12)
    np.testing.assert_allclose(total.samples(), a.samples() + b.samples(), atol=1e-12)


def test_gaussian_lineage_survives_scaling_and_mixed_families():
    with sampling(seed=6, sample_size=5000):
        a = gaussian(1.0, 2.0)
        b = gaussian(-1.0, 1.0)
        u = uniform(0.0, 1.0)
        combo = 2 * (a - b) - 2 * a
        mixed = (a + b) * u
    assert (combo.mean(), combo.std()) == (2.0, 2.0)
    np.testing.assert_allclose(
        mixed.samples(), (a.samples() + b.samples()) * u.samples(), atol=1e-12
    )
