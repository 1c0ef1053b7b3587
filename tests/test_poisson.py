"""Tests for the Poisson kernels."""

import math

import pytest

from src.engine.poisson import bivariate_poisson_pmf, clamp_lambda3, poisson_pmf


@pytest.mark.parametrize("lam", [0.1, 0.5, 1.0, 1.5, 3.0, 5.0, 10.0])
def test_pmf_sums_to_one(lam):
    total = sum(poisson_pmf(k, lam) for k in range(31))
    assert total == pytest.approx(1.0, abs=1e-6)


@pytest.mark.parametrize("lam", [0.1, 1.5, 10.0])
def test_pmf_in_unit_interval(lam):
    for k in range(21):
        p = poisson_pmf(k, lam)
        assert 0 < p <= 1


def test_pmf_known_values():
    assert poisson_pmf(0, 1.5) == pytest.approx(math.exp(-1.5))
    assert poisson_pmf(2, 1.5) == pytest.approx(math.exp(-1.5) * 1.5 ** 2 / 2)
    assert poisson_pmf(3, 2.0) == pytest.approx(math.exp(-2.0) * 8 / 6)


def test_pmf_large_k_does_not_overflow():
    p = poisson_pmf(200, 10.0)
    assert math.isfinite(p)
    assert 0 <= p < 1e-100


def test_pmf_zero_rate_is_point_mass():
    assert poisson_pmf(0, 0.0) == 1.0
    assert poisson_pmf(1, 0.0) == 0.0


def test_pmf_negative_k():
    assert poisson_pmf(-1, 1.5) == 0.0


def test_clamp_lambda3():
    assert clamp_lambda3(1.5, 1.2, 0.1) == 0.1
    assert clamp_lambda3(1.5, 1.2, -0.05) == 0.0
    assert clamp_lambda3(1.5, 0.3, 0.5) == 0.3


@pytest.mark.parametrize("h", range(6))
@pytest.mark.parametrize("a", range(6))
def test_bivariate_without_covariance_is_independent(h, a):
    expected = poisson_pmf(h, 1.7) * poisson_pmf(a, 0.9)
    assert bivariate_poisson_pmf(h, a, 1.7, 0.9, 0.0) == pytest.approx(expected, rel=1e-12)


def test_bivariate_negative_covariance_collapses_to_independent():
    assert bivariate_poisson_pmf(1, 1, 1.4, 1.1, -0.05) == pytest.approx(
        poisson_pmf(1, 1.4) * poisson_pmf(1, 1.1)
    )


def test_bivariate_zero_zero_closed_form():
    # P(0,0) = exp(-(l1* + l2* + l3)) = exp(-(lh + la - l3))
    lh, la, l3 = 1.6, 1.1, 0.12
    assert bivariate_poisson_pmf(0, 0, lh, la, l3) == pytest.approx(math.exp(-(lh + la - l3)))


def test_bivariate_covariance_at_marginal_limit_is_finite():
    # l3 clamped to the smaller marginal leaves a zero residual rate
    p = bivariate_poisson_pmf(1, 1, 1.5, 0.4, 2.0)
    assert math.isfinite(p)
    assert p > 0


def test_bivariate_marginal_matches_poisson():
    lh, la, l3 = 1.4, 1.2, 0.1
    home_zero = sum(bivariate_poisson_pmf(0, a, lh, la, l3) for a in range(25))
    assert home_zero == pytest.approx(poisson_pmf(0, lh), abs=1e-9)
