"""Tests for the scoreline models."""

import pytest

from src.engine.poisson import poisson_pmf
from src.engine.scoreline import (
    bivariate_poisson_matrix,
    dixon_coles_matrix,
    dixon_coles_tau,
    poisson_matrix,
)
from src.models import ScorelineModel

RATES = [(1.5, 1.2), (0.3, 2.4), (2.8, 0.6), (1.0, 1.0)]


def cell_probs(matrix):
    return [[cell.prob for cell in row] for row in matrix.cells]


class TestDixonColesTau:
    """Low-score correction factors."""

    def test_four_adjusted_cells(self):
        lh, la, rho = 1.4, 1.1, -0.13
        assert dixon_coles_tau(0, 0, lh, la, rho) == pytest.approx(1 - lh * la * rho)
        assert dixon_coles_tau(0, 1, lh, la, rho) == pytest.approx(1 + lh * rho)
        assert dixon_coles_tau(1, 0, lh, la, rho) == pytest.approx(1 + la * rho)
        assert dixon_coles_tau(1, 1, lh, la, rho) == pytest.approx(1 - rho)

    @pytest.mark.parametrize("h,a", [(2, 0), (0, 2), (2, 1), (1, 2), (3, 3), (5, 0)])
    def test_other_cells_unadjusted(self, h, a):
        assert dixon_coles_tau(h, a, 1.4, 1.1, -0.13) == 1.0

    def test_rho_zero_is_identity(self):
        for h in range(2):
            for a in range(2):
                assert dixon_coles_tau(h, a, 1.4, 1.1, 0.0) == 1.0


class TestPoissonMatrix:
    """Independent Poisson grid."""

    def test_grid_shape_and_cells(self):
        matrix = poisson_matrix(1.5, 1.2)

        assert matrix.model == ScorelineModel.POISSON
        assert matrix.size == 6
        assert matrix.cells[2][1].h == 2
        assert matrix.cells[2][1].a == 1
        assert matrix.prob(2, 1) == pytest.approx(poisson_pmf(2, 1.5) * poisson_pmf(1, 1.2))
        assert matrix.cells[0][0].adjustment is None

    def test_custom_size(self):
        assert poisson_matrix(1.5, 1.2, size=8).size == 8

    def test_outcomes_match_cell_sums(self):
        matrix = poisson_matrix(1.5, 1.2)
        cells = [cell for row in matrix.cells for cell in row]

        assert matrix.home_win_prob == pytest.approx(sum(c.prob for c in cells if c.h > c.a))
        assert matrix.draw_prob == pytest.approx(sum(c.prob for c in cells if c.h == c.a))
        assert matrix.away_win_prob == pytest.approx(sum(c.prob for c in cells if c.h < c.a))

    def test_truncated_grid_mass_below_one(self):
        matrix = poisson_matrix(1.5, 1.2)
        assert 0.95 < matrix.total_prob < 1.0

    def test_most_likely(self):
        best = poisson_matrix(1.5, 1.2).most_likely()
        assert (best.h, best.a) == (1, 1)


@pytest.mark.parametrize("lam_home,lam_away", RATES)
@pytest.mark.parametrize(
    "build",
    [
        lambda lh, la: poisson_matrix(lh, la),
        lambda lh, la: dixon_coles_matrix(lh, la, rho=-0.13),
        lambda lh, la: bivariate_poisson_matrix(lh, la, 0.1),
    ],
)
def test_outcome_probabilities_bounded(build, lam_home, lam_away):
    matrix = build(lam_home, lam_away)

    assert matrix.home_win_prob >= 0
    assert matrix.draw_prob >= 0
    assert matrix.away_win_prob >= 0
    assert matrix.outcomes.total <= 1.0
    assert matrix.outcomes.total == pytest.approx(matrix.total_prob)


class TestDixonColesMatrix:
    """Dixon-Coles grid."""

    @pytest.mark.parametrize("lam_home,lam_away", RATES)
    def test_rho_zero_matches_poisson(self, lam_home, lam_away):
        dc = dixon_coles_matrix(lam_home, lam_away, rho=0.0)
        plain = poisson_matrix(lam_home, lam_away)

        assert cell_probs(dc) == cell_probs(plain)

    def test_cells_carry_adjustment(self):
        matrix = dixon_coles_matrix(1.5, 1.2, rho=-0.13)

        assert matrix.model == ScorelineModel.DIXON_COLES
        assert matrix.cells[1][1].adjustment == pytest.approx(1.13)
        assert matrix.cells[3][2].adjustment == 1.0

    def test_equal_rates_are_symmetric(self):
        matrix = dixon_coles_matrix(1.5, 1.5, rho=-0.13)
        assert matrix.home_win_prob == pytest.approx(matrix.away_win_prob, abs=1e-12)

    def test_negative_rho_increases_draws(self):
        dc = dixon_coles_matrix(1.5, 1.5, rho=-0.13)
        plain = poisson_matrix(1.5, 1.5)

        assert dc.draw_prob > plain.draw_prob
        assert dc.prob(0, 0) > plain.prob(0, 0)
        assert dc.prob(1, 1) > plain.prob(1, 1)
        assert dc.prob(1, 0) < plain.prob(1, 0)


class TestBivariateMatrix:
    """Bivariate Poisson grid."""

    @pytest.mark.parametrize("lam_home,lam_away", RATES)
    def test_zero_covariance_matches_poisson(self, lam_home, lam_away):
        biv = bivariate_poisson_matrix(lam_home, lam_away, 0.0)
        plain = poisson_matrix(lam_home, lam_away)

        for h in range(6):
            for a in range(6):
                assert biv.prob(h, a) == pytest.approx(plain.prob(h, a), rel=1e-12)

    def test_negative_covariance_collapses_to_independent(self):
        biv = bivariate_poisson_matrix(1.0, 0.8, -0.05)
        plain = poisson_matrix(1.0, 0.8)

        assert biv.draw_prob == pytest.approx(plain.draw_prob)

    def test_positive_covariance_increases_draws(self):
        biv = bivariate_poisson_matrix(1.5, 1.2, 0.15)
        plain = poisson_matrix(1.5, 1.2)

        assert biv.model == ScorelineModel.BIVARIATE_POISSON
        assert biv.draw_prob > plain.draw_prob
