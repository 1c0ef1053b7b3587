"""
Scoreline models.

Three joint models over the same truncated grid: independent Poisson,
Dixon-Coles and bivariate Poisson. Each returns the grid together with
home/draw/away probabilities aggregated in a single pass.
"""

from typing import Callable, Optional

from src.engine.poisson import bivariate_poisson_pmf, poisson_pmf
from src.models.prediction import ScorelineCell, ScorelineMatrix, ScorelineModel

DEFAULT_MATRIX_SIZE = 6
DEFAULT_RHO = -0.13


def dixon_coles_tau(
    home_goals: int,
    away_goals: int,
    lam_home: float,
    lam_away: float,
    rho: float = DEFAULT_RHO,
) -> float:
    """
    Dixon-Coles correction factor for low-scoring results.

    Only 0-0, 0-1, 1-0 and 1-1 are adjusted; every other scoreline gets 1.
    With rho < 0 this lifts 0-0 and 1-1 and trims 0-1 and 1-0.
    """
    if home_goals == 0 and away_goals == 0:
        return 1 - lam_home * lam_away * rho
    if home_goals == 0 and away_goals == 1:
        return 1 + lam_home * rho
    if home_goals == 1 and away_goals == 0:
        return 1 + lam_away * rho
    if home_goals == 1 and away_goals == 1:
        return 1 - rho
    return 1.0


def _build_matrix(
    model: ScorelineModel,
    size: int,
    cell_prob: Callable[[int, int], tuple[float, Optional[float]]],
) -> ScorelineMatrix:
    home_win_prob = 0.0
    draw_prob = 0.0
    away_win_prob = 0.0
    rows = []

    for h in range(size):
        row = []
        for a in range(size):
            prob, adjustment = cell_prob(h, a)
            row.append(ScorelineCell(h=h, a=a, prob=prob, adjustment=adjustment))

            if h > a:
                home_win_prob += prob
            elif h == a:
                draw_prob += prob
            else:
                away_win_prob += prob
        rows.append(tuple(row))

    return ScorelineMatrix(
        model=model,
        cells=tuple(rows),
        home_win_prob=home_win_prob,
        draw_prob=draw_prob,
        away_win_prob=away_win_prob,
    )


def poisson_matrix(
    lam_home: float,
    lam_away: float,
    size: int = DEFAULT_MATRIX_SIZE,
) -> ScorelineMatrix:
    """Independent Poisson: P(h, a) = P(h; lam_home) * P(a; lam_away)."""
    home_probs = [poisson_pmf(h, lam_home) for h in range(size)]
    away_probs = [poisson_pmf(a, lam_away) for a in range(size)]

    return _build_matrix(
        ScorelineModel.POISSON,
        size,
        lambda h, a: (home_probs[h] * away_probs[a], None),
    )


def dixon_coles_matrix(
    lam_home: float,
    lam_away: float,
    rho: float = DEFAULT_RHO,
    size: int = DEFAULT_MATRIX_SIZE,
) -> ScorelineMatrix:
    """Independent Poisson with the Dixon-Coles tau applied to each cell."""
    home_probs = [poisson_pmf(h, lam_home) for h in range(size)]
    away_probs = [poisson_pmf(a, lam_away) for a in range(size)]

    def cell(h: int, a: int) -> tuple[float, Optional[float]]:
        tau = dixon_coles_tau(h, a, lam_home, lam_away, rho)
        return home_probs[h] * away_probs[a] * tau, tau

    return _build_matrix(ScorelineModel.DIXON_COLES, size, cell)


def bivariate_poisson_matrix(
    lam_home: float,
    lam_away: float,
    lam3: float,
    size: int = DEFAULT_MATRIX_SIZE,
) -> ScorelineMatrix:
    """Bivariate Poisson with shared covariance rate lam3 (clamped per cell)."""
    return _build_matrix(
        ScorelineModel.BIVARIATE_POISSON,
        size,
        lambda h, a: (bivariate_poisson_pmf(h, a, lam_home, lam_away, lam3), None),
    )
