"""
Poisson probability kernels.

Univariate Poisson PMF plus the simplified bivariate Poisson used for
correlated scoring.
"""

import math


def poisson_pmf(k: int, lam: float) -> float:
    """
    Calculate Poisson probability P(X = k) given lambda.

    Computed in log space so large k cannot overflow the factorial.

    Args:
        k: Number of events (goals)
        lam: Expected value (lambda), must be >= 0

    Returns:
        Probability of exactly k goals
    """
    if k < 0:
        return 0.0
    if lam == 0:
        # Degenerate point mass at zero
        return 1.0 if k == 0 else 0.0
    return math.exp(k * math.log(lam) - lam - math.lgamma(k + 1))


def clamp_lambda3(lam_home: float, lam_away: float, lam3: float) -> float:
    """
    Clamp the covariance rate into [0, min(lam_home, lam_away)].

    Negative covariance is not representable in this form, so a negative
    lam3 collapses to 0 and the joint model becomes independent Poisson.
    """
    return max(0.0, min(lam3, lam_home, lam_away))


def bivariate_poisson_pmf(
    home_goals: int,
    away_goals: int,
    lam_home: float,
    lam_away: float,
    lam3: float,
) -> float:
    """
    Joint probability of a scoreline under a bivariate Poisson model.

    Home and away goals share a common component with rate lam3. The
    marginal means stay lam_home and lam_away; the independent residual
    rates are lam_home - lam3 and lam_away - lam3.

    Args:
        home_goals: Home goals in the scoreline
        away_goals: Away goals in the scoreline
        lam_home: Home expected goals (marginal)
        lam_away: Away expected goals (marginal)
        lam3: Covariance rate, clamped before use

    Returns:
        P(home = home_goals, away = away_goals)
    """
    lam3_safe = clamp_lambda3(lam_home, lam_away, lam3)
    lam1_star = lam_home - lam3_safe
    lam2_star = lam_away - lam3_safe

    probability = 0.0
    for k in range(min(home_goals, away_goals) + 1):
        probability += (
            poisson_pmf(home_goals - k, lam1_star)
            * poisson_pmf(away_goals - k, lam2_star)
            * poisson_pmf(k, lam3_safe)
        )
    return probability
