"""
Price and probability conversions.

All odds are decimal (European) odds including the stake.
"""

from typing import Iterable, Optional


def decimal_to_implied_prob(odds: float) -> float:
    """Probability implied by a decimal price; prices at or below 1.0 read as certain."""
    if odds <= 1.0:
        return 1.0
    return 1.0 / odds


def fair_odds(prob: float) -> Optional[float]:
    """
    Margin-free price for a probability.

    Returns None when prob is not positive, since no finite price
    breaks even on an impossible outcome.
    """
    if prob <= 0.0:
        return None
    return 1.0 / prob


def calculate_overround(odds: Iterable[float]) -> float:
    """
    Book margin over a complete market, in percent.

    4.0 means the implied probabilities sum to 104%.
    """
    implied = [decimal_to_implied_prob(o) for o in odds]
    if not implied:
        return 0.0
    return (sum(implied) - 1.0) * 100


def calculate_edge(model_prob: float, market_odds: float) -> float:
    """Model probability minus the market's implied probability."""
    return model_prob - decimal_to_implied_prob(market_odds)
