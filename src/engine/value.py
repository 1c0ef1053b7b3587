"""
Match odds (1X2) value detection.

Flags selections where the model's probability beats the probability
implied by the market price.
"""

from typing import Mapping, Optional

from config.logging_config import get_logger
from src.models.prediction import OutcomeProbabilities, ValueSelection
from src.utils.odds import calculate_edge, calculate_overround, decimal_to_implied_prob

logger = get_logger(__name__)

DEFAULT_MIN_EDGE = 0.05


def find_match_odds_value(
    outcomes: OutcomeProbabilities,
    market_odds: Optional[Mapping[str, float]],
    min_edge: float = DEFAULT_MIN_EDGE,
) -> list[ValueSelection]:
    """
    Find value bets where model probability exceeds implied odds.

    Args:
        outcomes: Model 1X2 probabilities
        market_odds: Dict with 'home', 'draw', 'away' decimal odds
        min_edge: Minimum edge required (0.05 = 5%)

    Returns:
        List of value selections found
    """
    if not market_odds:
        return []

    prices = [market_odds.get(k) for k in ("home", "draw", "away")]
    if all(prices):
        logger.debug("Match odds overround", overround=round(calculate_overround(prices), 2))

    value_bets = []

    checks = [
        ("home", outcomes.home_win_prob, market_odds.get("home", 0)),
        ("draw", outcomes.draw_prob, market_odds.get("draw", 0)),
        ("away", outcomes.away_win_prob, market_odds.get("away", 0)),
    ]

    for selection, model_prob, odds in checks:
        if not odds or odds <= 1:
            continue

        edge = calculate_edge(model_prob, odds)

        if edge >= min_edge:
            value_bets.append(
                ValueSelection(
                    selection=selection,
                    model_prob=model_prob,
                    implied_prob=decimal_to_implied_prob(odds),
                    edge=edge,
                    odds=odds,
                )
            )

    return value_bets
