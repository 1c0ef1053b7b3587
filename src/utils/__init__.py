"""Utility functions."""

from src.utils.odds import (
    calculate_edge,
    calculate_overround,
    decimal_to_implied_prob,
    fair_odds,
)
from src.utils.retries import (
    RETRIABLE_EXCEPTIONS,
    RETRIABLE_STATUS_CODES,
    is_retriable,
    with_async_retry,
)

__all__ = [
    # Odds utilities
    "calculate_edge",
    "calculate_overround",
    "decimal_to_implied_prob",
    "fair_odds",
    # Retry utilities
    "RETRIABLE_EXCEPTIONS",
    "RETRIABLE_STATUS_CODES",
    "is_retriable",
    "with_async_retry",
]
