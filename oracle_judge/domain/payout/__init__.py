"""
Payout Domain

Pure payout-odds formula, validity gate and potential payout.
"""

from .payout_engine import (
    round_half_up,
    compute_payout_odds,
    is_valid_for_submission,
    compute_potential_payout,
    format_odds,
    format_currency,
    VALIDATION_MESSAGE,
    VALIDITY_THRESHOLD,
    ODDS_FLOOR,
    ODDS_CEILING,
)

__all__ = [
    "round_half_up",
    "compute_payout_odds",
    "is_valid_for_submission",
    "compute_potential_payout",
    "format_odds",
    "format_currency",
    "VALIDATION_MESSAGE",
    "VALIDITY_THRESHOLD",
    "ODDS_FLOOR",
    "ODDS_CEILING",
]
