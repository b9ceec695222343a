"""
Domain Service: Payout Engine

Turns the two judge sub-scores into a payout multiplier and a validity
verdict, and a multiplier plus stake into a potential payout.
Pure functions with no infrastructure dependencies.

    odds(b, c) = max(1.0, round_half_up((0.8 * b + 0.5 * c), 1))

The ceiling for valid scores is 13.0 (b = c = 10).
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Integral
from typing import Union

from ..errors import InvalidScoreRange, InvalidStake

SCORE_MIN = 0
SCORE_MAX = 10
VALIDITY_THRESHOLD = 4

BOLDNESS_WEIGHT = Decimal("0.8")
CONCRETENESS_WEIGHT = Decimal("0.5")
ODDS_FLOOR = 1.0
ODDS_CEILING = float(BOLDNESS_WEIGHT * SCORE_MAX + CONCRETENESS_WEIGHT * SCORE_MAX)

VALIDATION_MESSAGE = (
    "Your prediction is too vague. Please be more specific about what will happen and when."
)

_ONE_DECIMAL = Decimal("0.1")


def _check_score(name: str, value: int) -> int:
    # bool is an Integral; a True/False score is a caller bug
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidScoreRange(f"{name} must be an integer, got {value!r}")
    if not SCORE_MIN <= value <= SCORE_MAX:
        raise InvalidScoreRange(
            f"{name} must be in [{SCORE_MIN}, {SCORE_MAX}], got {value}"
        )
    return int(value)


def round_half_up(value: Union[Decimal, float]) -> float:
    """Round to one decimal, halves away from zero (7.05 -> 7.1, never 7.0)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return float(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compute_payout_odds(boldness: int, concreteness: int) -> float:
    """
    Compute the payout multiplier for a scored prediction.

    Weights are applied in decimal arithmetic so binary float error never
    changes the rounding.

    Raises:
        InvalidScoreRange: if either score is not an integer in [0, 10]
    """
    b = _check_score("boldness_score", boldness)
    c = _check_score("concreteness_score", concreteness)

    return max(ODDS_FLOOR, round_half_up(BOLDNESS_WEIGHT * b + CONCRETENESS_WEIGHT * c))


def is_valid_for_submission(concreteness: int) -> bool:
    """A prediction may be submitted iff concreteness >= 4."""
    c = _check_score("concreteness_score", concreteness)
    return c >= VALIDITY_THRESHOLD


def compute_potential_payout(stake: Union[int, float], odds: float) -> float:
    """
    Potential payout for a stake at the given odds.

    Raises:
        InvalidStake: if stake is not a finite number > 0
    """
    if isinstance(stake, bool) or not math.isfinite(stake) or stake <= 0:
        raise InvalidStake(f"stake must be a positive amount, got {stake!r}")
    if not math.isfinite(odds) or odds < ODDS_FLOOR:
        raise ValueError(f"odds must be >= {ODDS_FLOOR}, got {odds!r}")
    return float(Decimal(str(stake)) * Decimal(str(odds)))


def format_odds(odds: float) -> str:
    """Display form of a multiplier, e.g. ``9.4x``."""
    return f"{odds:.1f}x"


def format_currency(amount: float, currency: str = "USD") -> str:
    """Display form of a payout amount with up to two decimals."""
    symbol = "$" if currency == "USD" else f"{currency} "
    text = f"{amount:,.2f}".rstrip("0").rstrip(".")
    return f"{symbol}{text}"
