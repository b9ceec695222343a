"""
DTO: Judge Snapshot / Verdict

UI-facing records derived from oracle output via the payout engine.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from oracle_judge.domain.judge.entities import PartialScore, ScoreResult
from oracle_judge.domain.payout import (
    compute_payout_odds,
    is_valid_for_submission,
    VALIDATION_MESSAGE,
)


@dataclass
class JudgeSnapshotDTO:
    """
    One live-analysis update.

    ``payout_odds`` is set once both scores are present; ``is_valid`` and
    ``validation_message`` once concreteness is present.
    """

    generation: int
    concreteness_score: Optional[int] = None
    boldness_score: Optional[int] = None
    ai_comment: Optional[str] = None
    payout_odds: Optional[float] = None
    is_valid: Optional[bool] = None
    validation_message: Optional[str] = None
    complete: bool = False

    @classmethod
    def from_partial(cls, partial: PartialScore, generation: int) -> "JudgeSnapshotDTO":
        odds = None
        if partial.concreteness_score is not None and partial.boldness_score is not None:
            odds = compute_payout_odds(partial.boldness_score, partial.concreteness_score)

        is_valid = None
        message = None
        if partial.concreteness_score is not None:
            is_valid = is_valid_for_submission(partial.concreteness_score)
            message = None if is_valid else VALIDATION_MESSAGE

        return cls(
            generation=generation,
            concreteness_score=partial.concreteness_score,
            boldness_score=partial.boldness_score,
            ai_comment=partial.commentary,
            payout_odds=odds,
            is_valid=is_valid,
            validation_message=message,
            complete=partial.is_complete,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the NDJSON stream."""
        return {
            "generation": self.generation,
            "concreteness_score": self.concreteness_score,
            "boldness_score": self.boldness_score,
            "ai_comment": self.ai_comment,
            "payout_odds": self.payout_odds,
            "is_valid": self.is_valid,
            "validation_message": self.validation_message,
            "complete": self.complete,
        }


@dataclass
class JudgeVerdictDTO:
    """Complete one-shot verdict."""

    concreteness_score: int
    boldness_score: int
    payout_odds: float
    ai_comment: str
    is_valid: bool
    validation_message: Optional[str] = None

    @classmethod
    def from_score_result(cls, result: ScoreResult) -> "JudgeVerdictDTO":
        is_valid = is_valid_for_submission(result.concreteness_score)
        return cls(
            concreteness_score=result.concreteness_score,
            boldness_score=result.boldness_score,
            payout_odds=compute_payout_odds(result.boldness_score, result.concreteness_score),
            ai_comment=result.commentary,
            is_valid=is_valid,
            validation_message=None if is_valid else VALIDATION_MESSAGE,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for FastAPI response."""
        return {
            "concreteness_score": self.concreteness_score,
            "boldness_score": self.boldness_score,
            "payout_odds": self.payout_odds,
            "ai_comment": self.ai_comment,
            "is_valid": self.is_valid,
            "validation_message": self.validation_message,
        }
