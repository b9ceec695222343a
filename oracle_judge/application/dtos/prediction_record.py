"""
DTO: Prediction Submission

Request to submit a scored prediction, and the record handed to the
persistence collaborator.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import uuid

from oracle_judge.domain.payout import compute_potential_payout


@dataclass
class SubmitPredictionRequestDTO:
    """Request to record a scored prediction."""

    content: str
    concreteness_score: Optional[int]
    boldness_score: Optional[int]
    ai_comment: str = ""
    stake_amount: Optional[float] = None
    group_id: Optional[str] = None
    trace_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def from_dict(cls, data: dict) -> "SubmitPredictionRequestDTO":
        """Create from dictionary (FastAPI request body)."""
        return cls(
            content=data.get("content", ""),
            concreteness_score=data.get("concreteness_score"),
            boldness_score=data.get("boldness_score"),
            ai_comment=data.get("ai_comment") or "",
            stake_amount=data.get("stake_amount"),
            group_id=data.get("group_id"),
            trace_id=data.get("trace_id") or str(uuid.uuid4()),
        )


@dataclass(frozen=True)
class PredictionRecord:
    """
    Finished prediction tuple for storage.

    Scores and odds are fixed at creation; re-scoring is not supported.
    """

    content: str
    concreteness_score: int
    boldness_score: int
    payout_odds: float
    ai_comment: str
    stake_amount: float
    group_id: Optional[str] = None

    @property
    def potential_payout(self) -> float:
        return compute_potential_payout(self.stake_amount, self.payout_odds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "group_id": self.group_id,
            "concreteness_score": self.concreteness_score,
            "boldness_score": self.boldness_score,
            "payout_odds": self.payout_odds,
            "ai_comment": self.ai_comment,
            "stake_amount": self.stake_amount,
            "potential_payout": self.potential_payout,
        }
