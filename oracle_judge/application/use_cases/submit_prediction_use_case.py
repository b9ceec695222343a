"""
Use Case: Submit Prediction

Final submission: applies the validity gate to the last complete verdict,
recomputes the payout odds, and hands the record to persistence.
"""

from typing import Any, Dict, Optional

from ..dtos import SubmitPredictionRequestDTO, PredictionRecord
from ..interfaces import IPredictionRepository
from .stream_judgement_use_case import ILogger
from oracle_judge.domain.errors import InvalidPredictionText, SubmissionBlocked
from oracle_judge.domain.payout import (
    compute_payout_odds,
    compute_potential_payout,
    is_valid_for_submission,
    VALIDATION_MESSAGE,
)
from oracle_judge.models import EventType


class SubmitPredictionUseCase:
    """
    Use case for recording a scored prediction.

    Odds sent by a client are never trusted: they are recomputed from the
    scores. Submission is refused while the score state is absent or
    below the validity threshold.
    """

    def __init__(
        self,
        repository: IPredictionRepository,
        logger: Optional[ILogger] = None,
        min_length: int = 10,
        max_length: int = 1000,
        default_stake: float = 100,
    ):
        """
        Initialize use case.

        Args:
            repository: Persistence collaborator
            logger: Logger for audit trail
            min_length: Minimum prediction length in characters
            max_length: Maximum prediction length in characters
            default_stake: Stake used when the request carries none
        """
        self.repository = repository
        self.logger = logger
        self.min_length = min_length
        self.max_length = max_length
        self.default_stake = default_stake

    def build_record(self, request: SubmitPredictionRequestDTO) -> PredictionRecord:
        """
        Validate a submission and build the record to persist.

        Raises:
            InvalidPredictionText: content outside the length window
            SubmissionBlocked: scores missing or prediction too vague
            InvalidScoreRange: score outside [0, 10]
            InvalidStake: stake not a finite amount > 0
        """
        if not self.min_length <= len(request.content) <= self.max_length:
            raise InvalidPredictionText(
                f"Prediction must be {self.min_length}-{self.max_length} characters, got {len(request.content)}"
            )

        if request.concreteness_score is None or request.boldness_score is None:
            raise SubmissionBlocked("Prediction has not been scored yet")

        odds = compute_payout_odds(request.boldness_score, request.concreteness_score)
        if not is_valid_for_submission(request.concreteness_score):
            raise SubmissionBlocked(VALIDATION_MESSAGE, concreteness_score=request.concreteness_score)

        stake = self.default_stake if request.stake_amount is None else request.stake_amount
        # raises InvalidStake before anything is stored
        compute_potential_payout(stake, odds)

        return PredictionRecord(
            content=request.content,
            concreteness_score=request.concreteness_score,
            boldness_score=request.boldness_score,
            payout_odds=odds,
            ai_comment=request.ai_comment,
            stake_amount=stake,
            group_id=request.group_id,
        )

    async def execute(self, request: SubmitPredictionRequestDTO) -> Dict[str, Any]:
        """Validate, build and persist. Returns the stored row."""
        try:
            record = self.build_record(request)
        except SubmissionBlocked as e:
            if self.logger:
                self.logger.log_event(
                    request.trace_id, EventType.SUBMISSION_BLOCKED,
                    {"reason": str(e), "concreteness_score": e.concreteness_score},
                )
            raise

        stored = await self.repository.save(record)

        if self.logger:
            self.logger.log_event(
                request.trace_id, EventType.PREDICTION_SUBMITTED, stored,
                metrics={"payout_odds": record.payout_odds, "potential_payout": record.potential_payout},
            )
        return stored
