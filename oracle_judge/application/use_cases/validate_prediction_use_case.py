"""
Use Case: Validate Prediction

One-shot judging: complete verdict including the validity gate.
"""

from typing import Optional, Protocol
import uuid

from ..dtos import JudgeVerdictDTO
from .stream_judgement_use_case import ILogger
from oracle_judge.domain.errors import OracleUnavailable, OracleMalformedResponse
from oracle_judge.domain.judge.entities import ScoreResult
from oracle_judge.models import EventType


class IAtomicJudge(Protocol):
    """Interface for the atomic form of the scoring oracle."""

    async def evaluate(self, text: str, trace_id: Optional[str] = None) -> ScoreResult:
        ...


class ValidatePredictionUseCase:
    """Use case for validating a prediction before saving it."""

    def __init__(self, judge: IAtomicJudge, logger: Optional[ILogger] = None):
        self.judge = judge
        self.logger = logger

    async def execute(self, prediction: str, trace_id: Optional[str] = None) -> JudgeVerdictDTO:
        """
        Judge the prediction and apply the payout engine.

        Raises:
            InvalidPredictionText, OracleUnavailable, OracleMalformedResponse
        """
        trace_id = trace_id or str(uuid.uuid4())
        if self.logger:
            self.logger.log_event(trace_id, EventType.JUDGE_REQUESTED, {"length": len(prediction)})

        try:
            result = await self.judge.evaluate(prediction, trace_id=trace_id)
        except (OracleUnavailable, OracleMalformedResponse) as e:
            if self.logger:
                self.logger.log_event(
                    trace_id, EventType.ORACLE_FAILURE, {"error": type(e).__name__, "message": str(e)}
                )
            raise

        verdict = JudgeVerdictDTO.from_score_result(result)
        if self.logger:
            self.logger.log_event(trace_id, EventType.JUDGEMENT_COMPLETE, verdict.to_dict())
        return verdict
