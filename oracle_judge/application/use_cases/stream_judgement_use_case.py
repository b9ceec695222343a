"""
Use Case: Stream Judgement

Live analysis: runs the oracle in streaming mode and passes every partial
verdict through the payout engine.
"""

from typing import AsyncIterator, Optional, Protocol, Dict, Any
import uuid

from ..dtos import JudgeSnapshotDTO
from oracle_judge.domain.errors import OracleUnavailable, OracleMalformedResponse
from oracle_judge.domain.judge.entities import PartialScore
from oracle_judge.models import EventType


class IStreamingJudge(Protocol):
    """Interface for the streaming form of the scoring oracle."""

    def evaluate_streaming(
        self, text: str, trace_id: Optional[str] = None
    ) -> AsyncIterator[PartialScore]:
        ...


class ILogger(Protocol):
    """Interface for logging operations."""

    def log_event(self, trace_id: str, event_type: EventType, payload: Any, metrics: Dict = None) -> None:
        ...


class StreamJudgementUseCase:
    """
    Use case for live, incrementally updated judging.

    Every yielded snapshot fully replaces the previous one and carries the
    caller's generation so superseded calls can be discarded downstream.
    """

    def __init__(self, judge: IStreamingJudge, logger: Optional[ILogger] = None):
        """
        Initialize use case.

        Args:
            judge: Streaming scoring oracle (JudgeEngine)
            logger: Logger for audit trail
        """
        self.judge = judge
        self.logger = logger

    async def execute(
        self,
        prediction: str,
        generation: int = 0,
        trace_id: Optional[str] = None,
    ) -> AsyncIterator[JudgeSnapshotDTO]:
        """
        Yield UI snapshots for one prediction text.

        Raises:
            InvalidPredictionText, OracleUnavailable, OracleMalformedResponse
        """
        trace_id = trace_id or str(uuid.uuid4())
        self._log(trace_id, EventType.JUDGE_REQUESTED, {"generation": generation, "length": len(prediction)})

        partials = self.judge.evaluate_streaming(prediction, trace_id=trace_id)
        last: Optional[JudgeSnapshotDTO] = None
        try:
            async for partial in partials:
                last = JudgeSnapshotDTO.from_partial(partial, generation)
                yield last
        except (OracleUnavailable, OracleMalformedResponse) as e:
            self._log(trace_id, EventType.ORACLE_FAILURE, {"error": type(e).__name__, "message": str(e)})
            raise
        finally:
            aclose = getattr(partials, "aclose", None)
            if aclose is not None:
                await aclose()

        if last is not None:
            self._log(trace_id, EventType.JUDGEMENT_COMPLETE, last.to_dict())

    def _log(self, trace_id: str, event_type: EventType, payload: Dict[str, Any]) -> None:
        if self.logger is not None:
            self.logger.log_event(trace_id, event_type, payload)
