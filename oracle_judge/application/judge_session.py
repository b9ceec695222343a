"""
Live-analysis session

Caller-side state for one prediction input: the text being edited, a
monotonically increasing request generation, and the latest accepted
snapshot. Snapshots from superseded generations are discarded by comparing
generation numbers, so a slow stale call can never overwrite a newer one.
"""

from typing import Optional

from .dtos import JudgeSnapshotDTO, SubmitPredictionRequestDTO
from .use_cases import StreamJudgementUseCase
from oracle_judge.domain.errors import (
    InvalidPredictionText,
    OracleUnavailable,
    OracleMalformedResponse,
    SubmissionBlocked,
)
from oracle_judge.domain.payout import VALIDATION_MESSAGE


class JudgeSession:
    """
    State of one prediction input panel.

    Every text edit starts a new generation and clears the score state;
    submission is allowed only while the latest snapshot of the current
    generation is complete and valid.
    """

    def __init__(self, min_length: int = 20, max_length: int = 1000, default_stake: float = 100):
        self.min_length = min_length
        self.max_length = max_length
        self.default_stake = default_stake
        self.text = ""
        self._generation = 0
        self._latest: Optional[JudgeSnapshotDTO] = None
        self.last_error: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def latest(self) -> Optional[JudgeSnapshotDTO]:
        return self._latest

    def update_text(self, text: str) -> Optional[int]:
        """
        Record an edit.

        Returns:
            The new generation to judge with, or None while the text is
            shorter than ``min_length``.
        """
        self.text = text
        self._generation += 1
        self._latest = None
        self.last_error = None
        if len(text) < self.min_length:
            return None
        return self._generation

    def accept(self, snapshot: JudgeSnapshotDTO) -> bool:
        """Take a snapshot if it belongs to the current generation (latest wins)."""
        if snapshot.generation != self._generation:
            return False
        self._latest = snapshot
        return True

    def fail(self, generation: int, error: Exception) -> None:
        """Record an oracle failure; scores are cleared so submission stays blocked."""
        if generation != self._generation:
            return
        self._latest = None
        self.last_error = str(error)

    def can_submit(self) -> bool:
        snapshot = self._latest
        return (
            self.min_length <= len(self.text) <= self.max_length
            and snapshot is not None
            and snapshot.complete
            and bool(snapshot.is_valid)
        )

    def hint(self) -> str:
        """Status line shown under the input."""
        remaining = self.min_length - len(self.text)
        if remaining > 0:
            return f"Type at least {remaining} more characters to see analysis"
        if len(self.text) > self.max_length:
            return f"Keep your prediction to at most {self.max_length} characters"
        if self.can_submit():
            return "Your prediction is ready to be recorded in the Oracle"
        return "Make your prediction more specific to submit"

    def submission_request(self, stake_amount: Optional[float] = None, group_id: Optional[str] = None) -> SubmitPredictionRequestDTO:
        """
        Build the submission for the current text and verdict.

        Raises:
            SubmissionBlocked: score state absent, incomplete or invalid
        """
        if not self.can_submit():
            snapshot = self._latest
            if snapshot is not None and snapshot.is_valid is False:
                raise SubmissionBlocked(VALIDATION_MESSAGE, concreteness_score=snapshot.concreteness_score)
            raise SubmissionBlocked("Prediction has not been fully scored yet")

        snapshot = self._latest
        return SubmitPredictionRequestDTO(
            content=self.text,
            concreteness_score=snapshot.concreteness_score,
            boldness_score=snapshot.boldness_score,
            ai_comment=snapshot.ai_comment or "",
            stake_amount=self.default_stake if stake_amount is None else stake_amount,
            group_id=group_id,
        )

    async def analyze(self, use_case: StreamJudgementUseCase) -> Optional[JudgeSnapshotDTO]:
        """
        Judge the current text, feeding snapshots into the session.

        Stops consuming as soon as an edit supersedes this generation.
        Oracle failures and over-long text are recorded, not raised.
        """
        generation = self._generation
        if len(self.text) < self.min_length:
            return None

        snapshots = use_case.execute(self.text, generation=generation)
        try:
            async for snapshot in snapshots:
                if not self.accept(snapshot):
                    break
        except (OracleUnavailable, OracleMalformedResponse, InvalidPredictionText) as e:
            self.fail(generation, e)
        finally:
            await snapshots.aclose()

        return self._latest if generation == self._generation else None
