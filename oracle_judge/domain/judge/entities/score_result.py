"""
Domain Entity: ScoreResult / PartialScore

The oracle's verdict on one prediction text, complete or in progress.
"""

from dataclasses import dataclass, fields
from typing import Optional, FrozenSet

from oracle_judge.domain.errors import InvalidScoreRange

COMMENT_MAX_LENGTH = 280


def _in_range(name: str, value: Optional[int]) -> None:
    if value is not None and not 0 <= value <= 10:
        raise InvalidScoreRange(f"{name} must be in [0, 10], got {value}")


@dataclass(frozen=True)
class ScoreResult:
    """
    Complete verdict from the scoring oracle.

    Attributes:
        concreteness_score: How specific/measurable the claim is (0-10)
        boldness_score: How unlikely/contrarian the claim is (0-10)
        commentary: Short witty remark, at most 280 characters
    """
    concreteness_score: int
    boldness_score: int
    commentary: str = ""

    def __post_init__(self):
        """Validate invariants."""
        _in_range("concreteness_score", self.concreteness_score)
        _in_range("boldness_score", self.boldness_score)
        if len(self.commentary) > COMMENT_MAX_LENGTH:
            raise ValueError(
                f"commentary must be at most {COMMENT_MAX_LENGTH} chars, got {len(self.commentary)}"
            )


@dataclass(frozen=True)
class PartialScore:
    """
    One snapshot of an in-progress verdict.

    Any subset of fields may be present. Within one streaming sequence a
    field never goes from present back to absent, and each snapshot
    replaces the previous one.
    """
    concreteness_score: Optional[int] = None
    boldness_score: Optional[int] = None
    commentary: Optional[str] = None

    def __post_init__(self):
        _in_range("concreteness_score", self.concreteness_score)
        _in_range("boldness_score", self.boldness_score)

    @property
    def present_fields(self) -> FrozenSet[str]:
        return frozenset(f.name for f in fields(self) if getattr(self, f.name) is not None)

    @property
    def is_complete(self) -> bool:
        return len(self.present_fields) == len(fields(self))

    @property
    def is_empty(self) -> bool:
        return not self.present_fields

    def covers(self, previous: "PartialScore") -> bool:
        """True if every field present in ``previous`` is still present here."""
        return previous.present_fields <= self.present_fields

    def to_score_result(self) -> ScoreResult:
        """Convert a complete snapshot into a ScoreResult."""
        if not self.is_complete:
            missing = sorted({f.name for f in fields(self)} - self.present_fields)
            raise ValueError(f"Snapshot is incomplete, missing: {', '.join(missing)}")
        return ScoreResult(
            concreteness_score=self.concreteness_score,
            boldness_score=self.boldness_score,
            commentary=self.commentary,
        )

    @classmethod
    def from_score_result(cls, result: ScoreResult) -> "PartialScore":
        return cls(
            concreteness_score=result.concreteness_score,
            boldness_score=result.boldness_score,
            commentary=result.commentary,
        )
