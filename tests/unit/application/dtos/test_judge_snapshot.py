"""
Unit tests for judge snapshot and verdict DTOs
"""

from oracle_judge.application.dtos import JudgeSnapshotDTO, JudgeVerdictDTO
from oracle_judge.domain.judge.entities import PartialScore, ScoreResult
from oracle_judge.domain.payout import VALIDATION_MESSAGE


class TestJudgeSnapshotDTO:
    """Test payout fields derived from partial scores"""

    def test_boldness_only(self):
        snapshot = JudgeSnapshotDTO.from_partial(PartialScore(boldness_score=9), generation=1)
        assert snapshot.payout_odds is None
        assert snapshot.is_valid is None
        assert snapshot.validation_message is None
        assert snapshot.complete is False

    def test_concreteness_only(self):
        snapshot = JudgeSnapshotDTO.from_partial(PartialScore(concreteness_score=2), generation=1)
        assert snapshot.payout_odds is None
        assert snapshot.is_valid is False
        assert snapshot.validation_message == VALIDATION_MESSAGE

    def test_both_scores(self):
        snapshot = JudgeSnapshotDTO.from_partial(PartialScore(6, 8), generation=3)
        assert snapshot.payout_odds == 9.4
        assert snapshot.is_valid is True
        assert snapshot.generation == 3
        assert snapshot.ai_comment is None

    def test_complete_snapshot_dict(self):
        snapshot = JudgeSnapshotDTO.from_partial(PartialScore(10, 10, "Wow."), generation=2)
        assert snapshot.to_dict() == {
            "generation": 2,
            "concreteness_score": 10,
            "boldness_score": 10,
            "ai_comment": "Wow.",
            "payout_odds": 13.0,
            "is_valid": True,
            "validation_message": None,
            "complete": True,
        }


class TestJudgeVerdictDTO:

    def test_from_score_result(self):
        verdict = JudgeVerdictDTO.from_score_result(ScoreResult(0, 0, "Nothing to see."))
        assert verdict.to_dict() == {
            "concreteness_score": 0,
            "boldness_score": 0,
            "payout_odds": 1.0,
            "ai_comment": "Nothing to see.",
            "is_valid": False,
            "validation_message": VALIDATION_MESSAGE,
        }
