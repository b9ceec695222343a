"""
Oracle Judge Core Package

Prediction scoring and payout pipeline for The 2026 Oracle.

Architecture:
- Scoring oracle adapter turns prediction text into concreteness/boldness
  scores and a comment, atomically or as streamed partial snapshots
- Payout engine derives the payout multiplier and the validity gate
- Submission workflow attaches the last complete verdict and a stake
"""

__version__ = "0.1.0"

from .domain.errors import (
    OracleJudgeError, InvalidScoreRange, InvalidStake, InvalidPredictionText,
    OracleUnavailable, OracleMalformedResponse, SubmissionBlocked,
)
from .domain.payout import compute_payout_odds, is_valid_for_submission, compute_potential_payout
from .domain.judge.entities import ScoreResult, PartialScore
from .domain.judge.services import JudgeEngine
