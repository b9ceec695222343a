"""
Domain Layer

Pure business logic: the payout formula, the validity gate, and the
scoring oracle contract. No HTTP, no persistence.
"""

from .errors import (
    OracleJudgeError,
    InvalidScoreRange,
    InvalidStake,
    InvalidPredictionText,
    OracleUnavailable,
    OracleMalformedResponse,
    SubmissionBlocked,
)

__all__ = [
    "OracleJudgeError",
    "InvalidScoreRange",
    "InvalidStake",
    "InvalidPredictionText",
    "OracleUnavailable",
    "OracleMalformedResponse",
    "SubmissionBlocked",
]
