"""
Domain Errors

Stable error kinds for the scoring and payout pipeline. Callers branch on
the exception type; transport details stay in the message only.
"""

from typing import Optional


class OracleJudgeError(Exception):
    """Base class for all judge pipeline errors."""
    pass


class InvalidScoreRange(OracleJudgeError, ValueError):
    """Raised when a score outside [0, 10] reaches the payout engine."""
    pass


class InvalidStake(OracleJudgeError, ValueError):
    """Raised when a non-positive stake is used for payout computation."""
    pass


class InvalidPredictionText(OracleJudgeError, ValueError):
    """Raised when prediction text is outside the accepted length window."""
    pass


class OracleUnavailable(OracleJudgeError):
    """
    Raised when the upstream evaluator cannot be reached or times out.

    Recoverable: the caller may retry. ``detail`` keeps the raw transport
    message for logging.
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail


class OracleMalformedResponse(OracleJudgeError):
    """
    Raised when the upstream payload fails schema or range validation.

    Not retried: the same input will likely reproduce it.
    """

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class SubmissionBlocked(OracleJudgeError):
    """Raised when a prediction is submitted without a valid score state."""

    def __init__(self, message: str, concreteness_score: Optional[int] = None):
        super().__init__(message)
        self.concreteness_score = concreteness_score
