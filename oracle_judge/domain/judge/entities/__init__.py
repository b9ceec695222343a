"""
Domain Entities for the Judge

Pure domain objects with no external dependencies.
"""

from .score_result import ScoreResult, PartialScore, COMMENT_MAX_LENGTH

__all__ = [
    "ScoreResult",
    "PartialScore",
    "COMMENT_MAX_LENGTH",
]
