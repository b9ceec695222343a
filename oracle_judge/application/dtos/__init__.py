"""
DTOs for the Application Layer
"""

from .judge_snapshot import JudgeSnapshotDTO, JudgeVerdictDTO
from .prediction_record import SubmitPredictionRequestDTO, PredictionRecord

__all__ = [
    "JudgeSnapshotDTO",
    "JudgeVerdictDTO",
    "SubmitPredictionRequestDTO",
    "PredictionRecord",
]
