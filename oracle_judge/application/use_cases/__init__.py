"""Use Cases - Application orchestrators"""
from .stream_judgement_use_case import StreamJudgementUseCase, IStreamingJudge, ILogger
from .validate_prediction_use_case import ValidatePredictionUseCase, IAtomicJudge
from .submit_prediction_use_case import SubmitPredictionUseCase

__all__ = [
    "StreamJudgementUseCase",
    "ValidatePredictionUseCase",
    "SubmitPredictionUseCase",
    "IStreamingJudge",
    "IAtomicJudge",
    "ILogger",
]
