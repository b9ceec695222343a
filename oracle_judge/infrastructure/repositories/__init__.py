"""
Prediction repositories (persistence collaborator implementations)
"""

from .in_memory_repository import InMemoryPredictionRepository

__all__ = ["InMemoryPredictionRepository"]
