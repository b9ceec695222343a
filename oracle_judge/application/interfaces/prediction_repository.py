"""
IPredictionRepository Interface

Boundary with the persistence collaborator that stores predictions.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from oracle_judge.application.dtos import PredictionRecord


class IPredictionRepository(ABC):
    """
    Interface for prediction storage.

    The judge pipeline only writes: it hands off a finished record and
    never reads stored predictions back for its own computation.
    """

    @abstractmethod
    async def save(self, record: PredictionRecord) -> Dict[str, Any]:
        """
        Persist a finished prediction.

        Args:
            record: Scored prediction with stake

        Returns:
            The stored row: the record fields plus ``id``, ``status``
            and ``created_at``.
        """
        pass
