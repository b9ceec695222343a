"""
Infrastructure: In-Memory Prediction Repository

Process-local IPredictionRepository used by the standalone service and
tests. Real deployments plug in their relational store here.
"""

import time
import uuid
from typing import Any, Dict, List

from oracle_judge.application.dtos import PredictionRecord
from oracle_judge.application.interfaces import IPredictionRepository


class InMemoryPredictionRepository(IPredictionRepository):
    """Stores submitted predictions in a list, newest last."""

    def __init__(self):
        self._rows: List[Dict[str, Any]] = []

    async def save(self, record: PredictionRecord) -> Dict[str, Any]:
        row = record.to_dict()
        row.update({
            "id": str(uuid.uuid4()),
            "status": "pending",
            "created_at": time.time(),
        })
        self._rows.append(row)
        return dict(row)

    def all(self) -> List[Dict[str, Any]]:
        return [dict(row) for row in self._rows]
