"""
Structured JSON logging for the judge pipeline.

Every line is one JSON object. Audit events carry a trace id, the emitting
component and a payload hash; oracle request/response messages may carry
the full payload up to MAX_PAYLOAD_SIZE_BYTES.
"""

import hashlib
import json
import logging
import os
import time
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from .models import LogEntry, ComponentType, EventType

ENABLE_FULL_PAYLOAD_LOGGING = os.getenv("ENABLE_FULL_PAYLOAD_LOGGING", "true").lower() == "true"
MAX_PAYLOAD_SIZE_BYTES = int(os.getenv("MAX_PAYLOAD_SIZE_BYTES", "100000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Events where the caller did not get what it asked for
WARNING_EVENTS = frozenset({EventType.ORACLE_FAILURE, EventType.SUBMISSION_BLOCKED})

_PAYLOAD_KEYS = {"request": "request_payload", "response": "response_payload"}


class JudgeJSONFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(JudgeJSONFormatter, self).add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = time.time()
        log_record['level'] = (log_record.get('level') or record.levelname).upper()


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    # one StructuredLogger per component instance; handlers must not stack
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JudgeJSONFormatter('%(timestamp)s %(level)s %(name)s %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(LOG_LEVEL)
    logger.propagate = False
    return logger


class StructuredLogger:
    """JSON logger bound to one pipeline component."""

    def __init__(self, component: ComponentType):
        self.logger = get_logger(component.value)
        self.component = component

    def hash_payload(self, payload: Any) -> str:
        """Short stable digest of a payload, for correlating without storing it."""
        dumped = json.dumps(payload, sort_keys=True, default=str)
        return hashlib.sha256(dumped.encode()).hexdigest()[:16]

    def log_event(self,
                  trace_id: str,
                  event_type: EventType,
                  payload: Any,
                  metrics: Dict[str, Any] = None):
        """Audit event; failures and blocked submissions are logged at WARNING."""
        entry = LogEntry(
            trace_id=trace_id,
            component=self.component,
            event_type=event_type,
            payload_hash=self.hash_payload(payload),
            metrics=metrics or {},
            message=str(payload)[:200]
        )
        level = logging.WARNING if event_type in WARNING_EVENTS else logging.INFO
        self.logger.log(level, json.dumps(entry.model_dump(), default=str))

    def log_message(self,
                    trace_id: str,
                    direction: str,
                    message_type: str,
                    payload: Dict[str, Any],
                    metadata: Optional[Dict] = None):
        """
        Log an oracle request or response with trace correlation.

        Args:
            trace_id: Trace ID for correlation
            direction: "request" | "response" | "internal"
            message_type: e.g. "oracle_evaluate", "oracle_stream"
            payload: Prediction text or verdict
            metadata: Provider, model id, timing
        """
        entry = {
            "trace_id": trace_id,
            "component": self.component.value,
            "direction": direction,
            "message_type": message_type,
            "metadata": metadata or {},
        }

        if not ENABLE_FULL_PAYLOAD_LOGGING:
            entry["payload_hash"] = self.hash_payload(payload)
            self.logger.info(json.dumps(entry, default=str))
            return

        size = len(json.dumps(payload, default=str).encode('utf-8'))
        entry["content_size_bytes"] = size
        entry["truncated"] = size > MAX_PAYLOAD_SIZE_BYTES

        if entry["truncated"]:
            entry["payload_hash"] = self.hash_payload(payload)
        else:
            entry[_PAYLOAD_KEYS.get(direction, "internal_payload")] = payload

        self.logger.info(json.dumps(entry, default=str))
