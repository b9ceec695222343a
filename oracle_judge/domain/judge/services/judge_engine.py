"""
Domain Service: Judge Engine

Scoring oracle adapter: turns prediction text into a ScoreResult, either
atomically or as a stream of progressively filled PartialScore snapshots.
"""

import time
import uuid
from typing import AsyncIterator, Optional, Protocol, Any

from oracle_judge.domain.errors import InvalidPredictionText
from oracle_judge.domain.judge.entities import ScoreResult, PartialScore


class IJudgeBackend(Protocol):
    """Interface for the text-generation backend behind the oracle."""

    provider: str

    async def complete(
        self, system: str, prompt: str, temperature: float, max_tokens: int
    ) -> str:
        """
        Generate a full response.

        Raises:
            OracleUnavailable: upstream unreachable, non-200 or timed out
            OracleMalformedResponse: upstream envelope could not be decoded
        """
        ...

    def stream(
        self, system: str, prompt: str, temperature: float, max_tokens: int
    ) -> AsyncIterator[str]:
        """Generate a response as text chunks (same failures as complete)."""
        ...

    def get_model_id(self) -> str:
        """Get model identifier."""
        ...


class JudgeEngine:
    """
    Domain service for judging predictions.

    Orchestrates prompt building, backend generation, and response parsing.
    Each call is independent: there is no state across calls and no retry.
    """

    def __init__(
        self,
        backend: IJudgeBackend,
        prompt_builder: Any,  # PromptBuilder
        response_parser: Any,  # ResponseParser
        logger: Any = None,  # StructuredLogger
        temperature: float = 0.7,
        max_tokens: int = 400,
        min_length: int = 10,
        max_length: int = 1000,
    ):
        """
        Initialize judge engine.

        Args:
            backend: Backend for text generation
            prompt_builder: Service for building prompts
            response_parser: Service for parsing responses
            logger: Optional StructuredLogger for request/response audit
            temperature: Sampling temperature (some creativity for comments)
            max_tokens: Maximum tokens to generate
            min_length: Minimum prediction length in characters
            max_length: Maximum prediction length in characters
        """
        self.backend = backend
        self.prompt_builder = prompt_builder
        self.response_parser = response_parser
        self.logger = logger
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.min_length = min_length
        self.max_length = max_length

    def check_text(self, text: str) -> None:
        """Raise InvalidPredictionText unless len(text) is within bounds."""
        if not isinstance(text, str):
            raise InvalidPredictionText("Prediction text must be a string")
        if not self.min_length <= len(text) <= self.max_length:
            raise InvalidPredictionText(
                f"Prediction must be {self.min_length}-{self.max_length} characters, got {len(text)}"
            )

    async def evaluate(self, text: str, trace_id: Optional[str] = None) -> ScoreResult:
        """
        Judge a prediction in one round trip.

        Raises:
            InvalidPredictionText: before any outbound call
            OracleUnavailable: upstream unreachable or timed out
            OracleMalformedResponse: payload fails schema or range checks
        """
        self.check_text(text)
        trace_id = trace_id or str(uuid.uuid4())
        start_time = time.time()

        self._log(trace_id, "request", "oracle_evaluate", {"prediction": text})

        response_text = await self.backend.complete(
            self.prompt_builder.build_system_prompt(),
            self.prompt_builder.build_user_prompt(text),
            self.temperature,
            self.max_tokens,
        )
        result = self.response_parser.parse_complete(response_text)

        self._log(
            trace_id, "response", "oracle_evaluate",
            {
                "concreteness_score": result.concreteness_score,
                "boldness_score": result.boldness_score,
                "ai_comment": result.commentary,
            },
            {"inference_time_ms": (time.time() - start_time) * 1000},
        )
        return result

    async def evaluate_streaming(
        self, text: str, trace_id: Optional[str] = None
    ) -> AsyncIterator[PartialScore]:
        """
        Judge a prediction, yielding snapshots as the verdict fills in.

        The sequence is finite and not restartable. Only snapshots that
        differ from the previous one are yielded, fields never regress, and
        the last snapshot always has every field populated. Closing or
        cancelling the consumer closes the upstream response.

        Raises:
            InvalidPredictionText: on first iteration, before any outbound call
            OracleUnavailable / OracleMalformedResponse: as for evaluate()
        """
        self.check_text(text)
        trace_id = trace_id or str(uuid.uuid4())
        start_time = time.time()

        self._log(trace_id, "request", "oracle_stream", {"prediction": text})

        accumulated = ""
        last = PartialScore()
        emitted = 0
        chunks = self.backend.stream(
            self.prompt_builder.build_system_prompt(),
            self.prompt_builder.build_user_prompt(text),
            self.temperature,
            self.max_tokens,
        )
        try:
            async for chunk in chunks:
                accumulated += chunk
                snapshot = self.response_parser.parse_partial(accumulated)
                if snapshot.is_empty or snapshot == last:
                    continue
                last = snapshot
                emitted += 1
                yield snapshot
        finally:
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()

        final = PartialScore.from_score_result(
            self.response_parser.parse_complete(accumulated)
        )
        if final != last:
            emitted += 1
            yield final

        self._log(
            trace_id, "response", "oracle_stream",
            {
                "concreteness_score": final.concreteness_score,
                "boldness_score": final.boldness_score,
                "ai_comment": final.commentary,
            },
            {
                "snapshots": emitted,
                "inference_time_ms": (time.time() - start_time) * 1000,
            },
        )

    def _log(self, trace_id, direction, message_type, payload, metrics=None) -> None:
        if self.logger is None:
            return
        self.logger.log_message(
            trace_id=trace_id,
            direction=direction,
            message_type=message_type,
            payload=payload,
            metadata={
                "provider": self.backend.provider,
                "model_id": self.backend.get_model_id(),
                **(metrics or {}),
            },
        )
