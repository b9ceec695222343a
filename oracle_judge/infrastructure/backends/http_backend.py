"""
Infrastructure: HTTP Judge Backends

Concrete IJudgeBackend implementations that call hosted language models
over HTTP with aiohttp. One outbound request per call; streaming responses
are read as server-sent events. Transport failures are reported as
OracleUnavailable with the raw message kept in ``detail``.
"""

import asyncio
import json
import os
from typing import Any, AsyncIterator, Dict, Optional, Tuple

import aiohttp

from oracle_judge.domain.errors import OracleUnavailable, OracleMalformedResponse
from oracle_judge.logging_utils import StructuredLogger, ComponentType


class HttpJudgeBackend:
    """
    Base class for provider backends.

    Subclasses describe the request shape and how to pull text out of a
    complete response body or a streamed event.
    """

    provider = "unknown"

    def __init__(
        self,
        model: str,
        base_url: str,
        api_key: Optional[str] = None,
        api_key_env: Optional[str] = None,
        timeout: float = 30.0,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Initialize HTTP backend.

        Args:
            model: Provider model identifier
            base_url: API base URL (no trailing slash needed)
            api_key: Explicit API key (default read from ``api_key_env``)
            api_key_env: Environment variable holding the API key
            timeout: Bounded wait for the whole upstream call, in seconds
            logger: Optional logger
        """
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key or (os.getenv(api_key_env) if api_key_env else None)
        self._timeout = timeout
        self._logger = logger or StructuredLogger(ComponentType.ORACLE_ADAPTER)

    def get_model_id(self) -> str:
        return f"{self.provider}/{self.model}"

    async def complete(
        self, system: str, prompt: str, temperature: float, max_tokens: int
    ) -> str:
        """Send one generation request and return the response text."""
        url, headers, payload = self._build_request(system, prompt, temperature, max_tokens, stream=False)

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            ) as session:
                async with session.post(url, json=payload, headers=headers) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise self._http_error(response.status, error_text)
                    body = await response.text()

        except asyncio.TimeoutError as e:
            raise self._timeout_error() from e

        except aiohttp.ClientError as e:
            raise self._client_error(e) from e

        except UnicodeDecodeError as e:
            raise OracleMalformedResponse(
                f"{self.provider} response body is not valid text", raw_text=repr(e.object[:200])
            ) from e

        try:
            data = json.loads(body)
            return self._extract_text(data)
        except (json.JSONDecodeError, KeyError, IndexError, TypeError) as e:
            raise OracleMalformedResponse(
                f"{self.provider} response envelope could not be decoded: {e}",
                raw_text=body[:500],
            ) from e

    async def stream(
        self, system: str, prompt: str, temperature: float, max_tokens: int
    ) -> AsyncIterator[str]:
        """Send one streaming generation request and yield text deltas."""
        url, headers, payload = self._build_request(system, prompt, temperature, max_tokens, stream=True)

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            ) as session:
                async with session.post(url, json=payload, headers=headers) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise self._http_error(response.status, error_text)

                    async for event in self._iter_events(response):
                        delta = self._extract_delta(event)
                        if delta:
                            yield delta

        except asyncio.TimeoutError as e:
            raise self._timeout_error() from e

        except aiohttp.ClientError as e:
            raise self._client_error(e) from e

    async def _iter_events(self, response) -> AsyncIterator[Dict[str, Any]]:
        """Decode ``data:`` lines of a server-sent event stream."""
        async for raw_line in response.content:
            try:
                line = raw_line.decode("utf-8").strip()
            except UnicodeDecodeError as e:
                raise OracleMalformedResponse(
                    f"{self.provider} sent undecodable stream bytes", raw_text=repr(raw_line[:200])
                ) from e
            if not line.startswith("data:"):
                continue
            data = line[len("data:"):].strip()
            if data == "[DONE]":
                return
            try:
                event = json.loads(data)
            except json.JSONDecodeError as e:
                raise OracleMalformedResponse(
                    f"{self.provider} sent an undecodable stream event", raw_text=data[:500]
                ) from e
            if isinstance(event, dict) and event.get("type") == "error":
                raise OracleUnavailable(
                    f"{self.provider} stream reported an error",
                    detail=json.dumps(event.get("error"))[:200],
                )
            yield event

    def _require_key(self) -> str:
        if not self._api_key:
            raise OracleUnavailable(f"No API key configured for {self.provider}")
        return self._api_key

    def _http_error(self, status: int, error_text: str) -> OracleUnavailable:
        self._logger.logger.warning(f"{self.provider} returned HTTP {status}: {error_text[:200]}")
        return OracleUnavailable(f"{self.provider} returned HTTP {status}", detail=error_text[:200])

    def _timeout_error(self) -> OracleUnavailable:
        self._logger.logger.warning(f"{self.provider} timed out after {self._timeout}s")
        return OracleUnavailable(f"{self.provider} timed out after {self._timeout}s")

    def _client_error(self, error: Exception) -> OracleUnavailable:
        self._logger.logger.warning(f"{self.provider} request failed: {error}")
        return OracleUnavailable(f"{self.provider} is unreachable", detail=str(error))

    def _build_request(
        self, system: str, prompt: str, temperature: float, max_tokens: int, stream: bool
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        raise NotImplementedError

    def _extract_text(self, data: Dict[str, Any]) -> str:
        raise NotImplementedError

    def _extract_delta(self, event: Dict[str, Any]) -> Optional[str]:
        raise NotImplementedError


class AnthropicBackend(HttpJudgeBackend):
    """Anthropic Messages API."""

    provider = "anthropic"

    def __init__(self, *args, api_version: str = "2023-06-01", **kwargs):
        super().__init__(*args, **kwargs)
        self.api_version = api_version

    def _build_request(self, system, prompt, temperature, max_tokens, stream):
        headers = {
            "x-api-key": self._require_key(),
            "anthropic-version": self.api_version,
            "content-type": "application/json",
        }
        payload = {
            "model": self.model,
            "system": system,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "stream": stream,
        }
        return f"{self.base_url}/messages", headers, payload

    def _extract_text(self, data):
        return "".join(
            block["text"] for block in data["content"] if block.get("type") == "text"
        )

    def _extract_delta(self, event):
        if event.get("type") != "content_block_delta":
            return None
        delta = event.get("delta") or {}
        if delta.get("type") == "text_delta":
            return delta.get("text")
        return None


class OpenAIBackend(HttpJudgeBackend):
    """OpenAI Chat Completions API in JSON mode."""

    provider = "openai"

    def _build_request(self, system, prompt, temperature, max_tokens, stream):
        headers = {
            "Authorization": f"Bearer {self._require_key()}",
            "content-type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "response_format": {"type": "json_object"},
            "stream": stream,
        }
        return f"{self.base_url}/chat/completions", headers, payload

    def _extract_text(self, data):
        return data["choices"][0]["message"]["content"] or ""

    def _extract_delta(self, event):
        choices = event.get("choices") or []
        if not choices:
            return None
        return (choices[0].get("delta") or {}).get("content")


class GoogleBackend(HttpJudgeBackend):
    """Gemini generateContent API with JSON response mime type."""

    provider = "google"

    def _build_request(self, system, prompt, temperature, max_tokens, stream):
        headers = {
            "x-goog-api-key": self._require_key(),
            "content-type": "application/json",
        }
        payload = {
            "systemInstruction": {"parts": [{"text": system}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
                "responseMimeType": "application/json",
            },
        }
        if stream:
            url = f"{self.base_url}/models/{self.model}:streamGenerateContent?alt=sse"
        else:
            url = f"{self.base_url}/models/{self.model}:generateContent"
        return url, headers, payload

    def _extract_text(self, data):
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)

    def _extract_delta(self, event):
        candidates = event.get("candidates") or []
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts) or None
