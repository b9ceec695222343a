"""
Shared test fixtures and utilities for judge tests
"""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from oracle_judge.config import clear_config_cache
from oracle_judge.domain.judge.services import PromptBuilder, ResponseParser, JudgeEngine


VERDICT_TEXT = '{"concreteness_score": 8, "boldness_score": 6, "ai_comment": "Bold call on Bitcoin."}'

VERDICT_CHUNKS = [
    '{"concreteness_score": 8',
    ', "boldness_score": 6',
    ', "ai_comment": "Bold ',
    'call on Bitcoin."}',
]


def create_mock_aiohttp_response(status=200, text_data="", sse_lines=None):
    """
    Helper to create a properly mocked aiohttp response with async context managers.

    Args:
        status: HTTP status code
        text_data: String to return from response.text()
        sse_lines: Raw lines (str, or bytes passed through) to yield from response.content

    Returns:
        Tuple of (mock_session_context, mock_post_context, mock_response)
    """
    # Mock HTTP response
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value=text_data)
    mock_response.content.__aiter__.return_value = [
        line if isinstance(line, bytes) else line.encode("utf-8") for line in (sse_lines or [])
    ]

    # Mock async context manager for session.post()
    mock_post_context = AsyncMock()
    mock_post_context.__aenter__.return_value = mock_response
    mock_post_context.__aexit__.return_value = None

    # Mock session
    mock_session = MagicMock()
    mock_session.post.return_value = mock_post_context

    # Mock ClientSession as async context manager
    mock_session_context = AsyncMock()
    mock_session_context.__aenter__.return_value = mock_session
    mock_session_context.__aexit__.return_value = None

    return mock_session_context, mock_post_context, mock_response


def create_mock_aiohttp_error(exception):
    """
    Helper to create a mock whose session.post() raises an exception.

    Returns:
        mock_session_context ready to use with patch
    """
    mock_session = MagicMock()
    mock_session.post.side_effect = exception

    mock_session_context = AsyncMock()
    mock_session_context.__aenter__.return_value = mock_session
    mock_session_context.__aexit__.return_value = None

    return mock_session_context


def sse(event) -> str:
    """One server-sent event line carrying a JSON payload."""
    return "data: " + json.dumps(event)


class FakeBackend:
    """In-process IJudgeBackend that replays canned text."""

    provider = "fake"

    def __init__(self, chunks=None, text=VERDICT_TEXT, error=None, error_after=None):
        self.chunks = list(chunks if chunks is not None else VERDICT_CHUNKS)
        self.text = text
        self.error = error
        self.error_after = error_after
        self.calls = []
        self.chunks_sent = 0
        self.stream_closed = False

    def get_model_id(self):
        return "fake/model"

    async def complete(self, system, prompt, temperature, max_tokens):
        self.calls.append(("complete", prompt))
        if self.error is not None:
            raise self.error
        return self.text

    async def stream(self, system, prompt, temperature, max_tokens):
        self.calls.append(("stream", prompt))
        try:
            if self.error is not None and self.error_after is None:
                raise self.error
            for index, chunk in enumerate(self.chunks):
                if self.error_after is not None and index == self.error_after:
                    raise self.error
                self.chunks_sent += 1
                yield chunk
        finally:
            self.stream_closed = True


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test sees the packaged YAML config, not a cached copy."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def make_backend():
    """Factory for FakeBackend instances"""
    return FakeBackend


@pytest.fixture
def make_engine():
    """Factory for a JudgeEngine wired to a given backend"""
    def _make(backend, **kwargs):
        return JudgeEngine(
            backend=backend,
            prompt_builder=PromptBuilder(prediction_year=2026),
            response_parser=ResponseParser(),
            **kwargs,
        )
    return _make


@pytest.fixture
def mock_aiohttp_response():
    return create_mock_aiohttp_response


@pytest.fixture
def mock_aiohttp_error():
    return create_mock_aiohttp_error


@pytest.fixture
def sse_line():
    return sse


@pytest.fixture
def verdict_text():
    return VERDICT_TEXT


@pytest.fixture
def verdict_chunks():
    return list(VERDICT_CHUNKS)
