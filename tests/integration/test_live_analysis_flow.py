"""
Integration tests for the live analysis -> submission flow

Wires the real factory, HTTP backend, engine, use cases and session
together; only the upstream HTTP session is mocked.
"""

import pytest
from unittest.mock import patch

from oracle_judge.domain.errors import SubmissionBlocked
from oracle_judge.infrastructure.factory import JudgeFactory
from oracle_judge.infrastructure.repositories import InMemoryPredictionRepository


PREDICTION = "Bitcoin will exceed $150,000 by December 31, 2026"


@pytest.fixture
def openai_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-openai-key")
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    monkeypatch.delenv("JUDGE_TIMEOUT", raising=False)


def openai_stream(sse_line, text_chunks):
    lines = [sse_line({"choices": [{"delta": {"content": chunk}}]}) for chunk in text_chunks]
    return lines + ["data: [DONE]"]


class TestLiveAnalysisFlow:
    """Test a prediction from typing to a stored record"""

    @pytest.mark.asyncio
    async def test_type_analyze_submit(self, openai_env, mock_aiohttp_response, sse_line, verdict_chunks):
        session_ctx, _, _ = mock_aiohttp_response(sse_lines=openai_stream(sse_line, verdict_chunks))
        stream_use_case = JudgeFactory.create_stream_use_case("openai")
        repository = InMemoryPredictionRepository()
        submit_use_case = JudgeFactory.create_submit_use_case(repository)

        session = JudgeFactory.create_session()
        assert session.update_text("Bitcoin will") is None
        assert not session.can_submit()

        generation = session.update_text(PREDICTION)
        with patch("aiohttp.ClientSession", return_value=session_ctx):
            latest = await session.analyze(stream_use_case)

        assert latest.generation == generation
        assert latest.complete
        assert latest.payout_odds == 9.4
        assert session.hint() == "Your prediction is ready to be recorded in the Oracle"

        stored = await submit_use_case.execute(session.submission_request(group_id="g-1"))

        assert stored["payout_odds"] == 9.4
        assert stored["potential_payout"] == 940.0
        assert stored["ai_comment"] == "Bold call on Bitcoin."
        assert repository.all() == [stored]

    @pytest.mark.asyncio
    async def test_vague_prediction_never_stored(self, openai_env, mock_aiohttp_response, sse_line):
        chunks = ['{"concreteness_score": 2, "boldness_score": 4, ', '"ai_comment": "Bold of you to say nothing."}']
        session_ctx, _, _ = mock_aiohttp_response(sse_lines=openai_stream(sse_line, chunks))
        repository = InMemoryPredictionRepository()

        session = JudgeFactory.create_session()
        session.update_text("Something big will happen in politics this year")
        with patch("aiohttp.ClientSession", return_value=session_ctx):
            latest = await session.analyze(JudgeFactory.create_stream_use_case("openai"))

        assert latest.is_valid is False
        assert session.hint() == "Make your prediction more specific to submit"
        with pytest.raises(SubmissionBlocked):
            session.submission_request()
        assert repository.all() == []

    @pytest.mark.asyncio
    async def test_upstream_outage_blocks_submission(self, openai_env, mock_aiohttp_response):
        session_ctx, _, _ = mock_aiohttp_response(status=503, text_data="overloaded")

        session = JudgeFactory.create_session()
        session.update_text(PREDICTION)
        with patch("aiohttp.ClientSession", return_value=session_ctx):
            latest = await session.analyze(JudgeFactory.create_stream_use_case("openai"))

        assert latest is None
        assert "503" in session.last_error
        assert not session.can_submit()

    @pytest.mark.asyncio
    async def test_undecodable_stream_blocks_submission(self, openai_env, mock_aiohttp_response, sse_line):
        lines = [sse_line({"choices": [{"delta": {"content": '{"concreteness_score": 8, '}}]}), b"data: \xff\xfe"]
        session_ctx, _, _ = mock_aiohttp_response(sse_lines=lines)

        session = JudgeFactory.create_session()
        session.update_text(PREDICTION)
        with patch("aiohttp.ClientSession", return_value=session_ctx):
            latest = await session.analyze(JudgeFactory.create_stream_use_case("openai"))

        assert latest is None
        assert "undecodable" in session.last_error
        assert not session.can_submit()
