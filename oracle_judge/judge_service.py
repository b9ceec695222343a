"""
Judge Service for the Prediction Oracle

THIN FACADE - this module only handles:
- FastAPI endpoint setup
- HTTP request/response handling
- Delegation to application use cases

All business logic is in:
- oracle_judge/domain/ - payout engine, judge engine, prompts, parsing
- oracle_judge/application/ - use cases and DTOs
- oracle_judge/infrastructure/ - model backends, repository, factory
"""

import json
import os
from typing import Dict, Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, StreamingResponse

from .config import get_judge_config
from .logging_utils import StructuredLogger
from .models import (
    ComponentType, EventType, AIProvider,
    JudgeRequest, JudgeVerdict, CreatePredictionRequest, PredictionResponse,
)
from .application.dtos import SubmitPredictionRequestDTO
from .application.use_cases import (
    StreamJudgementUseCase, ValidatePredictionUseCase, SubmitPredictionUseCase,
)
from .domain.errors import (
    OracleJudgeError, OracleUnavailable, OracleMalformedResponse,
    InvalidPredictionText, InvalidScoreRange, InvalidStake, SubmissionBlocked,
)
from .domain.payout import VALIDITY_THRESHOLD
from .infrastructure.factory import JudgeFactory, default_provider, available_providers

# Configuration
JUDGE_PORT = int(os.getenv("PORT", os.getenv("JUDGE_PORT", "8080")))

logger = StructuredLogger(ComponentType.JUDGE_SERVICE)

# Per-provider use cases, created lazily
_stream_use_cases: Dict[str, StreamJudgementUseCase] = {}
_validate_use_cases: Dict[str, ValidatePredictionUseCase] = {}
_submit_use_case: Optional[SubmitPredictionUseCase] = None


def get_stream_use_case(provider: Optional[AIProvider] = None) -> StreamJudgementUseCase:
    name = provider.value if provider else default_provider()
    if name not in _stream_use_cases:
        _stream_use_cases[name] = JudgeFactory.create_stream_use_case(name)
    return _stream_use_cases[name]


def get_validate_use_case(provider: Optional[AIProvider] = None) -> ValidatePredictionUseCase:
    name = provider.value if provider else default_provider()
    if name not in _validate_use_cases:
        _validate_use_cases[name] = JudgeFactory.create_validate_use_case(name)
    return _validate_use_cases[name]


def get_submit_use_case() -> SubmitPredictionUseCase:
    global _submit_use_case
    if _submit_use_case is None:
        _submit_use_case = JudgeFactory.create_submit_use_case()
    return _submit_use_case


def error_status(error: OracleJudgeError) -> int:
    """HTTP status for a domain error kind."""
    if isinstance(error, OracleUnavailable):
        return 503
    if isinstance(error, OracleMalformedResponse):
        return 502
    if isinstance(error, SubmissionBlocked):
        return 422
    if isinstance(error, (InvalidPredictionText, InvalidScoreRange, InvalidStake)):
        return 400
    return 500


def error_body(error: OracleJudgeError) -> Dict[str, str]:
    return {"error": str(error), "error_type": type(error).__name__}


# FastAPI Application
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager - loads configuration on startup"""
    get_judge_config()
    logger.log_event("startup", EventType.SYSTEM_INIT, {
        "default_provider": default_provider(),
        "available_providers": available_providers(),
    })
    yield
    logger.logger.info("Judge Service shutting down")


app = FastAPI(title="Prediction-Oracle-Judge", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a 400, matching the judge API contract"""
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": json.loads(json.dumps(exc.errors(), default=str))},
    )


@app.get("/")
def root():
    """Describe the judge API"""
    config = get_judge_config()
    year = config["prediction_year"]
    return {
        "name": f"The {year} Oracle - AI Judge",
        "description": "Evaluates predictions for concreteness and boldness",
        "schema": {
            "request": {
                "prediction": f"string ({config['text']['min_length']}-{config['text']['max_length']} chars)",
                "provider": "anthropic | google | openai (optional)",
                "generation": "integer (optional, echoed on every snapshot)",
            },
            "response": {
                "concreteness_score": "number (0-10)",
                "boldness_score": "number (0-10)",
                "payout_odds": "number (calculated from scores)",
                "ai_comment": "string",
                "is_valid": f"boolean (true if concreteness >= {VALIDITY_THRESHOLD})",
            },
        },
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "default_provider": default_provider(),
    }


@app.get("/providers")
def providers():
    """List providers and which ones have credentials configured"""
    config = get_judge_config()
    return {
        "default": default_provider(),
        "available": available_providers(),
        "names": {name: block["display_name"] for name, block in config["providers"].items()},
    }


@app.post("/judge")
async def judge(request: JudgeRequest):
    """
    Judge a prediction with live, incrementally refined snapshots.

    Streams NDJSON, one snapshot per line; each line replaces the previous
    one. A failure after the stream has started is sent as a final
    ``{"error": ...}`` line.
    """
    use_case = get_stream_use_case(request.provider)
    snapshots = use_case.execute(
        request.prediction, generation=request.generation, trace_id=request.trace_id
    )

    # Pull the first snapshot so early failures still get a proper status code
    try:
        first = await snapshots.__anext__()
    except StopAsyncIteration:
        first = None
    except OracleJudgeError as e:
        await snapshots.aclose()
        logger.logger.warning(f"Judge stream failed before first snapshot: {e}")
        raise HTTPException(status_code=error_status(e), detail=error_body(e))

    async def body():
        try:
            if first is not None:
                yield json.dumps(first.to_dict()) + "\n"
            async for snapshot in snapshots:
                yield json.dumps(snapshot.to_dict()) + "\n"
        except OracleJudgeError as e:
            logger.logger.warning(f"Judge stream failed mid-stream: {e}")
            yield json.dumps(error_body(e)) + "\n"
        finally:
            await snapshots.aclose()

    return StreamingResponse(body(), media_type="application/x-ndjson")


@app.post("/judge/validate", response_model=JudgeVerdict)
async def validate(request: JudgeRequest):
    """
    Non-streaming judge - returns the complete verdict at once.

    Use this when you need to validate before saving.
    """
    use_case = get_validate_use_case(request.provider)

    try:
        verdict = await use_case.execute(request.prediction, trace_id=request.trace_id)
    except OracleJudgeError as e:
        logger.logger.error(f"Judge validation error: {e}")
        raise HTTPException(status_code=error_status(e), detail=error_body(e))

    return JudgeVerdict(**verdict.to_dict())


@app.post("/predictions", response_model=PredictionResponse, status_code=201)
async def create_prediction(request: CreatePredictionRequest):
    """Record a scored prediction with its stake"""
    use_case = get_submit_use_case()

    try:
        stored = await use_case.execute(SubmitPredictionRequestDTO.from_dict(request.model_dump()))
    except OracleJudgeError as e:
        logger.logger.warning(f"Prediction rejected: {e}")
        raise HTTPException(status_code=error_status(e), detail=error_body(e))

    return PredictionResponse(**stored)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=JUDGE_PORT)
