"""
Infrastructure: Judge Factory

Dependency injection factory for assembling the judge pipeline.
Single source of truth for component wiring.
"""

import os
from typing import List, Optional

from oracle_judge.config import get_judge_config, get_provider_config
from oracle_judge.domain.judge.services import PromptBuilder, ResponseParser, JudgeEngine
from oracle_judge.application.use_cases import (
    StreamJudgementUseCase,
    ValidatePredictionUseCase,
    SubmitPredictionUseCase,
)
from oracle_judge.application.interfaces import IPredictionRepository
from oracle_judge.application.judge_session import JudgeSession
from oracle_judge.infrastructure.backends import BACKENDS, HttpJudgeBackend
from oracle_judge.infrastructure.repositories import InMemoryPredictionRepository
from oracle_judge.logging_utils import StructuredLogger, ComponentType


def default_provider() -> str:
    """Provider from AI_PROVIDER, falling back to the configured default."""
    config = get_judge_config()
    provider = os.getenv("AI_PROVIDER", "").lower()
    if provider in config["providers"]:
        return provider
    return config["default_provider"]


def available_providers() -> List[str]:
    """Providers whose API key environment variable is set."""
    providers = get_judge_config()["providers"]
    return [name for name, block in providers.items() if os.getenv(block["api_key_env"])]


class JudgeFactory:
    """
    Factory for creating judge pipeline components.

    Runtime knobs come from the environment, defaults from the YAML config.
    """

    @staticmethod
    def create_backend(provider: Optional[str] = None) -> HttpJudgeBackend:
        """
        Create the HTTP backend for a provider.

        Args:
            provider: "anthropic" | "openai" | "google" (default from env)

        Returns:
            Configured backend
        """
        provider = provider or default_provider()
        block = get_provider_config(provider)
        config = get_judge_config()
        timeout = float(os.getenv("JUDGE_TIMEOUT", str(config["judge"]["timeout_seconds"])))

        kwargs = {}
        if "api_version" in block:
            kwargs["api_version"] = block["api_version"]

        return BACKENDS[provider](
            model=os.getenv(f"{provider.upper()}_MODEL", block["model"]),
            base_url=block["base_url"],
            api_key_env=block["api_key_env"],
            timeout=timeout,
            logger=StructuredLogger(ComponentType.ORACLE_ADAPTER),
            **kwargs,
        )

    @staticmethod
    def create_judge_engine(provider: Optional[str] = None) -> JudgeEngine:
        """
        Create fully wired JudgeEngine.

        Returns:
            JudgeEngine with backend, prompt builder and parser
        """
        config = get_judge_config()
        year = int(os.getenv("PREDICTION_YEAR", str(config["prediction_year"])))

        return JudgeEngine(
            backend=JudgeFactory.create_backend(provider),
            prompt_builder=PromptBuilder(prediction_year=year),
            response_parser=ResponseParser(),
            logger=StructuredLogger(ComponentType.ORACLE_ADAPTER),
            temperature=float(os.getenv("JUDGE_TEMPERATURE", str(config["judge"]["temperature"]))),
            max_tokens=int(os.getenv("JUDGE_MAX_TOKENS", str(config["judge"]["max_tokens"]))),
            min_length=config["text"]["min_length"],
            max_length=config["text"]["max_length"],
        )

    @staticmethod
    def create_stream_use_case(provider: Optional[str] = None) -> StreamJudgementUseCase:
        return StreamJudgementUseCase(
            judge=JudgeFactory.create_judge_engine(provider),
            logger=StructuredLogger(ComponentType.JUDGE_SERVICE),
        )

    @staticmethod
    def create_validate_use_case(provider: Optional[str] = None) -> ValidatePredictionUseCase:
        return ValidatePredictionUseCase(
            judge=JudgeFactory.create_judge_engine(provider),
            logger=StructuredLogger(ComponentType.JUDGE_SERVICE),
        )

    @staticmethod
    def create_submit_use_case(
        repository: Optional[IPredictionRepository] = None,
    ) -> SubmitPredictionUseCase:
        config = get_judge_config()
        return SubmitPredictionUseCase(
            repository=repository or InMemoryPredictionRepository(),
            logger=StructuredLogger(ComponentType.SUBMISSION),
            min_length=config["text"]["min_length"],
            max_length=config["text"]["max_length"],
            default_stake=config["payout"]["default_stake"],
        )

    @staticmethod
    def create_session() -> JudgeSession:
        """Live-analysis session using the configured text window and stake."""
        config = get_judge_config()
        return JudgeSession(
            min_length=config["live_analysis"]["min_length"],
            max_length=config["text"]["max_length"],
            default_stake=config["payout"]["default_stake"],
        )
