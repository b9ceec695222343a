"""
Oracle Judge Configuration Module

Provides centralized configuration loading for the judge and payout pipeline.
"""

from pathlib import Path
from typing import Dict, Any, Optional

import yaml


_config_cache: Optional[Dict[str, Any]] = None
CONFIG_DIR = Path(__file__).parent


def get_judge_config() -> Dict[str, Any]:
    """
    Load Oracle Judge configuration (cached).

    Returns:
        Dict containing all judge configuration settings.
    """
    global _config_cache
    if _config_cache is not None:
        return _config_cache

    config_path = CONFIG_DIR / "oracle_judge_config.yaml"
    with open(config_path, 'r') as f:
        _config_cache = yaml.safe_load(f)

    return _config_cache


def get_provider_config(provider: str) -> Dict[str, Any]:
    """Return the model/base-url block for one AI provider."""
    providers = get_judge_config()["providers"]
    if provider not in providers:
        raise KeyError(f"Unknown AI provider: {provider}")
    return providers[provider]


def clear_config_cache() -> None:
    """Clear the config cache (useful for testing)."""
    global _config_cache
    _config_cache = None
