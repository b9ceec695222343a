"""
Domain Services for the Judge
"""

from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser
from .judge_engine import JudgeEngine, IJudgeBackend

__all__ = [
    "PromptBuilder",
    "ResponseParser",
    "JudgeEngine",
    "IJudgeBackend",
]
