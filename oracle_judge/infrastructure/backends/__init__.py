"""
Judge model backends (hosted language model HTTP APIs)
"""

from .http_backend import HttpJudgeBackend, AnthropicBackend, OpenAIBackend, GoogleBackend

BACKENDS = {
    AnthropicBackend.provider: AnthropicBackend,
    OpenAIBackend.provider: OpenAIBackend,
    GoogleBackend.provider: GoogleBackend,
}

__all__ = ["HttpJudgeBackend", "AnthropicBackend", "OpenAIBackend", "GoogleBackend", "BACKENDS"]
