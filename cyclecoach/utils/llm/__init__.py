"""
LLM client package.
"""
from .client import LLMClientError, OpenAIClient

__all__ = [
    "LLMClientError",
    "OpenAIClient"
]
