"""
Research lookup client package.
"""
from .client import ResearchClient, ResearchClientError

__all__ = [
    "ResearchClient",
    "ResearchClientError"
]
