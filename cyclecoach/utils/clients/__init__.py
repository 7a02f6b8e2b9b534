"""
Centralized client initialization module.

This module provides lazy-loaded shared clients for the application.
Optional collaborators (LLM, research) are None when not configured.
"""
import os
from typing import Optional

from aws_lambda_powertools import Logger
from cyclecoach.utils.dynamo import get_dynamo
from cyclecoach.utils.llm import OpenAIClient
from cyclecoach.utils.research import ResearchClient

logger = Logger()

# Initialize shared clients (lazy loading)
_llm = None
_research = None

def get_llm() -> Optional[OpenAIClient]:
    """Get or create the LLM client, None when OPENAI_API_KEY is unset."""
    global _llm
    if _llm is None and os.environ.get("OPENAI_API_KEY"):
        _llm = OpenAIClient()
    elif _llm is None:
        logger.info("OPENAI_API_KEY not set, using catalog responses")
    return _llm

def get_research() -> Optional[ResearchClient]:
    """Get or create the research client, None when RESEARCH_API_URL is unset."""
    global _research
    if _research is None and os.environ.get("RESEARCH_API_URL"):
        _research = ResearchClient()
    return _research

__all__ = [
    "get_dynamo",
    "get_llm",
    "get_research"
]
