"""
OpenAI chat-completions client implementation.
"""
import os
from typing import Any, Dict, Optional

import requests

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_TIMEOUT = 30.0

class LLMClientError(Exception):
    """Raised when the completion request fails or returns no content."""
    pass

class OpenAIClient:
    """Client for the OpenAI chat completions HTTP API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = api_key or os.environ["OPENAI_API_KEY"]
        self.model = model or os.environ.get("OPENAI_MODEL", DEFAULT_MODEL)
        self.base_url = (
            base_url or os.environ.get("OPENAI_BASE_URL", DEFAULT_BASE_URL)
        ).rstrip("/")
        self.timeout = timeout or float(os.environ.get("OPENAI_TIMEOUT", DEFAULT_TIMEOUT))

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        json_mode: bool = False,
        max_tokens: int = 800,
        temperature: float = 0.7
    ) -> str:
        """
        Run a single system + user prompt completion.

        Args:
            system_prompt: Instructions for the assistant
            user_prompt: The user's message
            json_mode: Ask the model for a JSON object response
            max_tokens: Completion token limit
            temperature: Sampling temperature

        Returns:
            Assistant message content

        Raises:
            LLMClientError: On transport errors, non-2xx responses or empty content
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "response_format": {"type": "json_object" if json_mode else "text"}
        }

        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json"
                },
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise LLMClientError(f"Completion request failed: {e}") from e

        choices = data.get("choices") or [{}]
        content = (choices[0].get("message") or {}).get("content")
        if not content:
            raise LLMClientError("No completion content returned")
        return content
