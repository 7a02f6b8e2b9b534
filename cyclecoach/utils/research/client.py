"""
Research lookup client implementation.

Queries a vector-search service holding women's health research snippets.
"""
import os
from typing import Any, Dict, List, Optional

import requests

class ResearchClientError(Exception):
    """Raised when the research service cannot be queried."""
    pass

class ResearchClient:
    """Client for the research search HTTP API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 10.0
    ):
        self.base_url = (base_url or os.environ["RESEARCH_API_URL"]).rstrip("/")
        self.api_key = api_key or os.environ.get("RESEARCH_API_KEY")
        self.timeout = timeout

    def search(self, query: str, top_k: int = 3) -> List[Dict[str, str]]:
        """
        Search research snippets relevant to a query.

        Args:
            query: Free-text query
            top_k: Maximum number of matches

        Returns:
            List of {"content": str}, best match first

        Raises:
            ResearchClientError: On transport errors or non-2xx responses
        """
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = requests.post(
                f"{self.base_url}/search",
                headers=headers,
                json={"query": query, "top_k": top_k},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise ResearchClientError(f"Research search failed: {e}") from e

        results = []
        for match in data.get("matches", [])[:top_k]:
            content = _match_content(match)
            if content:
                results.append({"content": content})
        return results

def _match_content(match: Dict[str, Any]) -> Optional[str]:
    # Vector stores return the snippet either inline or under metadata
    return match.get("content") or (match.get("metadata") or {}).get("content")
