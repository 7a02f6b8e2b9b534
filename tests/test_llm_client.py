"""
Tests for the OpenAIClient class.
"""
import json
import pytest
import responses

from cyclecoach.utils.llm import LLMClientError, OpenAIClient

COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"

@pytest.fixture
def llm_client(monkeypatch):
    """Create an OpenAIClient instance for testing."""
    monkeypatch.setenv("OPENAI_API_KEY", "test_key")
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    return OpenAIClient()

def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}

@responses.activate
def test_complete_text(llm_client):
    """Test a text completion request and response."""
    responses.add(responses.POST, COMPLETIONS_URL, json=_completion("Hello!"), status=200)

    result = llm_client.complete("You are helpful.", "Hi")

    assert result == "Hello!"
    request = responses.calls[0].request
    assert request.headers["Authorization"] == "Bearer test_key"
    payload = json.loads(request.body)
    assert payload["model"] == "gpt-4o"
    assert payload["response_format"] == {"type": "text"}
    assert payload["messages"] == [
        {"role": "system", "content": "You are helpful."},
        {"role": "user", "content": "Hi"}
    ]

@responses.activate
def test_complete_json_mode(llm_client):
    """Test JSON mode asks for a JSON object."""
    responses.add(responses.POST, COMPLETIONS_URL, json=_completion("{}"), status=200)

    llm_client.complete("system", "user", json_mode=True, max_tokens=1200)

    payload = json.loads(responses.calls[0].request.body)
    assert payload["response_format"] == {"type": "json_object"}
    assert payload["max_tokens"] == 1200

@responses.activate
def test_complete_http_error(llm_client):
    """Test non-2xx responses raise LLMClientError."""
    responses.add(
        responses.POST, COMPLETIONS_URL,
        json={"error": {"message": "Rate limit reached"}}, status=429
    )

    with pytest.raises(LLMClientError):
        llm_client.complete("system", "user")

@responses.activate
def test_complete_empty_content(llm_client):
    """Test an empty completion raises LLMClientError."""
    responses.add(responses.POST, COMPLETIONS_URL, json=_completion(""), status=200)

    with pytest.raises(LLMClientError, match="No completion content"):
        llm_client.complete("system", "user")

@responses.activate
def test_custom_base_url_and_model(monkeypatch):
    """Test base URL and model come from the environment."""
    monkeypatch.setenv("OPENAI_API_KEY", "test_key")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://llm.internal/v1/")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    responses.add(
        responses.POST, "https://llm.internal/v1/chat/completions",
        json=_completion("ok"), status=200
    )

    assert OpenAIClient().complete("system", "user") == "ok"
    assert json.loads(responses.calls[0].request.body)["model"] == "gpt-4o-mini"

def test_missing_api_key(monkeypatch):
    """Test the client requires an API key."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(KeyError):
        OpenAIClient()
