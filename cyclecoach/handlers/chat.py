"""
Lambda handlers for the chat endpoints.

POST /chat answers one message; GET /chat/history lists recent exchanges.
"""
from typing import Dict, Optional

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, Field, ValidationError

from cyclecoach.models.phase import ReportedPhase
from cyclecoach.services.chat import ChatService
from cyclecoach.services.composer import ResponseComposer
from cyclecoach.services.exceptions import GenerationError, ProfileMissingError
from cyclecoach.services.storage import ChatHistoryStore, ProfileStore
from cyclecoach.utils.clients import get_llm, get_research
from cyclecoach.utils.logging import log_exception, logger
from cyclecoach.utils.middleware import json_response, parse_body, require_user

tracer = Tracer()

MAX_HISTORY_LIMIT = 100

class ChatRequest(BaseModel):
    """Chat request model."""
    message: str = Field(..., min_length=1)
    current_phase: Optional[ReportedPhase] = Field(default=None, alias="currentPhase")

def get_chat_service() -> ChatService:
    """Build the chat service from the configured clients."""
    return ChatService(
        composer=ResponseComposer(get_llm(), get_research()),
        profiles=ProfileStore(),
        history=ChatHistoryStore()
    )

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle a chat message.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        user_id: Caller identity from the authorizer

    Returns:
        API Gateway Lambda proxy response with a ChatResponse body
    """
    try:
        body = parse_body(event)
    except ValueError:
        return json_response(400, {"error": "Invalid JSON body"})

    message = body.get("message")
    if not isinstance(message, str) or not message.strip():
        return json_response(400, {"error": "Message is required"})

    try:
        request = ChatRequest.model_validate(body)
    except ValidationError as e:
        return json_response(400, {
            "error": "Invalid chat request",
            "details": e.errors(include_url=False)
        })

    try:
        response = get_chat_service().handle_message(
            user_id,
            request.message,
            current_phase=request.current_phase
        )
        return json_response(200, response.model_dump(mode="json", by_alias=True))

    except ProfileMissingError as e:
        return json_response(400, {"error": str(e)})

    except GenerationError:
        log_exception(logger, "Failed to generate chat response", extra={
            "user_id": user_id
        })
        return json_response(500, {
            "error": "Failed to generate response. Please try again."
        })

    except Exception:
        logger.exception("Failed to handle chat message", extra={
            "user_id": user_id
        })
        return json_response(500, {"error": "Internal server error"})

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user
def history_handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle chat history requests.

    Accepts an optional `limit` query parameter (1-100, default 50).
    """
    params = event.get("queryStringParameters") or {}
    try:
        limit = int(params.get("limit", 50))
    except (TypeError, ValueError):
        return json_response(400, {"error": "limit must be an integer"})
    if not 1 <= limit <= MAX_HISTORY_LIMIT:
        return json_response(400, {
            "error": f"limit must be between 1 and {MAX_HISTORY_LIMIT}"
        })

    try:
        turns = get_chat_service().get_history(user_id, limit)
        return json_response(200, {
            "history": [
                turn.model_dump(mode="json", by_alias=True) for turn in turns
            ]
        })
    except Exception:
        logger.exception("Failed to load chat history", extra={
            "user_id": user_id
        })
        return json_response(500, {"error": "Internal server error"})
