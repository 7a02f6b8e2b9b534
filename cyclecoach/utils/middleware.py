"""
Middleware functions for request processing.
"""
import json
from functools import wraps
from typing import Any, Callable, Dict, Optional

from aws_lambda_powertools import Logger

logger = Logger()

JSON_HEADERS = {"Content-Type": "application/json"}

def json_response(status_code: int, body: Any) -> Dict[str, Any]:
    """Build an API Gateway Lambda proxy response with a JSON body."""
    return {
        "statusCode": status_code,
        "headers": JSON_HEADERS,
        "body": json.dumps(body, default=str),
        "isBase64Encoded": False
    }

def get_user_id(event: Dict[str, Any]) -> Optional[str]:
    """
    Extract the caller identity set by the API Gateway authorizer.

    Supports Cognito user pool claims, HTTP API JWT claims and Lambda
    authorizers that set principalId.
    """
    if not isinstance(event, dict):
        return None
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}

    claims = authorizer.get("claims") or (authorizer.get("jwt") or {}).get("claims") or {}
    user_id = claims.get("sub") or authorizer.get("principalId")
    return str(user_id) if user_id else None

def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse the JSON request body.

    Raises:
        ValueError: If the body is not a JSON object
    """
    body = event.get("body") or {}
    if isinstance(body, str):
        body = json.loads(body)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body

def require_user(f: Callable) -> Callable:
    """
    Decorator to require a caller identity for handlers.

    The wrapped handler is called as f(event, context, user_id); requests
    without an identity get a 401 response.
    """
    @wraps(f)
    def wrapped(event: Dict[str, Any], context: Any, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        user_id = get_user_id(event)
        if not user_id:
            logger.warning("Request without caller identity", extra={
                "path": event.get("path") if isinstance(event, dict) else None
            })
            return json_response(401, {"error": "Unauthorized"})
        return f(event, context, user_id, *args, **kwargs)

    return wrapped
