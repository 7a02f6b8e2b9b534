"""
Lambda handler for saving onboarding answers.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from cyclecoach.models.profile import OnboardingProfile
from cyclecoach.services.storage import ProfileStore
from cyclecoach.utils.logging import logger
from cyclecoach.utils.middleware import json_response, parse_body, require_user

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle onboarding submissions.

    The profile is always stored under the caller's identity; any user id
    in the body is ignored.
    """
    try:
        body = parse_body(event)
    except ValueError:
        return json_response(400, {"error": "Invalid JSON body"})

    data = {k: v for k, v in body.items() if k not in ("userId", "user_id")}
    try:
        profile = OnboardingProfile.model_validate({**data, "user_id": user_id})
    except ValidationError as e:
        logger.warning("Invalid onboarding payload", extra={
            "user_id": user_id,
            "error_count": e.error_count()
        })
        return json_response(400, {
            "error": "Invalid onboarding payload",
            "details": e.errors(include_url=False)
        })

    try:
        saved = ProfileStore().save_onboarding_data(profile)
        return json_response(200, {
            "success": True,
            "data": saved.model_dump(mode="json", by_alias=True)
        })
    except Exception:
        logger.exception("Failed to save onboarding data", extra={
            "user_id": user_id
        })
        return json_response(500, {"error": "Internal server error"})
