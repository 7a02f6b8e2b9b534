"""
Lambda handler for reading back a user's onboarding answers.
"""
from typing import Dict

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from cyclecoach.services.exceptions import ProfileMissingError
from cyclecoach.services.storage import ProfileStore
from cyclecoach.utils.middleware import json_response, require_user

logger = Logger()
tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle profile requests.

    Returns:
        API Gateway Lambda proxy response with `{"onboarding": ...}`
    """
    try:
        profile = ProfileStore().get_onboarding_data(user_id)
        if profile is None:
            raise ProfileMissingError(user_id)
        return json_response(200, {
            "onboarding": profile.model_dump(mode="json", by_alias=True)
        })

    except ProfileMissingError as e:
        return json_response(400, {"error": str(e)})

    except Exception:
        logger.exception("Failed to load profile", extra={
            "user_id": user_id
        })
        return json_response(500, {"error": "Failed to load profile"})
