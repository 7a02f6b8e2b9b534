"""
Lambda handler for the current phase dashboard.
"""
from typing import Dict

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from cyclecoach.services.exceptions import ProfileMissingError
from cyclecoach.services.phase import compute_phase, get_phase_display
from cyclecoach.services.storage import ProfileStore
from cyclecoach.utils.middleware import json_response, require_user

logger = Logger()
tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle current phase requests.

    Returns:
        API Gateway Lambda proxy response with `{"success": True, "phase": ...}`
    """
    try:
        profile = ProfileStore().get_onboarding_data(user_id)
        phase_info = compute_phase(profile)
        return json_response(200, {
            "success": True,
            "phase": get_phase_display(phase_info, profile)
        })

    except ProfileMissingError as e:
        return json_response(400, {"error": str(e)})

    except Exception:
        logger.exception("Failed to compute current phase", extra={
            "user_id": user_id
        })
        return json_response(500, {"error": "Internal server error"})
