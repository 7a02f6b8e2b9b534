"""
Lambda handler for the tip of the day.
"""
from typing import Dict

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from cyclecoach.services.catalog import get_daily_tip
from cyclecoach.utils.middleware import json_response

logger = Logger()
tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """Return the same tip for every caller on a given day."""
    return json_response(200, get_daily_tip().model_dump())
