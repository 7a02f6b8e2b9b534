"""
Lambda handlers package for AWS Lambda functions.
"""
from .chat import handler as chat_handler
from .chat import history_handler
from .daily_tip import handler as daily_tip_handler
from .onboarding import handler as onboarding_handler
from .phase import handler as phase_handler
from .profile import handler as profile_handler

__all__ = [
    "chat_handler",
    "history_handler",
    "daily_tip_handler",
    "onboarding_handler",
    "phase_handler",
    "profile_handler"
]
