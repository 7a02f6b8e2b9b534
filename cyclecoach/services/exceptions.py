"""
Service-level exceptions.

This module contains exceptions that can be raised by the phase, composer
and chat services. All of them are scoped to a single chat exchange.
"""

class CoachError(Exception):
    """Base exception for coaching service errors."""
    pass

class ProfileMissingError(CoachError):
    """Raised when a user has not completed onboarding yet."""

    def __init__(self, user_id=None):
        self.user_id = user_id
        super().__init__(
            "No onboarding data found. Please complete onboarding first."
        )

class GenerationError(CoachError):
    """Raised when the LLM call fails or returns unparseable content."""
    pass

class MalformedIngredientError(CoachError):
    """Raised when an LLM-returned card cannot be turned into a card at all."""
    pass
