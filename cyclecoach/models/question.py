"""
Question category model for chat routing.
"""
from enum import Enum

class QuestionCategory(str, Enum):
    """
    Mutually exclusive categories that drive the response strategy.
    """
    ADVICE = "advice"            # Food, movement or emotion guidance
    CYCLE = "cycle"              # Questions about the user's cycle phase
    EDUCATIONAL = "educational"  # General women's health Q&A
