"""
Chat turn model for the append-only conversation history.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cyclecoach.models.recommendation import RecommendationCard

class ChatTurn(BaseModel):
    """
    One user message with the assistant's reply and any cards shown.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
    message: str
    response: str
    ingredients: List[RecommendationCard] = Field(default_factory=list)
    created_at: datetime
