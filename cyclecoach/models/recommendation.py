"""
Recommendation card models returned alongside chat responses.
"""
from typing import Annotated, List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

class FoodCard(BaseModel):
    """
    A food recommendation with lazy/tasty/healthy ways to apply it.
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["food"] = "food"
    name: str
    description: str
    emoji: str
    lazy: str
    tasty: str
    healthy: str

class MovementCard(BaseModel):
    """
    A movement recommendation with gentle/fun/strong variations.
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["movement"] = "movement"
    name: str
    description: str
    emoji: str
    gentle: str
    fun: str
    strong: str

class EmotionCard(BaseModel):
    """
    An emotional wellbeing practice with chill/creative/heartfelt variations.
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["emotion"] = "emotion"
    name: str
    description: str
    emoji: str
    chill: str
    creative: str
    heartfelt: str

RecommendationCard = Annotated[
    Union[FoodCard, MovementCard, EmotionCard],
    Field(discriminator="type")
]

# Guidance fields each card variant must carry
CARD_GUIDANCE_FIELDS = {
    "food": ("lazy", "tasty", "healthy"),
    "movement": ("gentle", "fun", "strong"),
    "emotion": ("chill", "creative", "heartfelt"),
}

class ChatResponse(BaseModel):
    """
    Assistant reply: free text plus zero or more recommendation cards.

    This is the JSON contract exposed to the web client.
    """
    message: str
    ingredients: List[RecommendationCard] = Field(default_factory=list)

class DailyTip(BaseModel):
    """A rotating daily wellness tip with its source."""
    model_config = ConfigDict(frozen=True)

    tip: str
    source: str
