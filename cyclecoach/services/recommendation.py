"""
Service module for validating recommendation cards returned by the LLM.

The model is asked for typed cards but does not always comply. Each card is
normalized against its declared variant and missing fields are filled with
safe defaults, so one bad card never blocks the rest of a reply.
"""
from typing import Any, Dict, List, Mapping, Optional

from aws_lambda_powertools import Logger
from pydantic import TypeAdapter

from cyclecoach.models.recommendation import CARD_GUIDANCE_FIELDS, RecommendationCard
from cyclecoach.services.exceptions import MalformedIngredientError

logger = Logger()

DEFAULT_CARD_EMOJI = {
    "food": "🌿",
    "movement": "🏃‍♀️",
    "emotion": "💖",
}

_card_adapter = TypeAdapter(RecommendationCard)

def infer_card_type(raw: Mapping[str, Any]) -> str:
    """
    Determine the variant of a raw card.

    Uses the declared type when valid, otherwise the variant whose guidance
    fields are present. Defaults to food.
    """
    declared = str(raw.get("type") or "").strip().lower()
    if declared in CARD_GUIDANCE_FIELDS:
        return declared
    for card_type, fields in CARD_GUIDANCE_FIELDS.items():
        if any(raw.get(field) for field in fields):
            return card_type
    return "food"

def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default

def normalize_ingredient(raw: Any) -> RecommendationCard:
    """
    Normalize one raw card into a typed RecommendationCard.

    Args:
        raw: Card as decoded from the model's JSON

    Returns:
        Food, movement or emotion card with every field populated

    Raises:
        MalformedIngredientError: If raw is not a JSON object

    Example:
        >>> card = normalize_ingredient({"type": "movement", "name": "Yoga"})
        >>> card.gentle
        ''
    """
    if not isinstance(raw, Mapping):
        raise MalformedIngredientError(
            f"Ingredient must be an object, got {type(raw).__name__}"
        )

    card_type = infer_card_type(raw)
    card: Dict[str, Any] = {
        "type": card_type,
        "name": _text(raw.get("name"), "Unknown"),
        "description": _text(raw.get("description"), ""),
        "emoji": _text(raw.get("emoji"), DEFAULT_CARD_EMOJI[card_type]),
    }
    missing = []
    for field in CARD_GUIDANCE_FIELDS[card_type]:
        card[field] = _text(raw.get(field), "")
        if not card[field]:
            missing.append(field)

    if missing or raw.get("type") != card_type or not raw.get("name"):
        logger.warning("Recovered malformed ingredient", extra={
            "declared_type": raw.get("type"),
            "card_type": card_type,
            "missing_fields": missing
        })

    return _card_adapter.validate_python(card)

def normalize_ingredients(raw_cards: Optional[Any]) -> List[RecommendationCard]:
    """
    Normalize a list of raw cards, skipping entries that cannot be recovered.

    Args:
        raw_cards: Value of the "ingredients" key in the model's JSON

    Returns:
        List of typed cards, in input order
    """
    if raw_cards is None:
        return []
    if not isinstance(raw_cards, list):
        logger.warning("Ingredients payload is not a list", extra={
            "payload_type": type(raw_cards).__name__
        })
        return []

    cards = []
    for index, raw in enumerate(raw_cards):
        try:
            cards.append(normalize_ingredient(raw))
        except MalformedIngredientError as e:
            logger.warning("Skipping malformed ingredient", extra={
                "index": index,
                "error": str(e)
            })
    return cards
