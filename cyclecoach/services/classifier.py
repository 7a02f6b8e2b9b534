"""
Service module for routing chat questions.

Questions are classified with an ordered list of (keyword set, category)
rules evaluated top-down. Advice vocabulary is checked before cycle
vocabulary, so "what should I eat during my luteal phase" is advice.
Anything that matches neither set is educational.
"""
import re
from typing import Iterable, Optional, Pattern, Set, Tuple

from aws_lambda_powertools import Logger

from cyclecoach.models.phase import CyclePhase
from cyclecoach.models.question import QuestionCategory
from cyclecoach.services.constants import (
    ADVICE_KEYWORDS,
    CYCLE_KEYWORDS,
    EMOTION_TOPIC_KEYWORDS,
    FOOD_TOPIC_KEYWORDS,
    MEAL_PLAN_PHRASES,
    MOVEMENT_TOPIC_KEYWORDS,
    PHASE_MENTIONS
)

logger = Logger()

def compile_keywords(keywords: Iterable[str]) -> Pattern:
    """
    Build one pattern matching any keyword that starts on a word boundary.

    Trailing text is allowed so plurals and verb forms still match
    ("food" matches "foods", "eat" matches "eating" but not "great").
    """
    alternatives = sorted({re.escape(k) for k in keywords}, key=len, reverse=True)
    return re.compile(r"\b(?:" + "|".join(alternatives) + ")")

CLASSIFICATION_RULES: Tuple[Tuple[Pattern, QuestionCategory], ...] = (
    (compile_keywords(ADVICE_KEYWORDS), QuestionCategory.ADVICE),
    (compile_keywords(CYCLE_KEYWORDS), QuestionCategory.CYCLE),
)

_FOOD_TOPIC = compile_keywords(FOOD_TOPIC_KEYWORDS)
_MOVEMENT_TOPIC = compile_keywords(MOVEMENT_TOPIC_KEYWORDS)
_EMOTION_TOPIC = compile_keywords(EMOTION_TOPIC_KEYWORDS)

def classify(message: str) -> QuestionCategory:
    """
    Classify a chat message into exactly one question category.

    Args:
        message: Free-text user message

    Returns:
        First matching category, EDUCATIONAL when nothing matches

    Example:
        >>> classify("what phase am I in")
        <QuestionCategory.CYCLE: 'cycle'>
        >>> classify("tell me about PCOS")
        <QuestionCategory.EDUCATIONAL: 'educational'>
    """
    text = (message or "").lower()
    for pattern, category in CLASSIFICATION_RULES:
        match = pattern.search(text)
        if match:
            logger.debug("Question classified", extra={
                "category": category.value,
                "matched_keyword": match.group(0)
            })
            return category
    return QuestionCategory.EDUCATIONAL

def is_meal_plan_request(message: str) -> bool:
    """Check if the user is asking for a meal plan."""
    text = (message or "").lower()
    return any(phrase in text for phrase in MEAL_PLAN_PHRASES)

def detect_phase_mention(message: str) -> Optional[CyclePhase]:
    """
    Find a cycle phase named in the message.

    Returns:
        First phase mentioned, None if the message names no phase
    """
    text = (message or "").lower()
    for fragment, phase in PHASE_MENTIONS:
        if fragment in text:
            return phase
    return None

def detect_advice_topics(message: str) -> Set[str]:
    """
    Detect which kinds of advice a message asks for.

    Returns:
        Subset of {"food", "movement", "emotion"}; empty when unclear
    """
    text = (message or "").lower()
    topics = set()
    if _FOOD_TOPIC.search(text):
        topics.add("food")
    if _MOVEMENT_TOPIC.search(text):
        topics.add("movement")
    if _EMOTION_TOPIC.search(text):
        topics.add("emotion")
    return topics
