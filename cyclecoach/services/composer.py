"""
Service module for composing chat replies.

A reply is built along one of two paths:
    - catalog path: deterministic content from the static catalog, used for
      meal plan requests and whenever no LLM client is configured
    - LLM path: a completion from the configured client, JSON mode for advice
      cards and text mode for cycle and educational answers

Composing has no side effects; persisting the exchange is the caller's job.
"""
import json
from typing import Any, Dict, List, Optional

from aws_lambda_powertools import Logger

from cyclecoach.models.phase import CyclePhase, PhaseInfo
from cyclecoach.models.profile import OnboardingProfile
from cyclecoach.models.question import QuestionCategory
from cyclecoach.models.recommendation import ChatResponse, RecommendationCard
from cyclecoach.services.catalog import (
    MEAL_PLAN_MESSAGE,
    extract_exercises_from_research,
    extract_foods_from_research,
    get_default_emotion,
    get_default_foods,
    get_default_movement,
    get_educational_answer,
    get_general_nutrition_foods,
    get_meal_plan_card
)
from cyclecoach.services.classifier import (
    detect_advice_topics,
    detect_phase_mention,
    is_meal_plan_request
)
from cyclecoach.services.constants import (
    PHASE_DETAILS,
    RESEARCH_CONTEXT_LIMIT,
    RESEARCH_TOP_K
)
from cyclecoach.services.exceptions import GenerationError
from cyclecoach.services.phase import compute_phase
from cyclecoach.services.prompts import (
    CYCLE_USER_PROMPT,
    build_advice_prompt,
    build_cycle_prompt,
    build_educational_prompt,
    build_profile_context
)
from cyclecoach.services.recommendation import normalize_ingredients
from cyclecoach.utils.llm import LLMClientError
from cyclecoach.utils.research import ResearchClientError

logger = Logger()

TOPIC_ORDER = ("food", "movement", "emotion")
TOPIC_LABELS = {
    "food": "food",
    "movement": "movement",
    "emotion": "emotional wellbeing",
}
TOPIC_RESEARCH_TERMS = {
    "food": "food nutrition diet",
    "movement": "exercise physical activity movement",
    "emotion": "mood stress emotional wellbeing",
}

ADVICE_MAX_TOKENS = 1200
TEXT_MAX_TOKENS = 800

def _join_labels(labels: List[str]) -> str:
    if len(labels) == 1:
        return labels[0]
    return ", ".join(labels[:-1]) + " and " + labels[-1]

class ResponseComposer:
    """
    Builds a ChatResponse for a classified question.

    Both collaborators are optional. Without an LLM client every category is
    answered from the catalog; without a research client no research context
    is used.
    """

    def __init__(self, llm_client=None, research_client=None):
        self.llm_client = llm_client
        self.research_client = research_client

    def compose(
        self,
        category: QuestionCategory,
        message: str,
        profile: Optional[OnboardingProfile],
        phase_info: Optional[PhaseInfo] = None
    ) -> ChatResponse:
        """
        Compose the reply for one message.

        Args:
            category: Classified question category
            message: The user's message
            profile: User's onboarding profile
            phase_info: Current phase, computed from the profile when omitted
                for cycle questions

        Returns:
            ChatResponse with message and recommendation cards

        Raises:
            GenerationError: If the LLM call fails or returns unusable content
            ProfileMissingError: If a cycle answer is needed and there is no
                profile or phase to base it on
        """
        if is_meal_plan_request(message):
            logger.debug("Meal plan request, using catalog")
            return self._meal_plan_response()

        if category == QuestionCategory.ADVICE:
            if self.llm_client is None:
                return self._fallback_advice(message, profile, phase_info)
            return self._llm_advice(message, profile)

        if category == QuestionCategory.CYCLE:
            if phase_info is None:
                phase_info = compute_phase(profile)
            if self.llm_client is None:
                return self._fallback_cycle(phase_info)
            return self._llm_text(
                build_cycle_prompt(build_profile_context(profile), phase_info),
                CYCLE_USER_PROMPT
            )

        if self.llm_client is None:
            return ChatResponse(message=get_educational_answer(message), ingredients=[])
        return self._llm_text(
            build_educational_prompt(build_profile_context(profile)),
            message
        )

    def _meal_plan_response(self) -> ChatResponse:
        return ChatResponse(
            message=MEAL_PLAN_MESSAGE,
            ingredients=[get_meal_plan_card()]
        )

    def _search_research(self, query: str) -> List[Dict[str, Any]]:
        """Look up research snippets, degrading to no matches on failure."""
        if self.research_client is None:
            return []
        try:
            return self.research_client.search(query, top_k=RESEARCH_TOP_K)
        except ResearchClientError as e:
            logger.warning("Research lookup failed, continuing without it", extra={
                "error": str(e)
            })
            return []

    def _fallback_advice(
        self,
        message: str,
        profile: Optional[OnboardingProfile],
        phase_info: Optional[PhaseInfo]
    ) -> ChatResponse:
        topics = detect_advice_topics(message) or {"food"}
        phase = detect_phase_mention(message)
        if phase is None and phase_info is not None:
            phase = phase_info.phase

        if phase is None:
            # No phase to key on
            diet = (profile.diet if profile else None) or "balanced"
            return ChatResponse(
                message=(
                    f"Based on your {diet} diet preferences, here are some "
                    "nutritional suggestions to support your health goals. For "
                    "more specific guidance, try asking about foods for your "
                    "cycle phase (like \"luteal phase foods\") or request a "
                    "personalized meal plan."
                ),
                ingredients=get_general_nutrition_foods()
            )

        ordered = [topic for topic in TOPIC_ORDER if topic in topics]
        query = " ".join(
            [f"{phase.display_name} women's health"]
            + [TOPIC_RESEARCH_TERMS[topic] for topic in ordered]
        )
        matches = self._search_research(query)

        ingredients: List[RecommendationCard] = []
        for topic in ordered:
            ingredients.extend(self._topic_cards(topic, phase, matches))

        source = "research-backed " if matches else ""
        labels = _join_labels([TOPIC_LABELS[topic] for topic in ordered])
        return ChatResponse(
            message=(
                f"Here are {source}{labels} recommendations for your "
                f"{phase.display_name.lower()}:"
            ),
            ingredients=ingredients
        )

    def _topic_cards(
        self,
        topic: str,
        phase: CyclePhase,
        matches: List[Dict[str, Any]]
    ) -> List[RecommendationCard]:
        if topic == "food":
            return list(extract_foods_from_research(matches, phase))
        if topic == "movement":
            return list(extract_exercises_from_research(matches)) or [get_default_movement(phase)]
        return [get_default_emotion(phase)]

    def _fallback_cycle(self, phase_info: PhaseInfo) -> ChatResponse:
        details = PHASE_DETAILS[phase_info.phase]
        message = (
            f"Based on your cycle data, you're currently in your "
            f"**{phase_info.phase_name}**. "
        )
        if phase_info.is_lunar:
            message += (
                "Since your period data is irregular or missing, I'm using the "
                "lunar cycle to guide your recommendations. "
            )
        elif phase_info.days_since_last_period is not None:
            message += (
                f"It's been {phase_info.days_since_last_period} days since "
                "your last period. "
            )
        message += details["narrative"]

        return ChatResponse(
            message=message,
            ingredients=get_default_foods(phase_info.phase)
        )

    def _complete(self, system_prompt: str, user_prompt: str, **kwargs) -> str:
        try:
            return self.llm_client.complete(system_prompt, user_prompt, **kwargs)
        except LLMClientError as e:
            raise GenerationError(f"LLM completion failed: {e}") from e

    def _llm_advice(
        self,
        message: str,
        profile: Optional[OnboardingProfile]
    ) -> ChatResponse:
        profile_context = build_profile_context(profile)
        matches = self._search_research(f"{message} {profile_context}")
        research_context = "\n---\n".join(
            match["content"] for match in matches if match.get("content")
        )[:RESEARCH_CONTEXT_LIMIT]

        content = self._complete(
            build_advice_prompt(profile_context, research_context),
            message,
            json_mode=True,
            max_tokens=ADVICE_MAX_TOKENS
        )

        try:
            parsed = json.loads(content)
        except ValueError as e:
            raise GenerationError(f"Completion is not valid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise GenerationError("Completion JSON is not an object")

        reply = parsed.get("message")
        if not isinstance(reply, str) or not reply.strip():
            raise GenerationError("Completion JSON has no message")

        return ChatResponse(
            message=reply,
            ingredients=normalize_ingredients(parsed.get("ingredients"))
        )

    def _llm_text(self, system_prompt: str, user_prompt: str) -> ChatResponse:
        content = self._complete(
            system_prompt,
            user_prompt,
            max_tokens=TEXT_MAX_TOKENS
        )
        return ChatResponse(message=content, ingredients=[])
