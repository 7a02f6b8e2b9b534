"""
Tests for chat reply composition.
"""
import json
import pytest
from unittest.mock import Mock

from cyclecoach.models.phase import CyclePhase
from cyclecoach.models.question import QuestionCategory
from cyclecoach.models.recommendation import EmotionCard, FoodCard, MovementCard
from cyclecoach.services.catalog import (
    GENERIC_ANSWER,
    MEAL_PLAN_CARD,
    PCOS_ANSWER,
    get_default_emotion,
    get_default_foods,
    get_default_movement,
    get_general_nutrition_foods
)
from cyclecoach.services.composer import ResponseComposer
from cyclecoach.services.exceptions import GenerationError
from cyclecoach.utils.llm import LLMClientError
from cyclecoach.utils.research import ResearchClientError

@pytest.fixture
def composer():
    """Create a composer without any external collaborators."""
    return ResponseComposer()

@pytest.fixture
def llm():
    """Create a mocked LLM client."""
    return Mock()

class TestCatalogPath:
    """Replies composed without an LLM client."""

    def test_meal_plan_request(self, composer, regular_profile, luteal_phase):
        """Test meal plan requests return the meal planning card."""
        response = composer.compose(
            QuestionCategory.ADVICE, "Can you make me a meal plan?",
            regular_profile, luteal_phase
        )
        assert response.ingredients == [MEAL_PLAN_CARD]
        assert "meal plan" in response.message

    def test_meal_plan_bypasses_llm(self, llm, regular_profile, luteal_phase):
        """Test meal plan requests never reach the LLM."""
        composer = ResponseComposer(llm_client=llm)
        response = composer.compose(
            QuestionCategory.ADVICE, "what to eat this week?",
            regular_profile, luteal_phase
        )
        assert response.ingredients == [MEAL_PLAN_CARD]
        llm.complete.assert_not_called()

    def test_food_advice_for_named_phase(self, composer, regular_profile, lunar_phase):
        """Test a phase named in the message wins over the current phase."""
        response = composer.compose(
            QuestionCategory.ADVICE, "what should I eat during my luteal phase",
            regular_profile, lunar_phase
        )
        assert response.ingredients == get_default_foods(CyclePhase.LUTEAL)
        assert response.message == "Here are food recommendations for your luteal phase:"

    def test_advice_uses_current_phase(self, composer, regular_profile, lunar_phase):
        """Test topic cards follow the current phase when none is named."""
        response = composer.compose(
            QuestionCategory.ADVICE, "yoga ideas for stress",
            regular_profile, lunar_phase
        )
        assert response.ingredients == [
            get_default_movement(CyclePhase.FOLLICULAR),
            get_default_emotion(CyclePhase.FOLLICULAR)
        ]
        assert "movement and emotional wellbeing" in response.message

    def test_advice_without_topic_defaults_to_food(self, composer, regular_profile, luteal_phase):
        """Test unclear advice questions get food cards."""
        response = composer.compose(
            QuestionCategory.ADVICE, "how do I handle my body",
            regular_profile, luteal_phase
        )
        assert response.ingredients == get_default_foods(CyclePhase.LUTEAL)

    def test_diet_question_without_phase(self, composer, regular_profile):
        """Test diet questions with no phase context still get cards."""
        response = composer.compose(
            QuestionCategory.ADVICE, "is a supplement worth it", regular_profile
        )
        assert response.ingredients == get_general_nutrition_foods()
        assert "vegetarian diet" in response.message

    def test_advice_with_research(self, regular_profile, luteal_phase):
        """Test research matches replace the phase defaults."""
        research = Mock()
        research.search.return_value = [
            {"content": "Salmon and pumpkin seeds eased luteal symptoms."}
        ]
        composer = ResponseComposer(research_client=research)

        response = composer.compose(
            QuestionCategory.ADVICE, "what foods help in the luteal phase",
            regular_profile, luteal_phase
        )

        assert [card.name for card in response.ingredients] == ["Pumpkin Seeds", "Salmon"]
        assert "research-backed" in response.message
        query = research.search.call_args[0][0]
        assert query.startswith("Luteal Phase women's health")

    def test_research_failure_degrades(self, regular_profile, luteal_phase):
        """Test research errors fall back to catalog defaults."""
        research = Mock()
        research.search.side_effect = ResearchClientError("timeout")
        composer = ResponseComposer(research_client=research)

        response = composer.compose(
            QuestionCategory.ADVICE, "what should I eat",
            regular_profile, luteal_phase
        )
        assert response.ingredients == get_default_foods(CyclePhase.LUTEAL)

    def test_movement_research_without_exercises(self, regular_profile, luteal_phase):
        """Test movement questions keep the phase card when research has no exercises."""
        research = Mock()
        research.search.return_value = [{"content": "Hormones shift across the cycle."}]
        composer = ResponseComposer(research_client=research)

        response = composer.compose(
            QuestionCategory.ADVICE, "best workout right now",
            regular_profile, luteal_phase
        )
        assert response.ingredients == [get_default_movement(CyclePhase.LUTEAL)]

    def test_cycle_calendar(self, composer, regular_profile, luteal_phase):
        """Test the cycle narrative reports elapsed days."""
        response = composer.compose(
            QuestionCategory.CYCLE, "what phase am I in",
            regular_profile, luteal_phase
        )
        assert "**Luteal Phase**" in response.message
        assert "It's been 20 days since your last period." in response.message
        assert "magnesium-rich foods" in response.message
        assert response.ingredients == get_default_foods(CyclePhase.LUTEAL)

    def test_cycle_lunar(self, composer, irregular_profile, lunar_phase):
        """Test the cycle narrative explains lunar tracking."""
        response = composer.compose(
            QuestionCategory.CYCLE, "what phase am I in",
            irregular_profile, lunar_phase
        )
        assert "lunar cycle" in response.message
        assert "since your last period" not in response.message
        assert response.ingredients

    def test_cycle_computes_missing_phase(self, composer, irregular_profile):
        """Test the phase is computed when the caller passes none."""
        response = composer.compose(
            QuestionCategory.CYCLE, "which phase is this", irregular_profile
        )
        assert "lunar cycle" in response.message

    @pytest.mark.parametrize("message,expected", [
        ("tell me about PCOS", PCOS_ANSWER),
        ("what is thyroid disease", GENERIC_ANSWER),
    ])
    def test_educational(self, composer, regular_profile, luteal_phase, message, expected):
        """Test educational questions get canned answers without cards."""
        response = composer.compose(
            QuestionCategory.EDUCATIONAL, message, regular_profile, luteal_phase
        )
        assert response.message == expected
        assert response.ingredients == []

class TestLLMPath:
    """Replies composed with an LLM client."""

    def test_advice_parses_cards(self, llm, regular_profile, luteal_phase):
        """Test JSON completions are parsed and normalized."""
        llm.complete.return_value = json.dumps({
            "message": "Here is what helps.",
            "ingredients": [
                {"type": "food", "name": "Oats", "description": "Fiber", "emoji": "🥣",
                 "lazy": "Overnight oats", "tasty": "With berries", "healthy": "1/2 cup"},
                {"name": "Walking", "gentle": "10 minutes"},
                "junk"
            ]
        })
        composer = ResponseComposer(llm_client=llm)

        response = composer.compose(
            QuestionCategory.ADVICE, "what should I eat", regular_profile, luteal_phase
        )

        assert response.message == "Here is what helps."
        assert isinstance(response.ingredients[0], FoodCard)
        assert isinstance(response.ingredients[1], MovementCard)
        assert len(response.ingredients) == 2

        args, kwargs = llm.complete.call_args
        assert kwargs["json_mode"] is True
        assert "Age: 29" in args[0]
        assert "Symptoms: cramps, bloating" in args[0]
        assert args[1] == "what should I eat"

    def test_advice_includes_truncated_research(self, llm, regular_profile, luteal_phase):
        """Test research context is capped before prompting."""
        research = Mock()
        research.search.return_value = [{"content": "a" * 5000}]
        llm.complete.return_value = json.dumps({"message": "ok", "ingredients": []})
        composer = ResponseComposer(llm_client=llm, research_client=research)

        composer.compose(QuestionCategory.ADVICE, "mood tips", regular_profile, luteal_phase)

        system_prompt = llm.complete.call_args[0][0]
        assert "a" * 4000 in system_prompt
        assert "a" * 4001 not in system_prompt

    def test_advice_emotion_cards(self, llm, regular_profile, luteal_phase):
        """Test emotion cards are kept as emotion cards."""
        llm.complete.return_value = json.dumps({
            "message": "That sounds hard.",
            "ingredients": [{"type": "emotion", "name": "Journaling", "chill": "5 minutes"}]
        })
        composer = ResponseComposer(llm_client=llm)

        response = composer.compose(
            QuestionCategory.ADVICE, "I feel anxious", regular_profile, luteal_phase
        )
        assert isinstance(response.ingredients[0], EmotionCard)

    @pytest.mark.parametrize("content", [
        "not json",
        "[1, 2]",
        json.dumps({"ingredients": []}),
    ])
    def test_advice_unusable_completion(self, llm, regular_profile, luteal_phase, content):
        """Test unusable completions raise GenerationError."""
        llm.complete.return_value = content
        composer = ResponseComposer(llm_client=llm)

        with pytest.raises(GenerationError):
            composer.compose(
                QuestionCategory.ADVICE, "what should I eat", regular_profile, luteal_phase
            )

    def test_llm_failure(self, llm, regular_profile, luteal_phase):
        """Test client errors are reported as GenerationError."""
        llm.complete.side_effect = LLMClientError("503")
        composer = ResponseComposer(llm_client=llm)

        with pytest.raises(GenerationError):
            composer.compose(
                QuestionCategory.EDUCATIONAL, "tell me about PCOS",
                regular_profile, luteal_phase
            )

    def test_cycle_text_completion(self, llm, regular_profile, luteal_phase):
        """Test cycle questions use the phase prompt in text mode."""
        llm.complete.return_value = "• You are in your luteal phase"
        composer = ResponseComposer(llm_client=llm)

        response = composer.compose(
            QuestionCategory.CYCLE, "what phase am I in", regular_profile, luteal_phase
        )

        assert response.message == "• You are in your luteal phase"
        assert response.ingredients == []
        args, kwargs = llm.complete.call_args
        assert "CURRENT CYCLE PHASE: Luteal Phase" in args[0]
        assert "DAYS SINCE LAST PERIOD: 20" in args[0]
        assert kwargs.get("json_mode", False) is False

    def test_cycle_prompt_lunar(self, llm, irregular_profile, lunar_phase):
        """Test lunar-tracked phases say so in the prompt."""
        llm.complete.return_value = "text"
        composer = ResponseComposer(llm_client=llm)

        composer.compose(QuestionCategory.CYCLE, "what phase am I in", irregular_profile, lunar_phase)

        assert "USING LUNAR CYCLE TRACKING" in llm.complete.call_args[0][0]

    def test_educational_text_completion(self, llm, regular_profile, luteal_phase):
        """Test educational questions are passed through in text mode."""
        llm.complete.return_value = "PCOS is..."
        composer = ResponseComposer(llm_client=llm)

        response = composer.compose(
            QuestionCategory.EDUCATIONAL, "tell me about PCOS",
            regular_profile, luteal_phase
        )

        assert response.message == "PCOS is..."
        assert response.ingredients == []
        assert llm.complete.call_args[0][1] == "tell me about PCOS"
