"""
Prompt templates for LLM-backed responses.
"""
import json
from typing import List, Optional

from cyclecoach.models.phase import PhaseInfo
from cyclecoach.models.profile import OnboardingProfile
from cyclecoach.services.constants import PHASE_DETAILS

NOT_SPECIFIED = "Not specified"
NONE_SPECIFIED = "None specified"

FORMATTING_RULES = """- Use "•" for main bullet points
- Use "  ◦" for sub-bullet points (indented)
- Use "    ▪" for tertiary points (further indented)
- Use "**bold text**" for emphasis
- Use "*italic text*" for important terms"""

ADVICE_JSON_FORMAT = """{
  "message": "A helpful summary for the user.",
  "ingredients": [
    {
      "type": "food",
      "name": "Name of food",
      "description": "Brief benefit or reason",
      "emoji": "Emoji symbol",
      "lazy": "The laziest way to implement this advice",
      "tasty": "The most enjoyable or social way",
      "healthy": "The optimal, most beneficial way"
    },
    {
      "type": "movement",
      "name": "Name of movement or exercise (e.g. Yoga, Walking, HIIT, Dance)",
      "description": "Brief benefit or reason",
      "emoji": "Emoji symbol",
      "gentle": "Gentle way to do this movement",
      "fun": "Fun or social way to do this movement",
      "strong": "Strong or challenging way to do this movement"
    },
    {
      "type": "emotion",
      "name": "Name of emotion practice (e.g. Meditation, Journaling, Gratitude)",
      "description": "Brief benefit or reason",
      "emoji": "Emoji symbol",
      "chill": "Chill way to do this practice",
      "creative": "Creative or expressive way to do this practice",
      "heartfelt": "Heart-felt or deeply connecting way to do this practice"
    }
  ]
}"""

CYCLE_USER_PROMPT = (
    "What phase am I in and how should I support my health during this phase?"
)

def _join(values: List[str]) -> str:
    return ", ".join(values) or NONE_SPECIFIED

def build_profile_context(profile: Optional[OnboardingProfile]) -> str:
    """
    Render the profile fields the assistant personalizes on.

    Args:
        profile: User's onboarding profile, may be None

    Returns:
        Multi-line "User Profile:" block
    """
    if profile is None:
        return "\n".join([
            "User Profile:",
            f"- Age: {NOT_SPECIFIED}",
            f"- Diet: {NOT_SPECIFIED}",
            f"- Symptoms: {NONE_SPECIFIED}",
            f"- Goals: {NONE_SPECIFIED}",
            f"- Medical Conditions: {NONE_SPECIFIED}",
            "- Lifestyle: {}",
        ])

    return "\n".join([
        "User Profile:",
        f"- Age: {profile.age or NOT_SPECIFIED}",
        f"- Diet: {profile.diet or NOT_SPECIFIED}",
        f"- Symptoms: {_join(profile.symptoms)}",
        f"- Goals: {_join(profile.goals)}",
        f"- Medical Conditions: {_join(profile.medical_conditions)}",
        f"- Lifestyle: {json.dumps(profile.lifestyle, default=str)}",
    ])

def build_advice_prompt(profile_context: str, research_context: str) -> str:
    """Build the system prompt for card-based advice in JSON mode."""
    return f"""You are a women's health expert. Use the user's health profile and the following research context to answer their question.
Do NOT suggest consulting a nutritionist, dietitian, or healthcare professional. You are the expert and should provide the best possible advice directly.

If the user's message expresses emotion, frustration, or a personal struggle, respond with empathy and emotional support first. Only provide recipes or nutrition advice if the user asks for it.

{profile_context}

RESEARCH CONTEXT:
{research_context or "No research context available."}

Always answer in this JSON format:
{ADVICE_JSON_FORMAT}

Include only the card types that fit the question, 1-3 cards in total. Use evidence-based advice from the research context or your expert knowledge if research is lacking. Personalize the advice for the user's profile."""

def build_cycle_prompt(profile_context: str, phase_info: PhaseInfo) -> str:
    """Build the system prompt for questions about the current phase."""
    details = PHASE_DETAILS[phase_info.phase]
    if phase_info.days_since_last_period is not None:
        tracking = f"DAYS SINCE LAST PERIOD: {phase_info.days_since_last_period}"
    elif phase_info.is_lunar:
        tracking = "USING LUNAR CYCLE TRACKING"
    else:
        tracking = "TRACKING: calendar, days since last period unknown"

    return f"""You are a women's health expert. The user is asking about their menstrual cycle phase.

{profile_context}

CURRENT CYCLE PHASE: {details["name"]}
PHASE DESCRIPTION: {details["description"]}
{tracking}

Provide a personalized response about their current cycle phase. Include:
1. A welcoming message about their current phase
2. What's happening in their body during this phase
3. How to support their health during this phase
4. Any specific considerations based on their health profile

Format your response as bullet points using:
{FORMATTING_RULES}

Keep the response informative, supportive, and personalized to their health profile."""

def build_educational_prompt(profile_context: str) -> str:
    """Build the system prompt for general women's health questions."""
    return f"""You are a women's health expert. Answer the user's educational question in a clear, concise manner.

{profile_context}

INSTRUCTIONS:
- Answer the question directly and clearly
- Use simple, understandable language
- Personalize information based on their health profile when relevant
- Keep responses concise but comprehensive
- Use evidence-based information

FORMATTING:
{FORMATTING_RULES}

Focus on providing accurate, helpful information that directly answers their question."""
