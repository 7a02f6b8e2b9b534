"""
Constants and shared data for phase inference and question routing.

All tables are read-only and loaded once at import time.
"""
from datetime import date
from types import MappingProxyType

from cyclecoach.models.phase import CyclePhase

# Calendar tracking
STALE_PERIOD_DATA_DAYS = 60
MENSTRUAL_PHASE_MAX_DAY = 5
FOLLICULAR_PHASE_RATIO = 0.5
OVULATORY_PHASE_RATIO = 0.55

# Fixed cutoffs for the alternate calendar rule (last day of each phase)
FIXED_PHASE_CUTOFFS = (
    (5, CyclePhase.MENSTRUAL),
    (13, CyclePhase.FOLLICULAR),
    (16, CyclePhase.OVULATORY),
)

# Lunar fallback
LUNAR_MONTH_DAYS = 29.53
KNOWN_NEW_MOON = date(2024, 1, 11)
LUNAR_PHASE_CUTOFFS = (
    (7, CyclePhase.MENSTRUAL),   # New moon: rest and renewal
    (14, CyclePhase.FOLLICULAR), # Waxing moon: energy building
    (21, CyclePhase.OVULATORY),  # Full moon: peak energy
)

PHASE_DETAILS = MappingProxyType({
    CyclePhase.MENSTRUAL: MappingProxyType({
        "name": "Menstrual Phase",
        "description": "Rest and renewal - Support iron replenishment and comfort",
        "emoji": "🌑",
        "color": "red",
        "days": "1-5",
        "narrative": (
            "This is your rest and renewal phase. Focus on iron-rich foods, "
            "warming spices, and comfort foods to support your body during "
            "menstruation."
        ),
        "foods": ("Iron-rich leafy greens", "Warming ginger and turmeric",
                  "Dark chocolate", "Red meat or lentils"),
        "movements": ("Gentle yoga", "Walking", "Stretching",
                      "Restorative practices"),
        "emotions": ("Self-compassion", "Rest", "Reflection",
                     "Gentle self-care"),
    }),
    CyclePhase.FOLLICULAR: MappingProxyType({
        "name": "Follicular Phase",
        "description": "Energy building - Support estrogen with lignans and healthy fats",
        "emoji": "🌱",
        "color": "green",
        "days": "6-13",
        "narrative": (
            "This is your energy-building phase. Your body is preparing for "
            "ovulation, so focus on fresh vegetables, lean proteins, and "
            "energizing foods."
        ),
        "foods": ("Fresh vegetables", "Lean proteins", "Sprouted foods",
                  "Citrus fruits", "Fermented foods"),
        "movements": ("Cardio", "Strength training", "Dance",
                      "High-energy activities"),
        "emotions": ("Creativity", "Social connection", "Planning",
                     "Optimism"),
    }),
    CyclePhase.OVULATORY: MappingProxyType({
        "name": "Ovulatory Phase",
        "description": "Peak energy - Support ovulation with zinc and vitamin E",
        "emoji": "🌕",
        "color": "yellow",
        "days": "14-16",
        "narrative": (
            "This is your peak energy phase. Support ovulation with "
            "antioxidant-rich foods, zinc sources, and healthy fats."
        ),
        "foods": ("Antioxidant berries", "Leafy greens", "Avocados",
                  "Wild-caught fish", "Colorful vegetables"),
        "movements": ("HIIT", "Intense workouts", "Team sports",
                      "Challenging activities"),
        "emotions": ("Confidence", "Leadership", "Social engagement",
                     "High energy"),
    }),
    CyclePhase.LUTEAL: MappingProxyType({
        "name": "Luteal Phase",
        "description": "Preparation - Support progesterone and reduce PMS symptoms",
        "emoji": "🌙",
        "color": "purple",
        "days": "17-28",
        "narrative": (
            "This is your preparation phase. Support progesterone production "
            "and reduce PMS symptoms with magnesium-rich foods and complex "
            "carbohydrates."
        ),
        "foods": ("Complex carbs", "Magnesium-rich foods", "B-vitamins",
                  "Calming herbs"),
        "movements": ("Gentle exercise", "Yoga", "Walking",
                      "Mindful movement"),
        "emotions": ("Self-care", "Boundary setting", "Preparation",
                     "Nurturing"),
    }),
})

# Question classification vocabularies
ADVICE_KEYWORDS = (
    # Food/Nutrition
    "eat", "food", "diet", "nutrition", "meal", "recipe", "cook", "supplement",
    "ingredient", "consume", "drink", "take", "add", "help with", "bloating",
    "digestion", "hunger", "craving", "appetite", "nourish", "fuel",
    "energy from food", "what should i eat", "recommend food", "best food",
    "food for", "nutrition for", "diet for",
    # Movement/Exercise
    "exercise", "workout", "movement", "activity", "fitness", "training",
    "sport", "yoga", "pilates", "dance", "walk", "run", "jog", "swim", "bike",
    "cycle", "strength", "cardio", "stretch", "flexibility", "mobility",
    "physical", "active", "move", "body", "muscle", "bone", "joint",
    "what exercise", "recommend exercise", "best exercise", "exercise for",
    # Emotion/Mental health
    "emotion", "mood", "stress", "anxiety", "depression", "happiness", "joy",
    "sadness", "anger", "fear", "worry", "calm", "peace", "mindfulness",
    "meditation", "breathing", "relaxation", "therapy", "counseling",
    "mental health", "psychological", "emotional", "feeling", "wellbeing",
    "self-care", "gratitude", "journaling", "reflection", "how to feel",
    "manage stress", "cope with", "deal with", "handle",
)

CYCLE_KEYWORDS = (
    "cycle", "phase", "menstrual", "period", "ovulation", "luteal",
    "follicular", "menstruation", "fertile", "pms", "premenstrual",
    "postmenstrual", "cycle day", "what phase", "which phase", "current phase",
    "my phase", "cycle tracking", "when ovulation", "when period",
    "cycle length", "regular cycle", "irregular cycle", "moon phase", "lunar",
    "calendar", "tracking", "fertility", "reproductive",
)

MEAL_PLAN_PHRASES = (
    "meal plan", "what to eat", "food plan", "diet plan", "recipes for",
    "meals for",
)

# Topic vocabularies used to pick card types when no LLM is available
FOOD_TOPIC_KEYWORDS = (
    "food", "eat", "nutrition", "diet", "ingredient", "meal", "recipe",
    "cook", "supplement", "drink", "bloating", "digestion", "craving",
    "appetite", "hunger",
)

MOVEMENT_TOPIC_KEYWORDS = (
    "exercise", "workout", "physical activity", "move my body", "movement",
    "fitness", "gym", "yoga", "cardio", "strength", "pilates", "walk", "run",
    "swim", "dance", "stretch",
)

EMOTION_TOPIC_KEYWORDS = (
    "emotion", "mood", "stress", "anxiety", "anxious", "depression", "sad",
    "anger", "angry", "worry", "worried", "calm", "mindfulness", "meditation",
    "breathing", "relaxation", "feeling", "self-care", "journaling",
    "gratitude", "frustrated", "overwhelmed",
)

# Phase names as users tend to write them, checked in order
PHASE_MENTIONS = (
    ("luteal", CyclePhase.LUTEAL),
    ("follicular", CyclePhase.FOLLICULAR),
    ("premenstrual", CyclePhase.LUTEAL),
    ("pms", CyclePhase.LUTEAL),
    ("menstrua", CyclePhase.MENSTRUAL),
    ("ovulat", CyclePhase.OVULATORY),
)

MAX_RESEARCH_CARDS = 3
RESEARCH_TOP_K = 3
RESEARCH_CONTEXT_LIMIT = 4000
