"""
Static recommendation catalog.

Per-phase default cards, general nutrition cards, the daily tip rotation and
helpers that turn research snippets into cards. Every phase has a non-empty
default food list, so the fallback path never returns an empty card list.

Typical usage:
    >>> foods = get_default_foods(CyclePhase.LUTEAL)
    >>> tip = get_daily_tip()
"""
import re
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Optional, Tuple

from cyclecoach.models.phase import CyclePhase
from cyclecoach.models.recommendation import (
    DailyTip,
    EmotionCard,
    FoodCard,
    MovementCard
)
from cyclecoach.services.constants import MAX_RESEARCH_CARDS
from cyclecoach.services.utils import DateLike, day_of_year

MEAL_PLAN_CARD = FoodCard(
    name="Personalized Meal Planning",
    description="Get customized meal plans based on your health conditions and preferences",
    emoji="🍽️",
    lazy="Use our AI meal planner for quick, tailored recommendations",
    tasty="Explore diverse cuisines and flavors that support your health goals",
    healthy="Get evidence-based meal timing, portion guidance, and therapeutic food combinations"
)

DEFAULT_FOODS: "MappingProxyType[CyclePhase, Tuple[FoodCard, ...]]" = MappingProxyType({
    CyclePhase.MENSTRUAL: (
        FoodCard(
            name="Dark Leafy Greens",
            description="Research shows iron and folate help replenish nutrients lost during menstruation",
            emoji="🥬",
            lazy="Add baby spinach to smoothies or buy pre-washed salad mixes",
            tasty="Sauté spinach with garlic and lemon, or add to pasta dishes",
            healthy="Consume 3-4 cups daily with vitamin C for enhanced iron absorption"
        ),
        FoodCard(
            name="Ginger Root",
            description="Studies confirm anti-inflammatory properties reduce menstrual cramps and nausea",
            emoji="🫚",
            lazy="Take ginger capsules or drink pre-made ginger tea",
            tasty="Make fresh ginger tea with honey and lemon, or add to smoothies",
            healthy="Consume 1-2g fresh ginger daily as tea or in cooking for anti-inflammatory effects"
        ),
        FoodCard(
            name="Iron-Rich Foods",
            description="Research indicates heme iron (meat) or plant iron (lentils) prevent anemia",
            emoji="🥩",
            lazy="Choose lean ground beef or canned lentils for quick meals",
            tasty="Make beef stir-fry or hearty lentil curry with warming spices",
            healthy="Include 3-4oz lean red meat or 1 cup cooked lentils daily during menstruation"
        ),
    ),
    CyclePhase.FOLLICULAR: (
        FoodCard(
            name="Flax Seeds",
            description="High in omega-3s and lignans to support rising estrogen",
            emoji="🌾",
            lazy="Mix ground flax into smoothies or yogurt",
            tasty="Add to oatmeal or bake into muffins",
            healthy="1 tbsp ground daily, store in refrigerator"
        ),
        FoodCard(
            name="Fermented Foods",
            description="Support gut health, which helps clear excess estrogen",
            emoji="🥒",
            lazy="Grab a ready-made kefir or yogurt cup",
            tasty="Top bowls and tacos with kimchi or sauerkraut",
            healthy="Include one serving of live-culture food daily"
        ),
        MEAL_PLAN_CARD,
    ),
    CyclePhase.OVULATORY: (
        FoodCard(
            name="Leafy Greens",
            description="Rich in folate, iron, and antioxidants to support hormone balance",
            emoji="🥬",
            lazy="Buy pre-washed spinach or kale for quick salads and smoothies",
            tasty="Sauté with garlic and olive oil, or blend into green smoothies",
            healthy="Aim for 2-3 cups daily, vary types (spinach, kale, arugula) for different nutrients"
        ),
        FoodCard(
            name="Omega-3 Rich Fish",
            description="Supports hormone production and reduces inflammation",
            emoji="🐟",
            lazy="Choose canned salmon or sardines for quick protein",
            tasty="Grill salmon with herbs, or make tuna salad with avocado",
            healthy="Include 2-3 servings per week, prioritize wild-caught varieties"
        ),
        FoodCard(
            name="Complex Carbohydrates",
            description="Provides steady energy and supports serotonin production",
            emoji="🌾",
            lazy="Use quinoa or brown rice from the freezer section",
            tasty="Make Buddha bowls with quinoa, roasted vegetables, and tahini dressing",
            healthy="Fill 1/4 of your plate with whole grains, avoid refined carbohydrates"
        ),
    ),
    CyclePhase.LUTEAL: (
        FoodCard(
            name="Dark Chocolate",
            description="Research shows magnesium and antioxidants support mood and reduce PMS symptoms",
            emoji="🍫",
            lazy="Choose 70%+ dark chocolate bars for quick magnesium boost",
            tasty="Make hot chocolate with dark cocoa powder and almond milk",
            healthy="Consume 1-2oz dark chocolate daily for magnesium and mood support"
        ),
        FoodCard(
            name="Complex Carbohydrates",
            description="Studies confirm steady energy and serotonin support during luteal phase",
            emoji="🍠",
            lazy="Use sweet potatoes, quinoa, or brown rice from the freezer section",
            tasty="Make sweet potato toast, quinoa bowls, or brown rice stir-fries",
            healthy="Include 1/4 plate complex carbs to support serotonin and energy levels"
        ),
        FoodCard(
            name="Magnesium-Rich Foods",
            description="Research indicates magnesium reduces PMS symptoms and supports sleep",
            emoji="🥜",
            lazy="Snack on almonds, pumpkin seeds, or dark chocolate for magnesium",
            tasty="Make trail mix with nuts, seeds, and dark chocolate pieces",
            healthy="Aim for 300-400mg magnesium daily from food sources during luteal phase"
        ),
    ),
})

DEFAULT_MOVEMENT: "MappingProxyType[CyclePhase, MovementCard]" = MappingProxyType({
    CyclePhase.MENSTRUAL: MovementCard(
        name="Gentle Movement",
        description="Supports circulation, reduces cramps, and aids recovery during your period.",
        emoji="🧘‍♀️",
        gentle="Do 5 minutes of gentle stretching or yoga at home.",
        fun="Take a relaxing walk in nature or with a friend for fresh air and connection.",
        strong="Aim for 20–30 minutes of gentle movement (yoga, walking, restorative Pilates) daily."
    ),
    CyclePhase.FOLLICULAR: MovementCard(
        name="Strength Training",
        description="Builds muscle and boosts metabolism, supporting hormone balance as energy rises.",
        emoji="🏋️‍♀️",
        gentle="Do a 10-minute bodyweight routine at home (squats, push-ups, lunges).",
        fun="Join a group fitness or dance class for extra motivation and fun.",
        strong="Aim for 30–45 minutes of progressive strength training 3x per week."
    ),
    CyclePhase.OVULATORY: MovementCard(
        name="High-Intensity Cardio",
        description="Peak energy and strength, a good time for challenging workouts or team sports.",
        emoji="🤸‍♀️",
        gentle="Do a short HIIT workout video at home (10–15 minutes).",
        fun="Play a team sport or join a spin/cycling class with friends.",
        strong="Aim for 30 minutes of high-intensity cardio or power yoga 2–3x per week."
    ),
    CyclePhase.LUTEAL: MovementCard(
        name="Mind-Body Movement",
        description="Moderate, mood-boosting movement and stress reduction as energy dips.",
        emoji="🧘",
        gentle="Do a 10-minute restorative yoga or stretching session.",
        fun="Take a walk outdoors or try a gentle swim for relaxation.",
        strong="Aim for 20–30 minutes of Pilates, yoga, or moderate cardio most days."
    ),
})

DEFAULT_EMOTION: "MappingProxyType[CyclePhase, EmotionCard]" = MappingProxyType({
    CyclePhase.MENSTRUAL: EmotionCard(
        name="Self-Compassion",
        description="Energy is lowest now; rest and reflection help you recharge.",
        emoji="💗",
        chill="Give yourself permission to cancel one non-essential plan today.",
        creative="Write a short letter to yourself about what you need this week.",
        heartfelt="Ask someone close for support with one task you usually carry alone."
    ),
    CyclePhase.FOLLICULAR: EmotionCard(
        name="Creative Planning",
        description="Rising estrogen brings optimism, a great window for new ideas.",
        emoji="✨",
        chill="Jot down three things you are looking forward to this month.",
        creative="Make a vision board or mind map for a new project.",
        heartfelt="Share your plans with a friend and invite them to join one."
    ),
    CyclePhase.OVULATORY: EmotionCard(
        name="Social Connection",
        description="Confidence and communication peak; connection feels natural.",
        emoji="🤝",
        chill="Send a voice note to someone you have not talked to in a while.",
        creative="Host a small get-together or cook with friends.",
        heartfelt="Tell someone specifically what you appreciate about them."
    ),
    CyclePhase.LUTEAL: EmotionCard(
        name="Boundary Setting",
        description="Progesterone rises and sensitivity increases; protect your energy.",
        emoji="🌙",
        chill="Try 5 minutes of slow breathing before bed.",
        creative="Journal about what drained and what restored you this week.",
        heartfelt="Say no to one request that does not serve you, kindly and clearly."
    ),
})

GENERAL_NUTRITION_FOODS: Tuple[FoodCard, ...] = (
    FoodCard(
        name="Leafy Greens",
        description="Rich in folate, iron, and magnesium for hormone production and energy",
        emoji="🥬",
        lazy="Add pre-washed spinach to smoothies or grab ready-to-eat salad mixes",
        tasty="Sauté with garlic and lemon, or blend into green smoothies with fruits",
        healthy="Aim for 2-3 cups daily, vary types (spinach, kale, arugula) for different nutrients"
    ),
    FoodCard(
        name="Omega-3 Rich Fish",
        description="Essential fatty acids reduce inflammation and support brain health",
        emoji="🐟",
        lazy="Choose canned wild salmon or sardines for quick meals",
        tasty="Grill with herbs, make fish tacos, or add to salads and pasta",
        healthy="Include 2-3 servings per week, prioritize wild-caught varieties"
    ),
    FoodCard(
        name="Complex Carbohydrates",
        description="Stable blood sugar and sustained energy for hormonal balance",
        emoji="🌾",
        lazy="Choose quinoa, oats, or sweet potatoes for easy preparation",
        tasty="Make overnight oats, quinoa bowls, or roasted sweet potato with toppings",
        healthy="Fill 1/4 of your plate with whole grains, avoid refined carbohydrates"
    ),
)

DAILY_TIPS: Tuple[DailyTip, ...] = (
    DailyTip(
        tip="Magnesium-rich foods like spinach and almonds can help reduce PMS symptoms. Try adding them to your meals today!",
        source="https://www.ncbi.nlm.nih.gov/pmc/articles/PMC5485207/"
    ),
    DailyTip(
        tip="Flax seeds are rich in lignans and omega-3s, supporting hormone balance during the menstrual cycle.",
        source="https://www.ncbi.nlm.nih.gov/pmc/articles/PMC3074428/"
    ),
    DailyTip(
        tip="Ginger has anti-inflammatory properties that can help reduce menstrual cramps and nausea.",
        source="https://www.ncbi.nlm.nih.gov/pmc/articles/PMC6341159/"
    ),
    DailyTip(
        tip="Vitamin D from sunlight or fortified foods supports hormonal balance and immune health.",
        source="https://ods.od.nih.gov/factsheets/VitaminD-Consumer/"
    ),
    DailyTip(
        tip="Fermented foods like yogurt and kimchi support gut health, which is linked to hormone regulation.",
        source="https://www.ncbi.nlm.nih.gov/pmc/articles/PMC6723657/"
    ),
)

MEAL_PLAN_MESSAGE = (
    "I can create a personalized meal plan for you! Based on your profile, "
    "I'll design meals that address your specific health needs. Use the meal "
    "plan generator in your dashboard to pick a cuisine and a daily, weekly or "
    "monthly plan, complete with recipes, shopping lists and nutritional "
    "guidance tailored to your conditions."
)

PCOS_ANSWER = """## PCOS (Polycystic Ovary Syndrome)

PCOS is a hormonal disorder affecting reproductive-aged women, characterized by irregular periods and elevated androgen levels.

### 🔍 Key Symptoms
• **Menstrual irregularities** - Irregular or missed periods
• **Hormonal signs** - Excess androgen levels causing acne and hirsutism
• **Ovarian changes** - Polycystic ovaries visible on ultrasound
• **Weight challenges** - Weight gain or difficulty losing weight
• **Metabolic issues** - Insulin resistance and blood sugar problems

### 💊 Management Approaches
• **Medical monitoring** - Regular check-ups with healthcare providers
• **Lifestyle changes** - Exercise, stress management, and weight control
• **Hormonal treatments** - Birth control pills, metformin, or other medications

*💡 For personalized nutritional support, ask about "foods for PCOS" or "PCOS meal plans"*"""

ENDOMETRIOSIS_ANSWER = """## Endometriosis

Endometriosis is a chronic condition where tissue similar to the uterine lining grows outside the uterus, causing inflammation and pain.

### 🔍 Common Symptoms
• **Severe pelvic pain** - Intense cramping during menstruation
• **Heavy bleeding** - Irregular or abnormally heavy menstrual periods
• **Digestive issues** - Bloating, nausea, and bowel problems during periods
• **Chronic fatigue** - Persistent exhaustion and low energy levels

### 🌿 Lifestyle Support
• **Heat therapy** - Heating pads and warm baths for pain relief
• **Gentle exercise** - Low-impact activities like yoga and walking
• **Quality sleep** - Consistent sleep schedule and restful environment

*💡 For anti-inflammatory nutrition support, ask about "foods for endometriosis" or "anti-inflammatory meal plans"*"""

SLEEP_ANSWER = """Sleep quality is crucial for hormonal balance and overall women's health.

**Sleep Hygiene Tips:**
- Maintain consistent bedtime and wake times
- Create a dark, cool, quiet sleep environment
- Limit screen time 1-2 hours before bed
- Avoid caffeine after 2 PM

**Hormonal Sleep Factors:**
- Estrogen and progesterone fluctuations affect sleep
- PMS can cause sleep disturbances
- Menopause often brings insomnia and night sweats

For specific sleep-supporting foods, ask about foods for better sleep or evening nutrition."""

GENERIC_ANSWER = (
    "I'm here to help with women's health questions! I can provide "
    "information about conditions like PCOS, endometriosis, thyroid disorders, "
    "and menstrual health, plus create personalized meal plans and nutritional "
    "guidance. What specific health topic would you like to learn about?"
)

# (fragments, answer) pairs checked in order
EDUCATIONAL_ANSWERS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("pcos", "polycystic"), PCOS_ANSWER),
    (("endometriosis",), ENDOMETRIOSIS_ANSWER),
    (("sleep", "insomnia"), SLEEP_ANSWER),
)

# Food terms recognised in research snippets
FOOD_PATTERNS = (
    re.compile(r"\b(sesame|flax|pumpkin|sunflower)\s+seeds?\b", re.IGNORECASE),
    re.compile(r"\b(salmon|sardines|mackerel|tuna)\b", re.IGNORECASE),
    re.compile(r"\b(spinach|kale|leafy greens|arugula)\b", re.IGNORECASE),
    re.compile(r"\b(avocado|nuts|olive oil)\b", re.IGNORECASE),
    re.compile(r"\b(quinoa|oats|brown rice)\b", re.IGNORECASE),
    re.compile(r"\b(berries|citrus|fruits)\b", re.IGNORECASE),
    re.compile(r"\b(broccoli|cauliflower|cruciferous)\b", re.IGNORECASE),
)

EXERCISE_PATTERN = re.compile(
    r"\b(yoga|walking|hiit|strength training|weightlifting|cardio|cycling|"
    r"running|swimming|dancing|pilates|stretching|meditation|breathing)\b",
    re.IGNORECASE
)

FOOD_BENEFITS = MappingProxyType({
    "sesame seeds": FoodCard(
        name="Sesame Seeds",
        description="Rich in lignans and healthy fats for hormone support",
        emoji="🌱",
        lazy="Sprinkle on yogurt or take as tahini",
        tasty="Toast and add to stir-fries or make tahini dressing",
        healthy="1-2 tbsp daily for optimal lignan intake"
    ),
    "flax seeds": FoodCard(
        name="Flax Seeds",
        description="High in omega-3s and lignans for estrogen balance",
        emoji="🌾",
        lazy="Mix ground flax into smoothies",
        tasty="Add to oatmeal or bake into muffins",
        healthy="1 tbsp ground daily, store in refrigerator"
    ),
    "pumpkin seeds": FoodCard(
        name="Pumpkin Seeds",
        description="Zinc and magnesium support progesterone and ease cramps",
        emoji="🎃",
        lazy="Keep a jar of roasted pumpkin seeds for snacking",
        tasty="Toss onto salads or blend into pesto",
        healthy="1-2 tbsp daily, especially in the second half of your cycle"
    ),
    "salmon": FoodCard(
        name="Salmon",
        description="Omega-3 fats lower inflammation and period pain",
        emoji="🐟",
        lazy="Use canned wild salmon on toast or salads",
        tasty="Bake with miso glaze or make salmon tacos",
        healthy="2-3 servings per week, prioritize wild-caught"
    ),
    "spinach": FoodCard(
        name="Spinach",
        description="Iron, folate and magnesium for energy and mood",
        emoji="🥬",
        lazy="Blend a handful into any smoothie",
        tasty="Wilt into pasta, curries or omelettes",
        healthy="Pair with vitamin C foods to boost iron absorption"
    ),
    "avocado": FoodCard(
        name="Avocado",
        description="Healthy fats and potassium for hormone production",
        emoji="🥑",
        lazy="Eat half an avocado with salt and lemon",
        tasty="Make guacamole or avocado toast with chili flakes",
        healthy="Half to one avocado daily as part of balanced meals"
    ),
    "quinoa": FoodCard(
        name="Quinoa",
        description="Complete protein and complex carbs for steady energy",
        emoji="🍚",
        lazy="Buy pre-cooked quinoa pouches",
        tasty="Make a quinoa bowl with roasted vegetables and tahini",
        healthy="1/2 to 1 cup cooked per meal in place of refined grains"
    ),
})

def get_default_foods(phase: CyclePhase) -> List[FoodCard]:
    """
    Get default food cards for a phase.

    Returns:
        Non-empty list of 1-3 food cards
    """
    return list(DEFAULT_FOODS.get(phase, DEFAULT_FOODS[CyclePhase.LUTEAL]))

def get_default_movement(phase: CyclePhase) -> MovementCard:
    """Get the default movement card for a phase."""
    return DEFAULT_MOVEMENT.get(phase, DEFAULT_MOVEMENT[CyclePhase.LUTEAL])

def get_default_emotion(phase: CyclePhase) -> EmotionCard:
    """Get the default emotion card for a phase."""
    return DEFAULT_EMOTION.get(phase, DEFAULT_EMOTION[CyclePhase.LUTEAL])

def get_meal_plan_card() -> FoodCard:
    """Get the meal planning card."""
    return MEAL_PLAN_CARD

def get_general_nutrition_foods() -> List[FoodCard]:
    """Get general food cards for diet questions without phase context."""
    return list(GENERAL_NUTRITION_FOODS)

def get_daily_tip(today: Optional[DateLike] = None) -> DailyTip:
    """
    Get the tip of the day.

    Tips rotate by day of year, independent of user and phase.

    Example:
        >>> get_daily_tip(date(2024, 1, 1)).tip.startswith("Flax")
        True
    """
    return DAILY_TIPS[day_of_year(today) % len(DAILY_TIPS)]

def _research_contents(matches: Iterable[Dict[str, Any]]) -> List[str]:
    contents = []
    for match in matches or []:
        content = match.get("content") or (match.get("metadata") or {}).get("content")
        if content:
            contents.append(content)
    return contents

def extract_foods_from_research(
    matches: Iterable[Dict[str, Any]],
    phase: CyclePhase
) -> List[FoodCard]:
    """
    Turn food terms found in research snippets into food cards.

    Args:
        matches: Research results, each with a "content" string
        phase: Phase used for the fallback list

    Returns:
        Up to three cards; the phase defaults when no known food is found
    """
    found: List[str] = []
    for content in _research_contents(matches):
        for pattern in FOOD_PATTERNS:
            for match in pattern.finditer(content):
                term = re.sub(r"\s+", " ", match.group(0).lower())
                if term.endswith(" seed"):
                    term += "s"
                if term not in found:
                    found.append(term)

    foods = [FOOD_BENEFITS[term] for term in found if term in FOOD_BENEFITS]
    return foods[:MAX_RESEARCH_CARDS] or get_default_foods(phase)

def extract_exercises_from_research(
    matches: Iterable[Dict[str, Any]]
) -> List[MovementCard]:
    """
    Turn exercise terms found in research snippets into movement cards.

    Returns:
        Up to three movement cards, possibly empty
    """
    found: List[str] = []
    for content in _research_contents(matches):
        for match in EXERCISE_PATTERN.finditer(content):
            term = match.group(0).lower()
            if term not in found:
                found.append(term)

    return [
        MovementCard(
            name=term.title(),
            description=f"Research-backed {term} recommendation",
            emoji="🏃‍♀️",
            gentle=f"Start with gentle {term} for 5-10 minutes",
            fun=f"Make {term} social by doing it with friends or in a group",
            strong=f"Challenge yourself with more intense {term} sessions"
        )
        for term in found[:MAX_RESEARCH_CARDS]
    ]

def get_educational_answer(message: str) -> str:
    """
    Get the canned answer for a general health question.

    Returns:
        PCOS, endometriosis or sleep answer when the topic is mentioned,
        otherwise a generic introduction
    """
    text = (message or "").lower()
    for fragments, answer in EDUCATIONAL_ANSWERS:
        if any(fragment in text for fragment in fragments):
            return answer
    return GENERIC_ANSWER
