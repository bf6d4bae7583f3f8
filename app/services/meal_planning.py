"""
FitTrack API - Meal Planning Service.

Meal layouts, calorie and macro splits, Gemini prompts for day plans,
single-meal regeneration and meal swaps. Every generator degrades to the
static meals in ``fixed_plans`` when Gemini is unavailable or its output
does not decode.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from app.services.ai_decoding import AIMealPayload, DecodeError, decode_meal, decode_meal_list
from app.services.fixed_plans import get_fixed_day_meals, get_fixed_meal, get_fixed_meal_plan
from app.services.gemini import GeminiService, gemini_service
from app.services.meal_images import fetch_meal_images


logger = logging.getLogger(__name__)


MEAL_LAYOUTS: Dict[int, List[str]] = {
    3: ["breakfast", "lunch", "dinner"],
    4: ["breakfast", "lunch", "snack", "dinner"],
    5: ["breakfast", "snack", "lunch", "snack2", "dinner"],
    6: ["breakfast", "snack", "lunch", "snack", "dinner", "snack2"],
}

CALORIE_SHARES: Dict[str, float] = {
    "breakfast": 0.25,
    "lunch": 0.30,
    "dinner": 0.35,
    "snack": 0.05,
    "snack2": 0.05,
}
DEFAULT_CALORIE_SHARE = 0.2

MACRO_RATIOS: Dict[str, Dict[str, int]] = {
    "balanced": {"protein": 30, "carbs": 40, "fat": 30},
    "low-carb": {"protein": 40, "carbs": 20, "fat": 40},
    "high-protein": {"protein": 40, "carbs": 30, "fat": 30},
    "keto": {"protein": 30, "carbs": 5, "fat": 65},
}

PLAN_DAYS: Dict[str, int] = {"daily": 1, "weekly": 7, "monthly": 30}

# Defaults for fields the model leaves out
DEFAULT_PROTEIN = 20
DEFAULT_CARBS = 40
DEFAULT_FAT = 15
DEFAULT_PREP_TIME = 20


def get_meal_types_for_day(meals_per_day: int) -> List[str]:
    """Meal types for a day; unsupported counts get the 3-meal layout."""
    return list(MEAL_LAYOUTS.get(meals_per_day, MEAL_LAYOUTS[3]))


def get_calorie_distribution(meal_types: List[str], total_calories: int) -> List[int]:
    return [round(total_calories * CALORIE_SHARES.get(t, DEFAULT_CALORIE_SHARE)) for t in meal_types]


def get_macro_ratios(distribution: Optional[str]) -> Dict[str, int]:
    return dict(MACRO_RATIOS.get(distribution or "balanced", MACRO_RATIOS["balanced"]))


def plan_length_days(plan_type: str, custom_days: int = 7) -> int:
    """Number of days covered by ``plan_type``; ``custom`` uses ``custom_days``."""
    if plan_type == "custom":
        return max(int(custom_days or 1), 1)
    return PLAN_DAYS.get(plan_type, 1)


@dataclass
class MealPlanParams:
    """Inputs for one generated day."""

    target_calories: int = 2000
    meals_per_day: int = 3
    diet_type: str = "standard"
    allergies: List[str] = field(default_factory=list)
    cuisine_preferences: List[str] = field(default_factory=list)
    macro_distribution: str = "balanced"
    location: str = "Pakistan"
    health_conditions: List[str] = field(default_factory=list)
    fitness_goal: Optional[str] = None


def _join(values: List[str], empty: str) -> str:
    return ", ".join(values) if values else empty


def build_day_prompt(params: MealPlanParams, meal_types: List[str], distribution: List[int]) -> str:
    macros = get_macro_ratios(params.macro_distribution)
    requirements = "\n".join(
        f"- {meal_type}: approximately {calories} calories"
        for meal_type, calories in zip(meal_types, distribution)
    )
    allowed_types = ", ".join(f'"{t}"' for t in meal_types)

    return f"""You are a professional nutritionist specializing in South Asian cuisine. Generate a detailed meal plan for ONE DAY with exactly {len(meal_types)} meals.

USER PROFILE:
- Target Daily Calories: {params.target_calories} kcal
- Diet Type: {params.diet_type}
- Allergies/Restrictions: {_join(params.allergies, "None")}
- Cuisine Preferences: {_join(params.cuisine_preferences, "South Asian, Pakistani")}
- Location: {params.location or "Pakistan"}
- Health Conditions: {_join(params.health_conditions, "None")}
- Fitness Goal: {params.fitness_goal or "General health"}
- Macro Distribution: {params.macro_distribution} (Protein: {macros['protein']}%, Carbs: {macros['carbs']}%, Fat: {macros['fat']}%)

MEAL REQUIREMENTS:
{requirements}

GUIDELINES:
1. Use ingredients commonly available in local markets and keep the plan budget-friendly
2. Prefer traditional dishes: daal, roti, paratha, biryani, curry
3. Prefer local proteins: chicken, eggs, daal (masoor, chana, moong), paneer
4. Keep portions realistic for a household kitchen
5. Avoid expensive imported items, protein powders and supplements

Generate a JSON array with EXACTLY {len(meal_types)} meals. Each meal must have:
- meal_type: one of [{allowed_types}]
- meal_name: descriptive name (can include local names in parentheses)
- calories: number (must add up close to {params.target_calories})
- protein: grams
- carbs: grams
- fat: grams
- prep_time: minutes
- ingredients: array of strings, each starting with a quantity and unit (e.g. "2 cups rice", "1 pao chicken", "250g daal")
- instructions: array of step-by-step cooking instructions

Return ONLY a valid JSON array, no markdown or extra text."""


def _meal_from_payload(
    payload: AIMealPayload,
    meal_type: str,
    calories: int,
    recipe_uri: str,
    image: str
) -> Dict[str, Any]:
    return {
        "meal_type": payload.meal_type or meal_type,
        "meal_name": payload.meal_name or "Healthy Meal",
        "calories": round(payload.calories or calories or 400),
        "protein": round(payload.protein or DEFAULT_PROTEIN),
        "carbs": round(payload.carbs or DEFAULT_CARBS),
        "fat": round(payload.fat or DEFAULT_FAT),
        "prep_time": round(payload.prep_time or DEFAULT_PREP_TIME),
        "ingredients": payload.ingredients,
        "instructions": payload.instructions,
        "recipe_uri": recipe_uri,
        "image": image,
    }


async def generate_day_meals(
    params: MealPlanParams,
    service: Optional[GeminiService] = None
) -> Tuple[List[Dict[str, Any]], bool]:
    """
    Generate one day of meals.

    Args:
        params: Day generation parameters.
        service: Gemini service; defaults to the shared instance.

    Returns:
        Tuple of the meal payloads and whether Gemini produced them
        (False means the whole day is static fallback data).
    """
    service = service or gemini_service
    meal_types = get_meal_types_for_day(params.meals_per_day)
    distribution = get_calorie_distribution(meal_types, params.target_calories)

    try:
        text = await service.generate(build_day_prompt(params, meal_types, distribution))
    except Exception as e:
        logger.warning(f"Gemini day plan failed, using fallback meals: {e}")
        return get_fixed_day_meals(meal_types, distribution), False

    result = decode_meal_list(text)
    if isinstance(result, DecodeError):
        logger.warning(f"Gemini day plan not decodable, using fallback meals: {result.reason}")
        return get_fixed_day_meals(meal_types, distribution), False

    payloads: List[AIMealPayload] = result.value
    images = await fetch_meal_images([p.meal_name or "Healthy Meal" for p in payloads])
    meals = []
    for index, (payload, image) in enumerate(zip(payloads, images)):
        meal_type = meal_types[index] if index < len(meal_types) else "meal"
        calories = distribution[index] if index < len(distribution) else 0
        meals.append(_meal_from_payload(payload, meal_type, calories, f"gemini-{index}", image))

    # Pad short answers so every meal type is covered
    for index in range(len(meals), len(meal_types)):
        meals.append(get_fixed_meal(meal_types[index], distribution[index]))

    return meals, True


def build_single_meal_prompt(
    meal_type: str,
    target_calories: int,
    diet_type: str,
    allergies: List[str],
    cuisine_preferences: List[str],
    macro_distribution: str,
    exclude_meals: List[str]
) -> str:
    macros = get_macro_ratios(macro_distribution)
    exclusions = f"\n- DO NOT suggest these meals: {', '.join(exclude_meals)}" if exclude_meals else ""
    return f"""You are a professional nutritionist specializing in South Asian cuisine. Generate ONE {meal_type} meal.

REQUIREMENTS:
- Target Calories: {target_calories} kcal
- Diet Type: {diet_type}
- Allergies: {_join(allergies, "None")}
- Cuisine: {_join(cuisine_preferences, "Pakistani/South Asian preferred")}
- Macro Distribution: Protein {macros['protein']}%, Carbs {macros['carbs']}%, Fat {macros['fat']}%{exclusions}

Generate a JSON object with:
- meal_type: "{meal_type}"
- meal_name: descriptive name
- calories: number (close to {target_calories})
- protein, carbs, fat: grams
- prep_time: minutes
- ingredients: array of strings with quantities
- instructions: array of cooking steps

Return ONLY a valid JSON object, no markdown."""


async def generate_single_meal(
    meal_type: str,
    target_calories: int,
    diet_type: str = "standard",
    allergies: Optional[List[str]] = None,
    cuisine_preferences: Optional[List[str]] = None,
    macro_distribution: str = "balanced",
    exclude_meals: Optional[List[str]] = None,
    service: Optional[GeminiService] = None
) -> Dict[str, Any]:
    """Regenerate one meal; falls back to the static meal for ``meal_type``."""
    service = service or gemini_service
    prompt = build_single_meal_prompt(
        meal_type,
        target_calories,
        diet_type,
        allergies or [],
        cuisine_preferences or [],
        macro_distribution,
        exclude_meals or [],
    )

    try:
        text = await service.generate(prompt)
    except Exception as e:
        logger.warning(f"Gemini single meal failed, using fallback: {e}")
        return get_fixed_meal(meal_type, target_calories)

    result = decode_meal(text)
    if isinstance(result, DecodeError):
        logger.warning(f"Gemini single meal not decodable: {result.reason}")
        return get_fixed_meal(meal_type, target_calories)

    payload: AIMealPayload = result.value
    [image] = await fetch_meal_images([payload.meal_name or "Healthy Meal"])
    return _meal_from_payload(payload, meal_type, target_calories, "gemini-single", image)


async def generate_swap_suggestions(
    current_meal: Dict[str, Any],
    target_calories: int,
    diet_type: str = "standard",
    allergies: Optional[List[str]] = None,
    cuisine_preferences: Optional[List[str]] = None,
    service: Optional[GeminiService] = None
) -> List[Dict[str, Any]]:
    """
    Up to three AI alternatives for ``current_meal``.

    Returns an empty list on any failure; the caller serves static
    alternatives instead.
    """
    service = service or gemini_service
    meal_type = current_meal.get("meal_type") or "lunch"
    prompt = f"""You are a nutritionist. The user wants to swap their current meal. Generate 3 alternative meal options.

CURRENT MEAL TO REPLACE:
- Name: {current_meal.get('meal_name')}
- Type: {meal_type}
- Calories: {current_meal.get('calories')}

REQUIREMENTS:
- Target Calories: {target_calories} kcal (similar to current)
- Diet Type: {diet_type or "standard"}
- Allergies: {_join(allergies or [], "None")}
- Cuisine: {_join(cuisine_preferences or [], "Pakistani, South Asian")}, budget-friendly

Generate 3 DIFFERENT alternatives that are similar in nutrition but different in taste and easy to prepare at home.

Return a JSON array with 3 meals, each having:
- meal_type, meal_name, calories, protein, carbs, fat, prep_time, ingredients, instructions

Return ONLY a valid JSON array."""

    try:
        text = await service.generate(prompt)
    except Exception as e:
        logger.warning(f"Gemini swap suggestions failed: {e}")
        return []

    result = decode_meal_list(text)
    if isinstance(result, DecodeError):
        logger.warning(f"Gemini swap suggestions not decodable: {result.reason}")
        return []

    payloads: List[AIMealPayload] = result.value[:3]
    images = await fetch_meal_images([p.meal_name or "Alternative Meal" for p in payloads])
    suggestions = []
    for index, (payload, image) in enumerate(zip(payloads, images)):
        suggestion = _meal_from_payload(payload, meal_type, target_calories, f"swap-{index}", image)
        suggestion["meal_type"] = meal_type
        if not payload.meal_name:
            suggestion["meal_name"] = "Alternative Meal"
        suggestions.append(suggestion)
    return suggestions


def build_suggestion_prompt(
    target_calories: int,
    meals_per_day: int,
    diet_type: str,
    allergies: List[str],
    cuisine_preferences: List[str],
    fitness_goal: str,
    macro_distribution: str,
    profile: Optional[Dict[str, Any]] = None,
    goals: Optional[Dict[str, Any]] = None
) -> str:
    profile = profile or {}
    goals = goals or {}
    lines = [
        "Create a personalized daily meal plan with the following specifications:",
        "",
        "**Dietary Requirements:**",
        f"- Diet Type: {diet_type}",
        f"- Target Daily Calories: {target_calories} kcal",
        f"- Meals Per Day: {meals_per_day}",
        f"- Macro Distribution: {macro_distribution}",
    ]
    if allergies:
        lines.append(f"- Allergies to Avoid: {', '.join(allergies)}")
    if cuisine_preferences:
        lines.append(f"- Preferred Cuisines: {', '.join(cuisine_preferences)}")
    lines += [
        "",
        "**User Profile:**",
        f"- Age: {profile.get('age') or 'Not specified'}",
        f"- Weight: {profile.get('weight_kg') or 'Not specified'} kg",
        f"- Height: {profile.get('height_cm') or 'Not specified'} cm",
        f"- Fitness Goal: {fitness_goal}",
    ]
    if goals.get("target_weight"):
        lines.append(f"- Target Weight: {goals['target_weight']} kg")
    lines += [
        "",
        "For each meal provide the meal name, estimated calories, protein/carbs/fat in grams,",
        "2-5 key ingredients with quantities, preparation time (max 30 minutes) and brief instructions.",
        "",
        "Return ONLY a valid JSON array in this exact format, with no markdown code blocks or extra text:",
        '[{"meal_type": "breakfast", "meal_name": "Example Meal", "calories": 400, "protein_g": 20,',
        ' "carbs_g": 50, "fat_g": 12, "ingredients": ["1 cup oats"], "prep_time_minutes": 15,',
        ' "instructions": "Step-by-step instructions"}]',
    ]
    return "\n".join(lines)


async def suggest_meal_plan(
    prompt: str,
    meals_per_day: int,
    target_calories: int,
    service: Optional[GeminiService] = None
) -> List[Dict[str, Any]]:
    """
    Meal plan suggestion for the AI endpoint.

    Model errors propagate (the endpoint reports them); undecodable output
    yields the static suggestion plan.
    """
    service = service or gemini_service
    text = await service.generate(prompt)

    result = decode_meal_list(text)
    if isinstance(result, DecodeError):
        logger.warning(f"Meal plan suggestion not decodable, using fallback: {result.reason}")
        return get_fixed_meal_plan(meals_per_day, target_calories)

    return [
        {
            "meal_type": payload.meal_type or "meal",
            "meal_name": payload.meal_name or "Meal",
            "calories": payload.calories or 0,
            "protein": payload.protein or 0,
            "carbs": payload.carbs or 0,
            "fat": payload.fat or 0,
            "ingredients": payload.ingredients,
            "prep_time": payload.prep_time or 0,
            "instructions": payload.instructions,
            "ai_generated": True,
        }
        for payload in result.value
    ]
