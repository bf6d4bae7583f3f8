"""
FitTrack API - Meal Plan Review Service.

Asks Gemini to critique a stored meal plan against the user's profile,
goals, dietary preferences, fitness data and medical history.
"""

import logging
from typing import Any, Dict, List, Optional

from app.services.ai_decoding import DecodeError, decode_meal_plan_review
from app.services.fixed_plans import get_fixed_meal_plan_review
from app.services.gemini import GeminiService, gemini_service


logger = logging.getLogger(__name__)


def _joined(values: Optional[List[str]], default: str) -> str:
    return ", ".join(values) if values else default


def build_review_prompt(
    plan: Dict[str, Any],
    meals: List[Dict[str, Any]],
    review_type: str = "comprehensive",
    profile: Optional[Dict[str, Any]] = None,
    goals: Optional[Dict[str, Any]] = None,
    dietary: Optional[Dict[str, Any]] = None,
    fitness: Optional[Dict[str, Any]] = None,
    medical: Optional[Dict[str, Any]] = None
) -> str:
    profile = profile or {}
    goals = goals or {}
    dietary = dietary or {}
    fitness = fitness or {}
    medical = medical or {}

    meal_summary = [
        f"- {m.get('meal_type')}: {m.get('meal_name')} "
        f"({m.get('calories', 0)}cal, P:{m.get('protein', 0)}g, C:{m.get('carbs', 0)}g, F:{m.get('fat', 0)}g)"
        for m in meals
    ]

    lines = [
        "You are a professional nutritionist and fitness coach. Review the following meal plan comprehensively.",
        "",
        "**Current Meal Plan:**",
        *(meal_summary or ["- No meals"]),
        "",
        f"**Total Daily Calories:** {plan.get('total_calories', 0)}",
        f"**Meals Per Day:** {plan.get('total_meals', len(meals))}",
        "",
        "**User Profile:**",
        f"- Age: {profile.get('age') or 'Unknown'}",
        f"- Weight: {profile.get('weight_kg') or 'Unknown'} kg",
        f"- Height: {profile.get('height_cm') or 'Unknown'} cm",
        f"- Activity Level: {profile.get('activity_level') or 'Unknown'}",
        "",
        "**Health Goals:**",
        f"- Primary Goal: {goals.get('primary_goal') or 'General wellness'}",
        f"- Target Weight: {goals.get('target_weight') or 'Not set'} kg",
        f"- Daily Calories: {goals.get('daily_calories') or 'Not set'}",
        "",
        "**Dietary Preferences:**",
        f"- Diet Type: {dietary.get('diet_type') or 'Standard'}",
        f"- Allergies: {_joined(dietary.get('allergies'), 'None')}",
        f"- Cuisine Preferences: {_joined(dietary.get('cuisine_preferences'), 'Any')}",
        "",
        "**Fitness Data:**",
        f"- Fitness Level: {fitness.get('fitness_level') or 'Unknown'}",
        f"- Workouts Per Week: {fitness.get('workout_frequency') or 'Unknown'}",
        f"- Preferred Workouts: {_joined(fitness.get('preferred_workout_types'), 'Unknown')}",
        "",
        "**Medical History:**",
        f"- Health Conditions: {_joined(medical.get('health_conditions'), 'None')}",
        f"- Medications: {_joined(medical.get('medications'), 'None')}",
        "",
        f"**Review Type:** {review_type}",
        "",
        "Return ONLY valid JSON, no markdown formatting, with this structure:",
        '{"overall_score": 85, "summary": "Brief overview", "strengths": ["..."],',
        ' "areas_for_improvement": ["..."], "nutrition_analysis": {"calorie_alignment": "...",',
        ' "macro_balance": "...", "micronutrients": "..."}, "modifications": [{"meal_type": "breakfast",',
        ' "current_meal": "...", "suggested_meal": "...", "reason": "...", "nutrition_change": "..."}],',
        ' "personalized_suggestions": ["..."], "meal_variety_score": 8, "diet_adherence": "...",',
        ' "health_goal_alignment": "..."}',
    ]
    return "\n".join(lines)


async def review_meal_plan(prompt: str, service: Optional[GeminiService] = None) -> Dict[str, Any]:
    """
    Review for the AI endpoint.

    Model errors propagate; undecodable output yields the static review.
    """
    service = service or gemini_service
    text = await service.generate(prompt)

    result = decode_meal_plan_review(text)
    if isinstance(result, DecodeError):
        logger.warning(f"Meal plan review not decodable, using fallback: {result.reason}")
        return get_fixed_meal_plan_review()

    review = result.value.model_dump()
    review["ai_generated"] = True
    return review
