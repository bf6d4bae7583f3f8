# app/routes/meals.py
"""
FitTrack API - Meal Routes.

Single-meal operations on stored plans: swap suggestions, applying a
swap, custom meals, direct edits and AI regeneration.
"""

from fastapi import APIRouter
from typing import Optional, Dict, Any
import logging
import time

from app.models.mongodb import DietaryPreferencesDocument, MealDocument, MealPlanDocument
from app.schemas.meal_plan import (
    AddMealRequest,
    ApplyMealSwapRequest,
    MealContent,
    MealSwapRequest,
    RegenerateMealRequest,
)
from app.services.fixed_plans import get_fixed_swap_suggestions
from app.services.meal_planning import generate_single_meal, generate_swap_suggestions
from app.utils.dates import utcnow
from app.utils.documents import parse_uuid, to_response
from app.utils.errors import NotFoundError

logger = logging.getLogger(__name__)
router = APIRouter()

DEFAULT_CUISINES = ["Pakistani", "South Asian"]


async def _get_meal(meal_id: Optional[str]) -> MealDocument:
    """Stored meal for ``meal_id``; malformed and unknown ids are both 404."""
    uid = parse_uuid(meal_id)
    meal = await MealDocument.find_one(MealDocument.uid == uid) if uid else None
    if not meal:
        raise NotFoundError(message="Meal not found")
    return meal


async def _apply_content(meal: MealDocument, content: Dict[str, Any]) -> MealDocument:
    for field, value in content.items():
        setattr(meal, field, value)
    meal.updated_at = utcnow()
    await meal.save()
    return meal


@router.post("/swap")
async def suggest_meal_swap(request: MealSwapRequest):
    """
    Suggest alternatives for a stored meal.

    Gemini proposes up to three meals of the same type and similar
    calories; the static alternatives are served when it cannot.
    """
    meal = await _get_meal(request.meal_id)
    target_calories = meal.calories or request.target_calories
    current_meal = to_response(meal)

    suggestions = await generate_swap_suggestions(
        current_meal,
        target_calories,
        diet_type=request.diet_type,
        allergies=request.allergies,
        cuisine_preferences=request.cuisine_preferences or list(DEFAULT_CUISINES),
    )
    if not suggestions:
        logger.info(f"Serving static swap suggestions for meal {meal.uid}")
        suggestions = get_fixed_swap_suggestions(request.meal_type or meal.meal_type, target_calories)

    return {
        "success": True,
        "currentMeal": current_meal,
        "suggestions": suggestions,
    }


@router.put("/swap")
async def apply_meal_swap(request: ApplyMealSwapRequest):
    """Replace a stored meal's content with the chosen alternative."""
    meal = await _get_meal(request.meal_id)
    await _apply_content(meal, request.new_meal.model_dump(exclude_none=True))
    return {"success": True, "meal": to_response(meal)}


@router.post("/add")
async def add_custom_meal(request: AddMealRequest):
    """
    Add a user-defined meal to a stored plan.

    Omitted nutrition values are stored as zero and the recipe URI is
    ``custom-<epoch ms>``.
    """
    uid = parse_uuid(request.plan_id)
    plan = await MealPlanDocument.find_one(MealPlanDocument.uid == uid) if uid else None
    if not plan:
        raise NotFoundError(message="Meal plan not found")

    content = request.model_dump(exclude_none=True, exclude={"plan_id", "day_index", "day_date"})
    meal = MealDocument(
        plan_id=plan.uid,
        day_index=request.day_index,
        day_date=request.day_date.isoformat() if request.day_date else plan.plan_date,
        recipe_uri=f"custom-{int(time.time() * 1000)}",
        **content,
    )
    await meal.insert()
    logger.info(f"Custom meal {meal.uid} added to plan {plan.uid}")
    return {"success": True, "meal": to_response(meal)}


@router.get("/{meal_id}")
async def get_meal(meal_id: str):
    meal = await _get_meal(meal_id)
    return {"meal": to_response(meal)}


@router.put("/{meal_id}")
async def update_meal(meal_id: str, request: MealContent):
    meal = await _get_meal(meal_id)
    await _apply_content(meal, request.model_dump(exclude_none=True))
    return {"success": True, "meal": to_response(meal)}


@router.delete("/{meal_id}")
async def delete_meal(meal_id: str):
    meal = await _get_meal(meal_id)
    await meal.delete()
    return {"success": True}


@router.post("/{meal_id}")
async def regenerate_meal(meal_id: str, request: Optional[RegenerateMealRequest] = None):
    """
    Regenerate a meal with Gemini.

    Request values override the plan owner's stored dietary preferences.
    The plan's other meals are excluded so the result is not a duplicate.
    """
    meal = await _get_meal(meal_id)
    request = request or RegenerateMealRequest()

    plan = await MealPlanDocument.find_one(MealPlanDocument.uid == meal.plan_id)
    dietary = None
    if plan:
        dietary = await DietaryPreferencesDocument.find_one(DietaryPreferencesDocument.user_id == plan.user_id)

    other_meals = await MealDocument.find(
        MealDocument.plan_id == meal.plan_id,
        MealDocument.uid != meal.uid
    ).to_list()

    new_meal = await generate_single_meal(
        meal_type=meal.meal_type,
        target_calories=request.target_calories or meal.calories,
        diet_type=request.diet_type or (dietary.diet_type if dietary else None) or "standard",
        allergies=request.allergies if request.allergies is not None else (dietary.allergies if dietary else []),
        cuisine_preferences=(
            request.cuisine_preferences if request.cuisine_preferences is not None
            else (dietary.cuisine_preferences if dietary else [])
        ),
        macro_distribution=request.macro_distribution,
        exclude_meals=[other.meal_name for other in other_meals],
    )

    await _apply_content(meal, {
        "meal_name": new_meal["meal_name"],
        "calories": round(new_meal["calories"]),
        "protein": new_meal["protein"],
        "carbs": new_meal["carbs"],
        "fat": new_meal["fat"],
        "prep_time": round(new_meal["prep_time"]),
        "ingredients": new_meal["ingredients"],
        "instructions": new_meal["instructions"],
        "image": new_meal.get("image"),
        "recipe_uri": new_meal.get("recipe_uri"),
    })

    generated_by = "gemini" if str(new_meal.get("recipe_uri", "")).startswith("gemini") else "fallback"
    return {"success": True, "meal": to_response(meal), "generatedBy": generated_by}
