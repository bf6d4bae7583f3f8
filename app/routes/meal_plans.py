# app/routes/meal_plans.py
"""
FitTrack API - Meal Plan Routes.

Generation, listing and deletion of multi-day meal plans. Generating a
plan replaces every plan of the user that overlaps the new date range,
together with its meals and shopping lists.
"""

from fastapi import APIRouter, Query
from typing import Optional, List, Dict, Any
from uuid import UUID
import logging

from pydantic import ValidationError as PydanticValidationError

from app.models.mongodb import (
    DietaryPreferencesDocument,
    HealthGoalsDocument,
    MealDocument,
    MealPlanDocument,
    MedicalHistoryDocument,
)
from app.schemas.meal_plan import GenerateMealPlanRequest
from app.services.ai_decoding import AIMealPayload
from app.services.meal_planning import MealPlanParams, generate_day_meals, plan_length_days
from app.services.plan_store import (
    delete_plans,
    find_overlapping_plans,
    load_plan_bundles,
    save_shopping_list,
)
from app.services.shopping_list import build_shopping_list
from app.utils.dates import date_range
from app.utils.documents import parse_uuid, to_response
from app.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()

URL_MAX_LENGTH = 500
DEFAULT_CUISINES = ["Pakistani", "South Asian"]


def _clip(value: Optional[str]) -> Optional[str]:
    return value[:URL_MAX_LENGTH] if value else None


def _supplied_meal(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a client-supplied meal (either key dialect)."""
    payload = AIMealPayload.model_validate(raw)
    return {
        "meal_type": payload.meal_type or "meal",
        "meal_name": payload.meal_name or "Meal",
        "calories": round(payload.calories or 0),
        "protein": payload.protein or 0,
        "carbs": payload.carbs or 0,
        "fat": payload.fat or 0,
        "prep_time": round(payload.prep_time or 0),
        "ingredients": payload.ingredients,
        "instructions": payload.instructions,
        "image": raw.get("image"),
        "source_url": raw.get("source_url"),
        "recipe_uri": raw.get("recipe_uri"),
    }


def _meal_document(plan_id: UUID, meal: Dict[str, Any], day_index: int, day_date: str) -> MealDocument:
    return MealDocument(
        plan_id=plan_id,
        meal_type=meal.get("meal_type") or "meal",
        meal_name=meal.get("meal_name") or "Meal",
        calories=round(meal.get("calories") or 0),
        protein=meal.get("protein") or 0,
        carbs=meal.get("carbs") or 0,
        fat=meal.get("fat") or 0,
        prep_time=round(meal.get("prep_time") or 0),
        ingredients=meal.get("ingredients") or [],
        instructions=meal.get("instructions") or [],
        image=_clip(meal.get("image")),
        source_url=_clip(meal.get("source_url")),
        recipe_uri=_clip(meal.get("recipe_uri")),
        day_index=day_index,
        day_date=day_date,
    )


async def _resolve_params(request: GenerateMealPlanRequest) -> MealPlanParams:
    """Fill unspecified generation parameters from the user's stored profile."""
    dietary = await DietaryPreferencesDocument.find_one(DietaryPreferencesDocument.user_id == request.user_id)
    goals = await HealthGoalsDocument.find_one(HealthGoalsDocument.user_id == request.user_id)
    medical = await MedicalHistoryDocument.find_one(MedicalHistoryDocument.user_id == request.user_id)

    return MealPlanParams(
        target_calories=request.target_calories or (goals.daily_calories if goals else None) or 2000,
        meals_per_day=request.meals_per_day or (dietary.meals_per_day if dietary else None) or 3,
        diet_type=request.diet_type or (dietary.diet_type if dietary else None) or "standard",
        allergies=request.allergies or (dietary.allergies if dietary else []),
        cuisine_preferences=(
            request.cuisine_preferences
            or (dietary.cuisine_preferences if dietary else [])
            or list(DEFAULT_CUISINES)
        ),
        macro_distribution=request.macro_distribution,
        location=request.location or "Pakistan",
        health_conditions=request.health_conditions or (medical.health_conditions if medical else []),
        fitness_goal=request.fitness_goal or (goals.primary_goal if goals else None),
    )


@router.post("/generate")
async def generate_meal_plan(request: GenerateMealPlanRequest):
    """
    Generate a meal plan for one or more days.

    Each day is produced by one Gemini call (static meals on failure)
    unless the request supplies ``meals``, which are then used for every
    day. A shopping list aggregating all meals is stored when requested.
    """
    supplied_meals = None
    if request.meals is not None:
        try:
            supplied_meals = [_supplied_meal(meal) for meal in request.meals]
        except PydanticValidationError as e:
            raise ValidationError(message="Invalid meals", detail=str(e))

    params = await _resolve_params(request)
    days = plan_length_days(request.plan_type, request.custom_days)
    dates = date_range(request.plan_date.isoformat(), days)
    start_date, end_date = dates[0], dates[-1]

    overlapping = await find_overlapping_plans(request.user_id, start_date, end_date)
    if overlapping:
        logger.info(f"Replacing {len(overlapping)} overlapping plan(s) for user:{request.user_id}")
        await delete_plans([plan.uid for plan in overlapping])

    plan = MealPlanDocument(
        user_id=request.user_id,
        plan_date=start_date,
        plan_end_date=end_date,
        plan_type=request.plan_type,
        total_calories=params.target_calories * days,
        total_meals=params.meals_per_day * days,
        status="active",
    )
    await plan.insert()

    all_meals: List[MealDocument] = []
    ai_days = 0
    for day_index, day_date in enumerate(dates):
        if supplied_meals is not None:
            day_meals = supplied_meals
        else:
            day_meals, used_ai = await generate_day_meals(params)
            ai_days += int(used_ai)

        documents = [_meal_document(plan.uid, meal, day_index, day_date) for meal in day_meals]
        if documents:
            await MealDocument.insert_many(documents)
        all_meals.extend(documents)

    shopping_list = None
    if request.generate_shopping_list and any(meal.ingredients for meal in all_meals):
        entries = build_shopping_list(all_meals)
        name_dates = start_date if request.plan_type == "daily" else f"{start_date} to {end_date}"
        shopping_list = await save_shopping_list(
            request.user_id, plan.uid, f"Shopping List - {name_dates}", entries
        )

    if supplied_meals is not None:
        generated_by = "provided"
    else:
        generated_by = "gemini" if ai_days else "fallback"

    logger.info(
        f"Meal plan {plan.uid} created for user:{request.user_id} "
        f"({days} day(s), {len(all_meals)} meals, {ai_days} AI day(s))"
    )

    return {
        "success": True,
        "plan": to_response(plan),
        "meals": [to_response(meal) for meal in all_meals],
        "shoppingList": shopping_list,
        "summary": {
            "totalDays": days,
            "totalMeals": len(all_meals),
            "totalCalories": sum(meal.calories for meal in all_meals),
            "shoppingItems": len(shopping_list["items"]) if shopping_list else 0,
        },
        "generatedBy": generated_by,
    }


@router.get("/generate")
async def get_meal_plans(
    user_id: UUID = Query(..., alias="userId"),
    plan_date: Optional[str] = Query(None, alias="date"),
    status: Optional[str] = None
):
    """List a user's plans, newest first, with meals and shopping lists."""
    criteria = [MealPlanDocument.user_id == user_id]
    if plan_date:
        criteria.append(MealPlanDocument.plan_date == plan_date)
    if status:
        criteria.append(MealPlanDocument.status == status)

    plans = await MealPlanDocument.find(*criteria).sort(-MealPlanDocument.plan_date).to_list()
    return {"plans": await load_plan_bundles(plans)}


@router.delete("/generate")
async def delete_meal_plan(plan_id: str = Query(..., alias="planId")):
    """Delete a plan with its meals, shopping lists and items."""
    uid = parse_uuid(plan_id)
    plan = await MealPlanDocument.find_one(MealPlanDocument.uid == uid) if uid else None
    if not plan:
        raise NotFoundError(message="Meal plan not found")

    await delete_plans([plan.uid])
    return {"success": True}
