# app/routes/nutrition.py
"""
FitTrack API - Nutrition Log Routes.
"""

from fastapi import APIRouter, Query
from typing import Optional
from uuid import UUID
import logging

from app.models.mongodb import NutritionLogDocument
from app.schemas.tracking import NutritionLogRequest
from app.utils.dates import today_iso
from app.utils.documents import to_response

logger = logging.getLogger(__name__)
router = APIRouter()

MACRO_FIELDS = ("calories", "protein", "carbs", "fat")


@router.post("/log")
async def log_nutrition(request: NutritionLogRequest):
    """Record a food intake entry; the date defaults to today."""
    entry = request.meal_data
    log = NutritionLogDocument(
        user_id=request.user_id,
        date=entry.date.isoformat() if entry.date else today_iso(),
        meal_type=entry.meal_type,
        food_name=entry.food_name,
        calories=entry.calories,
        protein=entry.protein,
        carbs=entry.carbs,
        fat=entry.fat,
    )
    await log.insert()
    return {"success": True, "data": to_response(log)}


@router.get("/log")
async def get_nutrition_log(
    user_id: UUID = Query(..., alias="userId"),
    log_date: Optional[str] = Query(None, alias="date")
):
    """One day's entries, most recent first, with macro totals."""
    day = log_date or today_iso()
    logs = await NutritionLogDocument.find(
        NutritionLogDocument.user_id == user_id,
        NutritionLogDocument.date == day
    ).sort(-NutritionLogDocument.created_at).to_list()

    totals = {field: sum(getattr(log, field) or 0 for log in logs) for field in MACRO_FIELDS}
    return {"meals": [to_response(log) for log in logs], "totals": totals}
