"""
FitTrack API - Activity and Nutrition Log Schemas.
"""

import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel


class ActivityLogRequest(CamelModel):
    """
    Schema for logging an activity.

    Attributes:
        exercise_type: Activity name (running, cycling, ...).
        duration_minutes: Activity length.
        date: Day of the activity; today when omitted.
    """

    user_id: UUID
    exercise_type: str = Field(..., min_length=1)
    duration_minutes: int = Field(..., gt=0)
    intensity: str = "moderate"
    calories_burned: int = Field(0, ge=0)
    date: Optional[datetime.date] = None
    notes: Optional[str] = None


class DeleteActivityRequest(CamelModel):
    id: str
    user_id: UUID


class NutritionEntry(CamelModel):
    """Food intake entry; ``mealType``/``meal_type`` spellings both accepted."""

    food_name: str = Field(..., min_length=1)
    meal_type: Optional[str] = None
    date: Optional[datetime.date] = None
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)


class NutritionLogRequest(CamelModel):
    user_id: UUID
    meal_data: NutritionEntry
