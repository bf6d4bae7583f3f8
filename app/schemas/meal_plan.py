"""
FitTrack API - Meal Plan Schemas.

Pydantic schemas for meal plan generation, meal swaps and meal edits.
"""

from datetime import date
from typing import Optional, List, Dict, Any, Literal
from uuid import UUID

from pydantic import Field, ConfigDict

from app.schemas.base import CamelModel


PlanType = Literal["daily", "weekly", "monthly", "custom"]


class GenerateMealPlanRequest(CamelModel):
    """
    Schema for meal plan generation.

    Attributes:
        user_id: Owner of the plan.
        plan_date: First day of the plan.
        plan_type: Plan length (daily/weekly/monthly/custom).
        custom_days: Length of a custom plan.
        target_calories: Daily calorie target; stored goals when omitted.
        meals_per_day: Meals per day (3-6); stored preference when omitted.
        meals: Pre-built meals used for every day instead of Gemini.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": "550e8400-e29b-41d4-a716-446655440000",
                "planDate": "2025-01-06",
                "planType": "weekly",
                "targetCalories": 2000,
                "mealsPerDay": 3,
                "macroDistribution": "balanced"
            }
        }
    )

    user_id: UUID
    plan_date: date
    plan_type: PlanType = "daily"
    custom_days: int = Field(7, ge=1, le=90)
    target_calories: Optional[int] = Field(None, gt=0)
    meals_per_day: Optional[int] = Field(None, ge=1, le=6)
    diet_type: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)
    cuisine_preferences: List[str] = Field(default_factory=list)
    macro_distribution: str = "balanced"
    generate_shopping_list: bool = True
    location: str = "Pakistan"
    health_conditions: List[str] = Field(default_factory=list)
    fitness_goal: Optional[str] = None
    meals: Optional[List[Dict[str, Any]]] = None


class MealContent(CamelModel):
    """Editable content of a meal (snake_case keys as stored)."""

    meal_name: Optional[str] = None
    meal_type: Optional[str] = None
    calories: Optional[int] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    prep_time: Optional[int] = Field(None, ge=0)
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    image: Optional[str] = None


class MealSwapRequest(CamelModel):
    """Schema for requesting alternatives to a stored meal."""

    user_id: UUID
    meal_id: str
    meal_type: Optional[str] = None
    target_calories: int = Field(500, ge=0)
    diet_type: str = "standard"
    allergies: List[str] = Field(default_factory=list)
    cuisine_preferences: List[str] = Field(default_factory=list)


class ApplyMealSwapRequest(CamelModel):
    """Schema for replacing a stored meal with a chosen alternative."""

    meal_id: str
    new_meal: MealContent


class RegenerateMealRequest(CamelModel):
    """Overrides for regenerating a single meal; stored preferences fill the rest."""

    target_calories: Optional[int] = Field(None, ge=0)
    diet_type: Optional[str] = None
    allergies: Optional[List[str]] = None
    cuisine_preferences: Optional[List[str]] = None
    macro_distribution: str = "balanced"


class AddMealRequest(MealContent):
    """Custom meal added by the user to an existing plan."""

    plan_id: str
    meal_name: str = Field(..., min_length=1)
    meal_type: str = Field(..., min_length=1)
    day_index: int = Field(0, ge=0)
    day_date: Optional[date] = None
