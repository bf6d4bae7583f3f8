"""
FitTrack API - AI Schemas.

Pydantic schemas for AI plan suggestions and the coach assistant.
"""

from typing import Optional, List, Dict, Any
from uuid import UUID

from pydantic import Field, ConfigDict

from app.schemas.base import CamelModel


class MealPlanSuggestionRequest(CamelModel):
    """
    Schema for an AI meal plan suggestion.

    Attributes:
        user_id: Requesting user; also the rate limit key.
        target_calories: Daily calorie target.
        meals_per_day: Number of meals to suggest.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": "550e8400-e29b-41d4-a716-446655440000",
                "targetCalories": 1800,
                "mealsPerDay": 4,
                "dietType": "vegetarian",
                "allergies": ["peanuts"]
            }
        }
    )

    user_id: UUID
    target_calories: int = Field(2000, gt=0)
    meals_per_day: int = Field(3, ge=1, le=6)
    diet_type: str = "balanced"
    allergies: List[str] = Field(default_factory=list)
    cuisine_preferences: List[str] = Field(default_factory=list)
    fitness_goal: str = "general"
    macro_distribution: str = "balanced"


class WorkoutSuggestionRequest(CamelModel):
    """Schema for an AI weekly workout suggestion."""

    user_id: UUID
    fitness_level: str = "moderate"
    fitness_goal: str = "general"
    workout_days: int = Field(3, ge=1, le=7)
    duration_minutes: int = Field(45, ge=10, le=180)
    favorite_exercises: List[str] = Field(default_factory=list)
    injuries_restrictions: str = ""
    equipment: List[str] = Field(default_factory=list)
    preferred_location: str = "home"


class ChatMessage(CamelModel):
    role: str
    content: str
    timestamp: Optional[str] = None


class AssistantRequest(CamelModel):
    """
    Schema for one coach turn.

    ``save_only`` stores ``messages`` under ``conversation_id`` without
    calling the model.
    """

    user_id: UUID
    messages: List[ChatMessage] = Field(default_factory=list)
    conversation_id: Optional[str] = None
    selected_plan: Optional[Dict[str, Any]] = None
    save_only: bool = False


class MealPlanReviewRequest(CamelModel):
    """Schema for an AI review of a stored meal plan owned by ``user_id``."""

    user_id: UUID
    plan_id: str
    review_type: str = "comprehensive"
