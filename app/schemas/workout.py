"""
FitTrack API - Workout Schemas.

Pydantic schemas for workout plans and their sessions.
"""

import datetime
from typing import Optional, List, Dict, Any
from uuid import UUID

from pydantic import Field, ConfigDict

from app.schemas.base import CamelModel


class CreateWorkoutPlanRequest(CamelModel):
    """
    Schema for creating a workout plan.

    Attributes:
        plan_name: Display name (stored truncated to 100 characters).
        start_date: First day; today when omitted.
        duration_weeks: Plan length in weeks.
        frequency: Sessions per week.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": "550e8400-e29b-41d4-a716-446655440000",
                "planName": "Beginner Strength",
                "startDate": "2025-01-06",
                "durationWeeks": 4,
                "frequency": 3
            }
        }
    )

    user_id: UUID
    plan_name: str = Field(..., min_length=1)
    plan_type: Optional[str] = None
    start_date: Optional[datetime.date] = None
    frequency: int = Field(3, ge=1, le=7)
    target_goal: Optional[str] = None
    difficulty_level: Optional[str] = None
    duration_weeks: int = Field(4, ge=1, le=52)
    notes: Optional[str] = None


class UpdateWorkoutPlanRequest(CamelModel):
    plan_id: str
    plan_name: Optional[str] = None
    plan_type: Optional[str] = None
    target_goal: Optional[str] = None
    difficulty_level: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class CreateSessionRequest(CamelModel):
    """
    Schema for adding a session to a workout plan.

    ``exercises`` entries are loose dicts as produced by the workout
    suggestion endpoint (``name``, ``sets``, ``reps``, ``restSeconds``...).
    """

    plan_id: str
    session_name: str = Field(..., min_length=1)
    day_of_week: Optional[str] = None
    session_number: int = Field(1, ge=1)
    duration: int = Field(45, gt=0)
    intensity: str = "moderate"
    exercises: List[Dict[str, Any]] = Field(default_factory=list)
    session_date: Optional[datetime.date] = None


class UpdateSessionRequest(CamelModel):
    session_id: str
    completed: Optional[bool] = None
    completion_date: Optional[datetime.datetime] = None
    calories_burned: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, gt=0)
    intensity: Optional[str] = None
