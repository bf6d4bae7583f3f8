"""
FitTrack API - Profile Schemas.

One schema per stored profile section. Every field is optional; the
update route only writes the values a client actually sends.
"""

from typing import Optional, List
from uuid import UUID

from pydantic import ConfigDict

from app.schemas.base import CamelModel


class ProfileSection(CamelModel):
    full_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    activity_level: Optional[str] = None
    location: Optional[str] = None


class GoalsSection(CamelModel):
    primary_goal: Optional[str] = None
    target_weight: Optional[float] = None
    target_date: Optional[str] = None
    weekly_goal: Optional[float] = None
    daily_calories: Optional[int] = None


class DietarySection(CamelModel):
    diet_type: Optional[str] = None
    allergies: Optional[List[str]] = None
    cuisine_preferences: Optional[List[str]] = None
    disliked_foods: Optional[List[str]] = None
    meals_per_day: Optional[int] = None


class MedicalSection(CamelModel):
    health_conditions: Optional[List[str]] = None
    medications: Optional[List[str]] = None
    injuries: Optional[List[str]] = None
    notes: Optional[str] = None


class FitnessSection(CamelModel):
    fitness_level: Optional[str] = None
    workout_frequency: Optional[int] = None
    preferred_workout_duration: Optional[int] = None
    preferred_workout_types: Optional[List[str]] = None
    equipment_access: Optional[List[str]] = None
    workout_location: Optional[str] = None


class UpdateProfileRequest(CamelModel):
    """
    Schema for a profile update.

    Attributes:
        user_id: Profile owner.
        profile_data: Basic profile values.
        goals_data: Health goal values.
        dietary_data: Dietary preference values.
        fitness_data: Training background values.
        medical_data: Medical history values.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": "550e8400-e29b-41d4-a716-446655440000",
                "profileData": {"full_name": "Ayesha Khan", "age": 29},
                "dietaryData": {"diet_type": "vegetarian", "allergies": ["peanuts"]}
            }
        }
    )

    user_id: UUID
    profile_data: Optional[ProfileSection] = None
    goals_data: Optional[GoalsSection] = None
    dietary_data: Optional[DietarySection] = None
    fitness_data: Optional[FitnessSection] = None
    medical_data: Optional[MedicalSection] = None
