# app/models/mongodb.py
"""
FitTrack MongoDB Document Models.

Beanie ODM models for MongoDB. Calendar dates are stored as ISO
``YYYY-MM-DD`` strings so range queries compare lexicographically.
"""

from beanie import Document, Indexed
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, Optional, List, Dict, Any
from uuid import UUID, uuid4


# ---------------------------------------------------------------------------
# Profile sections
# ---------------------------------------------------------------------------

class UserProfileDocument(Document):
    """Basic profile for a user."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: Annotated[UUID, Indexed(unique=True)]
    full_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    activity_level: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "user_profiles"

    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "Ayesha Khan",
                "age": 29,
                "gender": "female",
                "height_cm": 163,
                "weight_kg": 62,
                "activity_level": "moderate"
            }
        }


class HealthGoalsDocument(Document):
    """Weight and fitness targets for a user."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: Annotated[UUID, Indexed(unique=True)]
    primary_goal: Optional[str] = None  # weight_loss/muscle_gain/maintenance
    target_weight: Optional[float] = None
    target_date: Optional[str] = None
    weekly_goal: Optional[float] = None
    daily_calories: Optional[int] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "health_goals"


class DietaryPreferencesDocument(Document):
    """Dietary preferences for a user."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: Annotated[UUID, Indexed(unique=True)]
    diet_type: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)
    cuisine_preferences: List[str] = Field(default_factory=list)
    disliked_foods: List[str] = Field(default_factory=list)
    meals_per_day: Optional[int] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "dietary_preferences"


class MedicalHistoryDocument(Document):
    """Medical history for a user."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: Annotated[UUID, Indexed(unique=True)]
    health_conditions: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    injuries: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "medical_history"


class FitnessDataDocument(Document):
    """Training background for a user."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: Annotated[UUID, Indexed(unique=True)]
    fitness_level: Optional[str] = None  # beginner/intermediate/advanced
    workout_frequency: Optional[int] = None
    preferred_workout_duration: Optional[int] = None
    preferred_workout_types: List[str] = Field(default_factory=list)
    equipment_access: List[str] = Field(default_factory=list)
    workout_location: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "fitness_data"


# ---------------------------------------------------------------------------
# Meal plans and shopping lists
# ---------------------------------------------------------------------------

class MealPlanDocument(Document):
    """Meal plan covering one or more consecutive days."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: UUID
    plan_date: str
    plan_end_date: str
    plan_type: str = "daily"  # daily/weekly/monthly/custom
    total_calories: int = 0
    total_meals: int = 0
    status: str = "active"
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "meal_plans"
        indexes = [
            "user_id",
            "plan_date",
            "uid",
        ]


class MealDocument(Document):
    """Single meal belonging to a meal plan."""

    uid: UUID = Field(default_factory=uuid4)
    plan_id: UUID
    meal_type: str
    meal_name: str
    calories: int = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    prep_time: int = 0
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    recipe_uri: Optional[str] = None
    source_url: Optional[str] = None
    day_index: int = 0
    day_date: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "meals"
        indexes = [
            "plan_id",
            "uid",
        ]


class ShoppingListDocument(Document):
    """Shopping list derived from a meal plan."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: UUID
    meal_plan_id: Optional[UUID] = None
    name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "shopping_lists"
        indexes = [
            "user_id",
            "meal_plan_id",
        ]


class ShoppingListItemDocument(Document):
    """Aggregated ingredient line on a shopping list."""

    uid: UUID = Field(default_factory=uuid4)
    shopping_list_id: UUID
    food: str
    quantity: float = 1
    measure: str = "unit"
    category: str
    checked: bool = False

    class Settings:
        name = "shopping_list_items"
        indexes = [
            "shopping_list_id",
            "uid",
        ]


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------

class WorkoutPlanDocument(Document):
    """Workout program spanning several weeks."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: UUID
    plan_name: str
    plan_type: str = "custom"
    target_goal: Optional[str] = None
    difficulty_level: str = "intermediate"
    start_date: str
    end_date: str
    duration_weeks: int = 4
    frequency_per_week: int = 3
    weekly_duration_minutes: int = 135
    status: str = "active"
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "workout_plans"
        indexes = [
            "user_id",
            "uid",
        ]


class SessionExercise(BaseModel):
    """Exercise embedded in a workout session."""

    exercise_name: str
    exercise_type: str = "strength"
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight_kg: Optional[float] = None
    duration_seconds: Optional[int] = None
    rest_seconds: Optional[int] = None
    order_index: int = 1
    notes: Optional[str] = None


class WorkoutSessionDocument(Document):
    """Single training session of a workout plan."""

    uid: UUID = Field(default_factory=uuid4)
    workout_plan_id: UUID
    session_name: str
    session_date: str
    day_of_week: Optional[str] = None
    session_number: int = 1
    duration_minutes: int = 45
    intensity: str = "moderate"
    calories_burned: Optional[int] = None
    completed: bool = False
    completion_date: Optional[datetime] = None
    notes: Optional[str] = None
    exercises: List[SessionExercise] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "workout_sessions"
        indexes = [
            "workout_plan_id",
            "uid",
        ]


# ---------------------------------------------------------------------------
# Logs and conversations
# ---------------------------------------------------------------------------

class ActivityLogDocument(Document):
    """Logged physical activity."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: UUID
    exercise_type: str
    duration_minutes: int
    intensity: str = "moderate"
    calories_burned: int = 0
    date: str
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "activity_logs"
        indexes = [
            "user_id",
            "date",
        ]


class NutritionLogDocument(Document):
    """Logged food intake."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: UUID
    date: str
    meal_type: Optional[str] = None
    food_name: str
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "nutrition_logs"
        indexes = [
            "user_id",
            "date",
        ]


class ConversationMessage(BaseModel):
    """One chat turn."""

    role: str  # user/assistant
    content: str
    timestamp: Optional[str] = None


class AIConversationDocument(Document):
    """Persisted AI coach conversation."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: UUID
    messages: List[ConversationMessage] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "ai_conversations"
        indexes = [
            "user_id",
            "uid",
        ]


ALL_DOCUMENTS = [
    UserProfileDocument,
    HealthGoalsDocument,
    DietaryPreferencesDocument,
    MedicalHistoryDocument,
    FitnessDataDocument,
    MealPlanDocument,
    MealDocument,
    ShoppingListDocument,
    ShoppingListItemDocument,
    WorkoutPlanDocument,
    WorkoutSessionDocument,
    ActivityLogDocument,
    NutritionLogDocument,
    AIConversationDocument,
]
