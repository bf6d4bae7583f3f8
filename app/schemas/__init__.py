"""FitTrack API - Pydantic Schemas Package."""

from app.schemas.base import CamelModel
from app.schemas.meal_plan import (
    GenerateMealPlanRequest,
    MealContent,
    MealSwapRequest,
    ApplyMealSwapRequest,
    RegenerateMealRequest,
)
from app.schemas.shopping import ShoppingItemUpdate
from app.schemas.ai import (
    MealPlanSuggestionRequest,
    WorkoutSuggestionRequest,
    ChatMessage,
    AssistantRequest,
)
from app.schemas.tracking import (
    ActivityLogRequest,
    DeleteActivityRequest,
    NutritionEntry,
    NutritionLogRequest,
)
from app.schemas.profile import (
    ProfileSection,
    GoalsSection,
    DietarySection,
    MedicalSection,
    FitnessSection,
    UpdateProfileRequest,
)
from app.schemas.workout import (
    CreateWorkoutPlanRequest,
    UpdateWorkoutPlanRequest,
    CreateSessionRequest,
    UpdateSessionRequest,
)

__all__ = [
    "CamelModel",
    "GenerateMealPlanRequest",
    "MealContent",
    "MealSwapRequest",
    "ApplyMealSwapRequest",
    "RegenerateMealRequest",
    "ShoppingItemUpdate",
    "MealPlanSuggestionRequest",
    "WorkoutSuggestionRequest",
    "ChatMessage",
    "AssistantRequest",
    "ActivityLogRequest",
    "DeleteActivityRequest",
    "NutritionEntry",
    "NutritionLogRequest",
    "ProfileSection",
    "GoalsSection",
    "DietarySection",
    "MedicalSection",
    "FitnessSection",
    "UpdateProfileRequest",
    "CreateWorkoutPlanRequest",
    "UpdateWorkoutPlanRequest",
    "CreateSessionRequest",
    "UpdateSessionRequest",
]
