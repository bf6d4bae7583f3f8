"""
FitTrack API - MongoDB Models Package.

Export all Beanie ODM models for MongoDB operations.
"""

from app.models.mongodb import (
    ALL_DOCUMENTS,
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
    SessionExercise,
    ActivityLogDocument,
    NutritionLogDocument,
    AIConversationDocument,
    ConversationMessage,
)

__all__ = [
    "ALL_DOCUMENTS",
    "UserProfileDocument",
    "HealthGoalsDocument",
    "DietaryPreferencesDocument",
    "MedicalHistoryDocument",
    "FitnessDataDocument",
    "MealPlanDocument",
    "MealDocument",
    "ShoppingListDocument",
    "ShoppingListItemDocument",
    "WorkoutPlanDocument",
    "WorkoutSessionDocument",
    "SessionExercise",
    "ActivityLogDocument",
    "NutritionLogDocument",
    "AIConversationDocument",
    "ConversationMessage",
]
