"""FitTrack API - Routes Package."""

from app.routes import (
    activity,
    ai,
    meal_plans,
    meals,
    nutrition,
    profile,
    shopping,
    workouts,
)

__all__ = [
    "activity",
    "ai",
    "meal_plans",
    "meals",
    "nutrition",
    "profile",
    "shopping",
    "workouts",
]
