"""
FitTrack API - Strict decoding of Gemini output.

Model text is reduced to its JSON payload (code fences stripped, first
array or object extracted) and validated against pydantic schemas. The
outcome is a tagged result: ``DecodeOk`` carrying validated payloads, or
``DecodeError`` carrying the reason, which callers answer with the
static tables in ``fixed_plans``.
"""

import logging
import re
from dataclasses import dataclass
from typing import Annotated, Any, Generic, List, Optional, TypeVar, Union

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError as PydanticValidationError,
)

from app.utils.parsing import parse_number, parse_reps_value


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class DecodeOk(Generic[T]):
    """Model output decoded and validated."""

    value: T


@dataclass(frozen=True)
class DecodeError:
    """Model output unusable; fall back to static data."""

    reason: str


DecodeResult = Union[DecodeOk, DecodeError]


def _non_negative(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return max(0.0, value)


def _text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, list):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    return value


LenientNumber = Annotated[Optional[float], BeforeValidator(parse_number), AfterValidator(_non_negative)]
TextList = Annotated[List[str], BeforeValidator(_text_list)]


class AIMealPayload(BaseModel):
    """Meal as returned by Gemini (both prompt dialects)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    meal_type: Optional[str] = Field(None, validation_alias=AliasChoices("meal_type", "type"))
    meal_name: Optional[str] = Field(None, validation_alias=AliasChoices("meal_name", "name"))
    calories: LenientNumber = None
    protein: LenientNumber = Field(None, validation_alias=AliasChoices("protein", "protein_g"))
    carbs: LenientNumber = Field(None, validation_alias=AliasChoices("carbs", "carbs_g"))
    fat: LenientNumber = Field(None, validation_alias=AliasChoices("fat", "fat_g"))
    prep_time: LenientNumber = Field(None, validation_alias=AliasChoices("prep_time", "prep_time_minutes"))
    ingredients: TextList = Field(default_factory=list)
    instructions: TextList = Field(default_factory=list)


class AIExercisePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(validation_alias=AliasChoices("name", "exercise_name"))
    targetMuscles: TextList = Field(default_factory=list)
    sets: LenientNumber = None
    reps: Annotated[int, BeforeValidator(parse_reps_value)] = 10
    restSeconds: LenientNumber = None
    instructions: Optional[str] = None
    modifications: Optional[dict] = None
    safety: Optional[str] = None


class AIWorkoutDayPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    day: Optional[str] = None
    focus: Optional[str] = None
    warmup: Optional[str] = None
    exercises: List[AIExercisePayload] = Field(default_factory=list)
    cooldown: Optional[str] = None
    totalCalorieEstimate: LenientNumber = None


class AIWorkoutPlanPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    workoutPlan: List[AIWorkoutDayPayload]
    weeklyGoals: Optional[str] = None
    progressionTips: Optional[str] = None


_meal_list_adapter = TypeAdapter(List[AIMealPayload])
_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences around model output."""
    return _FENCE_PATTERN.sub("", text or "").strip()


def extract_json_span(text: str, opener: str) -> Optional[str]:
    """
    Slice from the first ``opener`` ("[" or "{") to the last matching closer.

    Returns None when no such span exists.
    """
    closer = "]" if opener == "[" else "}"
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def _decode(text: str, opener: str, validate) -> DecodeResult:
    span = extract_json_span(strip_code_fences(text), opener)
    if span is None:
        return DecodeError(reason=f"no JSON {'array' if opener == '[' else 'object'} in model output")
    try:
        return DecodeOk(value=validate(span))
    except PydanticValidationError as e:
        logger.warning(f"Model output failed validation: {e.error_count()} error(s)")
        return DecodeError(reason=str(e))


def decode_meal_list(text: str) -> DecodeResult:
    """Decode a JSON array of meals."""
    result = _decode(text, "[", _meal_list_adapter.validate_json)
    if isinstance(result, DecodeOk) and not result.value:
        return DecodeError(reason="model returned no meals")
    return result


def decode_meal(text: str) -> DecodeResult:
    """Decode a single JSON meal object."""
    return _decode(text, "{", AIMealPayload.model_validate_json)


def decode_workout_plan(text: str) -> DecodeResult:
    """Decode a ``{"workoutPlan": [...]}`` object."""
    return _decode(text, "{", AIWorkoutPlanPayload.model_validate_json)


def _score(upper: int):
    def clamp(value: Optional[float]) -> Optional[int]:
        return None if value is None else min(round(value), upper)
    return clamp


class AIReviewModificationPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    meal_type: Optional[str] = None
    current_meal: Optional[str] = None
    suggested_meal: str
    reason: Optional[str] = None
    nutrition_change: Optional[str] = None


class AINutritionAnalysisPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    calorie_alignment: Optional[str] = None
    macro_balance: Optional[str] = None
    micronutrients: Optional[str] = None


class AIMealPlanReviewPayload(BaseModel):
    """Meal plan review; scores are clamped to 0-100 and 0-10."""

    model_config = ConfigDict(extra="ignore")

    overall_score: Annotated[LenientNumber, AfterValidator(_score(100))]
    summary: str
    strengths: TextList = Field(default_factory=list)
    areas_for_improvement: TextList = Field(default_factory=list)
    nutrition_analysis: AINutritionAnalysisPayload = Field(default_factory=AINutritionAnalysisPayload)
    modifications: List[AIReviewModificationPayload] = Field(default_factory=list)
    personalized_suggestions: TextList = Field(default_factory=list)
    meal_variety_score: Annotated[LenientNumber, AfterValidator(_score(10))] = None
    diet_adherence: Optional[str] = None
    health_goal_alignment: Optional[str] = None


def decode_meal_plan_review(text: str) -> DecodeResult:
    """Decode a meal plan review object; ``overall_score`` and ``summary`` are required."""
    return _decode(text, "{", AIMealPlanReviewPayload.model_validate_json)
