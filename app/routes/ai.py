# app/routes/ai.py
"""
FitTrack API - AI Routes.

Gemini-backed meal plan and workout suggestions and meal plan reviews,
all rate limited per user, plus the conversational coach and its stored
conversations.
"""

from fastapi import APIRouter, Query
from typing import Optional, List, Dict, Any
from uuid import UUID, uuid4
import logging

from app.middleware.rate_limit import ai_rate_limiter, ai_review_rate_limiter
from app.models.mongodb import (
    ActivityLogDocument,
    AIConversationDocument,
    ConversationMessage,
    DietaryPreferencesDocument,
    FitnessDataDocument,
    HealthGoalsDocument,
    MealDocument,
    MealPlanDocument,
    MedicalHistoryDocument,
    NutritionLogDocument,
    UserProfileDocument,
    WorkoutPlanDocument,
)
from app.schemas.ai import (
    AssistantRequest,
    ChatMessage,
    MealPlanReviewRequest,
    MealPlanSuggestionRequest,
    WorkoutSuggestionRequest,
)
from app.services.coach import build_coach_system_prompt, calculate_nutrition_stats, to_chat_history
from app.services.gemini import GeminiNotConfiguredError, gemini_service
from app.services.meal_planning import build_suggestion_prompt, suggest_meal_plan
from app.services.meal_review import build_review_prompt, review_meal_plan
from app.services.workout_planning import build_workout_prompt, suggest_workout_plan
from app.utils.dates import utcnow
from app.utils.documents import parse_uuid
from app.utils.errors import NotFoundError, UpstreamServiceError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()

NOT_CONFIGURED_MESSAGE = "AI service not configured"
PREVIEW_LENGTH = 60
CONVERSATION_PAGE_SIZE = 50
RECENT_NUTRITION_LOGS = 14
ACTIVE_PLAN_LIMIT = 5


def _dump(document) -> Optional[Dict[str, Any]]:
    return document.model_dump(mode="json") if document else None


def _ensure_configured() -> None:
    if not gemini_service.is_configured:
        logger.error("AI request rejected: GEMINI_API_KEY is not set")
        raise UpstreamServiceError(message=NOT_CONFIGURED_MESSAGE)


def _upstream_error(message: str, error: Exception) -> UpstreamServiceError:
    """Map a model failure to 429 when the upstream reported a quota error, else 500."""
    if isinstance(error, GeminiNotConfiguredError):
        return UpstreamServiceError(message=NOT_CONFIGURED_MESSAGE)
    detail = str(error)
    status_code = 429 if "429" in detail else 500
    return UpstreamServiceError(message=message, detail=detail, status_code=status_code)


@router.post("/meal-plan-suggestion")
async def meal_plan_suggestion(request: MealPlanSuggestionRequest):
    """
    Suggest a one-day meal plan.

    Limited to ``AI_RATE_LIMIT`` requests per user. Output that cannot
    be decoded is replaced by a generic static plan.
    """
    ai_rate_limiter.check(request.user_id)
    _ensure_configured()

    profile = await UserProfileDocument.find_one(UserProfileDocument.user_id == request.user_id)
    goals = await HealthGoalsDocument.find_one(HealthGoalsDocument.user_id == request.user_id)

    prompt = build_suggestion_prompt(
        target_calories=request.target_calories,
        meals_per_day=request.meals_per_day,
        diet_type=request.diet_type,
        allergies=request.allergies,
        cuisine_preferences=request.cuisine_preferences,
        fitness_goal=request.fitness_goal,
        macro_distribution=request.macro_distribution,
        profile=_dump(profile),
        goals=_dump(goals),
    )

    try:
        meal_plan = await suggest_meal_plan(prompt, request.meals_per_day, request.target_calories)
    except Exception as e:
        logger.error(f"Gemini meal plan suggestion failed for user:{request.user_id}: {e}")
        raise _upstream_error("Failed to generate meal plan suggestion", e)

    return {"success": True, "mealPlan": meal_plan}


@router.post("/workout-suggestion")
async def workout_suggestion(request: WorkoutSuggestionRequest):
    """
    Suggest a weekly workout plan.

    Stored fitness data fills the level, goal and equipment the request
    leaves at their defaults; the user's last activities are added as
    context.
    """
    ai_rate_limiter.check(request.user_id)
    _ensure_configured()

    fitness = await FitnessDataDocument.find_one(FitnessDataDocument.user_id == request.user_id)
    recent_activities = await ActivityLogDocument.find(
        ActivityLogDocument.user_id == request.user_id
    ).sort(-ActivityLogDocument.date).limit(10).to_list()

    fitness_level = request.fitness_level
    equipment = request.equipment
    if fitness:
        if request.fitness_level == "moderate" and fitness.fitness_level:
            fitness_level = fitness.fitness_level
        equipment = equipment or fitness.equipment_access

    prompt = build_workout_prompt(
        fitness_level=fitness_level,
        fitness_goal=request.fitness_goal,
        workout_days=request.workout_days,
        duration_minutes=request.duration_minutes,
        favorite_exercises=request.favorite_exercises,
        injuries_restrictions=request.injuries_restrictions,
        equipment=equipment,
        preferred_location=request.preferred_location,
        recent_activity_types=[activity.exercise_type for activity in recent_activities],
    )

    try:
        workout_plan = await suggest_workout_plan(prompt, request.workout_days, request.duration_minutes)
    except Exception as e:
        logger.error(f"Gemini workout suggestion failed for user:{request.user_id}: {e}")
        raise _upstream_error("Failed to generate workout suggestion", e)

    return {"success": True, "workoutPlan": workout_plan}


@router.post("/meal-plan-review")
async def meal_plan_review(request: MealPlanReviewRequest):
    """
    Critique a stored meal plan with Gemini.

    Limited to ``AI_REVIEW_RATE_LIMIT`` requests per user. The plan must
    belong to the requesting user.
    """
    ai_review_rate_limiter.check(request.user_id)

    plan_uid = parse_uuid(request.plan_id)
    plan = await MealPlanDocument.find_one(
        MealPlanDocument.uid == plan_uid,
        MealPlanDocument.user_id == request.user_id
    ) if plan_uid else None
    if not plan:
        raise NotFoundError(message="Meal plan not found")

    _ensure_configured()

    user_id = request.user_id
    meals = await MealDocument.find(MealDocument.plan_id == plan.uid).sort(+MealDocument.day_index).to_list()
    profile = await UserProfileDocument.find_one(UserProfileDocument.user_id == user_id)
    goals = await HealthGoalsDocument.find_one(HealthGoalsDocument.user_id == user_id)
    dietary = await DietaryPreferencesDocument.find_one(DietaryPreferencesDocument.user_id == user_id)
    fitness = await FitnessDataDocument.find_one(FitnessDataDocument.user_id == user_id)
    medical = await MedicalHistoryDocument.find_one(MedicalHistoryDocument.user_id == user_id)

    prompt = build_review_prompt(
        plan=_dump(plan),
        meals=[_dump(meal) for meal in meals],
        review_type=request.review_type,
        profile=_dump(profile),
        goals=_dump(goals),
        dietary=_dump(dietary),
        fitness=_dump(fitness),
        medical=_dump(medical),
    )

    try:
        review = await review_meal_plan(prompt)
    except Exception as e:
        logger.error(f"Gemini meal plan review failed for plan {plan.uid}: {e}")
        raise _upstream_error("Failed to generate meal plan review", e)

    return {"success": True, "review": review}


async def _save_conversation(
    conversation_id: UUID,
    user_id: UUID,
    messages: List[ChatMessage],
    reply: Optional[str] = None
) -> AIConversationDocument:
    """Insert or replace the stored messages of a conversation."""
    now = utcnow()
    stored = [
        ConversationMessage(role=m.role, content=m.content, timestamp=m.timestamp or now.isoformat())
        for m in messages
    ]
    if reply is not None:
        stored.append(ConversationMessage(role="assistant", content=reply, timestamp=now.isoformat()))

    conversation = await AIConversationDocument.find_one(
        AIConversationDocument.uid == conversation_id,
        AIConversationDocument.user_id == user_id
    )
    if conversation:
        conversation.messages = stored
        conversation.updated_at = now
        await conversation.save()
    else:
        conversation = AIConversationDocument(uid=conversation_id, user_id=user_id, messages=stored)
        await conversation.insert()
    return conversation


@router.post("/assistant")
async def assistant(request: AssistantRequest):
    """
    One turn with the AI coach.

    The system prompt carries the user's profile, dietary preferences,
    recent nutrition averages, active plan counts and the plan the user
    is focused on. With ``saveOnly`` the messages are stored and no model
    call is made.
    """
    conversation_id = parse_uuid(request.conversation_id) or uuid4()

    if request.save_only:
        await _save_conversation(conversation_id, request.user_id, request.messages)
        return {"success": True, "conversationId": str(conversation_id)}

    if not request.messages:
        raise ValidationError(message="Messages array is required")
    _ensure_configured()

    user_id = request.user_id
    profile = await UserProfileDocument.find_one(UserProfileDocument.user_id == user_id)
    goals = await HealthGoalsDocument.find_one(HealthGoalsDocument.user_id == user_id)
    dietary = await DietaryPreferencesDocument.find_one(DietaryPreferencesDocument.user_id == user_id)
    workout_plans = await WorkoutPlanDocument.find(
        WorkoutPlanDocument.user_id == user_id,
        WorkoutPlanDocument.status == "active"
    ).limit(ACTIVE_PLAN_LIMIT).to_list()
    meal_plans = await MealPlanDocument.find(
        MealPlanDocument.user_id == user_id,
        MealPlanDocument.status == "active"
    ).limit(ACTIVE_PLAN_LIMIT).to_list()
    nutrition_logs = await NutritionLogDocument.find(
        NutritionLogDocument.user_id == user_id
    ).sort(-NutritionLogDocument.created_at).limit(RECENT_NUTRITION_LOGS).to_list()

    system_prompt = build_coach_system_prompt(
        profile=_dump(profile),
        goals=_dump(goals),
        dietary=_dump(dietary),
        nutrition_stats=calculate_nutrition_stats([_dump(log) for log in nutrition_logs]),
        active_workout_plans=len(workout_plans),
        active_meal_plans=len(meal_plans),
        selected_plan=request.selected_plan,
    )
    messages = [message.model_dump() for message in request.messages]

    try:
        reply = await gemini_service.chat(system_prompt, to_chat_history(messages), messages[-1]["content"])
    except Exception as e:
        logger.error(f"AI coach failed for user:{user_id}: {e}")
        raise _upstream_error("Failed to process request", e)

    await _save_conversation(conversation_id, user_id, request.messages, reply)
    logger.info(f"Conversation {conversation_id} saved for user:{user_id}")

    return {"message": reply, "conversationId": str(conversation_id)}


@router.get("/conversations")
async def list_conversations(user_id: UUID = Query(..., alias="userId")):
    """Most recently updated conversations with a short preview."""
    conversations = await AIConversationDocument.find(
        AIConversationDocument.user_id == user_id
    ).sort(-AIConversationDocument.updated_at).limit(CONVERSATION_PAGE_SIZE).to_list()

    summaries = []
    for conversation in conversations:
        first_user_message = next(
            (m.content for m in conversation.messages if m.role == "user"),
            "New conversation"
        )
        preview = first_user_message[:PREVIEW_LENGTH]
        if len(first_user_message) > PREVIEW_LENGTH:
            preview += "..."
        summaries.append({
            "id": str(conversation.uid),
            "created_at": conversation.created_at.isoformat(),
            "updated_at": conversation.updated_at.isoformat(),
            "preview": preview,
            "messageCount": len(conversation.messages),
        })

    return {"data": summaries}


@router.delete("/conversations")
async def delete_conversation(
    conversation_id: str = Query(..., alias="id"),
    user_id: UUID = Query(..., alias="userId")
):
    uid = parse_uuid(conversation_id)
    conversation = await AIConversationDocument.find_one(
        AIConversationDocument.uid == uid,
        AIConversationDocument.user_id == user_id
    ) if uid else None
    if not conversation:
        raise NotFoundError(message="Conversation not found")

    await conversation.delete()
    return {"success": True}
