# app/routes/workouts.py
"""
FitTrack API - Workout Routes.

Workout plans and their sessions. Sessions embed their exercises;
deleting a plan deletes its sessions.
"""

from fastapi import APIRouter, Query
from typing import Optional, List, Dict, Any
from uuid import UUID
import logging

from beanie.operators import In

from app.models.mongodb import SessionExercise, WorkoutPlanDocument, WorkoutSessionDocument
from app.schemas.workout import (
    CreateSessionRequest,
    CreateWorkoutPlanRequest,
    UpdateSessionRequest,
    UpdateWorkoutPlanRequest,
)
from app.utils.dates import add_days, as_naive_utc, next_weekday, start_of_week, today_iso, utcnow
from app.utils.documents import parse_uuid, to_response
from app.utils.errors import NotFoundError, ValidationError
from app.utils.parsing import parse_int_value, parse_reps_value

logger = logging.getLogger(__name__)
router = APIRouter()

TEXT_LIMIT = 100
MINUTES_PER_SESSION = 45


def truncate_to_limit(value: Optional[str], limit: int = TEXT_LIMIT) -> Optional[str]:
    """``value`` cut to ``limit`` characters, ending in "..." when shortened."""
    if not value:
        return None
    return value[:limit - 3] + "..." if len(value) > limit else value


async def _get_plan(plan_id: Optional[str]) -> WorkoutPlanDocument:
    uid = parse_uuid(plan_id)
    plan = await WorkoutPlanDocument.find_one(WorkoutPlanDocument.uid == uid) if uid else None
    if not plan:
        raise NotFoundError(message="Workout plan not found")
    return plan


async def _get_session(session_id: Optional[str]) -> WorkoutSessionDocument:
    uid = parse_uuid(session_id)
    session = await WorkoutSessionDocument.find_one(WorkoutSessionDocument.uid == uid) if uid else None
    if not session:
        raise NotFoundError(message="Workout session not found")
    return session


def _session_exercise(raw: Dict[str, Any], position: int) -> SessionExercise:
    """Exercise from a loose client or AI dict; reps and sets strings are parsed."""
    weight = raw.get("weight_kg")
    duration = raw.get("duration_seconds")
    return SessionExercise(
        exercise_name=raw.get("name") or raw.get("exercise_name") or "Exercise",
        exercise_type=raw.get("exercise_type") or "strength",
        sets=parse_int_value(raw.get("sets"), 3),
        reps=parse_reps_value(raw.get("reps")),
        weight_kg=parse_int_value(weight) if weight else None,
        duration_seconds=parse_int_value(duration) if duration else None,
        rest_seconds=parse_int_value(raw.get("rest_seconds") or raw.get("restSeconds"), 60),
        order_index=position,
        notes=raw.get("instructions") or raw.get("notes"),
    )


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

@router.get("/plans")
async def get_workout_plans(user_id: UUID = Query(..., alias="userId")):
    """A user's workout plans, newest first, each with its sessions."""
    plans = await WorkoutPlanDocument.find(
        WorkoutPlanDocument.user_id == user_id
    ).sort(-WorkoutPlanDocument.created_at).to_list()

    sessions_by_plan: Dict[UUID, List[Dict[str, Any]]] = {}
    if plans:
        sessions = await WorkoutSessionDocument.find(
            In(WorkoutSessionDocument.workout_plan_id, [plan.uid for plan in plans])
        ).sort(+WorkoutSessionDocument.session_number).to_list()
        for session in sessions:
            sessions_by_plan.setdefault(session.workout_plan_id, []).append(to_response(session))

    data = [to_response(plan, workout_sessions=sessions_by_plan.get(plan.uid, [])) for plan in plans]
    return {"data": data, "plans": data}


@router.post("/plans", status_code=201)
async def create_workout_plan(request: CreateWorkoutPlanRequest):
    """
    Create a workout plan.

    The end date is ``duration_weeks`` after the start and the weekly
    volume assumes 45 minutes per session.
    """
    start_date = request.start_date.isoformat() if request.start_date else today_iso()
    plan = WorkoutPlanDocument(
        user_id=request.user_id,
        plan_name=truncate_to_limit(request.plan_name),
        plan_type=truncate_to_limit(request.plan_type or "custom"),
        target_goal=truncate_to_limit(request.target_goal or "general"),
        difficulty_level=truncate_to_limit(request.difficulty_level or "moderate"),
        start_date=start_date,
        end_date=add_days(start_date, request.duration_weeks * 7),
        duration_weeks=request.duration_weeks,
        frequency_per_week=request.frequency,
        weekly_duration_minutes=request.frequency * MINUTES_PER_SESSION,
        status="active",
        notes=request.notes or None,
    )
    await plan.insert()
    logger.info(f"Workout plan {plan.uid} created for user:{request.user_id}")
    return {"plan": to_response(plan)}


@router.patch("/plans")
async def update_workout_plan(request: UpdateWorkoutPlanRequest):
    plan = await _get_plan(request.plan_id)
    updates = request.model_dump(exclude_none=True, exclude={"plan_id"})
    for field, value in updates.items():
        if field in ("plan_name", "plan_type", "target_goal", "difficulty_level"):
            value = truncate_to_limit(value)
        setattr(plan, field, value)
    plan.updated_at = utcnow()
    await plan.save()
    return {"plan": to_response(plan)}


@router.delete("/plans")
async def delete_workout_plan(plan_id: str = Query(..., alias="planId")):
    """Delete a workout plan and its sessions."""
    plan = await _get_plan(plan_id)
    await WorkoutSessionDocument.find(WorkoutSessionDocument.workout_plan_id == plan.uid).delete()
    await plan.delete()
    return {"success": True}


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

@router.get("/sessions")
async def get_workout_sessions(
    plan_id: Optional[str] = Query(None, alias="planId"),
    session_id: Optional[str] = Query(None, alias="sessionId")
):
    """One session by ``sessionId``, or every session of ``planId`` in order."""
    if session_id:
        session = await _get_session(session_id)
        return {"session": to_response(session)}

    if not plan_id:
        raise ValidationError(message="Plan ID or Session ID required")

    plan = await _get_plan(plan_id)
    sessions = await WorkoutSessionDocument.find(
        WorkoutSessionDocument.workout_plan_id == plan.uid
    ).sort(+WorkoutSessionDocument.session_number).to_list()
    return {"sessions": [to_response(session) for session in sessions]}


@router.post("/sessions", status_code=201)
async def create_workout_session(request: CreateSessionRequest):
    """
    Add a session to a plan.

    Without an explicit date, a ``dayOfWeek`` schedules the session on
    that day's next occurrence (today included); otherwise today.
    """
    plan = await _get_plan(request.plan_id)

    if request.session_date:
        session_date = request.session_date.isoformat()
    else:
        session_date = next_weekday(request.day_of_week) if request.day_of_week else None
        session_date = session_date or today_iso()

    session = WorkoutSessionDocument(
        workout_plan_id=plan.uid,
        session_name=request.session_name,
        session_date=session_date,
        day_of_week=request.day_of_week,
        session_number=request.session_number,
        duration_minutes=request.duration,
        intensity=request.intensity or "moderate",
        completed=False,
        exercises=[_session_exercise(raw, position) for position, raw in enumerate(request.exercises, start=1)],
    )
    await session.insert()
    return {"session": to_response(session)}


@router.patch("/sessions")
async def update_workout_session(request: UpdateSessionRequest):
    """Update a session; completing it stamps the completion time."""
    session = await _get_session(request.session_id)

    if request.completed is not None:
        session.completed = request.completed
        if request.completed:
            session.completion_date = request.completion_date or utcnow()
    if request.calories_burned is not None:
        session.calories_burned = request.calories_burned
    if request.notes is not None:
        session.notes = request.notes
    if request.duration_minutes is not None:
        session.duration_minutes = request.duration_minutes
    if request.intensity is not None:
        session.intensity = request.intensity

    session.updated_at = utcnow()
    await session.save()
    return {"session": to_response(session)}


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

@router.get("/stats")
async def get_workout_stats(user_id: UUID = Query(..., alias="userId")):
    """
    Completed session counts, plus calories and minutes for the current
    week (weeks start on Sunday).
    """
    plans = await WorkoutPlanDocument.find(WorkoutPlanDocument.user_id == user_id).to_list()
    sessions = []
    if plans:
        sessions = await WorkoutSessionDocument.find(
            In(WorkoutSessionDocument.workout_plan_id, [plan.uid for plan in plans])
        ).to_list()
    completed = [session for session in sessions if session.completed]

    week_start = start_of_week()
    this_week = [
        session for session in completed
        if session.completion_date and as_naive_utc(session.completion_date) >= week_start
    ]

    return {
        "weeklyWorkouts": len(this_week),
        "totalSessions": len(completed),
        "totalCaloriesThisWeek": sum(session.calories_burned or 0 for session in this_week),
        "totalDurationThisWeek": sum(session.duration_minutes or 0 for session in this_week),
    }
