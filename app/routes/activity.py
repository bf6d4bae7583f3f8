# app/routes/activity.py
"""
FitTrack API - Activity Log Routes.
"""

from fastapi import APIRouter, Query
from typing import Optional
from uuid import UUID
import logging

from app.models.mongodb import ActivityLogDocument
from app.schemas.tracking import ActivityLogRequest, DeleteActivityRequest
from app.utils.dates import today_iso
from app.utils.documents import parse_uuid, to_response
from app.utils.errors import NotFoundError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/log")
async def log_activity(request: ActivityLogRequest):
    """Record an activity; the date defaults to today."""
    activity = ActivityLogDocument(
        user_id=request.user_id,
        exercise_type=request.exercise_type,
        duration_minutes=request.duration_minutes,
        intensity=request.intensity or "moderate",
        calories_burned=request.calories_burned or 0,
        date=request.date.isoformat() if request.date else today_iso(),
        notes=request.notes or None,
    )
    await activity.insert()
    logger.info(f"Activity logged for user:{request.user_id} ({activity.exercise_type}, {activity.duration_minutes} min)")
    return {"success": True, "data": to_response(activity)}


@router.get("/logs")
async def get_activity_logs(
    user_id: UUID = Query(..., alias="userId"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate")
):
    """A user's activities, newest date first, optionally within a date range."""
    criteria = [ActivityLogDocument.user_id == user_id]
    if start_date:
        criteria.append(ActivityLogDocument.date >= start_date)
    if end_date:
        criteria.append(ActivityLogDocument.date <= end_date)

    activities = await ActivityLogDocument.find(*criteria).sort(-ActivityLogDocument.date).to_list()
    return [to_response(activity) for activity in activities]


@router.delete("/logs")
async def delete_activity_log(request: DeleteActivityRequest):
    uid = parse_uuid(request.id)
    activity = await ActivityLogDocument.find_one(
        ActivityLogDocument.uid == uid,
        ActivityLogDocument.user_id == request.user_id
    ) if uid else None
    if not activity:
        raise NotFoundError(message="Activity not found")

    await activity.delete()
    return {"success": True}
