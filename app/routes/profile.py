# app/routes/profile.py
"""
FitTrack API - Profile Routes.

Read and update the per-user profile sections: basic profile, health
goals, dietary preferences, medical history and fitness data.
"""

from fastapi import APIRouter, Query
from typing import Dict, Any
from uuid import UUID
import logging

from app.models.mongodb import (
    DietaryPreferencesDocument,
    FitnessDataDocument,
    HealthGoalsDocument,
    MedicalHistoryDocument,
    UserProfileDocument,
)
from app.schemas.profile import UpdateProfileRequest
from app.utils.dates import utcnow
from app.utils.documents import to_response

logger = logging.getLogger(__name__)
router = APIRouter()

# Request attribute -> (response key, document)
PROFILE_SECTIONS = {
    "profile_data": ("profile", UserProfileDocument),
    "goals_data": ("goals", HealthGoalsDocument),
    "dietary_data": ("dietary", DietaryPreferencesDocument),
    "medical_data": ("medical", MedicalHistoryDocument),
    "fitness_data": ("fitness", FitnessDataDocument),
}


def _present_values(section) -> Dict[str, Any]:
    """Values the client sent; nulls and empty strings are dropped, lists kept."""
    return {
        key: value
        for key, value in section.model_dump(exclude_none=True).items()
        if value != ""
    }


async def _upsert_section(document_class, user_id: UUID, values: Dict[str, Any]):
    document = await document_class.find_one(document_class.user_id == user_id)
    if document:
        for key, value in values.items():
            setattr(document, key, value)
        document.updated_at = utcnow()
        await document.save()
    else:
        document = document_class(user_id=user_id, **values)
        await document.insert()
    return document


@router.get("/profile")
async def get_profile(user_id: UUID = Query(..., alias="userId")):
    """Every profile section of the user; missing sections are null."""
    result = {}
    for key, document_class in PROFILE_SECTIONS.values():
        document = await document_class.find_one(document_class.user_id == user_id)
        result[key] = to_response(document)
    return result


@router.put("/profile")
async def update_profile(request: UpdateProfileRequest):
    """
    Upsert the profile sections present in the request.

    Returns:
        dict: ``success`` and one ``{table, success}`` entry per section written.
    """
    results = []
    for attribute, (key, document_class) in PROFILE_SECTIONS.items():
        section = getattr(request, attribute)
        if section is None:
            continue
        await _upsert_section(document_class, request.user_id, _present_values(section))
        results.append({"table": document_class.get_collection_name(), "success": True})

    logger.info(f"Profile updated for user:{request.user_id} ({len(results)} section(s))")
    return {"success": True, "results": results}
