"""FitTrack API - Document serialization helpers."""

from typing import Any, Dict, Optional
from uuid import UUID

from beanie import Document


def to_response(document: Optional[Document], **extra: Any) -> Optional[Dict[str, Any]]:
    """
    JSON-ready dict for ``document``.

    The Mongo ``_id`` and revision are dropped and ``uid`` is exposed as
    ``id``. Keyword arguments are merged into the result.
    """
    if document is None:
        return None
    data = document.model_dump(mode="json", exclude={"id", "revision_id"})
    data["id"] = data.pop("uid", None)
    data.update(extra)
    return data


def parse_uuid(value: Any) -> Optional[UUID]:
    """UUID from ``value`` or None when it is missing or malformed."""
    if isinstance(value, UUID):
        return value
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        return None
