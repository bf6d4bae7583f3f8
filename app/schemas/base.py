"""
FitTrack API - Schema base classes.

Request bodies use camelCase on the wire; snake_case field names are
accepted as well.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base request model accepting camelCase aliases and field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )
