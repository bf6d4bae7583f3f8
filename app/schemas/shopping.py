"""
FitTrack API - Shopping Schemas.
"""

from pydantic import ConfigDict

from app.schemas.base import CamelModel


class ShoppingItemUpdate(CamelModel):
    """
    Schema for checking off a shopping list item.

    Attributes:
        item_id: Shopping list item to update.
        checked: New checked state.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "itemId": "550e8400-e29b-41d4-a716-446655440000",
                "checked": True
            }
        }
    )

    item_id: str
    checked: bool
