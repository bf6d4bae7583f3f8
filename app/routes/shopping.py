# app/routes/shopping.py
"""
FitTrack API - Shopping List Routes.

Shopping lists are derived from meal plans at generation time; clients
can read them, check items off and delete whole lists.
"""

from fastapi import APIRouter, Query
from typing import Optional
from uuid import UUID
import logging

from app.models.mongodb import ShoppingListDocument, ShoppingListItemDocument
from app.schemas.shopping import ShoppingItemUpdate
from app.services.plan_store import delete_shopping_lists, load_shopping_lists
from app.utils.documents import parse_uuid, to_response
from app.utils.errors import NotFoundError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def get_shopping_lists(
    user_id: UUID = Query(..., alias="userId"),
    meal_plan_id: Optional[str] = Query(None, alias="mealPlanId")
):
    """A user's shopping lists, newest first, optionally for one meal plan."""
    plan_ids = None
    if meal_plan_id:
        plan_uid = parse_uuid(meal_plan_id)
        if not plan_uid:
            return {"shoppingLists": []}
        plan_ids = [plan_uid]

    return {"shoppingLists": await load_shopping_lists(user_id=user_id, meal_plan_ids=plan_ids)}


@router.put("")
async def update_shopping_item(request: ShoppingItemUpdate):
    """Check or uncheck one shopping list item."""
    uid = parse_uuid(request.item_id)
    item = await ShoppingListItemDocument.find_one(ShoppingListItemDocument.uid == uid) if uid else None
    if not item:
        raise NotFoundError(message="Shopping list item not found")

    item.checked = request.checked
    await item.save()
    return {"success": True, "item": to_response(item)}


@router.delete("")
async def delete_shopping_list(list_id: str = Query(..., alias="listId")):
    """Delete a shopping list and its items."""
    uid = parse_uuid(list_id)
    shopping_list = await ShoppingListDocument.find_one(ShoppingListDocument.uid == uid) if uid else None
    if not shopping_list:
        raise NotFoundError(message="Shopping list not found")

    await delete_shopping_lists([shopping_list.uid])
    logger.info(f"Deleted shopping list {shopping_list.uid}")
    return {"success": True}
