"""
FitTrack API - Meal Plan Storage.

Queries and cascade deletes that keep plans, meals, shopping lists and
shopping list items consistent. Nothing here leaves an orphan: removing
a plan removes its meals, its lists and their items.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from beanie.operators import In

from app.models.mongodb import (
    MealDocument,
    MealPlanDocument,
    ShoppingListDocument,
    ShoppingListItemDocument,
)
from app.services.shopping_list import ShoppingListEntry
from app.utils.documents import to_response


logger = logging.getLogger(__name__)


async def find_overlapping_plans(user_id: UUID, start: str, end: str) -> List[MealPlanDocument]:
    """Plans of ``user_id`` whose date range intersects ``[start, end]``."""
    return await MealPlanDocument.find(
        MealPlanDocument.user_id == user_id,
        MealPlanDocument.plan_date <= end,
        MealPlanDocument.plan_end_date >= start
    ).to_list()


async def delete_shopping_lists(list_ids: List[UUID]) -> None:
    """Delete shopping lists and their items."""
    if not list_ids:
        return
    await ShoppingListItemDocument.find(In(ShoppingListItemDocument.shopping_list_id, list_ids)).delete()
    await ShoppingListDocument.find(In(ShoppingListDocument.uid, list_ids)).delete()


async def delete_plans(plan_ids: List[UUID]) -> None:
    """Delete meal plans with their meals, shopping lists and items."""
    if not plan_ids:
        return
    lists = await ShoppingListDocument.find(In(ShoppingListDocument.meal_plan_id, plan_ids)).to_list()
    await delete_shopping_lists([shopping_list.uid for shopping_list in lists])
    await MealDocument.find(In(MealDocument.plan_id, plan_ids)).delete()
    await MealPlanDocument.find(In(MealPlanDocument.uid, plan_ids)).delete()
    logger.info(f"Deleted {len(plan_ids)} meal plan(s) with their meals and shopping lists")


async def save_shopping_list(
    user_id: UUID,
    meal_plan_id: Optional[UUID],
    name: str,
    entries: List[ShoppingListEntry]
) -> Dict[str, Any]:
    """Persist a shopping list with its items; returns the list with ``items``."""
    shopping_list = ShoppingListDocument(user_id=user_id, meal_plan_id=meal_plan_id, name=name)
    await shopping_list.insert()

    items = [
        ShoppingListItemDocument(shopping_list_id=shopping_list.uid, **entry.to_dict())
        for entry in entries
    ]
    if items:
        await ShoppingListItemDocument.insert_many(items)

    return to_response(shopping_list, items=[to_response(item) for item in items])


async def load_shopping_lists(
    user_id: Optional[UUID] = None,
    meal_plan_ids: Optional[List[UUID]] = None
) -> List[Dict[str, Any]]:
    """Shopping lists (newest first) with their items sorted by category."""
    criteria = []
    if user_id is not None:
        criteria.append(ShoppingListDocument.user_id == user_id)
    if meal_plan_ids is not None:
        criteria.append(In(ShoppingListDocument.meal_plan_id, meal_plan_ids))

    lists = await ShoppingListDocument.find(*criteria).sort(-ShoppingListDocument.created_at).to_list()
    if not lists:
        return []

    items = await ShoppingListItemDocument.find(
        In(ShoppingListItemDocument.shopping_list_id, [shopping_list.uid for shopping_list in lists])
    ).to_list()
    by_list: Dict[UUID, List[Dict[str, Any]]] = {}
    for item in sorted(items, key=lambda item: item.category):
        by_list.setdefault(item.shopping_list_id, []).append(to_response(item))

    return [to_response(shopping_list, items=by_list.get(shopping_list.uid, [])) for shopping_list in lists]


async def load_plan_bundles(plans: List[MealPlanDocument]) -> List[Dict[str, Any]]:
    """
    Plans with their meals (ordered by day) and shopping lists.

    Args:
        plans: Plans in the order they should be returned.
    """
    if not plans:
        return []

    plan_ids = [plan.uid for plan in plans]
    meals = await MealDocument.find(In(MealDocument.plan_id, plan_ids)).to_list()
    meals_by_plan: Dict[UUID, List[MealDocument]] = {}
    for meal in meals:
        meals_by_plan.setdefault(meal.plan_id, []).append(meal)

    lists_by_plan: Dict[str, List[Dict[str, Any]]] = {}
    for shopping_list in await load_shopping_lists(meal_plan_ids=plan_ids):
        lists_by_plan.setdefault(shopping_list["meal_plan_id"], []).append(shopping_list)

    bundles = []
    for plan in plans:
        plan_meals = sorted(meals_by_plan.get(plan.uid, []), key=lambda meal: meal.day_index)
        bundles.append(to_response(
            plan,
            meals=[to_response(meal) for meal in plan_meals],
            shopping_lists=lists_by_plan.get(str(plan.uid), []),
        ))
    return bundles
