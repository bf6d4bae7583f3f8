"""Tests for meal plan generation, listing and deletion."""

import json
from uuid import UUID, uuid4

from app.models.mongodb import MealDocument, MealPlanDocument, ShoppingListDocument, ShoppingListItemDocument


def _day_reply():
    return json.dumps([
        {"meal_type": "breakfast", "meal_name": "Anda Paratha", "calories": 500, "protein": 20,
         "carbs": 50, "fat": 20, "prep_time": 15, "ingredients": ["2 eggs", "1 paratha"], "instructions": ["Cook"]},
        {"meal_type": "lunch", "meal_name": "Chicken Karahi", "calories": 600, "protein": 40,
         "carbs": 30, "fat": 25, "prep_time": 40, "ingredients": ["250g chicken", "2 tomatoes"], "instructions": ["Cook"]},
        {"meal_type": "dinner", "meal_name": "Daal Chawal", "calories": 700, "protein": 25,
         "carbs": 100, "fat": 15, "prep_time": 35, "ingredients": ["1 cup rice", "1 cup masoor daal"], "instructions": ["Cook"]},
    ])


async def _generate(client, user_id, plan_date, plan_type="daily", **extra):
    body = {"userId": str(user_id), "planDate": plan_date, "planType": plan_type, **extra}
    return await client.post("/api/meal-plans/generate", json=body)


async def test_missing_fields_are_rejected(client):
    response = await client.post("/api/meal-plans/generate", json={"userId": str(uuid4())})

    assert response.status_code == 400
    body = response.json()
    assert body["error"].startswith("Missing required fields")
    assert "planDate" in body["error"]


async def test_weekly_plan_uses_fallback_meals_without_ai(client):
    response = await _generate(client, uuid4(), "2025-01-06", "weekly")

    assert response.status_code == 200
    body = response.json()
    assert body["generatedBy"] == "fallback"
    assert body["plan"]["plan_date"] == "2025-01-06"
    assert body["plan"]["plan_end_date"] == "2025-01-12"
    assert body["summary"]["totalDays"] == 7
    assert body["summary"]["totalMeals"] == 21
    assert len(body["meals"]) == 21
    assert body["meals"][-1]["day_date"] == "2025-01-12"

    shopping_list = body["shoppingList"]
    assert shopping_list["name"] == "Shopping List - 2025-01-06 to 2025-01-12"
    assert body["summary"]["shoppingItems"] == len(shopping_list["items"]) > 0
    foods = [item["food"].lower() for item in shopping_list["items"]]
    assert len(foods) == len(set(foods))


async def test_daily_plan_from_model(client, fake_gemini):
    model = fake_gemini([_day_reply()])
    response = await _generate(client, uuid4(), "2025-03-01", targetCalories=1800)

    body = response.json()
    assert body["generatedBy"] == "gemini"
    assert [meal["meal_name"] for meal in body["meals"]] == ["Anda Paratha", "Chicken Karahi", "Daal Chawal"]
    assert body["plan"]["total_calories"] == 1800
    assert body["shoppingList"]["name"] == "Shopping List - 2025-03-01"
    assert "Target Daily Calories: 1800 kcal" in model.prompts[0]


async def test_stored_preferences_fill_defaults(client, fake_gemini):
    model = fake_gemini([_day_reply()])
    user_id = uuid4()
    await client.put("/api/user/profile", json={
        "userId": str(user_id),
        "dietaryData": {"dietType": "vegetarian", "allergies": ["peanuts"], "mealsPerDay": 4},
        "goalsData": {"dailyCalories": 1600},
    })

    body = (await _generate(client, user_id, "2025-03-01")).json()

    assert body["plan"]["total_calories"] == 1600
    assert body["plan"]["total_meals"] == 4
    assert len(body["meals"]) == 4
    assert "Diet Type: vegetarian" in model.prompts[0]
    assert "Allergies/Restrictions: peanuts" in model.prompts[0]


async def test_supplied_meals_skip_the_model(client, fake_gemini):
    model = fake_gemini([_day_reply()])
    meals = [{"type": "breakfast", "name": "Oats", "calories": "300", "ingredients": ["1 cup oats"]}]

    body = (await _generate(client, uuid4(), "2025-03-01", meals=meals)).json()

    assert body["generatedBy"] == "provided"
    assert model.prompts == []
    assert body["meals"][0]["meal_name"] == "Oats"
    assert body["meals"][0]["calories"] == 300
    [item] = body["shoppingList"]["items"]
    assert (item["food"], item["quantity"], item["measure"], item["category"]) == ("oats", 1, "cup", "Grains")


async def test_shopping_list_can_be_skipped(client):
    body = (await _generate(client, uuid4(), "2025-03-01", generateShoppingList=False)).json()
    assert body["shoppingList"] is None
    assert body["summary"]["shoppingItems"] == 0


async def test_overlapping_plans_are_replaced(client):
    user_id = uuid4()
    old = (await _generate(client, user_id, "2025-01-08")).json()
    other = (await _generate(client, user_id, "2025-02-01")).json()

    await _generate(client, user_id, "2025-01-06", "weekly")

    assert await MealPlanDocument.find_one(MealPlanDocument.uid == UUID(old["plan"]["id"])) is None
    assert await MealDocument.find(MealDocument.plan_id == UUID(old["plan"]["id"])).count() == 0
    assert await ShoppingListDocument.find(ShoppingListDocument.meal_plan_id == UUID(old["plan"]["id"])).count() == 0
    assert await MealPlanDocument.find_one(MealPlanDocument.uid == UUID(other["plan"]["id"])) is not None


async def test_plan_starting_inside_an_existing_range_replaces_it(client):
    user_id = uuid4()
    weekly = (await _generate(client, user_id, "2025-01-01", "weekly")).json()

    await _generate(client, user_id, "2025-01-05")

    plans = (await client.get("/api/meal-plans/generate", params={"userId": str(user_id)})).json()["plans"]
    assert [plan["plan_date"] for plan in plans] == ["2025-01-05"]
    list_id = UUID(weekly["shoppingList"]["id"])
    assert await ShoppingListItemDocument.find(ShoppingListItemDocument.shopping_list_id == list_id).count() == 0


async def test_other_users_plans_are_untouched(client):
    first = (await _generate(client, uuid4(), "2025-01-06")).json()
    await _generate(client, uuid4(), "2025-01-06")
    assert await MealPlanDocument.find_one(MealPlanDocument.uid == UUID(first["plan"]["id"])) is not None


async def test_list_plans_with_meals_and_lists(client):
    user_id = uuid4()
    await _generate(client, user_id, "2025-01-01")
    await _generate(client, user_id, "2025-01-03", "custom", customDays=2)

    response = await client.get("/api/meal-plans/generate", params={"userId": str(user_id)})

    plans = response.json()["plans"]
    assert [plan["plan_date"] for plan in plans] == ["2025-01-03", "2025-01-01"]
    assert [meal["day_index"] for meal in plans[0]["meals"]] == [0, 0, 0, 1, 1, 1]
    assert len(plans[0]["shopping_lists"]) == 1

    filtered = await client.get("/api/meal-plans/generate", params={"userId": str(user_id), "date": "2025-01-01"})
    assert len(filtered.json()["plans"]) == 1


async def test_delete_plan_cascades(client):
    body = (await _generate(client, uuid4(), "2025-01-06")).json()
    plan_id = UUID(body["plan"]["id"])

    response = await client.delete("/api/meal-plans/generate", params={"planId": str(plan_id)})

    assert response.json() == {"success": True}
    assert await MealDocument.find(MealDocument.plan_id == plan_id).count() == 0
    assert await ShoppingListDocument.find(ShoppingListDocument.meal_plan_id == plan_id).count() == 0


async def test_delete_plan_errors(client):
    missing = await client.delete("/api/meal-plans/generate")
    assert missing.status_code == 400

    unknown = await client.delete("/api/meal-plans/generate", params={"planId": str(uuid4())})
    assert unknown.status_code == 404

    malformed = await client.delete("/api/meal-plans/generate", params={"planId": "not-a-uuid"})
    assert malformed.status_code == 404
