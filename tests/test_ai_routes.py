"""Tests for the AI suggestion, assistant and conversation endpoints."""

import json
from uuid import uuid4

import pytest


MEAL_REPLY = json.dumps([
    {"meal_type": "breakfast", "meal_name": "Greek Yogurt Bowl", "calories": 450,
     "protein_g": 25, "carbs_g": 50, "fat_g": 12, "ingredients": ["1 cup yogurt"],
     "prep_time_minutes": 5, "instructions": "Mix and serve"},
])

WORKOUT_REPLY = json.dumps({
    "workoutPlan": [
        {"day": "Monday", "focus": "Upper Body",
         "exercises": [{"name": "Push-ups", "sets": 3, "reps": "8-12", "restSeconds": 60}]},
    ],
    "weeklyGoals": "Get stronger",
})


def _suggestion(user_id, **extra):
    return {"userId": str(user_id), **extra}


async def test_meal_plan_suggestion(client, fake_gemini):
    model = fake_gemini([MEAL_REPLY])

    response = await client.post(
        "/api/ai/meal-plan-suggestion",
        json=_suggestion(uuid4(), targetCalories=1800, allergies=["peanuts"]),
    )

    assert response.status_code == 200
    [meal] = response.json()["mealPlan"]
    assert meal["meal_name"] == "Greek Yogurt Bowl"
    assert (meal["protein"], meal["prep_time"]) == (25, 5)
    assert meal["instructions"] == ["Mix and serve"]
    assert meal["ai_generated"] is True
    assert "Allergies to Avoid: peanuts" in model.prompts[0]


async def test_meal_plan_suggestion_fallback_on_bad_output(client, fake_gemini):
    fake_gemini(["I'd suggest eating well!"])

    response = await client.post("/api/ai/meal-plan-suggestion", json=_suggestion(uuid4(), mealsPerDay=4))

    plan = response.json()["mealPlan"]
    assert [meal["meal_type"] for meal in plan] == ["breakfast", "lunch", "dinner", "snack"]
    assert all(meal["ai_generated"] is False for meal in plan)


async def test_suggestion_requires_user_id(client):
    response = await client.post("/api/ai/meal-plan-suggestion", json={})
    assert response.status_code == 400
    assert "userId" in response.json()["error"]


async def test_suggestion_without_ai_configured(client):
    response = await client.post("/api/ai/meal-plan-suggestion", json=_suggestion(uuid4()))
    assert response.status_code == 500
    assert response.json()["error"] == "AI service not configured"


@pytest.mark.parametrize("message, status", [
    ("429 RESOURCE_EXHAUSTED", 429),
    ("connection reset", 500),
])
async def test_suggestion_upstream_errors(client, fake_gemini, message, status):
    fake_gemini(error=RuntimeError(message))

    response = await client.post("/api/ai/meal-plan-suggestion", json=_suggestion(uuid4()))

    assert response.status_code == status
    body = response.json()
    assert body["error"] == "Failed to generate meal plan suggestion"
    assert body["details"] == message


async def test_suggestions_are_rate_limited_per_user(client, fake_gemini):
    fake_gemini([MEAL_REPLY])
    user_id = uuid4()

    for _ in range(3):
        ok = await client.post("/api/ai/meal-plan-suggestion", json=_suggestion(user_id))
        assert ok.status_code == 200

    limited = await client.post("/api/ai/workout-suggestion", json=_suggestion(user_id))
    assert limited.status_code == 429
    assert int(limited.headers["Retry-After"]) >= 1
    assert limited.json()["details"]["retry_after_seconds"] >= 1

    other = await client.post("/api/ai/meal-plan-suggestion", json=_suggestion(uuid4()))
    assert other.status_code == 200


async def test_rate_limit_applies_before_configuration_check(client):
    user_id = uuid4()
    statuses = [
        (await client.post("/api/ai/meal-plan-suggestion", json=_suggestion(user_id))).status_code
        for _ in range(4)
    ]
    assert statuses == [500, 500, 500, 429]


async def test_workout_suggestion_uses_stored_fitness_data(client, fake_gemini):
    model = fake_gemini([WORKOUT_REPLY])
    user_id = uuid4()
    await client.put("/api/user/profile", json={
        "userId": str(user_id),
        "fitnessData": {"fitnessLevel": "advanced", "equipmentAccess": ["dumbbells"]},
    })
    await client.post("/api/activity/log", json={
        "userId": str(user_id), "exerciseType": "Swimming", "durationMinutes": 30,
    })

    response = await client.post("/api/ai/workout-suggestion", json=_suggestion(user_id, workoutDays=1))

    plan = response.json()["workoutPlan"]
    assert plan["weeklyGoals"] == "Get stronger"
    assert plan["workoutPlan"][0]["exercises"][0]["reps"] == 8
    prompt = model.prompts[0]
    assert "Current Fitness Level: advanced" in prompt
    assert "Available Equipment: dumbbells" in prompt
    assert "Last 1 workouts: Swimming" in prompt


async def test_workout_suggestion_fallback(client, fake_gemini):
    fake_gemini(["no plan today"])
    response = await client.post("/api/ai/workout-suggestion", json=_suggestion(uuid4(), workoutDays=2))
    plan = response.json()["workoutPlan"]
    assert plan["ai_generated"] is False
    assert [day["day"] for day in plan["workoutPlan"]] == ["Monday", "Tuesday"]


async def test_assistant_chat_saves_conversation(client, fake_gemini):
    model = fake_gemini(["Add a portion of daal to lunch."])
    user_id = uuid4()
    messages = [
        {"role": "assistant", "content": "Hi! How can I help?"},
        {"role": "user", "content": "How do I get more protein?"},
    ]

    response = await client.post("/api/ai/assistant", json={"userId": str(user_id), "messages": messages})

    body = response.json()
    assert body["message"] == "Add a portion of daal to lunch."
    assert model.chats[0]["message"] == "How do I get more protein?"
    assert model.chats[0]["history"] == []
    assert "Profile data not fully set up" in model.chats[0]["system"]

    conversations = (await client.get("/api/ai/conversations", params={"userId": str(user_id)})).json()["data"]
    assert len(conversations) == 1
    assert conversations[0]["id"] == body["conversationId"]
    assert conversations[0]["messageCount"] == 3
    assert conversations[0]["preview"] == "How do I get more protein?"


async def test_assistant_continues_existing_conversation(client, fake_gemini):
    fake_gemini(["First answer", "Second answer"])
    user_id = uuid4()
    first = [{"role": "user", "content": "Hello"}]
    body = (await client.post("/api/ai/assistant", json={"userId": str(user_id), "messages": first})).json()

    second = first + [
        {"role": "assistant", "content": "First answer"},
        {"role": "user", "content": "And dinner?"},
    ]
    again = (await client.post("/api/ai/assistant", json={
        "userId": str(user_id), "messages": second, "conversationId": body["conversationId"],
    })).json()

    assert again["message"] == "Second answer"
    assert again["conversationId"] == body["conversationId"]
    conversations = (await client.get("/api/ai/conversations", params={"userId": str(user_id)})).json()["data"]
    assert [c["messageCount"] for c in conversations] == [4]


async def test_assistant_save_only(client, fake_gemini):
    model = fake_gemini(["unused"])
    user_id = uuid4()
    long_question = "Can you build me a plan for the next three months that includes running and lifting?"

    response = await client.post("/api/ai/assistant", json={
        "userId": str(user_id),
        "messages": [{"role": "user", "content": long_question}],
        "saveOnly": True,
    })

    body = response.json()
    assert body["success"] is True
    assert model.chats == []
    [summary] = (await client.get("/api/ai/conversations", params={"userId": str(user_id)})).json()["data"]
    assert summary["preview"] == long_question[:60] + "..."
    assert summary["messageCount"] == 1


async def test_assistant_requires_messages(client, fake_gemini):
    fake_gemini(["unused"])
    response = await client.post("/api/ai/assistant", json={"userId": str(uuid4()), "messages": []})
    assert response.status_code == 400
    assert response.json()["error"] == "Messages array is required"


async def test_assistant_without_ai_configured(client):
    response = await client.post("/api/ai/assistant", json={
        "userId": str(uuid4()), "messages": [{"role": "user", "content": "Hi"}],
    })
    assert response.status_code == 500


async def test_delete_conversation(client):
    user_id = uuid4()
    saved = (await client.post("/api/ai/assistant", json={
        "userId": str(user_id), "messages": [{"role": "user", "content": "Hi"}], "saveOnly": True,
    })).json()

    wrong_user = await client.delete(
        "/api/ai/conversations", params={"id": saved["conversationId"], "userId": str(uuid4())}
    )
    assert wrong_user.status_code == 404

    deleted = await client.delete(
        "/api/ai/conversations", params={"id": saved["conversationId"], "userId": str(user_id)}
    )
    assert deleted.json() == {"success": True}
    assert (await client.get("/api/ai/conversations", params={"userId": str(user_id)})).json() == {"data": []}


REVIEW_REPLY = "```json\n" + json.dumps({
    "overall_score": "82",
    "summary": "Solid plan with room for more vegetables",
    "strengths": ["High protein breakfast"],
    "areas_for_improvement": "More fiber",
    "modifications": [{"meal_type": "dinner", "current_meal": "Chicken Karahi", "suggested_meal": "Grilled Fish"}],
    "meal_variety_score": 12,
}) + "\n```"


async def _stored_plan(client, user_id):
    body = {"userId": str(user_id), "planDate": "2025-01-06", "planType": "daily"}
    return (await client.post("/api/meal-plans/generate", json=body)).json()


async def test_meal_plan_review_from_model(client, fake_gemini):
    user_id = uuid4()
    plan = await _stored_plan(client, user_id)
    model = fake_gemini([REVIEW_REPLY])

    response = await client.post("/api/ai/meal-plan-review", json={
        "userId": str(user_id), "planId": plan["plan"]["id"], "reviewType": "quick",
    })

    assert response.status_code == 200
    review = response.json()["review"]
    assert review["overall_score"] == 82
    assert review["meal_variety_score"] == 10
    assert review["areas_for_improvement"] == ["More fiber"]
    assert review["modifications"][0]["suggested_meal"] == "Grilled Fish"
    assert review["ai_generated"] is True
    assert "**Review Type:** quick" in model.prompts[-1]
    assert plan["meals"][0]["meal_name"] in model.prompts[-1]


async def test_meal_plan_review_fallback_on_bad_output(client, fake_gemini):
    user_id = uuid4()
    plan = await _stored_plan(client, user_id)
    fake_gemini(['{"summary": "missing the score"}'])

    response = await client.post("/api/ai/meal-plan-review", json={
        "userId": str(user_id), "planId": plan["plan"]["id"],
    })

    review = response.json()["review"]
    assert review["overall_score"] == 75
    assert review["ai_generated"] is False


async def test_meal_plan_review_only_for_own_plan(client, fake_gemini):
    plan = await _stored_plan(client, uuid4())
    fake_gemini([REVIEW_REPLY])

    other_user = await client.post("/api/ai/meal-plan-review", json={
        "userId": str(uuid4()), "planId": plan["plan"]["id"],
    })
    malformed = await client.post("/api/ai/meal-plan-review", json={"userId": str(uuid4()), "planId": "nope"})

    assert other_user.status_code == 404
    assert other_user.json()["error"] == "Meal plan not found"
    assert malformed.status_code == 404


async def test_meal_plan_review_requires_ids(client):
    response = await client.post("/api/ai/meal-plan-review", json={"userId": str(uuid4())})
    assert response.status_code == 400
    assert "planId" in response.json()["error"]


async def test_meal_plan_review_without_ai_configured(client):
    user_id = uuid4()
    plan = await _stored_plan(client, user_id)

    response = await client.post("/api/ai/meal-plan-review", json={
        "userId": str(user_id), "planId": plan["plan"]["id"],
    })

    assert response.status_code == 500
    assert response.json()["error"] == "AI service not configured"


async def test_meal_plan_review_has_its_own_rate_limit(client, fake_gemini):
    user_id = uuid4()
    plan = await _stored_plan(client, user_id)
    fake_gemini([REVIEW_REPLY])
    body = {"userId": str(user_id), "planId": plan["plan"]["id"]}

    statuses = [(await client.post("/api/ai/meal-plan-review", json=body)).status_code for _ in range(6)]
    assert statuses == [200, 200, 200, 200, 200, 429]

    suggestion = await client.post("/api/ai/meal-plan-suggestion", json=_suggestion(user_id))
    assert suggestion.status_code == 200
