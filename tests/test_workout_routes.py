"""Tests for workout plans and sessions."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from app.routes.workouts import truncate_to_limit
from app.utils.dates import as_naive_utc, next_weekday, start_of_week, today_iso


async def _create_plan(client, user_id=None, **fields):
    body = {"userId": str(user_id or uuid4()), "planName": "Strength Block", **fields}
    return await client.post("/api/workouts/plans", json=body)


def test_truncate_to_limit():
    assert truncate_to_limit("short") == "short"
    assert truncate_to_limit("x" * 100) == "x" * 100
    assert truncate_to_limit("x" * 101) == "x" * 97 + "..."
    assert truncate_to_limit("") is None


async def test_create_plan_computes_schedule(client):
    response = await _create_plan(client, startDate="2025-01-06", durationWeeks=4, frequency=4)

    assert response.status_code == 201
    plan = response.json()["plan"]
    assert plan["end_date"] == "2025-02-03"
    assert plan["weekly_duration_minutes"] == 180
    assert (plan["plan_type"], plan["target_goal"], plan["difficulty_level"]) == ("custom", "general", "moderate")
    assert plan["status"] == "active"


async def test_create_plan_truncates_long_names(client):
    plan = (await _create_plan(client, planName="A" * 150)).json()["plan"]
    assert len(plan["plan_name"]) == 100
    assert plan["plan_name"].endswith("...")
    assert plan["start_date"] == today_iso()


async def test_update_plan(client):
    plan = (await _create_plan(client)).json()["plan"]

    response = await client.patch("/api/workouts/plans", json={"planId": plan["id"], "status": "completed"})

    assert response.json()["plan"]["status"] == "completed"
    assert response.json()["plan"]["plan_name"] == "Strength Block"


async def test_sessions_parse_exercise_values(client):
    plan = (await _create_plan(client)).json()["plan"]

    response = await client.post("/api/workouts/sessions", json={
        "planId": plan["id"],
        "sessionName": "Push Day",
        "sessionDate": "2025-01-07",
        "exercises": [
            {"name": "Push-ups", "sets": "4 sets", "reps": "AMRAP", "restSeconds": 45},
            {"exercise_name": "Bench Press", "reps": "8-10"},
        ],
    })

    assert response.status_code == 201
    session = response.json()["session"]
    assert session["session_date"] == "2025-01-07"
    assert session["completed"] is False
    first, second = session["exercises"]
    assert (first["exercise_name"], first["sets"], first["reps"], first["rest_seconds"]) == ("Push-ups", 4, 15, 45)
    assert (second["exercise_name"], second["sets"], second["reps"], second["rest_seconds"]) == ("Bench Press", 3, 8, 60)
    assert [first["order_index"], second["order_index"]] == [1, 2]


async def test_session_scheduled_by_weekday(client):
    plan = (await _create_plan(client)).json()["plan"]

    session = (await client.post("/api/workouts/sessions", json={
        "planId": plan["id"], "sessionName": "Legs", "dayOfWeek": "Friday",
    })).json()["session"]

    assert session["session_date"] == next_weekday("friday")


async def test_session_for_unknown_plan(client):
    response = await client.post("/api/workouts/sessions", json={"planId": str(uuid4()), "sessionName": "X"})
    assert response.status_code == 404


async def test_complete_session(client):
    plan = (await _create_plan(client)).json()["plan"]
    session = (await client.post("/api/workouts/sessions", json={
        "planId": plan["id"], "sessionName": "Cardio",
    })).json()["session"]

    response = await client.patch("/api/workouts/sessions", json={
        "sessionId": session["id"], "completed": True, "caloriesBurned": 320,
    })

    updated = response.json()["session"]
    assert updated["completed"] is True
    assert updated["completion_date"] is not None
    assert updated["calories_burned"] == 320


async def test_list_sessions_and_plans(client):
    user_id = uuid4()
    plan = (await _create_plan(client, user_id)).json()["plan"]
    for number in (2, 1):
        await client.post("/api/workouts/sessions", json={
            "planId": plan["id"], "sessionName": f"Session {number}", "sessionNumber": number,
        })

    sessions = (await client.get("/api/workouts/sessions", params={"planId": plan["id"]})).json()["sessions"]
    assert [s["session_name"] for s in sessions] == ["Session 1", "Session 2"]

    one = (await client.get("/api/workouts/sessions", params={"sessionId": sessions[0]["id"]})).json()
    assert one["session"]["session_name"] == "Session 1"

    plans = (await client.get("/api/workouts/plans", params={"userId": str(user_id)})).json()
    assert plans["plans"] == plans["data"]
    assert [s["session_number"] for s in plans["plans"][0]["workout_sessions"]] == [1, 2]


async def test_sessions_require_an_id(client):
    response = await client.get("/api/workouts/sessions")
    assert response.status_code == 400
    assert response.json()["error"] == "Plan ID or Session ID required"


async def test_delete_plan_removes_sessions(client):
    plan = (await _create_plan(client)).json()["plan"]
    session = (await client.post("/api/workouts/sessions", json={
        "planId": plan["id"], "sessionName": "Core",
    })).json()["session"]

    deleted = await client.delete("/api/workouts/plans", params={"planId": plan["id"]})

    assert deleted.json() == {"success": True}
    missing = await client.get("/api/workouts/sessions", params={"sessionId": session["id"]})
    assert missing.status_code == 404


async def _session(client, plan_id, name, **completion):
    session = (await client.post("/api/workouts/sessions", json={
        "planId": plan_id, "sessionName": name, "duration": 40,
    })).json()["session"]
    if completion:
        await client.patch("/api/workouts/sessions", json={"sessionId": session["id"], **completion})
    return session


async def test_workout_stats(client):
    user_id = uuid4()
    plan = (await _create_plan(client, user_id)).json()["plan"]
    await _session(client, plan["id"], "Today", completed=True, caloriesBurned=300)
    await _session(client, plan["id"], "Long ago", completed=True, caloriesBurned=500,
                   completionDate="2020-01-01T08:00:00Z")
    await _session(client, plan["id"], "Pending")

    other_plan = (await _create_plan(client)).json()["plan"]
    await _session(client, other_plan["id"], "Someone else", completed=True, caloriesBurned=999)

    stats = (await client.get("/api/workouts/stats", params={"userId": str(user_id)})).json()

    assert stats == {
        "weeklyWorkouts": 1,
        "totalSessions": 2,
        "totalCaloriesThisWeek": 300,
        "totalDurationThisWeek": 40,
    }


async def test_workout_stats_without_plans(client):
    stats = (await client.get("/api/workouts/stats", params={"userId": str(uuid4())})).json()
    assert stats["weeklyWorkouts"] == 0
    assert stats["totalSessions"] == 0


def test_weeks_start_on_sunday():
    assert start_of_week(datetime(2025, 1, 8, 15, 30)) == datetime(2025, 1, 5)
    assert start_of_week(datetime(2025, 1, 5, 10)) == datetime(2025, 1, 5)
    assert start_of_week(datetime(2025, 1, 4, 23, 59)) == datetime(2024, 12, 29)


def test_as_naive_utc():
    aware = datetime(2025, 1, 5, 3, 0, tzinfo=timezone(timedelta(hours=5)))
    assert as_naive_utc(aware) == datetime(2025, 1, 4, 22, 0)
    assert as_naive_utc(datetime(2025, 1, 5)) == datetime(2025, 1, 5)
