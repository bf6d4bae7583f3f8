"""Tests for profile reads and upserts."""

from uuid import uuid4


async def test_empty_profile(client):
    response = await client.get("/api/user/profile", params={"userId": str(uuid4())})
    assert response.json() == {"profile": None, "goals": None, "dietary": None, "medical": None, "fitness": None}


async def test_update_creates_then_merges_sections(client):
    user_id = str(uuid4())
    created = await client.put("/api/user/profile", json={
        "userId": user_id,
        "profileData": {"fullName": "Ayesha Khan", "age": 29, "location": ""},
        "dietaryData": {"dietType": "vegetarian", "allergies": ["peanuts"]},
    })
    assert created.json() == {
        "success": True,
        "results": [
            {"table": "user_profiles", "success": True},
            {"table": "dietary_preferences", "success": True},
        ],
    }

    await client.put("/api/user/profile", json={
        "userId": user_id,
        "profileData": {"weightKg": 61.5, "fullName": ""},
        "medicalData": {"healthConditions": ["diabetes"]},
    })

    profile = (await client.get("/api/user/profile", params={"userId": user_id})).json()
    assert profile["profile"]["full_name"] == "Ayesha Khan"
    assert profile["profile"]["weight_kg"] == 61.5
    assert profile["profile"]["location"] is None
    assert profile["dietary"]["allergies"] == ["peanuts"]
    assert profile["medical"]["health_conditions"] == ["diabetes"]
    assert profile["goals"] is None


async def test_update_requires_user_id(client):
    response = await client.put("/api/user/profile", json={"profileData": {"age": 30}})
    assert response.status_code == 400
