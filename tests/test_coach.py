"""Tests for the AI coach prompt helpers."""

from app.services.coach import build_coach_system_prompt, calculate_nutrition_stats, to_chat_history


EMPTY_STATS = {"avgCalories": 0, "avgProtein": 0, "avgCarbs": 0, "avgFat": 0, "daysLogged": 0}


def test_nutrition_stats_average_entries():
    logs = [
        {"calories": 2000, "protein": 100, "carbs": 250, "fat": 60},
        {"calories": 1500, "protein": None, "carbs": 200, "fat": 41},
    ]
    assert calculate_nutrition_stats(logs) == {
        "avgCalories": 1750,
        "avgProtein": 50,
        "avgCarbs": 225,
        "avgFat": 50,
        "daysLogged": 2,
    }


def test_nutrition_stats_without_logs():
    assert calculate_nutrition_stats([]) == EMPTY_STATS


def test_chat_history_excludes_last_message_and_maps_roles():
    messages = [
        {"role": "assistant", "content": "Hi! How can I help?"},
        {"role": "user", "content": "Plan my week"},
        {"role": "assistant", "content": "Sure"},
        {"role": "user", "content": "Make it vegetarian"},
    ]
    assert to_chat_history(messages) == [
        {"role": "user", "text": "Plan my week"},
        {"role": "model", "text": "Sure"},
    ]


def test_chat_history_for_single_message_is_empty():
    assert to_chat_history([{"role": "user", "content": "Hello"}]) == []


def test_system_prompt_without_profile():
    prompt = build_coach_system_prompt(None, None, None, EMPTY_STATS, 0, 0)
    assert "Profile data not fully set up" in prompt
    assert "No dietary preferences set" in prompt
    assert "MEAL PLANNING ASSISTANCE" not in prompt


def test_system_prompt_includes_user_data():
    prompt = build_coach_system_prompt(
        profile={"full_name": "Ayesha", "age": 29, "weight_kg": 62},
        goals={"primary_goal": "weight_loss"},
        dietary={"diet_type": "vegetarian", "allergies": ["peanuts"]},
        nutrition_stats=EMPTY_STATS,
        active_workout_plans=1,
        active_meal_plans=2,
    )
    assert "- Name: Ayesha" in prompt
    assert "- Goal: weight_loss" in prompt
    assert "- Allergies: peanuts" in prompt
    assert "- Active Meal Plans: 2" in prompt
    assert "The user has 2 active meal plan(s)" in prompt


def test_selected_meal_plan_focus():
    prompt = build_coach_system_prompt(
        None,
        None,
        {"allergies": ["shellfish"]},
        EMPTY_STATS,
        0,
        1,
        selected_plan={"type": "meal", "plan_type": "weekly", "total_calories": 2100},
    )
    assert "CURRENTLY FOCUSED MEAL PLAN" in prompt
    assert "2100 kcal" in prompt
    assert "shellfish" in prompt
    assert "MEAL PLANNING ASSISTANCE" not in prompt


def test_selected_workout_plan_focus():
    prompt = build_coach_system_prompt(
        None, None, None, EMPTY_STATS, 1, 0,
        selected_plan={"type": "workout", "plan_name": "Strength Block", "duration_weeks": 6},
    )
    assert "CURRENTLY FOCUSED WORKOUT PLAN" in prompt
    assert "- Name: Strength Block" in prompt
    assert "- Duration: 6 weeks" in prompt
