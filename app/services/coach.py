"""
FitTrack API - AI Coach Service.

System prompt assembly and chat-history shaping for the conversational
coach. The route loads user data; this module only formats it.
"""

from typing import Any, Dict, List, Optional


def calculate_nutrition_stats(logs: List[Dict[str, Any]]) -> Dict[str, int]:
    """
    Per-entry averages over recent nutrition logs.

    Args:
        logs: Nutrition log rows (calories, protein, carbs, fat).

    Returns:
        Dict[str, int]: avgCalories, avgProtein, avgCarbs, avgFat, daysLogged.
    """
    if not logs:
        return {"avgCalories": 0, "avgProtein": 0, "avgCarbs": 0, "avgFat": 0, "daysLogged": 0}

    totals = {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0}
    for log in logs:
        for key in totals:
            totals[key] += log.get(key) or 0

    count = len(logs)
    return {
        "avgCalories": round(totals["calories"] / count),
        "avgProtein": round(totals["protein"] / count),
        "avgCarbs": round(totals["carbs"] / count),
        "avgFat": round(totals["fat"] / count),
        "daysLogged": count,
    }


def _profile_section(profile: Optional[Dict[str, Any]], goals: Optional[Dict[str, Any]]) -> str:
    if not profile:
        return "- Profile data not fully set up"
    goals = goals or {}
    return "\n".join([
        f"- Name: {profile.get('full_name') or 'Friend'}",
        f"- Age: {profile.get('age') or 'unknown'}",
        f"- Goal: {goals.get('primary_goal') or 'general fitness'}",
        f"- Activity Level: {profile.get('activity_level') or 'moderate'}",
        f"- Current Weight: {profile.get('weight_kg') or 'unknown'} kg",
        f"- Height: {profile.get('height_cm') or 'unknown'} cm",
    ])


def _dietary_section(dietary: Optional[Dict[str, Any]]) -> str:
    if not dietary:
        return "- No dietary preferences set"
    return "\n".join([
        f"- Diet Type: {dietary.get('diet_type') or 'mixed'}",
        f"- Allergies: {', '.join(dietary.get('allergies') or []) or 'None'}",
        f"- Cuisine Preferences: {', '.join(dietary.get('cuisine_preferences') or []) or 'Any'}",
        f"- Meals Per Day: {dietary.get('meals_per_day') or 3}",
    ])


def _selected_plan_section(selected_plan: Dict[str, Any], dietary: Optional[Dict[str, Any]]) -> str:
    plan_type = selected_plan.get("type")
    if plan_type == "workout":
        return f"""
## CURRENTLY FOCUSED WORKOUT PLAN
- Name: {selected_plan.get('plan_name') or 'Unknown'}
- Goal: {selected_plan.get('target_goal') or 'general fitness'}
- Type: {selected_plan.get('plan_type') or 'unknown'}
- Duration: {selected_plan.get('duration_weeks') or 'N/A'} weeks
- Frequency: {selected_plan.get('frequency_per_week') or 'N/A'} sessions/week
- Difficulty: {selected_plan.get('difficulty_level') or 'moderate'}
- Period: {selected_plan.get('start_date') or 'N/A'} to {selected_plan.get('end_date') or 'N/A'}

Focus on progress toward this plan's goal, form corrections for its exercises,
progression or regression from the user's feedback, and recovery."""

    if plan_type == "meal":
        allergies = ", ".join((dietary or {}).get("allergies") or []) or "None"
        return f"""
## CURRENTLY FOCUSED MEAL PLAN
- Type: {selected_plan.get('plan_type') or 'balanced'}
- Total Meals: {selected_plan.get('total_meals') or 'N/A'}
- Target Calories: {selected_plan.get('total_calories') or 'N/A'} kcal
- Active Period: {selected_plan.get('plan_date') or 'N/A'} to {selected_plan.get('plan_end_date') or 'N/A'}

Focus on adherence against the nutrition logs, meal swaps that keep the
macro targets, grocery shopping for the plan and alternatives that respect
these allergies: {allergies}."""

    return ""


def build_coach_system_prompt(
    profile: Optional[Dict[str, Any]],
    goals: Optional[Dict[str, Any]],
    dietary: Optional[Dict[str, Any]],
    nutrition_stats: Dict[str, int],
    active_workout_plans: int,
    active_meal_plans: int,
    selected_plan: Optional[Dict[str, Any]] = None
) -> str:
    """Assemble the coach's system prompt from the user's stored data."""
    prompt = f"""You are an expert fitness and nutrition AI coach for FitTrack. You provide personalized, actionable advice based on the user's profile, current plans and goals.

## User Profile Data
{_profile_section(profile, goals)}

## Nutrition Context
{_dietary_section(dietary)}

## Recent Nutrition Statistics (Last 14 Entries)
- Average Daily Calories: {nutrition_stats['avgCalories']} kcal
- Average Protein: {nutrition_stats['avgProtein']}g
- Average Carbs: {nutrition_stats['avgCarbs']}g
- Average Fat: {nutrition_stats['avgFat']}g
- Total Logged Days: {nutrition_stats['daysLogged']}

## Current Plans Summary
- Active Workout Plans: {active_workout_plans}
- Active Meal Plans: {active_meal_plans}

## Response Guidelines
- Be encouraging and supportive
- Give specific, actionable recommendations grounded in the data above
- Respect dietary preferences and restrictions
- Ask clarifying questions when needed"""

    if selected_plan:
        prompt += _selected_plan_section(selected_plan, dietary)
    elif active_meal_plans > 0:
        prompt += f"""

## MEAL PLANNING ASSISTANCE AVAILABLE
The user has {active_meal_plans} active meal plan(s). Offer to modify the current plan,
adjust portions and macros, or plan for dining out when they ask about meals."""

    prompt += """

## Important Constraints
- Keep responses concise (2-3 paragraphs unless more detail is requested)
- Reference specific meals or exercises from their plans
- Explain recommended changes using their actual data"""
    return prompt


def to_chat_history(messages: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Gemini chat history from every message except the last.

    Non-user roles map to ``model``; leading model turns are dropped
    because a Gemini chat must open with a user turn.
    """
    history = [
        {"role": "user" if message.get("role") == "user" else "model", "text": message.get("content") or ""}
        for message in messages[:-1]
    ]
    while history and history[0]["role"] == "model":
        history.pop(0)
    return history
