"""
FitTrack API - Workout Suggestion Service.

Builds the weekly workout prompt from the user's fitness data and recent
activity, and turns Gemini's answer into a complete plan.
"""

import logging
from typing import Any, Dict, List, Optional

from app.services.ai_decoding import AIWorkoutPlanPayload, DecodeError, decode_workout_plan
from app.services.fixed_plans import get_fixed_exercises, get_fixed_workout_plan
from app.services.gemini import GeminiService, gemini_service


logger = logging.getLogger(__name__)


def build_workout_prompt(
    fitness_level: str,
    fitness_goal: str,
    workout_days: int,
    duration_minutes: int,
    favorite_exercises: List[str],
    injuries_restrictions: str,
    equipment: List[str],
    preferred_location: str,
    recent_activity_types: List[str]
) -> str:
    equipment_line = (
        f"- Available Equipment: {', '.join(equipment)}"
        if equipment else "- Available Equipment: None (bodyweight only)"
    )
    favorites_line = f"\n- Favorite Exercises: {', '.join(favorite_exercises)}" if favorite_exercises else ""
    injuries_line = (
        f"- Injuries/Restrictions: {injuries_restrictions}"
        if injuries_restrictions else "- No known injuries or restrictions"
    )
    recent = recent_activity_types[:5]
    recent_line = (
        f"- Last {len(recent)} workouts: {', '.join(recent)}"
        if recent else "- No recent activity data"
    )

    return f"""Create a personalized weekly workout plan with the following specifications:

**User Profile:**
- Current Fitness Level: {fitness_level}
- Fitness Goal: {fitness_goal}
- Workouts Per Week: {workout_days}
- Duration Per Session: {duration_minutes} minutes
- Preferred Location: {preferred_location}
{equipment_line}{favorites_line}

**Medical/Physical Considerations:**
{injuries_line}

**Recent Activity:**
{recent_line}

**REQUIREMENTS:**
1. Create EXACTLY {workout_days} workout sessions, one per day
2. Every day has at least 3 exercises
3. Each day has a day of week, a focus, a 5 min warm-up, main exercises ({max(duration_minutes - 10, 0)} min) and a 5 min cool-down
4. Each exercise has name, targetMuscles (array), sets (number), reps (number, never text), restSeconds (number), instructions, modifications (beginner/advanced) and safety

Return ONLY valid JSON with no markdown code blocks or extra text:
{{
  "workoutPlan": [
    {{
      "day": "Monday",
      "focus": "Upper Body",
      "warmup": "5 min light cardio + dynamic stretches",
      "exercises": [
        {{"name": "Push-ups", "targetMuscles": ["chest"], "sets": 3, "reps": 10, "restSeconds": 60,
          "instructions": "Form cues", "modifications": {{"beginner": "Knee push-ups", "advanced": "Decline push-ups"}},
          "safety": "Keep core tight"}}
      ],
      "cooldown": "5 min stretching",
      "totalCalorieEstimate": 250
    }}
  ],
  "weeklyGoals": "Build functional strength",
  "progressionTips": "Increase reps or weight by 5% each week"
}}"""


def _plan_from_payload(payload: AIWorkoutPlanPayload) -> Dict[str, Any]:
    days = []
    for day in payload.workoutPlan:
        focus = day.focus or "General"
        if day.exercises:
            exercises = [exercise.model_dump() for exercise in day.exercises]
        else:
            exercises = get_fixed_exercises(focus)
        days.append({
            "day": day.day or "Unknown",
            "focus": focus,
            "warmup": day.warmup or "5 min warm-up",
            "exercises": exercises,
            "cooldown": day.cooldown or "5 min cool-down",
            "totalCalorieEstimate": round(day.totalCalorieEstimate or 0),
        })

    return {
        "workoutPlan": days,
        "weeklyGoals": payload.weeklyGoals or "Build fitness",
        "progressionTips": payload.progressionTips or "Gradually increase intensity",
        "ai_generated": True,
    }


async def suggest_workout_plan(
    prompt: str,
    workout_days: int,
    duration_minutes: int,
    service: Optional[GeminiService] = None
) -> Dict[str, Any]:
    """
    Workout plan suggestion for the AI endpoint.

    Model errors propagate; undecodable or empty plans yield the static plan.
    """
    service = service or gemini_service
    text = await service.generate(prompt)

    result = decode_workout_plan(text)
    if isinstance(result, DecodeError):
        logger.warning(f"Workout suggestion not decodable, using fallback: {result.reason}")
        return get_fixed_workout_plan(workout_days, duration_minutes)
    if not result.value.workoutPlan:
        logger.warning("Workout suggestion had no days, using fallback")
        return get_fixed_workout_plan(workout_days, duration_minutes)

    return _plan_from_payload(result.value)
