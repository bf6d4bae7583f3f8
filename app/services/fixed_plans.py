"""
FitTrack API - Fixed Plans Service.

Static, non-AI meals and workouts served whenever Gemini is unavailable
or its output cannot be decoded.
"""

from typing import Dict, Any, List, Optional
from urllib.parse import quote


# Meal type -> (name, ingredients, instructions)
_FALLBACK_MEALS: Dict[str, Dict[str, Any]] = {
    "breakfast": {
        "name": "Paratha with Omelette (Anda Paratha)",
        "ingredients": [
            "2 whole wheat parathas",
            "2 eggs",
            "1 small onion, chopped",
            "1 green chili, chopped",
            "1 tbsp desi ghee",
            "Salt and black pepper to taste",
            "Fresh coriander for garnish",
        ],
        "instructions": [
            "Heat desi ghee in a pan over medium heat",
            "Beat eggs with onion, green chili, salt, and pepper",
            "Pour egg mixture into pan and cook until set",
            "Fold omelette and serve with warm parathas",
            "Garnish with fresh coriander",
        ],
    },
    "lunch": {
        "name": "Chicken Karahi with Roti",
        "ingredients": [
            "250g chicken (bone-in pieces)",
            "2 medium tomatoes, chopped",
            "2 green chilies",
            "1 tbsp ginger-garlic paste",
            "2 tbsp cooking oil",
            "1 tsp garam masala",
            "Salt to taste",
            "2 whole wheat rotis",
        ],
        "instructions": [
            "Heat oil in a karahi or wok over high heat",
            "Add chicken pieces and fry until golden",
            "Add ginger-garlic paste and cook for 2 minutes",
            "Add tomatoes and green chilies, cook until soft",
            "Add salt and garam masala, cook until oil separates",
            "Serve hot with fresh rotis",
        ],
    },
    "dinner": {
        "name": "Daal Chawal (Lentils with Rice)",
        "ingredients": [
            "1 cup masoor daal (red lentils)",
            "1 cup basmati rice",
            "1 onion, sliced",
            "2 cloves garlic, minced",
            "1 tsp cumin seeds",
            "1/2 tsp turmeric",
            "2 tbsp cooking oil",
            "Salt to taste",
            "Fresh coriander for garnish",
        ],
        "instructions": [
            "Wash and soak rice for 30 minutes, then cook",
            "Wash daal and pressure cook with turmeric until soft",
            "Heat oil and add cumin seeds until they splutter",
            "Add onion and garlic, fry until golden",
            "Add cooked daal, salt, and simmer for 5 minutes",
            "Serve daal over rice with fresh coriander",
        ],
    },
    "snack": {
        "name": "Fruit Chaat",
        "ingredients": [
            "1 banana, sliced",
            "1 apple, cubed",
            "1 cup seasonal fruit",
            "1/4 tsp chaat masala",
            "Pinch of black salt",
            "Lemon juice to taste",
        ],
        "instructions": [
            "Cut all fruits into bite-sized pieces",
            "Mix in a bowl with chaat masala and black salt",
            "Add lemon juice and toss gently",
            "Serve fresh",
        ],
    },
    "snack2": {
        "name": "Lassi (Yogurt Drink)",
        "ingredients": [
            "1 cup dahi (yogurt)",
            "1/2 cup water",
            "2 tbsp sugar or honey",
            "1/4 tsp cardamom powder",
            "Ice cubes",
        ],
        "instructions": [
            "Add yogurt, water, and sugar to a blender",
            "Blend until smooth and frothy",
            "Add cardamom powder and blend briefly",
            "Serve cold with ice cubes",
        ],
    },
}

SNACK_TYPES = ("snack", "snack2")


def placeholder_image(query: str) -> str:
    """Local placeholder image URL for ``query``."""
    return f"/placeholder.svg?height=400&width=600&query={quote(query)}"


def get_fixed_meal(meal_type: str, target_calories: int) -> Dict[str, Any]:
    """
    Get the static meal for ``meal_type`` sized to ``target_calories``.

    Unknown meal types get the lunch template. Macros follow a
    25/45/30 protein/carbs/fat calorie split.

    Args:
        meal_type: breakfast, lunch, dinner, snack or snack2.
        target_calories: Calories for this meal.

    Returns:
        Dict[str, Any]: Meal payload in the generated-meal shape.
    """
    template = _FALLBACK_MEALS.get(meal_type, _FALLBACK_MEALS["lunch"])
    return {
        "meal_type": meal_type,
        "meal_name": template["name"],
        "calories": target_calories,
        "protein": round(target_calories * 0.25 / 4),
        "carbs": round(target_calories * 0.45 / 4),
        "fat": round(target_calories * 0.3 / 9),
        "prep_time": 10 if meal_type in SNACK_TYPES else 30,
        "ingredients": list(template["ingredients"]),
        "instructions": list(template["instructions"]),
        "recipe_uri": f"fallback-{meal_type}",
        "image": placeholder_image(f"{template['name']} Pakistani food"),
    }


def get_fixed_day_meals(meal_types: List[str], calorie_distribution: List[int]) -> List[Dict[str, Any]]:
    """Static meals for one day, one per meal type."""
    return [
        get_fixed_meal(meal_type, calories)
        for meal_type, calories in zip(meal_types, calorie_distribution)
    ]


def get_fixed_meal_plan(meals_per_day: int, target_calories: int) -> List[Dict[str, Any]]:
    """
    Get the generic meal plan returned by the suggestion endpoint.

    Breakfast, lunch and dinner always; a snack from 4 meals and a second
    snack from 5. Calories are split evenly.
    """
    meal_types = ["breakfast", "lunch", "dinner"]
    if meals_per_day >= 4:
        meal_types.append("snack")
    if meals_per_day >= 5:
        meal_types.append("snack2")

    calories_per_meal = round(target_calories / len(meal_types))
    return [
        {
            "meal_type": meal_type,
            "meal_name": f"Healthy {meal_type.capitalize()}",
            "calories": calories_per_meal,
            "protein": round(calories_per_meal * 0.3 / 4),
            "carbs": round(calories_per_meal * 0.45 / 4),
            "fat": round(calories_per_meal * 0.25 / 9),
            "ingredients": ["Assorted fresh ingredients", "Prepared with care"],
            "prep_time": 30,
            "instructions": ["Prepare healthy meal using quality ingredients"],
            "ai_generated": False,
        }
        for meal_type in meal_types
    ]


# Meal type -> list of (name, calorie factor, protein, carbs, fat, prep, ingredients, instructions)
_SWAP_ALTERNATIVES: Dict[str, List[tuple]] = {
    "breakfast": [
        ("Halwa Puri with Chana", 1.1, 15, 60, 25, 30,
         ["2 puris", "1 cup chana (chickpea curry)", "Halwa (semolina pudding)", "Pickle"],
         ["Prepare chana curry with spices", "Fry puris until golden",
          "Make sooji halwa with sugar and ghee", "Serve hot with pickle"]),
        ("Anda Paratha (Egg Paratha)", 0.95, 18, 45, 20, 20,
         ["2 whole wheat parathas", "2 eggs", "Onion", "Green chili", "Desi ghee"],
         ["Make paratha dough and roll out", "Cook paratha with ghee",
          "Beat eggs with onion and chili", "Make omelette and serve with paratha"]),
        ("Nihari with Naan", 1.2, 28, 40, 30, 15,
         ["Beef nihari", "Fresh naan", "Ginger slices", "Green chilies", "Lemon"],
         ["Warm the nihari", "Garnish with ginger and chilies", "Serve with hot naan and lemon"]),
    ],
    "lunch": [
        ("Chicken Biryani", 1.0, 30, 55, 18, 45,
         ["1 cup basmati rice", "200g chicken", "Biryani masala", "Yogurt", "Onions", "Saffron"],
         ["Marinate chicken in yogurt and masala", "Par-boil rice",
          "Layer rice over cooked chicken", "Steam on low heat for 20 minutes"]),
        ("Daal Chawal with Achar", 0.85, 18, 60, 12, 30,
         ["1 cup masoor daal", "1 cup rice", "Tadka (tempering)", "Mango pickle", "Salad"],
         ["Boil daal until soft", "Cook rice", "Prepare tadka and pour over daal",
          "Serve with achar and salad"]),
        ("Karahi Gosht with Roti", 1.1, 35, 40, 22, 40,
         ["250g mutton", "Tomatoes", "Green chilies", "Ginger", "3 rotis"],
         ["Fry mutton until browned", "Add tomatoes and cook down",
          "Finish with ginger and chilies", "Serve with rotis"]),
    ],
    "dinner": [
        ("Chapli Kebab with Naan", 1.0, 32, 35, 25, 35,
         ["300g beef mince", "Onions", "Tomatoes", "Coriander", "2 naans", "Chutney"],
         ["Mix mince with onions, tomatoes and spices", "Shape into flat kebabs",
          "Shallow fry until cooked through", "Serve with naan and chutney"]),
        ("Palak Paneer with Roti", 0.9, 22, 40, 20, 30,
         ["200g paneer", "Spinach (palak)", "Onion", "Garlic", "Cream", "3 rotis"],
         ["Blanch and puree spinach", "Saute onion and garlic",
          "Add puree and paneer cubes", "Finish with cream and serve with rotis"]),
        ("Seekh Kebab with Paratha", 1.05, 28, 42, 24, 30,
         ["250g chicken mince", "Onion", "Green chilies", "Spices", "2 parathas"],
         ["Mix mince with onion, chilies and spices", "Shape onto skewers",
          "Grill until charred", "Serve with parathas"]),
    ],
    "snack": [
        ("Samosa with Chutney", 0.5, 6, 30, 15, 5,
         ["2 samosas", "Green chutney", "Tamarind chutney"],
         ["Warm samosas", "Serve with chutneys"]),
        ("Fruit Chaat", 0.4, 3, 35, 2, 10,
         ["Mixed seasonal fruits", "Chaat masala", "Black salt", "Lemon juice"],
         ["Chop fruits", "Toss with chaat masala, black salt and lemon"]),
        ("Dahi Bhalla", 0.45, 8, 28, 10, 15,
         ["Lentil fritters", "Yogurt", "Tamarind chutney", "Chaat masala"],
         ["Soak fritters in water", "Top with yogurt and chutney", "Sprinkle chaat masala"]),
    ],
    "snack2": [
        ("Mango Lassi", 0.35, 6, 30, 5, 5,
         ["Mango pulp", "Yogurt", "Sugar", "Cardamom"],
         ["Blend all ingredients", "Serve chilled"]),
        ("Pakora with Chai", 0.5, 5, 25, 18, 20,
         ["Besan (gram flour)", "Onion", "Potato", "Spices", "Tea"],
         ["Make besan batter with spices", "Dip vegetables and deep fry", "Serve with chai"]),
        ("Roasted Chana", 0.3, 10, 22, 4, 2,
         ["Roasted chickpeas (chana)", "Salt", "Chaat masala", "Lemon"],
         ["Toss chana with salt, chaat masala and lemon"]),
    ],
}


def get_fixed_swap_suggestions(meal_type: Optional[str], target_calories: int) -> List[Dict[str, Any]]:
    """
    Static alternatives for a meal swap.

    Unknown or missing meal types get the lunch alternatives.
    """
    key = meal_type if meal_type in _SWAP_ALTERNATIVES else "lunch"
    suggestions = []
    for index, (name, factor, protein, carbs, fat, prep, ingredients, instructions) in enumerate(
        _SWAP_ALTERNATIVES[key]
    ):
        suggestions.append({
            "meal_type": key,
            "meal_name": name,
            "calories": round(target_calories * factor),
            "protein": protein,
            "carbs": carbs,
            "fat": fat,
            "prep_time": prep,
            "ingredients": list(ingredients),
            "instructions": list(instructions),
            "recipe_uri": f"swap-fallback-{key}-{index}",
            "image": placeholder_image(f"{name} food dish"),
        })
    return suggestions


# Focus -> exercises
_FALLBACK_EXERCISES: Dict[str, List[Dict[str, Any]]] = {
    "Upper Body": [
        {"name": "Push-ups", "targetMuscles": ["chest", "shoulders"], "sets": 3, "reps": 10,
         "restSeconds": 60, "instructions": "Standard push-ups",
         "modifications": {"beginner": "Wall push-ups", "advanced": "Decline push-ups"},
         "safety": "Keep core tight"},
        {"name": "Dumbbell Rows", "targetMuscles": ["back", "biceps"], "sets": 3, "reps": 8,
         "restSeconds": 90, "instructions": "Pull dumbbells to chest",
         "modifications": {"beginner": "Lighter weight", "advanced": "Single-arm rows"},
         "safety": "Maintain neutral spine"},
        {"name": "Shoulder Press", "targetMuscles": ["shoulders", "triceps"], "sets": 3, "reps": 8,
         "restSeconds": 90, "instructions": "Press overhead",
         "modifications": {"beginner": "Machine press", "advanced": "Increase weight"},
         "safety": "Avoid arching back"},
    ],
    "Lower Body": [
        {"name": "Squats", "targetMuscles": ["quadriceps", "glutes"], "sets": 3, "reps": 12,
         "restSeconds": 90, "instructions": "Lower body with control",
         "modifications": {"beginner": "Wall squats", "advanced": "Jump squats"},
         "safety": "Keep knees aligned"},
        {"name": "Lunges", "targetMuscles": ["quadriceps", "glutes", "hamstrings"], "sets": 3,
         "reps": 10, "restSeconds": 60, "instructions": "Step forward and lower",
         "modifications": {"beginner": "Assisted lunges", "advanced": "Walking lunges with weight"},
         "safety": "Keep torso upright"},
        {"name": "Leg Press", "targetMuscles": ["quadriceps", "glutes"], "sets": 3, "reps": 12,
         "restSeconds": 60, "instructions": "Push weight away",
         "modifications": {"beginner": "Lighter weight", "advanced": "Increase weight"},
         "safety": "Full range of motion"},
    ],
    "Cardio": [
        {"name": "Running", "targetMuscles": ["full body"], "sets": 1, "reps": 20,
         "restSeconds": 0, "instructions": "Run at steady pace",
         "modifications": {"beginner": "Walk or jog", "advanced": "Sprint intervals"},
         "safety": "Proper footwear required"},
        {"name": "Cycling", "targetMuscles": ["legs"], "sets": 1, "reps": 30,
         "restSeconds": 0, "instructions": "Moderate intensity",
         "modifications": {"beginner": "Stationary bike", "advanced": "High resistance"},
         "safety": "Adjust seat height"},
        {"name": "Burpees", "targetMuscles": ["full body"], "sets": 3, "reps": 10,
         "restSeconds": 60, "instructions": "Squat, plank, jump",
         "modifications": {"beginner": "Step back instead of jump", "advanced": "Add push-up"},
         "safety": "Land softly"},
    ],
    "Full Body": [
        {"name": "Deadlifts", "targetMuscles": ["back", "glutes", "hamstrings"], "sets": 3,
         "reps": 6, "restSeconds": 120, "instructions": "Lift with legs, not back",
         "modifications": {"beginner": "Light weight", "advanced": "Sumo deadlifts"},
         "safety": "Maintain neutral spine"},
        {"name": "Kettlebell Swings", "targetMuscles": ["glutes", "hamstrings", "core"], "sets": 3,
         "reps": 15, "restSeconds": 60, "instructions": "Hip hinge movement",
         "modifications": {"beginner": "Lighter kettlebell", "advanced": "Higher reps"},
         "safety": "Control the swing"},
        {"name": "Mountain Climbers", "targetMuscles": ["core", "shoulders"], "sets": 3,
         "reps": 20, "restSeconds": 60, "instructions": "Fast leg movements",
         "modifications": {"beginner": "Slow pace", "advanced": "High speed"},
         "safety": "Keep hips level"},
    ],
    "Core": [
        {"name": "Planks", "targetMuscles": ["core"], "sets": 3, "reps": 30,
         "restSeconds": 60, "instructions": "Hold position",
         "modifications": {"beginner": "Knee plank", "advanced": "Side plank"},
         "safety": "Don't let hips sag"},
        {"name": "Crunches", "targetMuscles": ["abs"], "sets": 3, "reps": 15,
         "restSeconds": 45, "instructions": "Curl upper body",
         "modifications": {"beginner": "Partial range", "advanced": "Weighted crunches"},
         "safety": "Don't pull on neck"},
        {"name": "Leg Raises", "targetMuscles": ["lower abs"], "sets": 3, "reps": 12,
         "restSeconds": 60, "instructions": "Raise legs while lying",
         "modifications": {"beginner": "Bent knees", "advanced": "Straight legs"},
         "safety": "Lower legs slowly"},
    ],
}

WORKOUT_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
WORKOUT_FOCUSES = ["Upper Body", "Lower Body", "Cardio", "Full Body", "Core"]


def get_fixed_exercises(focus: str) -> List[Dict[str, Any]]:
    """Static exercises for ``focus``; unknown focuses get the full-body set."""
    exercises = _FALLBACK_EXERCISES.get(focus, _FALLBACK_EXERCISES["Full Body"])
    return [dict(exercise) for exercise in exercises]


def get_fixed_workout_plan(workout_days: int, duration_minutes: int) -> Dict[str, Any]:
    """
    Get a static weekly workout plan.

    Args:
        workout_days: Sessions per week (capped at 7).
        duration_minutes: Minutes per session.

    Returns:
        Dict[str, Any]: Plan in the workout-suggestion shape.
    """
    plan = []
    for index, day in enumerate(WORKOUT_DAYS[:max(workout_days, 0)]):
        focus = WORKOUT_FOCUSES[index % len(WORKOUT_FOCUSES)]
        plan.append({
            "day": day,
            "focus": focus,
            "warmup": "5 min light cardio + dynamic stretches",
            "exercises": get_fixed_exercises(focus),
            "cooldown": "5 min stretching",
            "totalCalorieEstimate": round(duration_minutes * 5),
        })

    return {
        "workoutPlan": plan,
        "weeklyGoals": "Build strength and improve fitness",
        "progressionTips": "Gradually increase weights or reps each week",
        "ai_generated": False,
    }


def get_fixed_meal_plan_review() -> Dict[str, Any]:
    """Generic meal plan review served when the model's review does not decode."""
    return {
        "overall_score": 75,
        "summary": "Your meal plan provides a balanced mix of macronutrients and supports your fitness goals.",
        "strengths": [
            "Good protein distribution across meals",
            "Adequate calorie alignment with fitness goals",
            "Diverse meal selection",
        ],
        "areas_for_improvement": [
            "Consider adding more leafy greens for micronutrients",
            "Increase fiber intake through whole grains",
        ],
        "nutrition_analysis": {
            "calorie_alignment": "Your plan aligns well with your daily caloric needs",
            "macro_balance": "Macronutrients are well-distributed for your fitness goals",
            "micronutrients": "Good variety of essential vitamins and minerals",
        },
        "modifications": [],
        "personalized_suggestions": [
            "Add a side salad to lunch for more nutrients",
            "Include omega-3 rich foods more often",
        ],
        "meal_variety_score": 7,
        "diet_adherence": "Plan adheres well to your dietary preferences",
        "health_goal_alignment": "Plan supports your stated health objectives",
        "ai_generated": False,
    }
