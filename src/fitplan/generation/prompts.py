"""Prompt templates for plan generation and fitness advice."""

from __future__ import annotations

from typing import Any

WORKOUT_SYSTEM = "You are an expert fitness trainer who creates personalized workout plans based on user profiles."
MEAL_SYSTEM = (
    "You are an expert nutritionist who creates personalized meal plans "
    "based on user profiles and dietary preferences."
)
ADVICE_SYSTEM = "You are a knowledgeable fitness expert who provides personalized advice based on user profiles."


def _value(profile: dict[str, Any], key: str, default: str) -> Any:
    value = profile.get(key)
    if value in (None, "", []):
        return default
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return value


def _profile_lines(profile: dict[str, Any], *, activity: bool = True, diet: bool = False) -> list[str]:
    lines = [
        f"- Age: {_value(profile, 'age', 'Not specified')}",
        f"- Weight: {_value(profile, 'weight', 'Not specified')} kg",
        f"- Height: {_value(profile, 'height', 'Not specified')} cm",
        f"- Fitness Goals: {_value(profile, 'fitnessGoals', 'General fitness')}",
    ]
    if activity:
        lines.append(f"- Activity Level: {_value(profile, 'activityLevel', 'Moderate')}")
    if diet:
        lines.append(f"- Dietary Restrictions: {_value(profile, 'dietaryRestrictions', 'None')}")
    return lines


def workout_prompt(profile: dict[str, Any]) -> str:
    return "\n".join([
        "Create a personalized 7-day workout plan for a user with the following profile:",
        *_profile_lines(profile),
        "",
        "Please structure the plan with:",
        "1. A brief introduction explaining the benefits of this plan for their specific goals",
        "2. Daily workouts with exercise names, sets, reps, and rest periods",
        "3. Warm-up and cool-down recommendations",
        "4. Weekly progression suggestions",
    ])


def meal_prompt(profile: dict[str, Any], settings: dict[str, Any] | None = None) -> str:
    meal_prefs = (settings or {}).get("mealPreferences") or {}
    return "\n".join([
        "Create a personalized 7-day meal plan for a user with the following profile:",
        *_profile_lines(profile, activity=False, diet=True),
        f"- Daily Calorie Target: {_value(meal_prefs, 'calories', 'Not specified')}",
        f"- Macro Preference: {_value(meal_prefs, 'macroPreferences', 'Balanced')}",
        "",
        "Please structure the plan with:",
        "1. A brief introduction explaining how this meal plan supports their goals",
        "2. Daily meal suggestions including breakfast, lunch, dinner, and snacks",
        "3. Approximate calorie and macronutrient breakdown for each meal",
        "4. A shopping list for the week",
        "5. Simple preparation instructions for complex meals",
    ])


def advice_prompt(profile: dict[str, Any], question: str) -> str:
    return "\n".join([
        "User Profile:",
        *_profile_lines(profile),
        "",
        f"User Question: {question}",
        "",
        "Please provide a helpful, informative response that is tailored to this specific user's profile.",
    ])
