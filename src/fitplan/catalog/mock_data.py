"""Static catalogs served when the plan collections are empty or unreadable."""

from __future__ import annotations

from typing import Any

MOCK_WORKOUT_PLANS: list[dict[str, Any]] = [
    {
        "id": "mock-workout-1",
        "ownerId": None,
        "status": "approved",
        "title": "Beginner Full Body",
        "description": "Three simple full-body sessions a week to build a base of strength.",
        "difficulty": "beginner",
        "duration": "4 weeks",
        "avgRating": 4.6,
        "totalRatings": 128,
        "exercises": [
            {"name": "Bodyweight Squats", "sets": 3, "reps": 12, "rest": "60 seconds"},
            {"name": "Push-ups", "sets": 3, "reps": 10, "rest": "60 seconds"},
            {"name": "Plank", "sets": 3, "reps": "30 seconds", "rest": "45 seconds"},
        ],
    },
    {
        "id": "mock-workout-2",
        "ownerId": None,
        "status": "approved",
        "title": "Couch to Cardio",
        "description": "Low-impact cardio that ramps up gradually.",
        "difficulty": "beginner",
        "duration": "8 weeks",
        "avgRating": 4.4,
        "totalRatings": 87,
        "exercises": [
            {"name": "Brisk Walk", "sets": 1, "reps": "20 minutes"},
            {"name": "Step-ups", "sets": 3, "reps": 15, "rest": "45 seconds"},
            {"name": "Jumping Jacks", "sets": 3, "reps": 20, "rest": "30 seconds"},
        ],
    },
    {
        "id": "mock-workout-3",
        "ownerId": None,
        "status": "approved",
        "title": "Upper / Lower Split",
        "description": "Four days a week alternating upper and lower body.",
        "difficulty": "intermediate",
        "duration": "8 weeks",
        "avgRating": 4.7,
        "totalRatings": 64,
        "exercises": [
            {"name": "Bench Press", "sets": 4, "reps": 8, "rest": "90 seconds"},
            {"name": "Pull-ups", "sets": 4, "reps": 8, "rest": "90 seconds"},
            {"name": "Romanian Deadlift", "sets": 3, "reps": 10, "rest": "90 seconds"},
            {"name": "Walking Lunges", "sets": 3, "reps": 12, "rest": "60 seconds"},
        ],
    },
    {
        "id": "mock-workout-4",
        "ownerId": None,
        "status": "approved",
        "title": "Strength Peak",
        "description": "Heavy compound lifts with progressive overload.",
        "difficulty": "advanced",
        "duration": "12 weeks",
        "avgRating": 4.8,
        "totalRatings": 41,
        "exercises": [
            {"name": "Back Squat", "sets": 5, "reps": 5, "rest": "3 minutes"},
            {"name": "Deadlift", "sets": 5, "reps": 3, "rest": "3 minutes"},
            {"name": "Overhead Press", "sets": 5, "reps": 5, "rest": "2 minutes"},
        ],
    },
]

MOCK_MEAL_PLANS: list[dict[str, Any]] = [
    {
        "id": "mock-meal-1",
        "ownerId": None,
        "status": "approved",
        "title": "High Protein Meal Plan",
        "description": "A meal plan focused on high protein intake.",
        "dietaryCategory": "high-protein",
        "calories": 2200,
        "avgRating": 4.5,
        "totalRatings": 96,
        "meals": [
            {
                "type": "Breakfast",
                "name": "Protein Oatmeal",
                "ingredients": ["1/2 cup rolled oats", "1 scoop protein powder", "1 tbsp almond butter"],
                "calories": 350,
                "protein": 25,
                "carbs": 40,
                "fat": 10,
            },
            {
                "type": "Lunch",
                "name": "Chicken Salad",
                "ingredients": ["4 oz grilled chicken breast", "2 cups mixed greens", "1/4 avocado"],
                "calories": 400,
                "protein": 35,
                "carbs": 15,
                "fat": 20,
            },
        ],
    },
    {
        "id": "mock-meal-2",
        "ownerId": None,
        "status": "approved",
        "title": "Vegetarian Meal Plan",
        "description": "Balanced vegetarian meals with plenty of legumes and whole grains.",
        "dietaryCategory": "vegetarian",
        "calories": 1900,
        "avgRating": 4.3,
        "totalRatings": 72,
        "meals": [
            {
                "type": "Lunch",
                "name": "Lentil Buddha Bowl",
                "ingredients": ["1 cup cooked lentils", "1/2 cup quinoa", "roasted vegetables"],
                "calories": 520,
                "protein": 24,
                "carbs": 70,
                "fat": 14,
            },
        ],
    },
    {
        "id": "mock-meal-3",
        "ownerId": None,
        "status": "approved",
        "title": "Plant Power",
        "description": "Fully plant-based meals for every day of the week.",
        "dietaryCategory": "vegan",
        "calories": 2000,
        "avgRating": 4.2,
        "totalRatings": 39,
        "meals": [
            {
                "type": "Dinner",
                "name": "Tofu Stir-fry",
                "ingredients": ["200 g firm tofu", "mixed vegetables", "1 cup brown rice"],
                "calories": 560,
                "protein": 28,
                "carbs": 68,
                "fat": 18,
            },
        ],
    },
    {
        "id": "mock-meal-4",
        "ownerId": None,
        "status": "approved",
        "title": "Low Carb Reset",
        "description": "Keto-friendly meals under 50 g of carbs a day.",
        "dietaryCategory": "keto",
        "calories": 1800,
        "avgRating": 4.0,
        "totalRatings": 25,
        "meals": [
            {
                "type": "Dinner",
                "name": "Salmon with Greens",
                "ingredients": ["5 oz baked salmon", "2 cups spinach", "1 tbsp olive oil"],
                "calories": 450,
                "protein": 34,
                "carbs": 6,
                "fat": 30,
            },
        ],
    },
]
