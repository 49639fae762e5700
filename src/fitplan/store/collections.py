"""Collection names. These MUST match the Firestore security rules."""

USERS = "users"
USER_STATS = "userStats"
USER_PROGRESS = "userProgress"  # completion event log
USER_ACHIEVEMENTS = "userAchievements"
WORKOUT_PLANS = "workoutPlans"
MEAL_PLANS = "mealPlans"
