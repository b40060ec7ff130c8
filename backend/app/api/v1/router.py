"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import goals, workouts, habit_data, statistics, smartwatch

api_router = APIRouter()

api_router.include_router(goals.router, prefix="/goals", tags=["Goals"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["Workouts"])
api_router.include_router(habit_data.router, prefix="/habit-data", tags=["Habit Data"])
api_router.include_router(statistics.router, prefix="/statistics", tags=["Statistics"])
api_router.include_router(smartwatch.router, tags=["SmartWatch"])
