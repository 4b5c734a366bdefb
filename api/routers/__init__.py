"""
Router package for the workout sync service.

This package contains all API routers organized by domain:
- health: Health check endpoint
- transcriptions: Handwritten log transcription and ingestion
- workouts: Workout listing, summaries and deletion
- exercises: Exercise definitions with personal bests
"""

from api.routers.exercises import router as exercises_router
from api.routers.health import router as health_router
from api.routers.transcriptions import router as transcriptions_router
from api.routers.workouts import router as workouts_router

__all__ = [
    "health_router",
    "transcriptions_router",
    "workouts_router",
    "exercises_router",
]
