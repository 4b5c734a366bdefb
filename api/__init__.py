"""
API package for the workout sync service.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
- schemas/: Request and response models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_aggregate_store,
    get_ingest_transcription_use_case,
    get_load_workout_use_case,
    get_settings,
    get_supabase_client_required,
    get_transcription_service,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client_required",
    "get_aggregate_store",
    # Services
    "get_transcription_service",
    # Use cases
    "get_load_workout_use_case",
    "get_ingest_transcription_use_case",
]
