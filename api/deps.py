"""
FastAPI Dependency Providers for the workout sync service.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with in-memory fakes.

Architecture:
- Settings and the Supabase client are cached per-process
- The aggregate store and use cases are created per-request

Usage in routers:
    from api.deps import get_load_workout_use_case

    @router.get("/workouts/{workout_id}/summary")
    async def summary(
        workout_id: str,
        use_case: LoadWorkoutUseCase = Depends(get_load_workout_use_case),
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_aggregate_store] = lambda: fake_store
"""

from fastapi import Depends, HTTPException
from supabase import AsyncClient

from application.ports import AggregateStore, TranscriptionService
from application.use_cases import (
    ExerciseStatsUseCase,
    IngestTranscriptionUseCase,
    LoadWorkoutUseCase,
)
from backend.ai.client_factory import AIClientFactory
from backend.database import get_supabase_client as _get_supabase_client
from backend.settings import Settings, get_settings as _get_settings
from infrastructure import (
    OpenAITranscriptionService,
    SupabaseExerciseDefinitionRepository,
    SupabaseSetRepository,
    SupabaseWorkoutRepository,
)


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


async def get_supabase_client_required(
    settings: Settings = Depends(get_settings),
) -> AsyncClient:
    """
    Get the async Supabase client, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = await _get_supabase_client(settings)
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Aggregate Store Provider
# =============================================================================


def get_aggregate_store(
    client: AsyncClient = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> AggregateStore:
    """
    Get the repositories a workout aggregate is persisted across.

    Returns:
        AggregateStore backed by Supabase
    """
    return AggregateStore(
        workouts=SupabaseWorkoutRepository(
            client,
            max_attempts=settings.save_max_attempts,
            min_wait_seconds=settings.save_min_wait_seconds,
            max_wait_seconds=settings.save_max_wait_seconds,
        ),
        exercises=SupabaseExerciseDefinitionRepository(client),
        sets=SupabaseSetRepository(client),
        attach_timeout_seconds=settings.owner_attach_timeout_seconds,
    )


# =============================================================================
# Transcription Provider
# =============================================================================


def get_transcription_service(
    settings: Settings = Depends(get_settings),
) -> TranscriptionService:
    """
    Get the vision transcription service.

    Raises:
        HTTPException: 503 if the OpenAI API key is not configured
    """
    if not settings.openai_api_key:
        raise HTTPException(
            status_code=503,
            detail="Transcription not available. OpenAI API key not configured.",
        )
    client = AIClientFactory.create_openai_client(settings)
    return OpenAITranscriptionService(client, settings.transcription_model)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_load_workout_use_case(
    store: AggregateStore = Depends(get_aggregate_store),
) -> LoadWorkoutUseCase:
    return LoadWorkoutUseCase(store)


def get_ingest_transcription_use_case(
    store: AggregateStore = Depends(get_aggregate_store),
    transcriber: TranscriptionService = Depends(get_transcription_service),
) -> IngestTranscriptionUseCase:
    return IngestTranscriptionUseCase(store, transcriber)


def get_exercise_stats_use_case(
    store: AggregateStore = Depends(get_aggregate_store),
) -> ExerciseStatsUseCase:
    return ExerciseStatsUseCase(store)
