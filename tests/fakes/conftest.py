"""
Test Fixtures and Helpers for Fake Repositories.

This module provides pytest fixtures and helper functions for overriding
FastAPI dependencies with in-memory fakes.

Usage:
    def test_something(client, fake_store):
        fake_store.workouts.seed([...])
        response = client.get("/workouts/w1/summary")
        assert response.status_code == 200

Or use the standalone functions:
    from tests.fakes.conftest import override_dependency, reset_overrides

    app = create_app(settings=Settings(environment="test", _env_file=None))
    override_dependency(app, get_aggregate_store, store)
"""

from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api import deps
from application.ports import AggregateStore
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import FakeTranscriptionService, create_store

# Type for dependency getters
DepGetter = Callable[..., Any]


# =============================================================================
# Reset and Override Functions
# =============================================================================


def reset_overrides(app: FastAPI) -> None:
    """Reset all FastAPI dependency overrides on `app`."""
    app.dependency_overrides.clear()


def override_dependency(app: FastAPI, getter: DepGetter, implementation: Any) -> None:
    """
    Override a FastAPI dependency with a fake implementation.

    Args:
        app: Application to override on
        getter: The dependency getter function (e.g., get_aggregate_store)
        implementation: The fake instance
    """
    app.dependency_overrides[getter] = lambda: implementation


# =============================================================================
# pytest Fixtures
# =============================================================================


@pytest.fixture
def fake_store() -> AggregateStore:
    """Fresh AggregateStore backed by in-memory fakes."""
    return create_store()


@pytest.fixture
def fake_transcriber() -> FakeTranscriptionService:
    """Fake transcriber returning an empty workout; tests replace `.result`."""
    return FakeTranscriptionService()


@pytest.fixture
def test_app(fake_store, fake_transcriber) -> FastAPI:
    """App with storage and transcription replaced by fakes."""
    app = create_app(settings=Settings(environment="test", _env_file=None))
    override_dependency(app, deps.get_aggregate_store, fake_store)
    override_dependency(app, deps.get_transcription_service, fake_transcriber)
    yield app
    reset_overrides(app)


@pytest.fixture
def client(test_app) -> TestClient:
    with TestClient(test_app) as test_client:
        yield test_client
