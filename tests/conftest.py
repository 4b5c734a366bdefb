"""Shared pytest configuration."""
import pytest

from domain.entities import background
from tests.fakes.conftest import (  # noqa: F401
    client,
    fake_store,
    fake_transcriber,
    test_app,
)


@pytest.fixture(autouse=True)
def _forget_background_tasks():
    """Drop tasks left over from a test; each test runs on its own event loop."""
    yield
    background._pending.clear()
