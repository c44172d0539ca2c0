"""Shared pytest fixtures for revalidate tests."""

from __future__ import annotations

import pytest

from revalidate.store import MemoryStore

from tests.helpers import FaultyStore, RecordingObserver


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def faulty_store() -> FaultyStore:
    return FaultyStore()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()
