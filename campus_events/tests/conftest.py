"""Pytest configuration for campus events tests."""

import os
from unittest.mock import patch

import pytest

from campus_events.models.config import CampusEventsConfig
from campus_events.store import EventStore
from campus_events.tests.factories import FIXED_NOW


@pytest.fixture(scope="session", autouse=True)
def clean_env_vars():
    """Keep the developer's CAMPUS_EVENTS_* settings out of the tests."""
    cleaned = {key: value for key, value in os.environ.items() if not key.startswith("CAMPUS_EVENTS_")}
    with patch.dict(os.environ, cleaned, clear=True):
        yield


@pytest.fixture
def config():
    """Create a CampusEventsConfig for testing."""
    return CampusEventsConfig(_env_file=None)


@pytest.fixture
def store(config):
    """Empty store whose clock is fixed at FIXED_NOW."""
    return EventStore(config, clock=lambda: FIXED_NOW)


@pytest.fixture
def event_form():
    """Valid event creation form."""
    return {
        "name": "Python Workshop",
        "type": "Workshop",
        "date": "2024-03-15",
        "time": "14:00",
        "location": "Lab 101",
        "description": "Intro to Python",
        "max_capacity": 2,
    }
