"""Shared pytest fixtures and markers for all tests."""

import pytest

from housecomp.engine.catalog import CompetitionCatalog
from housecomp.engine.notifications import NotificationChannel
from housecomp.engine.reconciliation import ReconciliationGate
from housecomp.engine.timers import ManualScheduler
from housecomp.models.competition import CompetitionCategory, CompetitionDefinition
from housecomp.store import GameStore

TIMEOUT_MS = 6000
REVEAL_MS = 1200


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests that drive the full challenge flow"
    )


def make_definition(key: str, **overrides) -> CompetitionDefinition:
    """Helper to create a minimal competition definition."""
    fields = {
        "key": key,
        "title": key.title(),
        "category": CompetitionCategory.ARCADE,
    }
    fields.update(overrides)
    return CompetitionDefinition(**fields)


@pytest.fixture
def scheduler():
    """Provide a virtual-clock scheduler starting at 0ms."""
    return ManualScheduler()


@pytest.fixture
def store():
    """Provide an empty game store."""
    return GameStore()


@pytest.fixture
def channel():
    """Provide a fresh notification channel."""
    return NotificationChannel()


@pytest.fixture
def gate(store, scheduler, channel):
    """Provide a reconciliation gate with default timings."""
    return ReconciliationGate(
        store,
        scheduler,
        channel=channel,
        timeout_ms=TIMEOUT_MS,
        reveal_ms=REVEAL_MS,
    )


@pytest.fixture
def weighted_catalog():
    """Two definitions weighted 1:3."""
    return CompetitionCatalog([
        make_definition("light", weight=1),
        make_definition("heavy", weight=3),
    ])


@pytest.fixture
def mixed_catalog():
    """Small catalog covering categories, retirement and every adapter family."""
    return CompetitionCatalog([
        make_definition("tapper", scoring_adapter="raw", category=CompetitionCategory.ARCADE),
        make_definition(
            "sprinter",
            scoring_adapter="timeToPoints",
            scoring_params={"targetMs": 1000, "maxMs": 10000},
            category=CompetitionCategory.ARCADE,
        ),
        make_definition(
            "stacker",
            scoring_adapter="authoritative",
            authoritative=True,
            category=CompetitionCategory.LOGIC,
        ),
        make_definition("quiz", scoring_adapter="rankPoints", category=CompetitionCategory.TRIVIA),
        make_definition("oldQuiz", category=CompetitionCategory.TRIVIA, retired=True, replaced_by="quiz"),
    ])
