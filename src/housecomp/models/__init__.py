"""housecomp data models.

This module exports the competition definitions and result types shared by
the engine, the legacy shim and the coordinator.
"""

from .competition import (
    CompetitionCategory,
    CompetitionDefinition,
    MetricKind,
    ScoringAdapter,
    ScoringParams,
)
from .registry import DEFAULT_COMPETITIONS
from .results import (
    AdapterResult,
    AuthoritativeWinner,
    RankedResult,
    RawResult,
    WinnerSignal,
    WinnerSource,
)

__all__ = [
    # Enums
    "CompetitionCategory",
    "MetricKind",
    "ScoringAdapter",
    "WinnerSource",
    # Definition models
    "CompetitionDefinition",
    "ScoringParams",
    "DEFAULT_COMPETITIONS",
    # Result models
    "RawResult",
    "AdapterResult",
    "RankedResult",
    "WinnerSignal",
    "AuthoritativeWinner",
]
