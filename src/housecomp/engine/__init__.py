"""Competition engine for housecomp.

This module contains the core competition logic including:
- scoring: Adapters mapping raw challenge output to canonical scores
- catalog: Competition table and deterministic weighted selection
- resolver: Precedence-based authoritative winner resolution
- reconciliation: Exactly-once commit behind the observer presentation
- challenge: End-to-end orchestration and run history
- timers / notifications: Cancellable timers and the in-process channel

Usage:
    from housecomp.engine import (
        ChallengeCoordinator, GameStore, ManualScheduler, ReconciliationGate,
        get_default_catalog,
    )
    from housecomp.models import RawResult

    scheduler = ManualScheduler()
    gate = ReconciliationGate(GameStore(), scheduler)
    coordinator = ChallengeCoordinator(get_default_catalog(), gate)

    pending = coordinator.start_challenge(seed=42, participants=["p1", "p2"])
    run = coordinator.complete_challenge([
        RawResult(player_id="p1", raw_value=80),
        RawResult(player_id="p2", raw_value=55),
    ])
    print(f"{run.competition_key}: {run.winner.player_id} ({run.winner.source.value})")
"""

from housecomp.engine.catalog import CompetitionCatalog, get_default_catalog
from housecomp.engine.challenge import (
    ChallengeCoordinator,
    ChallengePhase,
    ChallengeRun,
    DebugOverrides,
    PendingChallenge,
    derive_seed,
)
from housecomp.engine.notifications import (
    COMPETITION_FINISHED,
    SHOW_OBSERVER_VIEW,
    CompetitionFinished,
    NotificationChannel,
    ShowObserverView,
    Subscription,
)
from housecomp.engine.reconciliation import (
    ReconciliationGate,
    ReconciliationSession,
    SessionState,
)
from housecomp.engine.resolver import (
    AuthoritativeWinnerResolver,
    ResolutionSession,
    ResolverState,
    resolve,
)
from housecomp.engine.scoring import (
    ADAPTERS,
    compute_ranked,
    compute_score,
    normalize_for_ranking,
)
from housecomp.engine.timers import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    TimerGroup,
    TimerHandle,
)
from housecomp.store import GameStore

__all__ = [
    # Scoring
    "ADAPTERS",
    "compute_score",
    "compute_ranked",
    "normalize_for_ranking",
    # Catalog
    "CompetitionCatalog",
    "get_default_catalog",
    # Resolution
    "AuthoritativeWinnerResolver",
    "ResolutionSession",
    "ResolverState",
    "resolve",
    # Reconciliation
    "ReconciliationGate",
    "ReconciliationSession",
    "SessionState",
    "GameStore",
    # Orchestration
    "ChallengeCoordinator",
    "ChallengePhase",
    "ChallengeRun",
    "DebugOverrides",
    "PendingChallenge",
    "derive_seed",
    # Timers and notifications
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "TimerGroup",
    "TimerHandle",
    "NotificationChannel",
    "Subscription",
    "CompetitionFinished",
    "ShowObserverView",
    "COMPETITION_FINISHED",
    "SHOW_OBSERVER_VIEW",
]
