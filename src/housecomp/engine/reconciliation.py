"""Reconciliation gate for observer presentations.

When a competition's outcome is shown to an observer before it is applied,
the commit into shared state has to wait for the reveal to finish, and it
must happen exactly once however many "done" or "skip" events arrive.

Session lifecycle:
    idle -> running -> resolving -> revealing -> committed
                 \\________________________/
                        presenting
    presenting -> cancelled (observer view unmounted, nothing committed)

- running: presentation is up, no winner known yet
- resolving: a (provisional) winner is known, reveal animation playing
- revealing: reveal finished, waiting for the presentation's done signal
- A higher-precedence winner arriving before commit restarts the reveal

Commit triggers: ``done()`` after the reveal, or ``skip()`` at any point
while presenting. The guard flag is set before any commit logic runs, so
duplicate triggers are silent no-ops. The gate is the only writer of a
run's winner into the GameStore.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from housecomp import config
from housecomp.engine.notifications import (
    SHOW_OBSERVER_VIEW,
    NotificationChannel,
    ShowObserverView,
    Subscription,
)
from housecomp.engine.resolver import AuthoritativeWinnerResolver, ResolutionSession
from housecomp.engine.timers import Scheduler, TimerGroup
from housecomp.errors import UnresolvableCompetition
from housecomp.models.results import AuthoritativeWinner, RankedResult, WinnerSignal, WinnerSource
from housecomp.store import GameStore

logger = logging.getLogger(__name__)

REVEAL_TIMER = "reveal"


class SessionState(str, Enum):
    """States of a ReconciliationSession."""

    IDLE = "idle"
    RUNNING = "running"
    RESOLVING = "resolving"
    REVEALING = "revealing"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


PRESENTING_STATES = frozenset({SessionState.RUNNING, SessionState.RESOLVING, SessionState.REVEALING})


def new_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


@dataclass
class ReconciliationSession:
    """One observer presentation of one competition run.

    Attributes:
        session_id: Unique per mount; a remount never reuses it
        run_id: Competition run being presented
        competitor_ids: Participants shown
        resolver: Winner resolver owned by this session
        timers: Every timer of this session (reveal and resolver timeout)
        state: Current SessionState
        guard_flag: Set the instant a commit begins
        pending_winner: Winner to be committed, provisional until commit
    """

    session_id: str
    run_id: str
    competitor_ids: tuple[str, ...]
    resolver: AuthoritativeWinnerResolver
    timers: TimerGroup
    state: SessionState = SessionState.IDLE
    guard_flag: bool = False
    pending_winner: AuthoritativeWinner | None = None

    @property
    def is_presenting(self) -> bool:
        return self.state in PRESENTING_STATES


CommitListener = Callable[[str, AuthoritativeWinner], None]
RevealListener = Callable[[ReconciliationSession], None]
FailureListener = Callable[[ReconciliationSession, UnresolvableCompetition], None]


class ReconciliationGate:
    """Single writer of competition winners into the GameStore.

    Args:
        store: Shared authoritative state
        scheduler: Clock and timers
        channel: Notification channel for ``competition:finished`` (resolver)
            and ``observer:show`` (see ``listen``)
        timeout_ms: Resolver wait window (default from config)
        reveal_ms: Reveal animation length (default from config)
        auto_commit: Commit as soon as the reveal finishes instead of waiting
            for the presentation's done signal
    """

    def __init__(
        self,
        store: GameStore,
        scheduler: Scheduler,
        *,
        channel: NotificationChannel | None = None,
        timeout_ms: float | None = None,
        reveal_ms: float | None = None,
        auto_commit: bool = False,
    ):
        self.store = store
        self.scheduler = scheduler
        self.channel = channel
        self.timeout_ms = config.get_resolve_timeout_ms() if timeout_ms is None else timeout_ms
        self.reveal_ms = config.get_reveal_duration_ms() if reveal_ms is None else reveal_ms
        self.auto_commit = auto_commit
        self.session: ReconciliationSession | None = None
        self._commit_listeners: list[CommitListener] = []
        self._reveal_listeners: list[RevealListener] = []
        self._failure_listeners: list[FailureListener] = []
        self._direct_runs: set[str] = set()

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def on_commit(self, listener: CommitListener) -> None:
        self._commit_listeners.append(listener)

    def on_reveal(self, listener: RevealListener) -> None:
        self._reveal_listeners.append(listener)

    def on_failure(self, listener: FailureListener) -> None:
        self._failure_listeners.append(listener)

    def listen(self) -> Subscription:
        """Mount sessions in response to ``observer:show`` notifications.

        Raises:
            ValueError: If the gate has no channel
        """
        if self.channel is None:
            raise ValueError("ReconciliationGate.listen requires a notification channel")
        return self.channel.subscribe(SHOW_OBSERVER_VIEW, self._on_show)

    # -------------------------------------------------------------------------
    # Presentation lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_presenting(self) -> bool:
        return self.session is not None and self.session.is_presenting

    def mount(
        self,
        run_id: str | None = None,
        competitor_ids: Sequence[str] = (),
        *,
        ranked: Sequence[RankedResult] = (),
        authoritative_adapter: bool = False,
        initial_winner_id: str | None = None,
        seed: int = 0,
    ) -> ReconciliationSession:
        """Start a fresh observer session (idle -> presenting).

        Any existing session is discarded first without committing.

        Args:
            run_id: Run being presented (generated if omitted)
            competitor_ids: Participants shown
            ranked: Ranked results already known
            authoritative_adapter: The competition names its own winner
            initial_winner_id: Winner already announced with the show request
            seed: Seed for the no-results fallback pick
        """
        if self.session is not None:
            logger.info(f"Discarding session {self.session.session_id} for a new mount")
            self.unmount()

        run_id = run_id or new_run_id()
        session_id = uuid.uuid4().hex
        timers = TimerGroup(self.scheduler, name=f"session:{session_id[:8]}")
        resolution = ResolutionSession(
            run_id=run_id,
            participants=tuple(competitor_ids),
            ranked=tuple(ranked),
            authoritative_adapter=authoritative_adapter,
            store_winner=self.store.external_winner(),
            seed=seed,
        )
        resolver = AuthoritativeWinnerResolver(
            resolution,
            self.scheduler,
            timeout_ms=self.timeout_ms,
            channel=self.channel,
            timers=timers,
        )
        session = ReconciliationSession(
            session_id=session_id,
            run_id=run_id,
            competitor_ids=tuple(competitor_ids),
            resolver=resolver,
            timers=timers,
        )
        resolver.on_winner(lambda winner: self._on_winner(session, winner))
        resolver.on_error(lambda exc: self._on_failure(session, exc))

        self.session = session
        session.state = SessionState.RUNNING
        logger.info(f"Mounted observer session {session_id[:8]} for run {run_id}")

        resolver.start()
        if initial_winner_id is not None:
            resolver.offer(
                WinnerSignal(
                    source=WinnerSource.EXTERNAL_EVENT,
                    player_id=initial_winner_id,
                    score=resolution.score_of(initial_winner_id),
                )
            )
        return session

    def offer_results(self, ranked: Sequence[RankedResult]) -> bool:
        """Hand late-arriving results to the current session's resolver."""
        if not self.is_presenting:
            return False
        return self.session.resolver.offer_results(ranked)

    def done(self) -> bool:
        """Presentation finished its reveal. Commits once.

        The presentation runs its own reveal animation, so a done signal that
        arrives while the reveal timer is still running counts as the reveal
        completing. Before any winner is known the signal is ignored.

        Returns:
            True if this call committed the winner
        """
        session = self.session
        if session is None or session.guard_flag:
            logger.debug("Done signal with no active session, ignoring")
            return False
        if session.state not in (SessionState.RESOLVING, SessionState.REVEALING) or session.pending_winner is None:
            logger.debug(f"Done signal in state {session.state.value} before a winner, ignoring")
            return False
        return self._commit(session)

    def skip(self) -> bool:
        """Observer skipped ahead. Forces resolution if needed, then commits once.

        Returns:
            True if this call committed the winner
        """
        session = self.session
        if session is None or session.guard_flag or not session.is_presenting:
            logger.debug("Skip request with no presenting session, ignoring")
            return False
        if session.pending_winner is None:
            session.resolver.resolve_now()
            if self.session is not session or session.pending_winner is None:
                return False
        return self._commit(session)

    def unmount(self) -> bool:
        """Observer view went away. Cancels everything, commits nothing.

        Returns:
            True if a session was discarded
        """
        session = self.session
        if session is None:
            return False
        self.session = None
        session.resolver.cancel()
        cancelled = session.timers.close()
        session.state = SessionState.CANCELLED
        logger.info(f"Unmounted session {session.session_id[:8]} for run {session.run_id} ({cancelled} timer(s) cancelled)")
        return True

    def commit_direct(self, run_id: str, winner: AuthoritativeWinner) -> bool:
        """Commit a winner when no observer presentation is involved.

        Returns:
            True if committed, False if this run was already committed or is
            currently being presented
        """
        if self.session is not None and self.session.run_id == run_id:
            logger.warning(f"Run {run_id} is being presented; the observer session will commit it")
            return False
        if run_id in self._direct_runs or self.store.is_committed(run_id):
            logger.debug(f"Run {run_id} already committed, ignoring direct commit")
            return False
        self._direct_runs.add(run_id)
        self.store.apply_winner(run_id, winner)
        self._notify_commit(run_id, winner)
        return True

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _is_current(self, session: ReconciliationSession) -> bool:
        return self.session is session and not session.guard_flag

    def _on_show(self, payload: ShowObserverView) -> None:
        session = self.session
        same_run = session is not None and payload.run_id in (None, session.run_id)
        if session is not None and session.is_presenting and same_run:
            if payload.winner_id is not None:
                session.resolver.offer(
                    WinnerSignal(source=WinnerSource.EXTERNAL_EVENT, player_id=payload.winner_id)
                )
            return
        self.mount(payload.run_id, payload.competitor_ids, initial_winner_id=payload.winner_id)

    def _on_winner(self, session: ReconciliationSession, winner: AuthoritativeWinner) -> None:
        if not self._is_current(session):
            return
        session.pending_winner = winner
        session.state = SessionState.RESOLVING
        session.timers.schedule(REVEAL_TIMER, self.reveal_ms, lambda: self._on_revealed(session))
        logger.debug(f"Revealing {winner.player_id} for run {session.run_id} over {self.reveal_ms}ms")

    def _on_revealed(self, session: ReconciliationSession) -> None:
        if not self._is_current(session):
            return
        session.state = SessionState.REVEALING
        for listener in list(self._reveal_listeners):
            listener(session)
        if self.auto_commit and self._is_current(session):
            self.done()

    def _on_failure(self, session: ReconciliationSession, exc: UnresolvableCompetition) -> None:
        if self.session is session:
            self.session = None
        session.timers.close()
        session.state = SessionState.CANCELLED
        if not self._failure_listeners:
            raise exc
        for listener in list(self._failure_listeners):
            listener(session, exc)

    def _commit(self, session: ReconciliationSession) -> bool:
        session.guard_flag = True
        if self.store.is_committed(session.run_id):
            logger.debug(f"Run {session.run_id} already committed, discarding session {session.session_id[:8]}")
            if self.session is session:
                self.session = None
            session.resolver.cancel()
            session.timers.close()
            session.state = SessionState.CANCELLED
            return False
        try:
            session.resolver.lock()
            session.timers.close()
            winner = session.pending_winner
            self.store.apply_winner(session.run_id, winner)
            session.state = SessionState.COMMITTED
        finally:
            if self.session is session:
                self.session = None
        self._notify_commit(session.run_id, winner)
        return True

    def _notify_commit(self, run_id: str, winner: AuthoritativeWinner) -> None:
        for listener in list(self._commit_listeners):
            listener(run_id, winner)
