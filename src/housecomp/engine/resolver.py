"""Authoritative winner resolution for housecomp.

Several independent sources may claim a winner for the same competition
run, asynchronously and in any order. This module turns those claims into
exactly one AuthoritativeWinner by a fixed precedence rule rather than by
arrival order.

Precedence (highest first):
1. self-reported: a RawResult flagged authoritative_winner, or the top
   result of an authoritative-adapter competition
2. store: the winner already present in shared game state at start
3. external-event: a ``competition:finished`` notification naming a winner
4. timeout-fallback: after the bounded wait window, the best-ranked result,
   or a seeded pick among eligible participants when there are no results

Rules:
- Claims naming a non-participant are ignored
- Among claims of the same tier, the first to arrive wins
- Once resolved, same-or-lower tier claims are no-ops; a strictly higher
  tier claim replaces the provisional winner until ``lock()`` (commit)
- Timeout with no participants and no results raises UnresolvableCompetition
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from housecomp.engine.notifications import (
    COMPETITION_FINISHED,
    CompetitionFinished,
    NotificationChannel,
    Subscription,
)
from housecomp.engine.timers import Scheduler, TimerGroup
from housecomp.errors import UnresolvableCompetition
from housecomp.models.results import (
    AuthoritativeWinner,
    RankedResult,
    WinnerSignal,
    WinnerSource,
)
from housecomp.parameters import RESOLVE_TIMEOUT_MS

logger = logging.getLogger(__name__)

TIMEOUT_TIMER = "resolve-timeout"


# =============================================================================
# Session input
# =============================================================================


class ResolutionSession(BaseModel):
    """Signals available for one competition run at resolution time.

    Attributes:
        run_id: Identifier of the competition run
        participants: Eligible player ids (derived from results when empty)
        ranked: Ranked results, best first
        authoritative_adapter: The competition names its own winner, so the
            top ranked result is ground truth
        store_winner: Winner present in shared state at resolution start
        seed: Seed for the no-results fallback pick
    """

    model_config = ConfigDict(frozen=True)

    run_id: str
    participants: tuple[str, ...] = ()
    ranked: tuple[RankedResult, ...] = ()
    authoritative_adapter: bool = False
    store_winner: str | None = None
    seed: int = Field(default=0)

    def eligible_players(self) -> list[str]:
        """Participants, or the result owners when no participants were given."""
        if self.participants:
            return list(self.participants)
        seen: list[str] = []
        for result in self.ranked:
            if result.player_id not in seen:
                seen.append(result.player_id)
        return seen

    def is_eligible(self, player_id: str | None) -> bool:
        return player_id is not None and player_id in self.eligible_players()

    def self_reported_signal(self) -> WinnerSignal | None:
        """Tier 1 claim derived from the results, if any."""
        eligible = [r for r in self.ranked if self.is_eligible(r.player_id)]
        for result in eligible:
            if result.authoritative_winner:
                return WinnerSignal(
                    source=WinnerSource.SELF_REPORTED, player_id=result.player_id, score=result.score
                )
        if self.authoritative_adapter and eligible:
            top = eligible[0]
            return WinnerSignal(source=WinnerSource.SELF_REPORTED, player_id=top.player_id, score=top.score)
        return None

    def store_signal(self) -> WinnerSignal | None:
        """Tier 2 claim from shared state, if it names a participant."""
        if not self.is_eligible(self.store_winner):
            return None
        return WinnerSignal(
            source=WinnerSource.STORE, player_id=self.store_winner, score=self.score_of(self.store_winner)
        )

    def fallback_signal(self) -> WinnerSignal:
        """Tier 4 claim: best-ranked result, else a seeded participant pick.

        Raises:
            UnresolvableCompetition: No participants and no results
        """
        for result in self.ranked:
            if self.is_eligible(result.player_id):
                return WinnerSignal(
                    source=WinnerSource.TIMEOUT_FALLBACK, player_id=result.player_id, score=result.score
                )
        eligible = self.eligible_players()
        if not eligible:
            raise UnresolvableCompetition(self.run_id)
        picked = random.Random(self.seed).choice(eligible)
        return WinnerSignal(source=WinnerSource.TIMEOUT_FALLBACK, player_id=picked)

    def score_of(self, player_id: str | None) -> int | None:
        for result in self.ranked:
            if result.player_id == player_id:
                return result.score
        return None


def select_signal(signals: Iterable[WinnerSignal]) -> WinnerSignal | None:
    """Highest-precedence signal; the earliest one among equal tiers."""
    best: WinnerSignal | None = None
    for signal in signals:
        if best is None or signal.source.outranks(best.source):
            best = signal
    return best


def resolve(
    session: ResolutionSession,
    signals: Sequence[WinnerSignal] = (),
    *,
    timed_out: bool = True,
    timestamp: float = 0.0,
) -> AuthoritativeWinner | None:
    """Apply the precedence rule to everything currently known.

    Args:
        session: Results, participants and store state for the run
        signals: External claims received so far, in arrival order
        timed_out: Whether the wait window has elapsed. When False and no
            tier 1-3 claim exists, None is returned (still waiting)
        timestamp: Clock value recorded on the winner

    Returns:
        The authoritative winner, or None while still waiting

    Raises:
        UnresolvableCompetition: Timed out with no participants or results
    """
    candidates = [
        signal
        for signal in (session.self_reported_signal(), session.store_signal(), *signals)
        if signal is not None and session.is_eligible(signal.player_id)
    ]
    chosen = select_signal(candidates)
    if chosen is None:
        if not timed_out:
            return None
        chosen = session.fallback_signal()
    if chosen.score is None:
        chosen = chosen.model_copy(update={"score": session.score_of(chosen.player_id)})
    return AuthoritativeWinner.from_signal(chosen, timestamp)


# =============================================================================
# Event-driven resolver
# =============================================================================


class ResolverState(str, Enum):
    WAITING = "waiting"
    RESOLVED = "resolved"
    FAILED = "failed"


WinnerListener = Callable[[AuthoritativeWinner], None]
ErrorListener = Callable[[UnresolvableCompetition], None]


class AuthoritativeWinnerResolver:
    """Collects winner claims for one run and keeps the current best.

    The resolver never blocks: ``start`` checks the synchronous tiers and
    arms a timeout on its TimerGroup; claims arriving later go through
    ``offer``. The winner stays provisional until ``lock`` is called by the
    commit.

    Args:
        session: Initial session data
        scheduler: Clock and timers
        timeout_ms: Bounded wait window before the fallback
        channel: If given, ``competition:finished`` notifications are
            offered as external-event claims
        timers: TimerGroup to schedule on (defaults to a private group)
    """

    def __init__(
        self,
        session: ResolutionSession,
        scheduler: Scheduler,
        *,
        timeout_ms: float = RESOLVE_TIMEOUT_MS,
        channel: NotificationChannel | None = None,
        timers: TimerGroup | None = None,
    ):
        self.session = session
        self.scheduler = scheduler
        self.timeout_ms = timeout_ms
        self.timers = timers or TimerGroup(scheduler, name=f"resolver:{session.run_id}")
        self.state = ResolverState.WAITING
        self.winner: AuthoritativeWinner | None = None
        self.signals: list[WinnerSignal] = []
        self.locked = False
        self.cancelled = False
        self._channel = channel
        self._subscription: Subscription | None = None
        self._listeners: list[WinnerListener] = []
        self._error_listeners: list[ErrorListener] = []
        self._started = False

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def on_winner(self, listener: WinnerListener) -> None:
        """Call ``listener`` on every resolution and provisional replacement."""
        self._listeners.append(listener)

    def on_error(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_final(self) -> bool:
        return self.locked or self.cancelled or self.state == ResolverState.FAILED

    def start(self) -> AuthoritativeWinner | None:
        """Evaluate the synchronous tiers and start waiting if needed.

        Returns:
            The winner if one is already known, else None
        """
        if self._started:
            return self.winner
        self._started = True

        if self._channel is not None:
            self._subscription = self._channel.subscribe(COMPETITION_FINISHED, self._on_finished)

        self._update()
        if self.winner is None:
            self.timers.schedule(TIMEOUT_TIMER, self.timeout_ms, self._on_timeout)
            logger.debug(f"Run {self.session.run_id}: waiting up to {self.timeout_ms}ms for a winner")
        return self.winner

    def offer(self, signal: WinnerSignal) -> bool:
        """Offer a claim from any source.

        Returns:
            True if the claim changed the current winner
        """
        if self.is_final:
            logger.debug(f"Run {self.session.run_id}: ignoring {signal.source.value} claim, resolver final")
            return False
        if not self.session.is_eligible(signal.player_id):
            logger.debug(f"Run {self.session.run_id}: ignoring claim for non-participant {signal.player_id}")
            return False
        self.signals.append(signal)
        return self._update()

    def offer_results(self, ranked: Sequence[RankedResult]) -> bool:
        """Replace the ranked results, e.g. when the challenge reports late.

        Returns:
            True if the results changed the current winner
        """
        if self.is_final:
            return False
        self.session = self.session.model_copy(update={"ranked": tuple(ranked)})
        return self._update()

    def resolve_now(self) -> AuthoritativeWinner | None:
        """Resolve immediately, using the fallback if nothing better exists.

        Used when the observer skips ahead. A failure is reported exactly as
        a timeout failure would be.

        Returns:
            The winner, or None if resolution failed or was abandoned
        """
        if self.winner is None:
            self._on_timeout()
        return self.winner

    def lock(self) -> AuthoritativeWinner | None:
        """Freeze the current winner. Called when the winner is committed."""
        self.locked = True
        self._teardown()
        return self.winner

    def cancel(self) -> None:
        """Abandon resolution without producing a winner."""
        self.cancelled = True
        self._teardown()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _teardown(self) -> None:
        self.timers.cancel(TIMEOUT_TIMER)
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def _on_finished(self, payload: CompetitionFinished | None) -> None:
        if payload is None or payload.winner_id is None:
            return
        if payload.run_id is not None and payload.run_id != self.session.run_id:
            return
        self.offer(
            WinnerSignal(
                source=WinnerSource.EXTERNAL_EVENT,
                player_id=payload.winner_id,
                score=self.session.score_of(payload.winner_id),
            )
        )

    def _on_timeout(self) -> None:
        if self.is_final or self.winner is not None:
            return
        try:
            winner = resolve(self.session, self.signals, timed_out=True, timestamp=self.scheduler.now())
        except UnresolvableCompetition as exc:
            self._fail(exc)
            return
        logger.warning(
            f"Run {self.session.run_id}: no winner reported within {self.timeout_ms}ms, "
            f"falling back to {winner.player_id}"
        )
        self._set_winner(winner)

    def _update(self) -> bool:
        candidate = resolve(self.session, self.signals, timed_out=False, timestamp=self.scheduler.now())
        if candidate is None:
            return False
        if self.winner is not None and not candidate.source.outranks(self.winner.source):
            logger.debug(
                f"Run {self.session.run_id}: {candidate.source.value} claim does not outrank "
                f"{self.winner.source.value}, keeping {self.winner.player_id}"
            )
            return False
        self._set_winner(candidate)
        return True

    def _set_winner(self, winner: AuthoritativeWinner) -> None:
        previous = self.winner
        self.winner = winner
        self.state = ResolverState.RESOLVED
        self.timers.cancel(TIMEOUT_TIMER)
        if previous is None:
            logger.info(f"Run {self.session.run_id}: resolved {winner.player_id} ({winner.source.value})")
        else:
            logger.info(
                f"Run {self.session.run_id}: {winner.source.value} winner {winner.player_id} "
                f"replaces provisional {previous.source.value} winner {previous.player_id}"
            )
        for listener in list(self._listeners):
            listener(winner)

    def _fail(self, exc: UnresolvableCompetition) -> None:
        self.state = ResolverState.FAILED
        self._teardown()
        logger.error(f"Run {self.session.run_id}: {exc}")
        if not self._error_listeners:
            raise exc
        for listener in list(self._error_listeners):
            listener(exc)
