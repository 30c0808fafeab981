"""Challenge orchestration for housecomp.

Drives one competition from selection to committed winner:
    start_challenge -> rules -> countdown -> playing -> complete / spectate

- start_challenge picks a definition (or a forced one) and derives the
  per-challenge seed
- complete_challenge ranks the results, resolves the winner synchronously
  and commits it through the gate
- spectate_challenge hands the results to an observer session; the run is
  recorded when the gate commits

Completed runs are kept newest-first for replay telemetry.
"""

from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Iterable, Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict

from housecomp import config
from housecomp.engine.catalog import CompetitionCatalog
from housecomp.engine.reconciliation import ReconciliationGate, ReconciliationSession
from housecomp.engine.resolver import ResolutionSession, resolve
from housecomp.engine.scoring import compute_ranked
from housecomp.models.competition import CompetitionCategory, CompetitionDefinition, ScoringAdapter
from housecomp.models.results import AuthoritativeWinner, RankedResult, RawResult, WinnerSource

logger = logging.getLogger(__name__)

_MASK_32 = 0xFFFFFFFF
_GOLDEN_RATIO_32 = 0x9E3779B9


class ChallengePhase(str, Enum):
    RULES = "rules"
    COUNTDOWN = "countdown"
    PLAYING = "playing"
    DONE = "done"


class PendingChallenge(BaseModel):
    """The challenge currently being set up or played."""

    id: str
    definition: CompetitionDefinition
    seed: int
    participants: tuple[str, ...]
    phase: ChallengePhase = ChallengePhase.RULES


class ChallengeRun(BaseModel):
    """Telemetry record of a finished run, enough to replay it.

    Attributes:
        id: Run id
        competition_key: Definition that was played
        seed: Per-challenge seed
        participants: Player ids
        raw_scores: player_id -> raw value
        canonical_scores: player_id -> canonical score
        winner: Committed winner, with its source tag
        authoritative: Winner came from the self-reported tier
        timestamp: Scheduler clock at commit
    """

    model_config = ConfigDict(frozen=True)

    id: str
    competition_key: str
    seed: int
    participants: tuple[str, ...]
    raw_scores: dict[str, float]
    canonical_scores: dict[str, int]
    winner: AuthoritativeWinner
    authoritative: bool
    timestamp: float


class DebugOverrides(BaseModel):
    """Developer overrides applied by start_challenge."""

    force_key: str | None = None
    force_seed: int | None = None
    skip_rules: bool = False
    fast_forward_countdown: bool = False


def derive_seed(base: int, key: str) -> int:
    """Derive a per-challenge 32-bit seed from a base seed and a competition key.

    Different keys under the same base seed get unrelated seeds, while the
    same (base, key) pair always maps to the same value.
    """
    value = base & _MASK_32
    for char in key:
        value = ((value ^ ord(char)) * _GOLDEN_RATIO_32) & _MASK_32
    return int(random.Random(value).random() * (_MASK_32 + 1)) & _MASK_32


class ChallengeCoordinator:
    """Runs competitions end to end against a catalog and a gate.

    Args:
        catalog: Competitions to pick from
        gate: The single writer of winners
        history_limit: Completed runs kept (default from config)
    """

    def __init__(
        self,
        catalog: CompetitionCatalog,
        gate: ReconciliationGate,
        *,
        history_limit: int | None = None,
    ):
        self.catalog = catalog
        self.gate = gate
        self.history_limit = config.get_history_limit() if history_limit is None else history_limit
        self.debug = DebugOverrides()
        self.pending: PendingChallenge | None = None
        self._history: list[ChallengeRun] = []
        self._spectated: dict[str, tuple[PendingChallenge, list[RankedResult]]] = {}
        gate.on_commit(self._on_gate_commit)

    @property
    def history(self) -> list[ChallengeRun]:
        """Completed runs, newest first."""
        return list(self._history)

    # -------------------------------------------------------------------------
    # Debug overrides
    # -------------------------------------------------------------------------

    def set_debug_overrides(self, **overrides) -> DebugOverrides:
        self.debug = self.debug.model_copy(update=DebugOverrides(**overrides).model_dump(exclude_unset=True))
        return self.debug

    def clear_debug_overrides(self) -> None:
        self.debug = DebugOverrides()

    # -------------------------------------------------------------------------
    # Flow
    # -------------------------------------------------------------------------

    def start_challenge(
        self,
        seed: int,
        participants: Sequence[str],
        *,
        category: CompetitionCategory | str | None = None,
        exclude_keys: Iterable[str] | None = None,
        force_key: str | None = None,
    ) -> PendingChallenge:
        """Pick a competition and set it up as the pending challenge.

        Args:
            seed: Base seed; the per-challenge seed is derived from it
            participants: Player ids competing
            category: Optional category filter
            exclude_keys: Optional keys to leave out (e.g. recently played)
            force_key: Play this competition regardless of selection

        Raises:
            KeyError: If a forced key is not in the catalog
            NoCompetitionsAvailable: If the catalog has nothing to offer
        """
        forced = force_key or self.debug.force_key
        base_seed = seed if self.debug.force_seed is None else self.debug.force_seed

        if forced:
            definition = self.catalog.get_by_key(forced)
            if definition is None:
                raise KeyError(f"Unknown competition key: {forced}")
        else:
            definition = self.catalog.pick_random(base_seed, category=category, exclude_keys=exclude_keys)

        # A new competition starts with an empty winner field.
        self.gate.store.set_external_winner(None)

        self.pending = PendingChallenge(
            id=f"challenge-{uuid.uuid4().hex[:12]}",
            definition=definition,
            seed=derive_seed(base_seed, definition.key),
            participants=tuple(participants),
            phase=ChallengePhase.COUNTDOWN if self.debug.skip_rules else ChallengePhase.RULES,
        )
        logger.info(f"Started challenge {self.pending.id}: {definition.key} for {len(participants)} player(s)")
        return self.pending

    def set_phase(self, phase: ChallengePhase | str) -> None:
        if self.pending is not None:
            self.pending = self.pending.model_copy(update={"phase": ChallengePhase(phase)})

    def rank(self, raw_results: Iterable[RawResult]) -> list[RankedResult]:
        """Rank results with the pending definition's adapter."""
        if self.pending is None:
            return []
        definition = self.pending.definition
        return compute_ranked(definition.scoring_adapter, raw_results, definition.scoring_params)

    def complete_challenge(self, raw_results: Iterable[RawResult]) -> ChallengeRun | None:
        """Finish the pending challenge without an observer presentation.

        Returns:
            The recorded run, or None if nothing is pending or the run is
            already being presented to an observer (recorded on that commit)

        Raises:
            UnresolvableCompetition: No participants and no results
        """
        pending = self.pending
        if pending is None:
            return None
        results = list(raw_results)
        ranked = self.rank(results)
        session = ResolutionSession(
            run_id=pending.id,
            participants=pending.participants,
            ranked=tuple(ranked),
            authoritative_adapter=self._is_authoritative(pending.definition),
            store_winner=self.gate.store.external_winner(),
            seed=pending.seed,
        )
        winner = resolve(session, timed_out=True, timestamp=self.gate.scheduler.now())
        if not self.gate.commit_direct(pending.id, winner):
            logger.warning(f"Challenge {pending.id} was not committed directly; not recording it here")
            return None
        self.pending = None
        return self._record_run(pending, ranked, winner)

    def spectate_challenge(self, raw_results: Iterable[RawResult] = ()) -> ReconciliationSession | None:
        """Present the pending challenge to an observer before committing.

        Returns:
            The observer session, or None if nothing is pending
        """
        pending = self.pending
        if pending is None:
            return None
        ranked = self.rank(raw_results)
        self.pending = pending.model_copy(update={"phase": ChallengePhase.DONE})
        # Mounting discards any earlier observer session, so only one can commit.
        self._spectated = {pending.id: (pending, ranked)}
        return self.gate.mount(
            pending.id,
            pending.participants,
            ranked=ranked,
            authoritative_adapter=self._is_authoritative(pending.definition),
            seed=pending.seed,
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @staticmethod
    def _is_authoritative(definition: CompetitionDefinition) -> bool:
        return definition.authoritative or definition.scoring_adapter == ScoringAdapter.AUTHORITATIVE.value

    def _on_gate_commit(self, run_id: str, winner: AuthoritativeWinner) -> None:
        spectated = self._spectated.pop(run_id, None)
        if spectated is None:
            return
        pending, ranked = spectated
        if self.pending is not None and self.pending.id == run_id:
            self.pending = None
        self._record_run(pending, ranked, winner)

    def _record_run(
        self,
        pending: PendingChallenge,
        ranked: list[RankedResult],
        winner: AuthoritativeWinner,
    ) -> ChallengeRun:
        run = ChallengeRun(
            id=pending.id,
            competition_key=pending.definition.key,
            seed=pending.seed,
            participants=pending.participants,
            raw_scores={r.player_id: r.raw.raw_value for r in ranked},
            canonical_scores={r.player_id: r.score for r in ranked},
            winner=winner,
            authoritative=winner.source == WinnerSource.SELF_REPORTED,
            timestamp=self.gate.scheduler.now(),
        )
        self._history = [run, *self._history][: self.history_limit]
        logger.info(f"Recorded run {run.id}: {run.competition_key} won by {winner.player_id} ({winner.source.value})")
        return run
