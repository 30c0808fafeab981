"""Shared authoritative game state for housecomp.

GameStore stands in for the game's state store: it holds the current
competition winner field and the committed winner of every run.
``apply_winner`` is the only mutation path for a run's winner and is called
by the reconciliation gate.

The winner field serves two readers. The rest of the game reads it as the
latest winner. The resolver reads it as the ``store`` precedence tier, but
only while it was set by game-core logic ahead of a run; a value left there
by an earlier commit belongs to that run and is not a claim for the next.
"""

from __future__ import annotations

import logging

from housecomp.errors import WinnerAlreadyCommitted
from housecomp.models.results import AuthoritativeWinner

logger = logging.getLogger(__name__)


class GameStore:
    """In-memory authoritative state.

    Attributes:
        winner_id: Current competition winner as seen by the rest of the game.
            Game-core logic outside the pipeline may set it ahead of a run.
    """

    def __init__(self, winner_id: str | None = None):
        self.winner_id = winner_id
        self._committed: dict[str, AuthoritativeWinner] = {}
        self._winner_run_id: str | None = None
        self.write_count = 0

    def set_external_winner(self, player_id: str | None) -> None:
        """Record a winner decided by game-core logic outside the pipeline."""
        self.winner_id = player_id
        self._winner_run_id = None

    def external_winner(self) -> str | None:
        """Winner field as a store-tier claim for the next run.

        Returns None when the field only holds an earlier run's committed winner.
        """
        if self._winner_run_id is not None:
            return None
        return self.winner_id

    def apply_winner(self, run_id: str, winner: AuthoritativeWinner) -> None:
        """Commit the winner of a run.

        Raises:
            WinnerAlreadyCommitted: If the run already has a committed winner
        """
        existing = self._committed.get(run_id)
        if existing is not None:
            raise WinnerAlreadyCommitted(run_id, existing.player_id)
        self._committed[run_id] = winner
        self.winner_id = winner.player_id
        self._winner_run_id = run_id
        self.write_count += 1
        logger.info(f"Committed winner {winner.player_id} for run {run_id} (source={winner.source.value})")

    def committed_winner(self, run_id: str) -> AuthoritativeWinner | None:
        return self._committed.get(run_id)

    def is_committed(self, run_id: str) -> bool:
        return run_id in self._committed
