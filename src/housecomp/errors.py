"""Exceptions raised by housecomp.

Fallbacks (unknown adapter, empty pool, duplicate commit) are logged and
handled in place; only the conditions below are surfaced to callers.
"""


class HousecompError(Exception):
    """Base class for housecomp errors."""


class NoCompetitionsAvailable(HousecompError):
    """The catalog holds no non-retired definitions.

    This is a configuration error and is never retried.
    """


class UnresolvableCompetition(HousecompError):
    """The wait window elapsed with zero participants and zero results."""

    def __init__(self, competition_key: str):
        super().__init__(f"No participants or results for competition run: {competition_key}")
        self.competition_key = competition_key


class WinnerAlreadyCommitted(HousecompError):
    """A second writer tried to set the winner of an already committed run."""

    def __init__(self, run_id: str, existing_player_id: str):
        super().__init__(f"Run {run_id} already committed winner {existing_player_id}")
        self.run_id = run_id
        self.existing_player_id = existing_player_id
