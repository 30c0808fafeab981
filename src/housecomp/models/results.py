"""Result and winner models for housecomp.

RawResult is what a challenge emits per participant. AdapterResult is the
canonical score derived from it, RankedResult pairs the two with a
placement, and AuthoritativeWinner is the single outcome of a run.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from housecomp.parameters import CANONICAL_MAX, CANONICAL_MIN


class RawResult(BaseModel):
    """Raw output of one participant for one competition run.

    Attributes:
        player_id: Participant identifier
        raw_value: Adapter-dependent magnitude (count, ms, accuracy %, ...)
        authoritative_winner: Set by the challenge itself to name the winner
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_id: str = Field(alias="playerId")
    raw_value: float = Field(alias="rawValue")
    authoritative_winner: bool = Field(default=False, alias="authoritativeWinner")


class AdapterResult(BaseModel):
    """Canonical score and display points for one raw value."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=CANONICAL_MIN, le=CANONICAL_MAX)
    points: int


class RankedResult(BaseModel):
    """A scored result with its 1-based placement."""

    model_config = ConfigDict(frozen=True)

    raw: RawResult
    scored: AdapterResult
    rank: int = Field(ge=1)

    @property
    def player_id(self) -> str:
        return self.raw.player_id

    @property
    def score(self) -> int:
        return self.scored.score

    @property
    def points(self) -> int:
        return self.scored.points

    @property
    def authoritative_winner(self) -> bool:
        return self.raw.authoritative_winner


class WinnerSource(str, Enum):
    """Where an authoritative winner came from, in precedence order."""

    SELF_REPORTED = "self-reported"
    STORE = "store"
    EXTERNAL_EVENT = "external-event"
    TIMEOUT_FALLBACK = "timeout-fallback"

    @property
    def priority(self) -> int:
        """Lower number wins."""
        return _SOURCE_PRIORITY[self]

    def outranks(self, other: WinnerSource) -> bool:
        """True if this source strictly takes precedence over ``other``."""
        return self.priority < other.priority


_SOURCE_PRIORITY = {
    WinnerSource.SELF_REPORTED: 1,
    WinnerSource.STORE: 2,
    WinnerSource.EXTERNAL_EVENT: 3,
    WinnerSource.TIMEOUT_FALLBACK: 4,
}


class WinnerSignal(BaseModel):
    """A claim about who won, offered to the resolver by one source."""

    model_config = ConfigDict(frozen=True)

    source: WinnerSource
    player_id: str
    score: int | None = None


class AuthoritativeWinner(BaseModel):
    """The one outcome treated as final truth for a competition run.

    Immutable: a replacement before commit produces a new instance. The
    ``source`` tag is kept so that downstream logic can tell a
    timeout-derived winner from a genuinely reported one.

    Attributes:
        player_id: Winning participant
        score: Canonical score of the winner, when known
        source: Which precedence tier produced this winner
        timestamp: Scheduler clock (ms) at resolution
    """

    model_config = ConfigDict(frozen=True)

    player_id: str
    score: int | None = None
    source: WinnerSource
    timestamp: float = 0.0

    @classmethod
    def from_signal(cls, signal: WinnerSignal, timestamp: float) -> AuthoritativeWinner:
        return cls(
            player_id=signal.player_id,
            score=signal.score,
            source=signal.source,
            timestamp=timestamp,
        )
