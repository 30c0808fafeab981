"""Competition definition models for housecomp.

A CompetitionDefinition describes one mini-challenge: how it is presented,
how its raw output is scored, and how likely it is to be picked. Definitions
are immutable and only created at load time.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ScoringAdapter(str, Enum):
    """Names of the built-in scoring strategies.

    Definitions store the adapter as a plain string so that a typo in the
    catalog degrades to the ``raw`` adapter at scoring time instead of
    failing validation.
    """

    RAW = "raw"
    RANK_POINTS = "rankPoints"
    TIME_TO_POINTS = "timeToPoints"
    LOWER_BETTER = "lowerBetter"
    BINARY = "binary"
    AUTHORITATIVE = "authoritative"


class CompetitionCategory(str, Enum):
    """Closed set of selection categories."""

    ARCADE = "arcade"
    ENDURANCE = "endurance"
    LOGIC = "logic"
    TRIVIA = "trivia"


class MetricKind(str, Enum):
    """What a challenge's raw value measures."""

    COUNT = "count"
    TIME = "time"
    ACCURACY = "accuracy"
    ENDURANCE = "endurance"
    HYBRID = "hybrid"
    POINTS = "points"


class ScoringParams(BaseModel):
    """Adapter-specific numeric configuration.

    Every field is optional; adapters substitute the defaults from
    ``housecomp.parameters``. The camelCase names used by challenge modules
    are accepted as aliases.

    Attributes:
        target_ms: timeToPoints/lowerBetter ideal time
        max_ms: timeToPoints/lowerBetter worst acceptable time
        rank_scores: rankPoints points per placement [1st, 2nd, ...]
        threshold: binary pass threshold
        min_raw: raw adapter lower bound
        max_raw: raw adapter upper bound
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target_ms: float | None = Field(default=None, alias="targetMs")
    max_ms: float | None = Field(default=None, alias="maxMs")
    rank_scores: tuple[int, ...] | None = Field(default=None, alias="rankScores")
    threshold: float | None = Field(default=None)
    min_raw: float | None = Field(default=None, alias="minRaw")
    max_raw: float | None = Field(default=None, alias="maxRaw")


class CompetitionDefinition(BaseModel):
    """One entry of the competition catalog.

    Attributes:
        key: Unique identity
        title: Display name
        description: One-line summary
        instructions: Bullet points shown before the challenge starts
        metric_kind: What the raw value measures
        metric_label: Label for the raw value
        time_limit_ms: Auto-end after this long (0 = the challenge ends itself)
        authoritative: The challenge is trusted to name its own winner
        scoring_adapter: Adapter name (see ScoringAdapter)
        scoring_params: Adapter configuration
        module_path: Challenge module implementing the UI
        legacy: Written against the older 0-100 scoring contract
        weight: Relative selection likelihood (positive integer)
        category: Selection category
        retired: Excluded from selection but kept for lookup
        replaced_by: Key of the definition that supersedes a retired one
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    title: str
    description: str = ""
    instructions: tuple[str, ...] = ()
    metric_kind: MetricKind = MetricKind.POINTS
    metric_label: str = "Score"
    time_limit_ms: int = Field(default=0, ge=0)
    authoritative: bool = False
    scoring_adapter: str = ScoringAdapter.RAW.value
    scoring_params: ScoringParams = Field(default_factory=ScoringParams)
    module_path: str = ""
    legacy: bool = True
    weight: int = Field(default=1, ge=1)
    category: CompetitionCategory
    retired: bool = False
    replaced_by: str | None = None
