"""Scoring adapters for housecomp.

Adapters turn a challenge's raw output into a canonical, higher-is-better
score in [0, 1000] plus integer display points. Every adapter is a pure,
total function: any finite input is clamped rather than rejected, NaN is
treated as the worst possible value, and infinities clamp to the nearest
bound.

Adapters (see ``housecomp.parameters`` for defaults):
- raw: linear clamp of [min_raw, max_raw] onto [0, 1000]
- rankPoints: score = max(0, 1000 - (rank - 1) * 200), points from a table
- timeToPoints / lowerBetter: exponential decay between target_ms and max_ms
- binary: 1000 if raw >= threshold else 0
- authoritative: raw is already a 0-1000 score assigned by the challenge

Ranking puts a challenge-nominated winner first, then sorts by score
descending. Python's sort is stable, so equal scores keep input order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping

from housecomp.models.competition import ScoringAdapter, ScoringParams
from housecomp.models.results import AdapterResult, RankedResult, RawResult
from housecomp.parameters import (
    CANONICAL_MAX,
    CANONICAL_MIDPOINT,
    CANONICAL_MIN,
    DEFAULT_BINARY_THRESHOLD,
    DEFAULT_MAX_MS,
    DEFAULT_MAX_RAW,
    DEFAULT_MIN_RAW,
    DEFAULT_RANK_SCORES,
    DEFAULT_TARGET_MS,
    FULL_POINTS,
    RANK_SCORE_STEP,
)

logger = logging.getLogger(__name__)

ParamsLike = ScoringParams | Mapping[str, object] | None

_warned_adapters: set[str] = set()


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value to the specified range."""
    return max(min_val, min(max_val, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's built-in round() uses banker's rounding, which would make
    12.5 and 13.5 both land on even numbers.
    """
    return int(math.floor(value + 0.5))


def as_params(params: ParamsLike) -> ScoringParams:
    """Coerce a mapping (camelCase or snake_case keys) into ScoringParams."""
    if params is None:
        return ScoringParams()
    if isinstance(params, ScoringParams):
        return params
    return ScoringParams.model_validate(dict(params))


def _finite_or(value: float, worst: float) -> float:
    if math.isnan(value):
        return worst
    return value


# =============================================================================
# Individual adapters
# =============================================================================


def adapter_raw(raw_value: float, params: ScoringParams) -> AdapterResult:
    """Normalize a higher-is-better magnitude (taps, accuracy %)."""
    low = DEFAULT_MIN_RAW if params.min_raw is None else params.min_raw
    high = DEFAULT_MAX_RAW if params.max_raw is None else params.max_raw
    if high < low:
        low, high = high, low

    clamped = clamp(_finite_or(raw_value, low), low, high)
    if high == low:
        return AdapterResult(score=CANONICAL_MIDPOINT, points=round_half_up(clamped))

    score = round_half_up((clamped - low) / (high - low) * CANONICAL_MAX)
    return AdapterResult(score=score, points=round_half_up(clamped))


def adapter_rank_points(raw_value: float, params: ScoringParams) -> AdapterResult:
    """Score a placement (1 = first). Placements below 1 count as first."""
    table = DEFAULT_RANK_SCORES if params.rank_scores is None else params.rank_scores
    value = _finite_or(raw_value, math.inf)
    if math.isinf(value):
        rank = 1 if value < 0 else len(table) + CANONICAL_MAX
    else:
        rank = max(1, round_half_up(value))

    points = table[rank - 1] if rank <= len(table) else 0
    score = max(CANONICAL_MIN, CANONICAL_MAX - (rank - 1) * RANK_SCORE_STEP)
    return AdapterResult(score=score, points=points)


def adapter_time_to_points(raw_value: float, params: ScoringParams) -> AdapterResult:
    """Score an elapsed time in ms where lower is better.

    Formula:
        time <= target: 1000
        time >= max:    0
        otherwise:      1000 * e^(-k * (time - target)), k = ln(1000) / (max - target)
    """
    target = DEFAULT_TARGET_MS if params.target_ms is None else params.target_ms
    limit = DEFAULT_MAX_MS if params.max_ms is None else params.max_ms
    time_ms = _finite_or(raw_value, math.inf)

    if time_ms <= target:
        return AdapterResult(score=CANONICAL_MAX, points=FULL_POINTS)
    if time_ms >= limit:
        return AdapterResult(score=CANONICAL_MIN, points=0)

    k = math.log(CANONICAL_MAX) / (limit - target)
    score = round_half_up(CANONICAL_MAX * math.exp(-k * (time_ms - target)))
    score = int(clamp(score, CANONICAL_MIN, CANONICAL_MAX))
    return AdapterResult(score=score, points=round_half_up(score / 10))


def adapter_binary(raw_value: float, params: ScoringParams) -> AdapterResult:
    """Pass/fail against a threshold."""
    threshold = DEFAULT_BINARY_THRESHOLD if params.threshold is None else params.threshold
    if not math.isnan(raw_value) and raw_value >= threshold:
        return AdapterResult(score=CANONICAL_MAX, points=FULL_POINTS)
    return AdapterResult(score=CANONICAL_MIN, points=0)


def adapter_authoritative(raw_value: float, params: ScoringParams) -> AdapterResult:
    """Trust the challenge's own 0-1000 score; only clamp it."""
    score = round_half_up(clamp(_finite_or(raw_value, CANONICAL_MIN), CANONICAL_MIN, CANONICAL_MAX))
    return AdapterResult(score=score, points=round_half_up(score / 10))


ADAPTERS: dict[str, Callable[[float, ScoringParams], AdapterResult]] = {
    ScoringAdapter.RAW.value: adapter_raw,
    ScoringAdapter.RANK_POINTS.value: adapter_rank_points,
    ScoringAdapter.TIME_TO_POINTS.value: adapter_time_to_points,
    ScoringAdapter.LOWER_BETTER.value: adapter_time_to_points,
    ScoringAdapter.BINARY.value: adapter_binary,
    ScoringAdapter.AUTHORITATIVE.value: adapter_authoritative,
}


def get_adapter(adapter_name: ScoringAdapter | str) -> Callable[[float, ScoringParams], AdapterResult]:
    """Look up an adapter by name, degrading to ``raw`` for unknown names."""
    name = adapter_name.value if isinstance(adapter_name, ScoringAdapter) else adapter_name
    adapter = ADAPTERS.get(name)
    if adapter is None:
        if name not in _warned_adapters:
            _warned_adapters.add(name)
            logger.warning(f"Unknown scoring adapter '{name}', falling back to raw")
        return adapter_raw
    return adapter


# =============================================================================
# Public API
# =============================================================================


def compute_score(adapter_name: ScoringAdapter | str, raw_value: float, params: ParamsLike = None) -> AdapterResult:
    """Compute the canonical score for one raw value.

    Args:
        adapter_name: One of the ScoringAdapter names (unknown -> raw)
        raw_value: Raw value reported by the challenge
        params: ScoringParams or a mapping of adapter options

    Returns:
        AdapterResult with score in [0, 1000]

    Examples:
        >>> compute_score("binary", 7, {"threshold": 5})
        AdapterResult(score=1000, points=100)
        >>> compute_score("timeToPoints", 1000, {"targetMs": 1000, "maxMs": 10000})
        AdapterResult(score=1000, points=100)
    """
    return get_adapter(adapter_name)(float(raw_value), as_params(params))


def compute_ranked(
    adapter_name: ScoringAdapter | str,
    results: Iterable[RawResult],
    params: ParamsLike = None,
) -> list[RankedResult]:
    """Score every participant and rank them.

    Sort order: authoritative_winner first, then score descending. Ties keep
    their input order so rankings are reproducible for the same input.

    Args:
        adapter_name: Scoring adapter name
        results: One RawResult per participant
        params: Adapter options

    Returns:
        RankedResult list with 1-based ranks, best first
    """
    options = as_params(params)
    adapter = get_adapter(adapter_name)
    scored = [(raw, adapter(raw.raw_value, options)) for raw in results]
    scored.sort(key=lambda pair: (not pair[0].authoritative_winner, -pair[1].score))
    return [
        RankedResult(raw=raw, scored=adapter_result, rank=index + 1)
        for index, (raw, adapter_result) in enumerate(scored)
    ]


def normalize_for_ranking(
    results: Iterable[RawResult],
    adapter_name: ScoringAdapter | str,
    params: ParamsLike = None,
) -> dict[str, int]:
    """Map player_id -> canonical score, e.g. for pre-simulated AI players."""
    return {ranked.player_id: ranked.score for ranked in compute_ranked(adapter_name, results, params)}
