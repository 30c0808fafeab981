"""Tests for the scoring adapters and ranking.

Tests verify:
1. Every adapter keeps scores inside [0, 1000] for any input
2. raw is non-decreasing and timeToPoints non-increasing in the raw value
3. The worked examples (binary threshold, time at target, authoritative rank)
4. Unknown adapters degrade to raw
5. Ranking is stable for ties
"""

import logging
import math

import pytest

from housecomp.engine import scoring
from housecomp.engine.scoring import (
    ADAPTERS,
    compute_ranked,
    compute_score,
    normalize_for_ranking,
    round_half_up,
)
from housecomp.models.competition import ScoringAdapter, ScoringParams
from housecomp.models.results import AdapterResult, RawResult

EDGE_VALUES = [-1e12, -5000, -1, 0, 0.5, 1, 50, 99.5, 100, 999, 1000, 1001, 5000, 1e12]


class TestScoreBounds:
    """Scores stay in [0, 1000] whatever the challenge reports."""

    @pytest.mark.parametrize("adapter_name", sorted(ADAPTERS))
    @pytest.mark.parametrize("raw_value", EDGE_VALUES)
    def test_finite_inputs_in_bounds(self, adapter_name, raw_value):
        result = compute_score(adapter_name, raw_value)
        assert 0 <= result.score <= 1000

    @pytest.mark.parametrize("adapter_name", sorted(ADAPTERS))
    @pytest.mark.parametrize("raw_value", [math.inf, -math.inf, math.nan])
    def test_non_finite_inputs_in_bounds(self, adapter_name, raw_value):
        result = compute_score(adapter_name, raw_value)
        assert 0 <= result.score <= 1000

    def test_nan_is_worst_value(self):
        """NaN scores as badly as the adapter allows."""
        assert compute_score("raw", math.nan).score == 0
        assert compute_score("timeToPoints", math.nan).score == 0
        assert compute_score("binary", math.nan).score == 0
        assert compute_score("rankPoints", math.nan).score == 0


class TestMonotonicity:
    """Ordering of raw values is preserved in the right direction."""

    def test_raw_non_decreasing(self):
        values = [-10, 0, 10, 33.3, 50, 66.6, 100, 150]
        scores = [compute_score("raw", v).score for v in values]
        assert scores == sorted(scores)

    def test_time_to_points_non_increasing(self):
        values = [0, 500, 1000, 1500, 2500, 5000, 7500, 9999, 10000, 20000]
        scores = [compute_score("timeToPoints", v).score for v in values]
        assert scores == sorted(scores, reverse=True)

    def test_rank_points_non_increasing(self):
        scores = [compute_score("rankPoints", rank).score for rank in range(1, 8)]
        assert scores == sorted(scores, reverse=True)


class TestWorkedExamples:
    """Examples from the scoring contract."""

    def test_binary_threshold(self):
        assert compute_score("binary", 7, {"threshold": 5}) == AdapterResult(score=1000, points=100)
        assert compute_score("binary", 3, {"threshold": 5}) == AdapterResult(score=0, points=0)

    def test_binary_exact_threshold_passes(self):
        assert compute_score("binary", 5, {"threshold": 5}).score == 1000

    def test_time_to_points_at_target(self):
        result = compute_score("timeToPoints", 1000, {"targetMs": 1000, "maxMs": 10000})
        assert result == AdapterResult(score=1000, points=100)

    def test_authoritative_flag_beats_higher_score(self):
        ranked = compute_ranked("raw", [
            RawResult(player_id="p1", raw_value=80),
            RawResult(player_id="p2", raw_value=20, authoritative_winner=True),
        ])
        assert ranked[0].player_id == "p2"
        assert ranked[0].rank == 1
        assert ranked[0].score == 200
        assert ranked[1].player_id == "p1"
        assert ranked[1].score == 800


class TestRawAdapter:
    """Linear normalization of higher-is-better values."""

    def test_scales_default_range(self):
        assert compute_score("raw", 42) == AdapterResult(score=420, points=42)

    def test_custom_range(self):
        result = compute_score("raw", 15, {"minRaw": 10, "maxRaw": 20})
        assert result.score == 500

    def test_zero_range_is_midpoint(self):
        result = compute_score("raw", 7, ScoringParams(min_raw=7, max_raw=7))
        assert result.score == 500

    def test_clamps_above_range(self):
        assert compute_score("raw", 250) == AdapterResult(score=1000, points=100)


class TestRankPointsAdapter:
    """Placement scoring."""

    def test_default_table(self):
        assert compute_score("rankPoints", 1) == AdapterResult(score=1000, points=500)
        assert compute_score("rankPoints", 2) == AdapterResult(score=800, points=300)
        assert compute_score("rankPoints", 5) == AdapterResult(score=200, points=25)

    def test_rank_beyond_table(self):
        assert compute_score("rankPoints", 6) == AdapterResult(score=0, points=0)

    def test_rank_below_one_counts_as_first(self):
        assert compute_score("rankPoints", 0).score == 1000
        assert compute_score("rankPoints", -3).score == 1000

    def test_custom_table(self):
        result = compute_score("rankPoints", 2, {"rankScores": [10, 5]})
        assert result.points == 5


class TestTimeToPointsAdapter:
    """Exponential decay between target and max."""

    def test_at_or_beyond_max(self):
        assert compute_score("timeToPoints", 10000) == AdapterResult(score=0, points=0)
        assert compute_score("timeToPoints", 60000) == AdapterResult(score=0, points=0)

    def test_midway_decay(self):
        """Halfway between target and max: 1000 * e^(-ln(1000)/2) = sqrt(1000) ~ 31.6."""
        result = compute_score("timeToPoints", 5500, {"targetMs": 1000, "maxMs": 10000})
        assert result.score == 32
        assert result.points == 3

    def test_lower_better_alias(self):
        assert compute_score("lowerBetter", 2500) == compute_score("timeToPoints", 2500)


class TestAuthoritativeAdapter:
    """Trusted 0-1000 scores are only clamped."""

    def test_passthrough(self):
        assert compute_score("authoritative", 640) == AdapterResult(score=640, points=64)

    def test_clamps(self):
        assert compute_score("authoritative", 4000).score == 1000
        assert compute_score("authoritative", -4).score == 0


class TestUnknownAdapter:
    """Unknown adapter names degrade to raw."""

    def test_falls_back_to_raw(self):
        assert compute_score("doesNotExist", 42) == compute_score("raw", 42)

    def test_warns_once_per_name(self, caplog, monkeypatch):
        monkeypatch.setattr(scoring, "_warned_adapters", set())
        with caplog.at_level(logging.WARNING, logger="housecomp.engine.scoring"):
            compute_score("mystery", 1)
            compute_score("mystery", 2)
        warnings = [r for r in caplog.records if "mystery" in r.getMessage()]
        assert len(warnings) == 1


class TestAdapterLookup:
    """Adapters can be named by enum member or by string."""

    def test_enum_member_matches_name(self):
        assert scoring.get_adapter(ScoringAdapter.BINARY) is scoring.adapter_binary
        assert scoring.get_adapter(ScoringAdapter.TIME_TO_POINTS) is scoring.get_adapter("timeToPoints")

    def test_enum_member_does_not_warn(self, caplog, monkeypatch):
        monkeypatch.setattr(scoring, "_warned_adapters", set())
        with caplog.at_level(logging.WARNING, logger="housecomp.engine.scoring"):
            result = compute_score(ScoringAdapter.BINARY, 7, {"threshold": 5})
        assert result == compute_score("binary", 7, {"threshold": 5})
        assert caplog.records == []

    def test_ranked_with_enum_member(self):
        results = [RawResult(player_id="a", raw_value=3), RawResult(player_id="b", raw_value=9)]
        ranked = compute_ranked(ScoringAdapter.RAW, results)
        assert [r.player_id for r in ranked] == ["b", "a"]


class TestRanking:
    """Ranking order and ties."""

    def test_ranks_by_score_descending(self):
        ranked = compute_ranked("raw", [
            RawResult(player_id="a", raw_value=10),
            RawResult(player_id="b", raw_value=90),
            RawResult(player_id="c", raw_value=50),
        ])
        assert [r.player_id for r in ranked] == ["b", "c", "a"]
        assert [r.rank for r in ranked] == [1, 2, 3]

    def test_ties_keep_input_order(self):
        ranked = compute_ranked("raw", [
            RawResult(player_id="first", raw_value=60),
            RawResult(player_id="second", raw_value=60),
        ])
        assert [r.player_id for r in ranked] == ["first", "second"]

    def test_accepts_camel_case_results(self):
        ranked = compute_ranked("binary", [RawResult.model_validate({"playerId": "p9", "rawValue": 2})])
        assert ranked[0].player_id == "p9"
        assert ranked[0].score == 1000

    def test_empty_results(self):
        assert compute_ranked("raw", []) == []

    def test_normalize_for_ranking(self):
        scores = normalize_for_ranking(
            [RawResult(player_id="ai1", raw_value=1500), RawResult(player_id="ai2", raw_value=12000)],
            "timeToPoints",
        )
        assert scores["ai1"] > 0
        assert scores["ai2"] == 0


class TestRoundHalfUp:
    """Half-up rounding rather than banker's rounding."""

    def test_halves_round_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(13.5) == 14
        assert round_half_up(0.49) == 0
