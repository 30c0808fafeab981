"""Tests for the legacy scoring shim.

Legacy modules compute ``calculateFinalScore({rawScore, compBeast: 0.5})``
when the shim is installed and ``rawScore * 10`` otherwise. Both paths must
agree for default parameters, and the shim must never raise on missing or
malformed optional arguments.
"""

import logging
import math

import pytest

from housecomp.engine.notifications import (
    COMPETITION_FINISHED,
    SHOW_OBSERVER_VIEW,
    CompetitionFinished,
    ShowObserverView,
)
from housecomp.legacy import (
    LegacyScoring,
    build_legacy_shim,
    fallback_final_score,
    final_score,
)


@pytest.fixture
def legacy():
    return LegacyScoring()


class TestNormalize:
    """0-100 normalization."""

    def test_default_range(self, legacy):
        assert legacy.normalize(42) == pytest.approx(42.0)

    def test_clamps(self, legacy):
        assert legacy.normalize(-5) == 0.0
        assert legacy.normalize(250) == 100.0

    def test_zero_range_midpoint(self, legacy):
        assert legacy.normalize(3, 3, 3) == 50.0

    def test_missing_arguments_use_defaults(self, legacy):
        assert legacy.normalize(30, None, None) == pytest.approx(30.0)
        assert legacy.normalize(None) == 0.0


class TestNormalizeTime:
    """Lower-is-better time on 0-100 with a floor of 20."""

    def test_at_target(self, legacy):
        assert legacy.normalize_time(800) == 100.0

    def test_at_max_is_floor(self, legacy):
        assert legacy.normalize_time(5000) == 20.0
        assert legacy.normalize_time(90000) == 20.0

    def test_between_decays(self, legacy):
        """Halfway: 100 * e^(-ln(5)/2) = 100 / sqrt(5)."""
        assert legacy.normalize_time(3000) == pytest.approx(100 / math.sqrt(5))

    def test_missing_time_scores_floor(self, legacy):
        assert legacy.normalize_time(None) == 20.0


class TestNormalizeAccuracy:
    def test_percentage(self, legacy):
        assert legacy.normalize_accuracy(3, 4) == pytest.approx(75.0)

    def test_no_attempts(self, legacy):
        assert legacy.normalize_accuracy(0, 0) == 0.0


class TestNormalizeEndurance:
    """Higher-is-better duration."""

    def test_below_minimum(self, legacy):
        assert legacy.normalize_endurance(500) == pytest.approx(5.0)

    def test_linear_band(self, legacy):
        # (15500 - 1000) / (30000 - 1000) = 0.5 -> 10 + 45
        assert legacy.normalize_endurance(15500) == pytest.approx(55.0)

    def test_beyond_target(self, legacy):
        assert legacy.normalize_endurance(45000) == 100.0


class TestCalculateFinalScore:
    """Final score with the compBeast difficulty window."""

    @pytest.mark.parametrize("raw_score", [0, 1, 17.5, 42, 73, 99, 100])
    def test_matches_fallback_with_defaults(self, legacy, raw_score):
        """With compBeast 0.5 the shim and the raw * 10 fallback agree."""
        shimmed = legacy.calculate_final_score({"rawScore": raw_score, "minScore": 0, "maxScore": 100, "compBeast": 0.5})
        assert shimmed == pytest.approx(fallback_final_score(raw_score))

    def test_keyword_form(self, legacy):
        assert legacy.calculate_final_score(raw_score=60) == pytest.approx(600.0)

    def test_difficulty_window(self, legacy):
        assert legacy.calculate_final_score(raw_score=100, comp_beast=0.0) == pytest.approx(750.0)
        assert legacy.calculate_final_score(raw_score=100, comp_beast=1.0) == pytest.approx(1250.0)

    def test_comp_beast_clamped(self, legacy):
        assert legacy.calculate_final_score(raw_score=100, comp_beast=7) == pytest.approx(1250.0)

    def test_result_capped(self, legacy):
        score = legacy.calculate_final_score(raw_score=100, comp_beast=1.0, difficulty_multiplier=3.0)
        assert score == 1500.0

    def test_no_arguments(self, legacy):
        assert legacy.calculate_final_score() == 0.0

    def test_malformed_options_use_defaults(self, legacy):
        score = legacy.calculate_final_score({"rawScore": 50, "compBeast": "lots", "unknown": 1})
        assert score == pytest.approx(500.0)


class TestLegacyShim:
    """The bundle injected into legacy modules."""

    def test_final_score_paths_agree(self, mixed_catalog, channel):
        shim = build_legacy_shim(mixed_catalog, channel)
        for raw_score in (0, 25, 64, 100):
            assert final_score(shim, raw_score) == pytest.approx(final_score(None, raw_score))

    def test_registry_view(self, mixed_catalog, channel):
        registry = build_legacy_shim(mixed_catalog, channel).registry
        assert registry.get_game("quiz").key == "quiz"
        assert registry.get_game("missing") is None
        assert len(registry.get_all_games()) == len(mixed_catalog)
        assert set(registry.get_registry()) == {d.key for d in mixed_catalog.get_all()}

    def test_spectator_publishes(self, mixed_catalog, channel):
        shown: list[ShowObserverView] = []
        finished: list[CompetitionFinished] = []
        channel.subscribe(SHOW_OBSERVER_VIEW, shown.append)
        channel.subscribe(COMPETITION_FINISHED, finished.append)

        spectator = build_legacy_shim(mixed_catalog, channel).spectator
        spectator.show(["p1", "p2"], run_id="r1")
        spectator.end("p2", run_id="r1")

        assert shown == [ShowObserverView(competitor_ids=("p1", "p2"), run_id="r1")]
        assert finished == [CompetitionFinished(winner_id="p2", run_id="r1")]

    def test_error_handler_logs(self, mixed_catalog, channel, caplog):
        errors = build_legacy_shim(mixed_catalog, channel).errors
        with caplog.at_level(logging.WARNING):
            errors.handle_error(RuntimeError("canvas lost"), context="snake")
            errors.warn("slow frame")
        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (logging.ERROR, "[snake] canvas lost") in levels
        assert (logging.WARNING, "slow frame") in levels
