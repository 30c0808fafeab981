"""Tests for the competition catalog and weighted selection."""

import pytest
from conftest import make_definition
from pydantic import ValidationError

from housecomp.engine.catalog import CompetitionCatalog, get_default_catalog
from housecomp.errors import NoCompetitionsAvailable
from housecomp.models.competition import CompetitionCategory, ScoringAdapter


class TestPickRandom:
    """Seeded weighted selection."""

    def test_same_seed_same_definition(self, mixed_catalog):
        picks = {mixed_catalog.pick_random(1234).key for _ in range(20)}
        assert len(picks) == 1

    def test_replay_across_instances(self):
        first = CompetitionCatalog(get_default_catalog().get_all())
        second = CompetitionCatalog(get_default_catalog().get_all())
        for seed in range(50):
            assert first.pick_random(seed).key == second.pick_random(seed).key

    def test_weight_proportionality(self, weighted_catalog):
        """Weights 1:3 over 4000 seeded draws select the heavy entry ~75% of the time."""
        draws = [weighted_catalog.pick_random(seed).key for seed in range(4000)]
        share = draws.count("heavy") / len(draws)
        assert share == pytest.approx(0.75, abs=0.03)

    def test_never_picks_retired(self, mixed_catalog):
        for seed in range(200):
            assert mixed_catalog.pick_random(seed).key != "oldQuiz"

    def test_category_filter(self, mixed_catalog):
        for seed in range(50):
            assert mixed_catalog.pick_random(seed, category="arcade").category == CompetitionCategory.ARCADE

    def test_exclude_keys(self, mixed_catalog):
        excluded = {"tapper", "sprinter", "stacker"}
        for seed in range(50):
            assert mixed_catalog.pick_random(seed, exclude_keys=excluded).key == "quiz"

    def test_empty_pool_falls_back_to_first(self, mixed_catalog, caplog):
        picked = mixed_catalog.pick_random(7, category=CompetitionCategory.ENDURANCE)
        assert picked.key == "tapper"
        assert "falling back" in caplog.text

    def test_no_live_definitions_is_fatal(self):
        catalog = CompetitionCatalog([make_definition("gone", retired=True)])
        with pytest.raises(NoCompetitionsAvailable):
            catalog.pick_random(1)

    def test_empty_catalog_is_fatal(self):
        with pytest.raises(NoCompetitionsAvailable):
            CompetitionCatalog([]).pick_random(1)


class TestCatalogLookups:
    """Key lookups, pools and replacement chains."""

    def test_get_by_key(self, mixed_catalog):
        assert mixed_catalog.get_by_key("quiz").scoring_adapter == ScoringAdapter.RANK_POINTS.value
        assert mixed_catalog.get_by_key("missing") is None
        assert "quiz" in mixed_catalog
        assert "missing" not in mixed_catalog

    def test_get_all_includes_retired(self, mixed_catalog):
        keys = [d.key for d in mixed_catalog.get_all()]
        assert keys == ["tapper", "sprinter", "stacker", "quiz", "oldQuiz"]

    def test_get_pool_filters(self, mixed_catalog):
        assert [d.key for d in mixed_catalog.get_pool(retired=True)] == ["oldQuiz"]
        assert [d.key for d in mixed_catalog.get_pool(category="trivia")] == ["quiz", "oldQuiz"]
        assert [d.key for d in mixed_catalog.get_pool(retired=False, category="trivia")] == ["quiz"]

    def test_get_replacement(self, mixed_catalog):
        assert mixed_catalog.get_replacement("oldQuiz").key == "quiz"
        assert mixed_catalog.get_replacement("quiz").key == "quiz"
        assert mixed_catalog.get_replacement("missing") is None

    def test_replacement_cycle_returns_none(self):
        catalog = CompetitionCatalog([
            make_definition("a", retired=True, replaced_by="b"),
            make_definition("b", retired=True, replaced_by="a"),
        ])
        assert catalog.get_replacement("a") is None

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            CompetitionCatalog([make_definition("same"), make_definition("same")])

    def test_weight_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_definition("zero", weight=0)


class TestDefaultCatalog:
    """The built-in competition table."""

    def test_size_and_uniqueness(self):
        catalog = get_default_catalog()
        keys = [d.key for d in catalog.get_all()]
        assert len(keys) == 31
        assert len(set(keys)) == len(keys)

    def test_cached(self):
        assert get_default_catalog() is get_default_catalog()

    def test_adapters_known(self):
        known = {adapter.value for adapter in ScoringAdapter}
        for definition in get_default_catalog().get_all():
            assert definition.scoring_adapter in known

    def test_authoritative_games(self):
        catalog = get_default_catalog()
        for key in ("snake", "tetris", "minesweeps"):
            assert catalog.get_by_key(key).authoritative

    def test_every_category_has_games(self):
        catalog = get_default_catalog()
        for category in CompetitionCategory:
            assert catalog.get_pool(retired=False, category=category)
