"""Tests for environment configuration."""

from housecomp import config
from housecomp.parameters import HISTORY_LIMIT, RESOLVE_TIMEOUT_MS, REVEAL_DURATION_MS


class TestConfig:
    """Environment overrides fall back to parameters on bad input."""

    def test_defaults(self, monkeypatch):
        for name in (
            "HOUSECOMP_RESOLVE_TIMEOUT_MS",
            "HOUSECOMP_REVEAL_DURATION_MS",
            "HOUSECOMP_HISTORY_LIMIT",
            "HOUSECOMP_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        assert config.get_resolve_timeout_ms() == RESOLVE_TIMEOUT_MS == 6000
        assert config.get_reveal_duration_ms() == REVEAL_DURATION_MS == 1200
        assert config.get_history_limit() == HISTORY_LIMIT == 50
        assert config.get_log_level() == "INFO"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("HOUSECOMP_RESOLVE_TIMEOUT_MS", "2500")
        monkeypatch.setenv("HOUSECOMP_HISTORY_LIMIT", "5")
        monkeypatch.setenv("HOUSECOMP_LOG_LEVEL", "debug")
        assert config.get_resolve_timeout_ms() == 2500
        assert config.get_history_limit() == 5
        assert config.get_log_level() == "DEBUG"

    def test_invalid_values_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("HOUSECOMP_REVEAL_DURATION_MS", "soon")
        monkeypatch.setenv("HOUSECOMP_HISTORY_LIMIT", "-3")
        monkeypatch.setenv("HOUSECOMP_LOG_LEVEL", "LOUD")
        assert config.get_reveal_duration_ms() == REVEAL_DURATION_MS
        assert config.get_history_limit() == HISTORY_LIMIT
        assert config.get_log_level() == "INFO"
        assert "HOUSECOMP_REVEAL_DURATION_MS" in caplog.text
