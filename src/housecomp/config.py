"""Runtime configuration for housecomp.

Defaults come from ``housecomp.parameters``; each can be overridden through
an environment variable. Invalid values are logged and ignored.

Configuration via environment variables:
    HOUSECOMP_RESOLVE_TIMEOUT_MS: Bounded wait before the fallback winner (default: 6000)
    HOUSECOMP_REVEAL_DURATION_MS: Reveal animation length (default: 1200)
    HOUSECOMP_HISTORY_LIMIT: Completed runs kept for telemetry (default: 50)
    HOUSECOMP_LOG_LEVEL: Logging level for scripts (default: "INFO")
"""

import logging
import os

from housecomp.parameters import HISTORY_LIMIT, RESOLVE_TIMEOUT_MS, REVEAL_DURATION_MS

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "INFO"


def _get_positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring {name}={raw!r}: must be positive, using {default}")
        return default
    return value


def get_resolve_timeout_ms() -> int:
    """Get the resolver wait window from environment."""
    return _get_positive_int("HOUSECOMP_RESOLVE_TIMEOUT_MS", RESOLVE_TIMEOUT_MS)


def get_reveal_duration_ms() -> int:
    """Get the reveal animation length from environment."""
    return _get_positive_int("HOUSECOMP_REVEAL_DURATION_MS", REVEAL_DURATION_MS)


def get_history_limit() -> int:
    """Get the run history cap from environment."""
    return _get_positive_int("HOUSECOMP_HISTORY_LIMIT", HISTORY_LIMIT)


def get_log_level() -> str:
    """Get the configured log level name from environment."""
    level = os.environ.get("HOUSECOMP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts.

    Args:
        level: Level name. If None, uses environment config.
    """
    logging.basicConfig(
        level=level or get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
