"""Legacy challenge module support.

Modules written against the older 0-100 scoring contract receive a LegacyShim
at load time and keep working unchanged:

    from housecomp.engine import NotificationChannel, get_default_catalog
    from housecomp.legacy import build_legacy_shim, final_score

    shim = build_legacy_shim(get_default_catalog(), NotificationChannel())
    score = final_score(shim, raw_score=42)   # 420.0, same as 42 * 10
"""

from housecomp.legacy.scoring import LegacyScoring, fallback_final_score
from housecomp.legacy.shim import (
    LegacyErrorHandler,
    LegacyRegistry,
    LegacyShim,
    LegacySpectator,
    build_legacy_shim,
    final_score,
)

__all__ = [
    "LegacyScoring",
    "fallback_final_score",
    "final_score",
    "LegacyShim",
    "LegacyRegistry",
    "LegacyErrorHandler",
    "LegacySpectator",
    "build_legacy_shim",
]
