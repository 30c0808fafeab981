"""Tunable constants for housecomp.

This module is the SINGLE SOURCE OF TRUTH for scoring defaults, timing
windows and legacy scale constants. Environment overrides for the timing
values live in ``housecomp.config``.

Parameter Categories:
- Canonical scale: Range every adapter normalizes into
- Adapter defaults: Fallback parameters when a definition omits them
- Resolution timing: Bounded wait and reveal windows
- Legacy shim: 0-100 scale constants used by older challenge modules

Usage:
    from housecomp.parameters import CANONICAL_MAX, RESOLVE_TIMEOUT_MS
"""

# =============================================================================
# CANONICAL SCALE
# =============================================================================

CANONICAL_MIN = 0
CANONICAL_MAX = 1000
"""Canonical score range. Higher is always better after normalization."""

CANONICAL_MIDPOINT = 500
"""Score returned by the raw adapter when min_raw == max_raw."""


# =============================================================================
# ADAPTER DEFAULTS
# =============================================================================

DEFAULT_MIN_RAW = 0.0
DEFAULT_MAX_RAW = 100.0
"""Default raw range for the ``raw`` adapter (accuracy percentages, taps)."""

DEFAULT_RANK_SCORES = (500, 300, 150, 75, 25)
"""Points per placement for ``rankPoints``. Placements past the table get 0."""

RANK_SCORE_STEP = 200
"""Canonical score lost per placement below first for ``rankPoints``."""

DEFAULT_TARGET_MS = 1000.0
DEFAULT_MAX_MS = 10000.0
"""Time window for ``timeToPoints``/``lowerBetter``.

At or below target the score is 1000, at or beyond max it is 0, and in
between it decays exponentially with k = ln(1000) / (max - target), so the
curve reaches 1 point exactly at max.
"""

DEFAULT_BINARY_THRESHOLD = 1.0
"""Minimum raw value that counts as a pass for ``binary``."""

FULL_POINTS = 100
"""Display points awarded for a perfect time or a binary pass."""


# =============================================================================
# RESOLUTION TIMING
# =============================================================================

RESOLVE_TIMEOUT_MS = 6000
"""Bounded wait before the resolver falls back to the ranked results.

Matches the speculative simulation length of the observer presentation,
so the fallback lands when the on-screen simulation would have finished.
"""

REVEAL_DURATION_MS = 1200
"""Length of the reveal animation between resolution and 'revealing'."""

HISTORY_LIMIT = 50
"""Maximum number of completed runs retained for replay telemetry."""


# =============================================================================
# LEGACY SHIM
# =============================================================================

LEGACY_SCALE = 100
"""Internal scale used by older challenge modules (x10 reaches canonical)."""

LEGACY_MIDPOINT = 50.0
"""Returned by ``normalize`` when min == max."""

LEGACY_FINAL_MAX = 1500.0
"""Upper clamp for calculate_final_score, tolerating multiplier overshoot."""

COMP_BEAST_DEFAULT = 0.5
COMP_BEAST_BASE = 0.75
COMP_BEAST_SPAN = 0.5
"""Difficulty window: multiplier = 0.75 + compBeast * 0.5, i.e. 0.75-1.25.

compBeast 0.5 gives a multiplier of exactly 1.0, which keeps the shim in
step with the ``rawScore * 10`` fallback carried by legacy modules.
"""

LEGACY_TIME_TARGET_MS = 1000.0
LEGACY_TIME_MAX_MS = 5000.0
LEGACY_TIME_FLOOR = 20.0
"""normalize_time: 100 at target, decays to a floor of 20 at max."""

LEGACY_ENDURANCE_TARGET_MS = 30000.0
LEGACY_ENDURANCE_MIN_MS = 1000.0
LEGACY_ENDURANCE_BASE = 10.0
"""normalize_endurance: 0-10 below min, 10-100 linearly up to target."""
