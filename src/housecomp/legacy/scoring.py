"""Legacy 0-100 scoring contract.

Older challenge modules were written against a scoring object with a 0-100
internal scale and a ``calculateFinalScore`` that applies a compBeast
difficulty window. LegacyScoring reproduces that contract on top of the same
clamping rules as the canonical ``raw`` adapter, so those modules plug into
the resolution pipeline unchanged.

Formulas:
    normalize(raw, min, max)  = clamp((raw - min) / (max - min) * 100, 0, 100)
    multiplier                = 0.75 + compBeast * 0.5           # 0.75-1.25
    final                     = normalize * 10 * multiplier * difficulty
                                clamped to [0, 1500]

Modules that run without the shim use ``raw_score * 10`` instead. With the
default compBeast (0.5) and difficulty (1.0) the two agree exactly for raw
scores in [0, 100].
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from housecomp.engine.scoring import clamp
from housecomp.parameters import (
    COMP_BEAST_BASE,
    COMP_BEAST_DEFAULT,
    COMP_BEAST_SPAN,
    LEGACY_ENDURANCE_BASE,
    LEGACY_ENDURANCE_MIN_MS,
    LEGACY_ENDURANCE_TARGET_MS,
    LEGACY_FINAL_MAX,
    LEGACY_MIDPOINT,
    LEGACY_SCALE,
    LEGACY_TIME_FLOOR,
    LEGACY_TIME_MAX_MS,
    LEGACY_TIME_TARGET_MS,
)

# Keys used by legacy modules when they pass a single options object.
_LEGACY_OPTION_NAMES = {
    "rawScore": "raw_score",
    "minScore": "min_score",
    "maxScore": "max_score",
    "compBeast": "comp_beast",
    "difficultyMultiplier": "difficulty_multiplier",
}


def _number(value, default: float) -> float:
    """Coerce a possibly-missing legacy argument to a usable float."""
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(number) else number


def fallback_final_score(raw_score: float) -> float:
    """Formula legacy modules use when no shim is installed."""
    return _number(raw_score, 0.0) * 10


class LegacyScoring:
    """Scoring object handed to legacy challenge modules.

    No method raises on missing or malformed optional arguments; each falls
    back to its documented default.
    """

    SCALE = LEGACY_SCALE

    def normalize(self, raw: float, min_score: float = 0.0, max_score: float = 100.0) -> float:
        """Map raw onto 0-100. A zero-width range returns the midpoint (50)."""
        low = _number(min_score, 0.0)
        high = _number(max_score, float(LEGACY_SCALE))
        if high == low:
            return LEGACY_MIDPOINT
        value = _number(raw, low)
        return clamp((value - low) / (high - low) * LEGACY_SCALE, 0.0, float(LEGACY_SCALE))

    def normalize_time(
        self,
        time_ms: float,
        target_ms: float = LEGACY_TIME_TARGET_MS,
        max_ms: float = LEGACY_TIME_MAX_MS,
    ) -> float:
        """Lower-is-better time on 0-100: 100 at target, floor of 20 at max."""
        time_ms = _number(time_ms, math.inf)
        target = _number(target_ms, LEGACY_TIME_TARGET_MS)
        limit = _number(max_ms, LEGACY_TIME_MAX_MS)
        if time_ms <= target:
            return float(LEGACY_SCALE)
        if time_ms >= limit:
            return LEGACY_TIME_FLOOR
        k = math.log(LEGACY_SCALE / LEGACY_TIME_FLOOR) / (limit - target)
        return clamp(LEGACY_SCALE * math.exp(-k * (time_ms - target)), LEGACY_TIME_FLOOR, float(LEGACY_SCALE))

    def normalize_accuracy(self, correct: float, total: float) -> float:
        """Percentage correct on 0-100. No attempts scores 0."""
        total = _number(total, 0.0)
        if total == 0:
            return 0.0
        return clamp(_number(correct, 0.0) / total * LEGACY_SCALE, 0.0, float(LEGACY_SCALE))

    def normalize_endurance(
        self,
        duration_ms: float,
        target_ms: float = LEGACY_ENDURANCE_TARGET_MS,
        min_ms: float = LEGACY_ENDURANCE_MIN_MS,
    ) -> float:
        """Higher-is-better duration on 0-100.

        Below min_ms the score ramps 0-10, between min_ms and target_ms it
        rises linearly 10-100, beyond target it stays at 100.
        """
        duration = _number(duration_ms, 0.0)
        target = _number(target_ms, LEGACY_ENDURANCE_TARGET_MS)
        minimum = _number(min_ms, LEGACY_ENDURANCE_MIN_MS)
        if duration <= minimum:
            if minimum <= 0:
                return 0.0
            return max(0.0, duration / minimum * LEGACY_ENDURANCE_BASE)
        if duration >= target:
            return float(LEGACY_SCALE)
        progress = (duration - minimum) / (target - minimum)
        return clamp(LEGACY_ENDURANCE_BASE + progress * (LEGACY_SCALE - LEGACY_ENDURANCE_BASE), 0.0, float(LEGACY_SCALE))

    def difficulty_window(self, comp_beast: float = COMP_BEAST_DEFAULT) -> float:
        """compBeast in [0, 1] -> multiplier in [0.75, 1.25]."""
        beast = clamp(_number(comp_beast, COMP_BEAST_DEFAULT), 0.0, 1.0)
        return COMP_BEAST_BASE + beast * COMP_BEAST_SPAN

    def calculate_final_score(
        self,
        options: Mapping[str, float] | None = None,
        *,
        raw_score: float = 0.0,
        min_score: float = 0.0,
        max_score: float = 100.0,
        comp_beast: float = COMP_BEAST_DEFAULT,
        difficulty_multiplier: float = 1.0,
    ) -> float:
        """Final score on the canonical scale, clamped to [0, 1500].

        Accepts either keyword arguments or a single legacy options mapping
        (``rawScore``, ``minScore``, ``maxScore``, ``compBeast``,
        ``difficultyMultiplier``); keys in the mapping take precedence.

        Examples:
            >>> LegacyScoring().calculate_final_score({"rawScore": 42, "compBeast": 0.5})
            420.0
        """
        values = {
            "raw_score": raw_score,
            "min_score": min_score,
            "max_score": max_score,
            "comp_beast": comp_beast,
            "difficulty_multiplier": difficulty_multiplier,
        }
        for legacy_name, value in (options or {}).items():
            name = _LEGACY_OPTION_NAMES.get(legacy_name, legacy_name)
            if name in values:
                values[name] = value

        normalized = self.normalize(values["raw_score"], values["min_score"], values["max_score"])
        multiplier = self.difficulty_window(values["comp_beast"])
        difficulty = _number(values["difficulty_multiplier"], 1.0)
        return clamp(normalized * 10 * multiplier * difficulty, 0.0, LEGACY_FINAL_MAX)

