"""Compatibility surface for legacy challenge modules.

Legacy modules expect four collaborators injected at load time: a scoring
object, a registry, an error handler and a spectator. ``build_legacy_shim``
assembles them over a CompetitionCatalog and a NotificationChannel so the
modules talk to the same catalog and resolution pipeline as everything else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from housecomp.engine.catalog import CompetitionCatalog
from housecomp.engine.notifications import (
    COMPETITION_FINISHED,
    SHOW_OBSERVER_VIEW,
    CompetitionFinished,
    NotificationChannel,
    ShowObserverView,
)
from housecomp.legacy.scoring import LegacyScoring, fallback_final_score
from housecomp.models.competition import CompetitionDefinition

logger = logging.getLogger(__name__)


class LegacyRegistry:
    """Read-only view of the catalog in the shape legacy modules query."""

    def __init__(self, catalog: CompetitionCatalog):
        self._catalog = catalog

    def get_game(self, key: str) -> CompetitionDefinition | None:
        return self._catalog.get_by_key(key)

    def get_all_games(self) -> list[CompetitionDefinition]:
        return self._catalog.get_all()

    def get_registry(self) -> dict[str, CompetitionDefinition]:
        return {definition.key: definition for definition in self._catalog.get_all()}


class LegacyErrorHandler:
    """Routes legacy module errors into logging."""

    def __init__(self, name: str = "legacy"):
        self.logger = logging.getLogger(f"{__name__}.{name}")

    def handle_error(self, error: BaseException | str, context: str = "") -> None:
        prefix = f"[{context}] " if context else ""
        self.logger.error(f"{prefix}{error}")

    def warn(self, message: str, context: str = "") -> None:
        prefix = f"[{context}] " if context else ""
        self.logger.warning(f"{prefix}{message}")


class LegacySpectator:
    """Translates legacy spectator calls into channel notifications.

    ``show`` asks for the observer presentation; ``end`` announces the
    finished competition, which the resolver treats as an external-event
    winner claim.
    """

    def __init__(self, channel: NotificationChannel):
        self.channel = channel

    def show(
        self,
        competitor_ids: list[str] | tuple[str, ...] = (),
        *,
        run_id: str | None = None,
        variant: str = "holdwall",
        winner_id: str | None = None,
    ) -> int:
        payload = ShowObserverView(
            competitor_ids=tuple(competitor_ids),
            run_id=run_id,
            variant=variant,
            winner_id=winner_id,
        )
        return self.channel.publish(SHOW_OBSERVER_VIEW, payload)

    def end(self, winner_id: str | None = None, *, run_id: str | None = None) -> int:
        logger.debug(f"Legacy spectator ended run {run_id} with winner {winner_id}")
        return self.channel.publish(COMPETITION_FINISHED, CompetitionFinished(winner_id=winner_id, run_id=run_id))


@dataclass
class LegacyShim:
    """Collaborators injected into a legacy module."""

    scoring: LegacyScoring
    registry: LegacyRegistry
    errors: LegacyErrorHandler
    spectator: LegacySpectator
    extras: dict[str, Any] = field(default_factory=dict)


def build_legacy_shim(catalog: CompetitionCatalog, channel: NotificationChannel) -> LegacyShim:
    """Assemble the shim for legacy modules.

    Args:
        catalog: Catalog exposed through the registry view
        channel: Channel the spectator publishes to

    Returns:
        LegacyShim ready to inject
    """
    return LegacyShim(
        scoring=LegacyScoring(),
        registry=LegacyRegistry(catalog),
        errors=LegacyErrorHandler(),
        spectator=LegacySpectator(channel),
    )


def final_score(shim: LegacyShim | None, raw_score: float, **options) -> float:
    """Score the way a legacy module does: shim when installed, fallback otherwise.

    Examples:
        >>> final_score(None, 42)
        420.0
    """
    if shim is None:
        return fallback_final_score(raw_score)
    return shim.scoring.calculate_final_score(raw_score=raw_score, **options)
