"""In-process notification channel for housecomp.

Two notifications cross the boundary between running challenges and the
resolution pipeline:

- ``competition:finished``: a challenge or a controlling script announces
  that the run is over, optionally naming the winner. Consumed by the
  resolver as an external-event claim.
- ``observer:show``: asks for the observer presentation of a run, with the
  competitor ids and an optional pre-known winner. Consumed by the
  reconciliation gate.

Delivery is synchronous and in publish order. Subscribers are removed with
the returned Subscription's ``cancel()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

COMPETITION_FINISHED = "competition:finished"
SHOW_OBSERVER_VIEW = "observer:show"


@dataclass(frozen=True)
class CompetitionFinished:
    """Payload of ``competition:finished``."""

    winner_id: str | None = None
    run_id: str | None = None


@dataclass(frozen=True)
class ShowObserverView:
    """Payload of ``observer:show``.

    Attributes:
        competitor_ids: Participants shown in the presentation
        run_id: Run being observed (a fresh id is generated if omitted)
        variant: Presentation style hint, passed through untouched
        winner_id: Winner already known when the presentation is requested
    """

    competitor_ids: tuple[str, ...] = ()
    run_id: str | None = None
    variant: str = "holdwall"
    winner_id: str | None = None


class Subscription:
    """Handle returned by NotificationChannel.subscribe."""

    def __init__(self, channel: NotificationChannel, topic: str, callback: Callable[[Any], None]):
        self._channel = channel
        self.topic = topic
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._channel._remove(self)


@dataclass
class NotificationChannel:
    """Synchronous publish/subscribe keyed by topic name."""

    _subscribers: dict[str, list[Subscription]] = field(default_factory=dict)

    def subscribe(self, topic: str, callback: Callable[[Any], None]) -> Subscription:
        subscription = Subscription(self, topic, callback)
        self._subscribers.setdefault(topic, []).append(subscription)
        return subscription

    def publish(self, topic: str, payload: Any = None) -> int:
        """Deliver ``payload`` to every current subscriber of ``topic``.

        Subscribers added or cancelled during delivery take effect for the
        next publish.

        Returns:
            Number of subscribers notified
        """
        delivered = 0
        for subscription in list(self._subscribers.get(topic, ())):
            if not subscription.active:
                continue
            subscription.callback(payload)
            delivered += 1
        logger.debug(f"Published {topic} to {delivered} subscriber(s)")
        return delivered

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, ()))

    def _remove(self, subscription: Subscription) -> None:
        subscribers = self._subscribers.get(subscription.topic, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
