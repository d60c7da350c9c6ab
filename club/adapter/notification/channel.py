"""Change notification channel.

Carries "something changed in this club" notices from writers to anyone
who needs to react, such as the invitation sync listener.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Protocol
from uuid import uuid4

import logfire
from pydantic import BaseModel, Field

from club.adapter.error import NotificationError
from club.domain.value import ClubId, EventId


class ChangeKind(str, Enum):
    """What changed."""

    EVENT_CHANGED = "event_changed"  # Event created or its rule edited
    INVITEES_CHANGED = "invitees_changed"  # Users added to an event
    OCCURRENCE_CANCELLED = "occurrence_cancelled"


class ChangeNotice(BaseModel):
    """A change within one club."""

    club_id: ClubId
    kind: ChangeKind
    event_id: Optional[EventId] = None
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


ChangeCallback = Callable[[ChangeNotice], Awaitable[None]]


def club_scope(club_id: ClubId) -> str:
    """Notification scope covering every change of one club."""
    return f"club:{club_id}"


class Subscription:
    """Handle returned by subscribe(); cancels delivery when closed."""

    def __init__(self, notifier: "InMemoryChangeNotifier", scope: Optional[str], key: str):
        self._notifier = notifier
        self.scope = scope
        self.key = key
        self.active = True

    def unsubscribe(self) -> None:
        """Stop delivering notices to this subscription. Idempotent."""
        if self.active:
            self._notifier._remove(self.scope, self.key)
            self.active = False


class ChangeNotifier(Protocol):
    """Protocol for publishing and subscribing to change notices."""

    def subscribe(self, scope: Optional[str], callback: ChangeCallback) -> Subscription:
        """Register a callback for a scope.

        Args:
            scope: Scope to listen to, or None for every scope
            callback: Coroutine function called with each notice

        Returns:
            Subscription handle
        """
        ...

    async def publish(self, scope: str, change: ChangeNotice) -> int:
        """Deliver a notice to the scope's subscribers.

        Returns:
            Number of subscribers that handled the notice without error
        """
        ...


class InMemoryChangeNotifier:
    """In-process change notifier.

    Callbacks for one notice run concurrently. A failing callback is logged
    and does not prevent delivery to the other subscribers.
    """

    def __init__(self) -> None:
        self._subscribers: dict[Optional[str], dict[str, ChangeCallback]] = {}

    def subscribe(self, scope: Optional[str], callback: ChangeCallback) -> Subscription:
        key = uuid4().hex
        self._subscribers.setdefault(scope, {})[key] = callback
        logfire.debug("Change subscription added", scope=scope or "*")
        return Subscription(self, scope, key)

    def _remove(self, scope: Optional[str], key: str) -> None:
        callbacks = self._subscribers.get(scope, {})
        callbacks.pop(key, None)
        if not callbacks:
            self._subscribers.pop(scope, None)

    def subscriber_count(self, scope: Optional[str]) -> int:
        return len(self._subscribers.get(scope, {}))

    async def publish(self, scope: str, change: ChangeNotice) -> int:
        if scope is None:
            raise NotificationError("Notices must be published to a concrete scope")

        callbacks = list(self._subscribers.get(scope, {}).values())
        callbacks += list(self._subscribers.get(None, {}).values())
        if not callbacks:
            return 0

        with logfire.span(
            "notifier.publish",
            scope=scope,
            kind=change.kind.value,
            subscribers=len(callbacks),
        ):
            results = await asyncio.gather(
                *(callback(change) for callback in callbacks), return_exceptions=True
            )
            failures = [r for r in results if isinstance(r, BaseException)]
            for failure in failures:
                logfire.error(
                    "Change subscriber failed",
                    scope=scope,
                    kind=change.kind.value,
                    error=repr(failure),
                )
            return len(results) - len(failures)
