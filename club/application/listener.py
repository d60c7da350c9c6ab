"""Re-runs invitation sync when a club's events change."""

from collections.abc import Awaitable, Callable
from typing import Optional

import logfire

from club.adapter.notification import (
    ChangeKind,
    ChangeNotice,
    ChangeNotifier,
    Subscription,
    club_scope,
)
from club.application.usecase.invitation import (
    SyncInvitationsRequest,
    SyncInvitationsResponse,
)
from club.domain.value import ClubId

# Runs one sync in its own unit of work (session, transaction)
SyncRunner = Callable[[SyncInvitationsRequest], Awaitable[SyncInvitationsResponse]]

RESYNC_KINDS = frozenset({ChangeKind.EVENT_CHANGED, ChangeKind.INVITEES_CHANGED})


class InvitationSyncListener:
    """Subscribes to change notices and resyncs the affected event.

    Cancellations never add occurrences, so they do not trigger a sync.
    """

    def __init__(self, notifier: ChangeNotifier, run_sync: SyncRunner) -> None:
        self.notifier = notifier
        self.run_sync = run_sync
        self._subscriptions: dict[Optional[ClubId], Subscription] = {}

    def watch(self, club_id: Optional[ClubId] = None) -> Subscription:
        """Start listening to one club, or to every club when club_id is None.

        Watching the same club twice returns the existing subscription.
        """
        existing = self._subscriptions.get(club_id)
        if existing and existing.active:
            return existing
        scope = club_scope(club_id) if club_id is not None else None
        subscription = self.notifier.subscribe(scope, self.handle)
        self._subscriptions[club_id] = subscription
        return subscription

    def close(self) -> None:
        """Stop listening everywhere."""
        for subscription in self._subscriptions.values():
            subscription.unsubscribe()
        self._subscriptions.clear()

    async def handle(self, notice: ChangeNotice) -> Optional[SyncInvitationsResponse]:
        """Sync the event named by a notice, if the change can add occurrences."""
        if notice.kind not in RESYNC_KINDS or notice.event_id is None:
            return None

        with logfire.span(
            "invitation_sync_listener.handle",
            club_id=str(notice.club_id),
            event_id=str(notice.event_id),
            kind=notice.kind.value,
        ):
            return await self.run_sync(
                SyncInvitationsRequest(event_id=str(notice.event_id))
            )
