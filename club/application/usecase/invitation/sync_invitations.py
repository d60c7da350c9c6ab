"""Sync invitations use case."""

from datetime import date
from typing import Literal, Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from club.application.usecase.base import BaseUseCase
from club.config import Settings
from club.domain.error import InvalidRuleError
from club.domain.service import EventService, InvitationService
from club.domain.value import EventId, UserId


class SyncInvitationsRequest(BaseModel):
    """Request to bring an event's invitations up to date."""

    event_id: str
    user_ids: list[str] = []  # Invite these users in addition to existing invitees
    today: Optional[date] = None  # Defaults to the server's current date


class UserSyncItem(BaseModel):
    """Outcome for one invitee."""

    user_id: str
    created: list[date]
    duplicates: int
    failed: list[date]


class SyncInvitationsResponse(BaseModel):
    """Response after syncing invitations."""

    event_id: str
    window_start: date
    window_end: date
    users: list[UserSyncItem] = []
    created_count: int = 0
    failed_count: int = 0
    skipped: Optional[Literal["cancelled", "not_recurring", "invalid_rule"]] = None


class SyncInvitationsUseCase(BaseUseCase):
    """Materialize pending invitations for every invitee of a recurring event.

    The window runs from today to the end of the event's lead time. Each
    invitee's diff is computed against that invitee's own records, so adding
    a user never touches anyone else's invitations.
    """

    def __init__(
        self,
        event_service: EventService,
        invitation_service: InvitationService,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            event_service: Event domain service
            invitation_service: Invitation domain service
            settings: Application settings
        """
        self.event_service = event_service
        self.invitation_service = invitation_service
        self.settings = settings

    async def execute(self, request: SyncInvitationsRequest) -> SyncInvitationsResponse:
        """Execute sync invitations use case.

        Args:
            request: Sync request

        Returns:
            Per-user outcome, or a skip reason when nothing can be synced

        Raises:
            NotFoundError: If the event does not exist
            TransientStoreError: If the store is unavailable
        """
        event_id = EventId(UUID(request.event_id))
        today = request.today or date.today()

        with logfire.span("sync_invitations", event_id=str(event_id)):
            event = await self.event_service.get_by_id(event_id)
            window_end = event.lookahead_end(
                today, self.settings.scheduling.lookahead_weeks
            )
            response = SyncInvitationsResponse(
                event_id=str(event_id), window_start=today, window_end=window_end
            )

            if event.cancelled:
                logfire.info("Skipping sync of cancelled event", event_id=str(event_id))
                response.skipped = "cancelled"
                return response
            if not event.is_recurring:
                response.skipped = "not_recurring"
                return response

            invitee_ids = await self._collect_invitees(event_id, request.user_ids)

            for user_id in invitee_ids:
                try:
                    result = await self.invitation_service.sync_for_user(
                        event, user_id, today, window_end
                    )
                except InvalidRuleError as e:
                    # Rule-level fault; every other user would fail the same way
                    logfire.warn(
                        "Cannot sync invitations for invalid rule",
                        event_id=str(event_id),
                        error=str(e),
                    )
                    response.skipped = "invalid_rule"
                    return response

                response.users.append(
                    UserSyncItem(
                        user_id=str(user_id),
                        created=result.created,
                        duplicates=len(result.duplicates),
                        failed=result.failed,
                    )
                )
                response.created_count += result.created_count
                response.failed_count += result.failed_count

            logfire.info(
                "Invitations synced",
                event_id=str(event_id),
                users=len(invitee_ids),
                created=response.created_count,
                failed=response.failed_count,
            )
            return response

    async def _collect_invitees(
        self, event_id: EventId, requested: list[str]
    ) -> list[UserId]:
        """Existing invitees, then requested users, then configured defaults."""
        existing = await self.invitation_service.find_invitee_ids(event_id)
        candidates = [
            *existing,
            *(UserId(UUID(u)) for u in requested),
            *(UserId(UUID(u)) for u in self.settings.scheduling.default_invitee_ids),
        ]
        # Deduplicate preserving order
        return list(dict.fromkeys(candidates))
