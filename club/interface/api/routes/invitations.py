"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel, Field

from club.application.usecase.invitation import (
    SyncInvitationsRequest,
    SyncInvitationsResponse,
    SyncInvitationsUseCase,
)
from club.domain.error import DomainError
from club.interface.error import to_http_exception

router = APIRouter(prefix="/events", tags=["invitations"], route_class=DishkaRoute)


class SyncInvitationsAPIRequest(BaseModel):
    """API request for syncing invitations."""

    user_ids: list[UUID] = Field(default=[], max_length=500)


@router.post("/{event_id}/invitations/sync", response_model=SyncInvitationsResponse)
async def sync_invitations(
    event_id: UUID,
    use_case: FromDishka[SyncInvitationsUseCase],
    request: SyncInvitationsAPIRequest | None = None,
) -> SyncInvitationsResponse:
    """Create missing invitations for the event's upcoming occurrences.

    Safe to call repeatedly and concurrently; existing invitations are never
    duplicated or changed.

    Raises:
        HTTPException: 404 if the event does not exist, 503 if the store is
            unavailable
    """
    user_ids = request.user_ids if request else []
    try:
        return await use_case.execute(
            SyncInvitationsRequest(
                event_id=str(event_id), user_ids=[str(u) for u in user_ids]
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
