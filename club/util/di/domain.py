"""Domain layer DI providers."""

from dishka import Scope, provide

from club.domain.repository import (
    EventRepository,
    InvitationRepository,
    SubgroupRepository,
)
from club.domain.service import CalendarService, EventService, InvitationService
from club.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_event_service(self, event_repository: EventRepository) -> EventService:
        """Provide event domain service."""
        return EventService(event_repository=event_repository)

    @provide
    def get_invitation_service(
        self, invitation_repository: InvitationRepository
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(invitation_repository=invitation_repository)

    @provide
    def get_calendar_service(
        self,
        event_repository: EventRepository,
        subgroup_repository: SubgroupRepository,
    ) -> CalendarService:
        """Provide calendar domain service."""
        return CalendarService(
            event_repository=event_repository,
            subgroup_repository=subgroup_repository,
        )
