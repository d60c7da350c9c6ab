"""Application layer DI providers."""

from dishka import Scope, provide

from club.adapter.notification import ChangeNotifier
from club.application.usecase.calendar import GetCalendarMonthUseCase
from club.application.usecase.event import (
    CancelOccurrenceUseCase,
    GetNextOccurrenceUseCase,
)
from club.application.usecase.invitation import SyncInvitationsUseCase
from club.config import Settings
from club.domain.service import CalendarService, EventService, InvitationService
from club.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_sync_invitations_use_case(
        self,
        event_service: EventService,
        invitation_service: InvitationService,
        settings: Settings,
    ) -> SyncInvitationsUseCase:
        """Provide sync invitations use case."""
        return SyncInvitationsUseCase(
            event_service=event_service,
            invitation_service=invitation_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_calendar_month_use_case(
        self, calendar_service: CalendarService
    ) -> GetCalendarMonthUseCase:
        """Provide get calendar month use case."""
        return GetCalendarMonthUseCase(calendar_service=calendar_service)

    @provide(scope=Scope.REQUEST)
    def get_next_occurrence_use_case(
        self, event_service: EventService
    ) -> GetNextOccurrenceUseCase:
        """Provide get next occurrence use case."""
        return GetNextOccurrenceUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_occurrence_use_case(
        self,
        event_service: EventService,
        invitation_service: InvitationService,
        notifier: ChangeNotifier,
    ) -> CancelOccurrenceUseCase:
        """Provide cancel occurrence use case."""
        return CancelOccurrenceUseCase(
            event_service=event_service,
            invitation_service=invitation_service,
            notifier=notifier,
        )
