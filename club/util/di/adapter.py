"""Adapter DI providers."""

from dishka import AsyncContainer, Scope, provide

from club.adapter.notification import ChangeNotifier, InMemoryChangeNotifier
from club.application.listener import InvitationSyncListener
from club.application.usecase.invitation import (
    SyncInvitationsRequest,
    SyncInvitationsResponse,
    SyncInvitationsUseCase,
)
from club.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Change notification channel and its listeners, shared app-wide."""

    scope = Scope.APP

    @provide
    def get_change_notifier(self) -> ChangeNotifier:
        """Provide the in-process change notifier."""
        return InMemoryChangeNotifier()

    @provide
    def get_invitation_sync_listener(
        self, notifier: ChangeNotifier, container: AsyncContainer
    ) -> InvitationSyncListener:
        """Provide listener that syncs each notice in its own request scope."""

        async def run_sync(request: SyncInvitationsRequest) -> SyncInvitationsResponse:
            async with container() as request_container:
                use_case = await request_container.get(SyncInvitationsUseCase)
                return await use_case.execute(request)

        return InvitationSyncListener(notifier=notifier, run_sync=run_sync)
