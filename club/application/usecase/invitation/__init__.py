"""Invitation use cases."""

from club.application.usecase.invitation.sync_invitations import (
    SyncInvitationsRequest,
    SyncInvitationsResponse,
    SyncInvitationsUseCase,
    UserSyncItem,
)

__all__ = [
    "SyncInvitationsRequest",
    "SyncInvitationsResponse",
    "SyncInvitationsUseCase",
    "UserSyncItem",
]
