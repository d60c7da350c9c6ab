"""Change notification adapter."""

from .channel import (
    ChangeCallback,
    ChangeKind,
    ChangeNotice,
    ChangeNotifier,
    InMemoryChangeNotifier,
    Subscription,
    club_scope,
)

__all__ = [
    "ChangeCallback",
    "ChangeKind",
    "ChangeNotice",
    "ChangeNotifier",
    "InMemoryChangeNotifier",
    "Subscription",
    "club_scope",
]
