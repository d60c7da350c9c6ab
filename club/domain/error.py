"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidRuleError(DomainError):
    """Raised when a recurrence rule cannot be expanded."""

    def __init__(self, message: str, event_id: str | None = None):
        self.event_id = event_id
        prefix = f"Event {event_id}: " if event_id else ""
        super().__init__(f"{prefix}{message}")


class InvalidWindowError(DomainError):
    """Raised when a date window ends before it starts."""

    def __init__(self, window_start: object, window_end: object):
        super().__init__(f"Window start {window_start} is after window end {window_end}")


class DuplicateInvitationError(DomainError):
    """Raised when an invitation for the same event, user and date already exists."""

    def __init__(self, event_id: str, user_id: str, occurrence_date: str):
        self.event_id = event_id
        self.user_id = user_id
        self.occurrence_date = occurrence_date
        super().__init__(
            f"Invitation already exists for event {event_id}, "
            f"user {user_id} on {occurrence_date}"
        )


class StoreError(DomainError):
    """Raised when the persistent store rejects an operation."""

    pass


class TransientStoreError(StoreError):
    """Raised when the persistent store is temporarily unavailable.

    Retryable by the caller; never retried internally.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
