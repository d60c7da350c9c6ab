"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class NotificationError(AdapterError):
    """Change notification channel error."""

    pass
