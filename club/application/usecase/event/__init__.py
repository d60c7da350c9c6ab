"""Event use cases."""

from club.application.usecase.event.cancel_occurrence import (
    CancelOccurrenceRequest,
    CancelOccurrenceResponse,
    CancelOccurrenceUseCase,
)
from club.application.usecase.event.get_next_occurrence import (
    GetNextOccurrenceRequest,
    GetNextOccurrenceResponse,
    GetNextOccurrenceUseCase,
)

__all__ = [
    "CancelOccurrenceRequest",
    "CancelOccurrenceResponse",
    "CancelOccurrenceUseCase",
    "GetNextOccurrenceRequest",
    "GetNextOccurrenceResponse",
    "GetNextOccurrenceUseCase",
]
