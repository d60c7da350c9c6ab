"""Calendar use cases."""

from club.application.usecase.calendar.get_calendar_month import (
    CalendarDay,
    GetCalendarMonthRequest,
    GetCalendarMonthResponse,
    GetCalendarMonthUseCase,
    OccurrenceItem,
)

__all__ = [
    "CalendarDay",
    "GetCalendarMonthRequest",
    "GetCalendarMonthResponse",
    "GetCalendarMonthUseCase",
    "OccurrenceItem",
]
