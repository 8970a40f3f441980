"""
Booking status rules shared by intake, transition validation and the handlers.

PENDING is the only initial state; CONFIRMED and CANCELLED are terminal and
are the only states reachable through a transition event.
"""

from typing import Any

from bus_ticketing.platform.exception.exceptions import (
    InvalidEventSourceError,
    InvalidStatusError,
    MissingCancellationFieldsError,
)
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.enum.booking_status import BookingStatus
from bus_ticketing.service.booking.domain.enum.event_source import EventSource


_STATUS_VALUES = frozenset(status.value for status in BookingStatus)

_EVENT_SOURCES: dict[BookingStatus, EventSource] = {
    BookingStatus.CONFIRMED: EventSource.CONFIRMED,
    BookingStatus.CANCELLED: EventSource.CANCELLED,
}


def validate_status(candidate: Any) -> BookingStatus:
    """Exact, case-sensitive match against the three status values."""
    if not isinstance(candidate, str) or candidate not in _STATUS_VALUES:
        raise InvalidStatusError()
    return BookingStatus(candidate)


def resolve_event_source(status: Any) -> EventSource:
    try:
        return _EVENT_SOURCES[status]
    except (KeyError, TypeError):
        raise InvalidEventSourceError() from None


def ensure_cancellation_fields(booking: Booking) -> None:
    """A cancelled booking must say why (reason) and who (cancelled_by)."""
    if booking.status != BookingStatus.CANCELLED:
        return
    if booking.cancelled is None or booking.cancelled.is_empty:
        raise MissingCancellationFieldsError()
    if missing := booking.cancelled.missing_fields():
        raise MissingCancellationFieldsError(missing=missing)
