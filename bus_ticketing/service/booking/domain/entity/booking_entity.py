from datetime import datetime
from typing import Any, Optional

import attrs

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.domain.enum.booking_status import BookingStatus
from bus_ticketing.service.booking.domain.enum.user_type import STAFF_ID_PREFIX
from bus_ticketing.service.booking.domain.value_object.booking_status_change import (
    BookingStatusChange,
)
from bus_ticketing.service.booking.domain.value_object.cancellation_detail import (
    CancellationDetail,
)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f'invalid datetime value: {value!r}')
    return datetime.fromisoformat(value)


def _parse_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key) or ''
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


@attrs.define
class Booking:
    id: str = ''
    user_id: str = ''
    bus_id: str = ''
    bus_route_id: str = ''
    status: BookingStatus = BookingStatus.PENDING
    seat_number: str = ''
    travel_date: str = ''
    date_created: Optional[datetime] = None
    date_confirmed: Optional[datetime] = None
    is_cancelled: Optional[bool] = None
    cancelled: Optional[CancellationDetail] = None
    timestamp: str = ''
    version: int = 0
    # Id of the transition event that last wrote this record
    transition_id: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'Booking':
        """
        Build a Booking from a decoded JSON payload (queued creation or transition event).

        Raises:
            ValueError: payload is not an object, a field has the wrong type,
                or the status is not a BookingStatus value
        """
        if not isinstance(data, dict):
            raise ValueError('booking payload must be a JSON object')

        is_cancelled = data.get('is_cancelled')
        if is_cancelled is not None and not isinstance(is_cancelled, bool):
            raise ValueError("'is_cancelled' must be a boolean")

        version = data.get('version') or 0
        if not isinstance(version, int) or isinstance(version, bool):
            raise ValueError("'version' must be an integer")

        return cls(
            id=_parse_str(data, 'id'),
            user_id=_parse_str(data, 'user_id'),
            bus_id=_parse_str(data, 'bus_id'),
            bus_route_id=_parse_str(data, 'bus_route_id'),
            status=BookingStatus(data.get('status') or BookingStatus.PENDING),
            seat_number=_parse_str(data, 'seat_number'),
            travel_date=_parse_str(data, 'travel_date'),
            date_created=_parse_datetime(data.get('date_created')),
            date_confirmed=_parse_datetime(data.get('date_confirmed')),
            is_cancelled=is_cancelled,
            cancelled=CancellationDetail.from_dict(data.get('cancelled')),
            timestamp=_parse_str(data, 'timestamp'),
            version=version,
            transition_id=_parse_str(data, 'transition_id'),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'bus_id': self.bus_id,
            'bus_route_id': self.bus_route_id,
            'status': str(self.status),
            'seat_number': self.seat_number,
            'travel_date': self.travel_date,
            'date_created': self.date_created,
            'date_confirmed': self.date_confirmed,
            'is_cancelled': self.is_cancelled,
            'cancelled': self.cancelled.to_dict() if self.cancelled else None,
            'timestamp': self.timestamp,
            'version': self.version,
            'transition_id': self.transition_id,
        }

    @property
    def is_staff_cancellation(self) -> bool:
        return bool(self.cancelled and self.cancelled.cancelled_by.startswith(STAFF_ID_PREFIX))

    @Logger.io
    def assign_identity(self, *, id: str, now: datetime) -> 'Booking':
        """Identity and creation time are assigned by the worker, never by the caller."""
        return attrs.evolve(
            self, id=id, date_created=now, date_confirmed=None, version=0, transition_id=''
        )

    @Logger.io
    def merge_status_change(self, *, change: BookingStatusChange) -> 'Booking':
        """
        Merge a status-change request onto this (stored) booking.

        Blank fields keep the stored value. Cancellation details are merged
        sub-field by sub-field, only when the request carries the
        cancellation flag. The merged status is not validated here.
        """
        cancelled = self.cancelled
        if change.is_cancelled is not None and change.cancelled is not None:
            current = cancelled or CancellationDetail()
            cancelled = CancellationDetail(
                reason=change.cancelled.reason or current.reason,
                cancelled_by=change.cancelled.cancelled_by or current.cancelled_by,
            )

        return attrs.evolve(
            self,
            status=change.status or self.status,
            seat_number=change.seat_number or self.seat_number,
            cancelled=cancelled,
        )

    def stamp_transition(self, *, transition_id: str) -> 'Booking':
        return attrs.evolve(self, transition_id=transition_id)

    @Logger.io
    def mark_cancellation_in_flight(self) -> 'Booking':
        return attrs.evolve(self, is_cancelled=True)

    @Logger.io
    def confirm(self, *, now: datetime) -> 'Booking':
        return attrs.evolve(self, status=BookingStatus.CONFIRMED, date_confirmed=now)

    @Logger.io
    def cancel(self) -> 'Booking':
        return attrs.evolve(
            self, status=BookingStatus.CANCELLED, is_cancelled=True, date_confirmed=None
        )
