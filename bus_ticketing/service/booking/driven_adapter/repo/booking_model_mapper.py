from typing import Any

from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.enum.booking_status import BookingStatus
from bus_ticketing.service.booking.domain.value_object.cancellation_detail import (
    CancellationDetail,
)
from bus_ticketing.service.booking.driven_adapter.model.booking_model import BookingModel


def to_entity(db_booking: BookingModel) -> Booking:
    cancelled = None
    if db_booking.cancelled_reason or db_booking.cancelled_by:
        cancelled = CancellationDetail(
            reason=db_booking.cancelled_reason or '',
            cancelled_by=db_booking.cancelled_by or '',
        )

    return Booking(
        id=db_booking.id,
        user_id=db_booking.user_id,
        bus_id=db_booking.bus_id,
        bus_route_id=db_booking.bus_route_id,
        status=BookingStatus(db_booking.status),
        seat_number=db_booking.seat_number,
        travel_date=db_booking.travel_date,
        date_created=db_booking.date_created,
        date_confirmed=db_booking.date_confirmed,
        is_cancelled=db_booking.is_cancelled,
        cancelled=cancelled,
        timestamp=db_booking.timestamp,
        version=db_booking.version,
        transition_id=db_booking.transition_id,
    )


def to_row(booking: Booking) -> dict[str, Any]:
    """Column values for an insert; the dedup token is added by the caller."""
    return {
        'id': booking.id,
        'bus_route_id': booking.bus_route_id,
        'user_id': booking.user_id,
        'bus_id': booking.bus_id,
        'status': str(booking.status),
        'seat_number': booking.seat_number,
        'travel_date': booking.travel_date,
        'date_created': booking.date_created,
        'date_confirmed': booking.date_confirmed,
        'is_cancelled': booking.is_cancelled,
        'cancelled_reason': booking.cancelled.reason if booking.cancelled else None,
        'cancelled_by': booking.cancelled.cancelled_by if booking.cancelled else None,
        'timestamp': booking.timestamp,
        'version': booking.version,
        'transition_id': booking.transition_id,
    }
