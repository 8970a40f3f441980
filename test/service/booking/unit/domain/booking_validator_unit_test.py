"""
Unit tests for booking status rules

Test Coverage:
1. validate_status: exact, case-sensitive match
2. resolve_event_source: only terminal states route to a handler
3. ensure_cancellation_fields: reason and cancelled_by on cancelled bookings
"""

import pytest

from bus_ticketing.platform.exception.exceptions import (
    InvalidEventSourceError,
    InvalidStatusError,
    MissingCancellationFieldsError,
)
from bus_ticketing.service.booking.domain.booking_validator import (
    ensure_cancellation_fields,
    resolve_event_source,
    validate_status,
)
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.enum.booking_status import BookingStatus
from bus_ticketing.service.booking.domain.enum.event_source import EventSource
from bus_ticketing.service.booking.domain.value_object.cancellation_detail import (
    CancellationDetail,
)


pytestmark = pytest.mark.unit


class TestValidateStatus:
    @pytest.mark.parametrize('candidate', ['PENDING', 'CONFIRMED', 'CANCELLED'])
    def test_known_statuses_are_accepted(self, candidate):
        # When
        status = validate_status(candidate)

        # Then
        assert status == BookingStatus(candidate)
        assert isinstance(status, BookingStatus)

    @pytest.mark.parametrize('candidate', ['pending', 'Confirmed', 'BOOKED', '', ' PENDING', None, 1])
    def test_anything_else_is_rejected(self, candidate):
        with pytest.raises(InvalidStatusError) as exc_info:
            validate_status(candidate)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == 'invalid booking status'


class TestResolveEventSource:
    def test_confirmed_routes_to_confirmation_handler(self):
        assert resolve_event_source(BookingStatus.CONFIRMED) == EventSource.CONFIRMED
        assert str(EventSource.CONFIRMED) == 'booking:confirmed'

    def test_cancelled_routes_to_cancellation_handler(self):
        assert resolve_event_source(BookingStatus.CANCELLED) == EventSource.CANCELLED
        assert str(EventSource.CANCELLED) == 'booking:cancelled'

    def test_pending_has_no_event_source(self):
        with pytest.raises(InvalidEventSourceError) as exc_info:
            resolve_event_source(BookingStatus.PENDING)

        assert 'CONFIRMED, CANCELLED' in exc_info.value.message


class TestEnsureCancellationFields:
    def test_non_cancelled_booking_needs_no_details(self):
        # Given: A confirmed booking without cancellation details
        booking = Booking(id='bk-1', status=BookingStatus.CONFIRMED)

        # When / Then: Nothing is raised
        ensure_cancellation_fields(booking)

    def test_cancelled_without_details_is_rejected(self):
        booking = Booking(id='bk-1', status=BookingStatus.CANCELLED)

        with pytest.raises(MissingCancellationFieldsError) as exc_info:
            ensure_cancellation_fields(booking)

        assert exc_info.value.message == "'cancelled' fields are not set in the payload"

    def test_cancelled_with_empty_details_is_rejected_as_unset(self):
        booking = Booking(
            id='bk-1', status=BookingStatus.CANCELLED, cancelled=CancellationDetail()
        )

        with pytest.raises(MissingCancellationFieldsError) as exc_info:
            ensure_cancellation_fields(booking)

        assert exc_info.value.missing == []

    def test_missing_cancelled_by_is_named(self):
        # Given: Only the reason is set
        booking = Booking(
            id='bk-1',
            status=BookingStatus.CANCELLED,
            cancelled=CancellationDetail(reason='duplicate'),
        )

        # When
        with pytest.raises(MissingCancellationFieldsError) as exc_info:
            ensure_cancellation_fields(booking)

        # Then
        assert exc_info.value.missing == ['cancelled_by']
        assert exc_info.value.message == "object has missing required properties: ['cancelled_by']"

    def test_missing_reason_is_named(self):
        booking = Booking(
            id='bk-1',
            status=BookingStatus.CANCELLED,
            cancelled=CancellationDetail(cancelled_by='CSTMR-0001'),
        )

        with pytest.raises(MissingCancellationFieldsError) as exc_info:
            ensure_cancellation_fields(booking)

        assert exc_info.value.missing == ['reason']

    def test_complete_details_pass(self):
        booking = Booking(
            id='bk-1',
            status=BookingStatus.CANCELLED,
            cancelled=CancellationDetail(reason='change of plans', cancelled_by='CSTMR-0001'),
        )

        ensure_cancellation_fields(booking)
