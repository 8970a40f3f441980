"""
Unit tests for the booking read side

Test Coverage:
1. GetBookingUseCase: found / not found by (id, bus_route_id)
2. ListBookingsUseCase: blank filters ignored, the rest combined
3. ListCancellationRecordsUseCase: records of one booking, not found when none
"""

from datetime import datetime, timezone

import pytest

from bus_ticketing.platform.exception.exceptions import NotFoundError
from bus_ticketing.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from bus_ticketing.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from bus_ticketing.service.booking.app.query.list_cancellation_records_use_case import (
    ListCancellationRecordsUseCase,
)
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.entity.cancellation_record_entity import (
    CancellationRecord,
)
from bus_ticketing.service.booking.domain.enum.booking_status import BookingStatus


pytestmark = pytest.mark.unit


class TestGetBooking:
    @pytest.mark.asyncio
    async def test_found(self, booking_store, pending_booking):
        use_case = GetBookingUseCase(booking_store)

        booking = await use_case.get_booking(
            booking_id=pending_booking.id, bus_route_id=pending_booking.bus_route_id
        )

        assert booking == pending_booking

    @pytest.mark.asyncio
    async def test_both_keys_must_match(self, booking_store, pending_booking):
        use_case = GetBookingUseCase(booking_store)

        with pytest.raises(NotFoundError, match=r'no record\(s\) found'):
            await use_case.get_booking(booking_id=pending_booking.id, bus_route_id='RT-9999')


class TestListBookings:
    def setup_method(self):
        self.bookings = [
            Booking(id='bk-1', bus_id='BUS-1', bus_route_id='RT-1', status=BookingStatus.PENDING),
            Booking(id='bk-2', bus_id='BUS-1', bus_route_id='RT-2', status=BookingStatus.CONFIRMED),
            Booking(id='bk-3', bus_id='BUS-2', bus_route_id='RT-1', status=BookingStatus.PENDING),
        ]

    def _use_case(self, booking_store) -> ListBookingsUseCase:
        booking_store.rows.clear()
        for booking in self.bookings:
            booking_store.seed(booking)
        return ListBookingsUseCase(booking_store)

    @pytest.mark.asyncio
    async def test_blank_filters_return_everything(self, booking_store):
        use_case = self._use_case(booking_store)

        bookings = await use_case.list_bookings()

        assert {booking.id for booking in bookings} == {'bk-1', 'bk-2', 'bk-3'}

    @pytest.mark.asyncio
    async def test_filters_are_combined(self, booking_store):
        use_case = self._use_case(booking_store)

        bookings = await use_case.list_bookings(status='PENDING', bus_route_id='RT-1', bus_id='BUS-2')

        assert [booking.id for booking in bookings] == ['bk-3']

    @pytest.mark.asyncio
    async def test_no_match_is_an_empty_list(self, booking_store):
        use_case = self._use_case(booking_store)

        assert await use_case.list_bookings(status='CANCELLED') == []


class TestListCancellationRecords:
    @pytest.mark.asyncio
    async def test_records_of_booking(self, cancellation_record_store):
        # Given
        record = CancellationRecord(
            id='rec-1',
            booking_id='bk-1',
            reason='duplicate',
            cancelled_by='CSTMR-0001',
            date_cancelled=datetime(2026, 10, 19, tzinfo=timezone.utc),
        )
        await cancellation_record_store.create_if_absent(record=record)
        use_case = ListCancellationRecordsUseCase(cancellation_record_store)

        # When
        records = await use_case.list_records(booking_id='bk-1')

        # Then
        assert records == [record]

    @pytest.mark.asyncio
    async def test_no_records_is_not_found(self, cancellation_record_store):
        use_case = ListCancellationRecordsUseCase(cancellation_record_store)

        with pytest.raises(NotFoundError):
            await use_case.list_records(booking_id='bk-1')
