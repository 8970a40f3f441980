"""
Unit tests for the Booking entity and the status-change request

Test Coverage:
1. Decoding payloads (queued creations and transition events)
2. Merging a status change onto a stored booking
3. Handler-side state changes (confirm / cancel)
4. Cancellation record creation
"""

from datetime import datetime, timezone

import orjson
import pytest

from bus_ticketing.platform.exception.exceptions import MissingCancellationFieldsError
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.entity.cancellation_record_entity import (
    CancellationRecord,
)
from bus_ticketing.service.booking.domain.enum.booking_status import BookingStatus
from bus_ticketing.service.booking.domain.value_object.booking_status_change import (
    BookingStatusChange,
)
from bus_ticketing.service.booking.domain.value_object.cancellation_detail import (
    CancellationDetail,
)


pytestmark = pytest.mark.unit

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


class TestBookingFromDict:
    def test_creation_payload_defaults_missing_fields(self):
        # Given: A creation payload with only a few fields
        data = {'status': 'PENDING', 'seat_number': '12', 'user_id': 'CSTMR-0001'}

        # When
        booking = Booking.from_dict(data)

        # Then
        assert booking.status == BookingStatus.PENDING
        assert booking.seat_number == '12'
        assert booking.id == ''
        assert booking.cancelled is None
        assert booking.version == 0

    def test_event_payload_survives_the_wire(self):
        # Given: A booking serialized the way the event publisher does it
        original = Booking(
            id='bk-1',
            bus_route_id='RT-1',
            status=BookingStatus.CANCELLED,
            date_created=NOW,
            is_cancelled=True,
            cancelled=CancellationDetail(reason='sick', cancelled_by='CSTMR-0001'),
            version=3,
        )

        # When
        decoded = Booking.from_dict(orjson.loads(orjson.dumps(original.to_dict())))

        # Then
        assert decoded == original

    @pytest.mark.parametrize(
        'data',
        [
            ['not', 'an', 'object'],
            {'status': 'BOOKED'},
            {'seat_number': 12},
            {'is_cancelled': 'yes'},
            {'version': '1'},
            {'cancelled': 'duplicate'},
            {'date_created': 20261019},
        ],
    )
    def test_malformed_payload_raises_value_error(self, data):
        with pytest.raises(ValueError):
            Booking.from_dict(data)

    def test_assign_identity_resets_worker_owned_fields(self):
        # Given: A caller that tried to supply its own identity
        submitted = Booking(id='caller-id', version=7, date_confirmed=NOW)

        # When
        booking = submitted.assign_identity(id='generated-id', now=NOW)

        # Then
        assert booking.id == 'generated-id'
        assert booking.date_created == NOW
        assert booking.date_confirmed is None
        assert booking.version == 0


class TestBookingStatusChange:
    def test_nested_cancellation_detail(self):
        change = BookingStatusChange.from_dict(
            {'status': 'CANCELLED', 'cancelled': {'reason': 'sick', 'cancelled_by': 'CSTMR-1'}}
        )

        assert change.cancelled == CancellationDetail(reason='sick', cancelled_by='CSTMR-1')

    def test_flat_cancellation_detail(self):
        change = BookingStatusChange.from_dict({'status': 'CANCELLED', 'reason': 'duplicate'})

        assert change.cancelled == CancellationDetail(reason='duplicate', cancelled_by='')

    def test_status_is_kept_raw(self):
        change = BookingStatusChange.from_dict({'status': 'confirmed'})

        assert change.status == 'confirmed'

    def test_non_object_payload_is_rejected(self):
        with pytest.raises(ValueError):
            BookingStatusChange.from_dict('CONFIRMED')


class TestMergeStatusChange:
    def setup_method(self):
        self.stored = Booking(
            id='bk-1',
            bus_route_id='RT-1',
            status=BookingStatus.PENDING,
            seat_number='12',
            version=2,
        )

    def test_blank_fields_keep_stored_values(self):
        # Given: A request carrying only the status
        change = BookingStatusChange(status='CONFIRMED')

        # When
        merged = self.stored.merge_status_change(change=change)

        # Then: Only the status changed
        assert merged.status == 'CONFIRMED'
        assert merged.seat_number == '12'
        assert merged.version == 2

    def test_seat_number_overwrites(self):
        merged = self.stored.merge_status_change(
            change=BookingStatusChange(status='CONFIRMED', seat_number='12,13')
        )

        assert merged.seat_number == '12,13'

    def test_cancellation_detail_ignored_without_flag(self):
        change = BookingStatusChange(
            status='CONFIRMED', cancelled=CancellationDetail(reason='x', cancelled_by='y')
        )

        merged = self.stored.merge_status_change(change=change)

        assert merged.cancelled is None

    def test_cancellation_sub_fields_merge_individually(self):
        # Given: A stored booking that already carries a reason
        stored = Booking(
            id='bk-1',
            cancelled=CancellationDetail(reason='weather', cancelled_by=''),
        )
        change = BookingStatusChange(
            status='CANCELLED',
            is_cancelled=True,
            cancelled=CancellationDetail(cancelled_by='ADMN-0001'),
        )

        # When
        merged = stored.merge_status_change(change=change)

        # Then: The blank reason kept the stored one
        assert merged.cancelled == CancellationDetail(reason='weather', cancelled_by='ADMN-0001')


class TestHandlerStateChanges:
    def test_confirm_stamps_confirmation_time(self):
        booking = Booking(id='bk-1', status='CONFIRMED', version=1).confirm(now=NOW)

        assert booking.status is BookingStatus.CONFIRMED
        assert booking.date_confirmed == NOW
        assert booking.version == 1

    def test_cancel_clears_confirmation_time(self):
        booking = Booking(id='bk-1', status=BookingStatus.CONFIRMED, date_confirmed=NOW).cancel()

        assert booking.status is BookingStatus.CANCELLED
        assert booking.is_cancelled is True
        assert booking.date_confirmed is None

    @pytest.mark.parametrize(
        'cancelled_by, is_staff', [('ADMN-0001', True), ('CSTMR-0001', False), ('', False)]
    )
    def test_staff_cancellation_is_told_by_actor_prefix(self, cancelled_by, is_staff):
        booking = Booking(cancelled=CancellationDetail(reason='r', cancelled_by=cancelled_by))

        assert booking.is_staff_cancellation is is_staff


class TestCancellationRecordCreate:
    def test_copies_details_from_booking(self):
        booking = Booking(
            id='bk-1',
            status=BookingStatus.CANCELLED,
            cancelled=CancellationDetail(reason='sick', cancelled_by='CSTMR-0001'),
        )

        record = CancellationRecord.create(id='rec-1', booking=booking, now=NOW)

        assert record.to_dict() == {
            'id': 'rec-1',
            'booking_id': 'bk-1',
            'reason': 'sick',
            'cancelled_by': 'CSTMR-0001',
            'date_cancelled': NOW,
        }

    def test_refuses_booking_without_details(self):
        booking = Booking(id='bk-1', status=BookingStatus.CANCELLED)

        with pytest.raises(MissingCancellationFieldsError):
            CancellationRecord.create(id='rec-1', booking=booking, now=NOW)
