from datetime import datetime, timezone

from opentelemetry import trace
import uuid_utils

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_booking_command_repo import (
    IBookingCommandRepo,
)
from bus_ticketing.service.booking.app.interface.i_cancellation_record_repo import (
    ICancellationRecordRepo,
)
from bus_ticketing.service.booking.app.service.booking_notification_service import (
    BookingNotificationService,
)
from bus_ticketing.service.booking.app.service.booking_version_guard import BookingVersionGuard
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.entity.cancellation_record_entity import (
    CancellationRecord,
)


class CancelBookingUseCase:
    """
    Cancellation handler for `booking:cancelled` events.

    Flow:
    1. Version-checked update: CANCELLED, is_cancelled, date_confirmed cleared
    2. Insert the cancellation record unless one already exists for the booking
    3. E-mail the passenger (staff or customer wording)

    Redelivering the same event leaves exactly one cancellation record.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        cancellation_record_repo: ICancellationRecordRepo,
        version_guard: BookingVersionGuard,
        notification_service: BookingNotificationService,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.cancellation_record_repo = cancellation_record_repo
        self.version_guard = version_guard
        self.notification_service = notification_service
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def cancel(self, *, booking: Booking) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': booking.id, 'booking.version': booking.version},
        ):
            cancelled = booking.cancel()
            # Built before any write so an event without cancellation details changes nothing
            record = CancellationRecord.create(
                id=str(uuid_utils.uuid4()),
                booking=cancelled,
                now=datetime.now(timezone.utc),
            )

            stored = await self.version_guard.apply(
                booking=cancelled, update=self.booking_command_repo.update_on_cancelled
            )

            if not await self.cancellation_record_repo.create_if_absent(record=record):
                Logger.base.info(
                    f'♻️ [CANCEL] Cancellation record for booking {booking.id} already exists'
                )

            await self.notification_service.notify_cancelled(booking=stored)

        Logger.base.info(f'🛑 [CANCEL] Booking {booking.id} cancelled by {record.cancelled_by}')
        return stored
