from datetime import datetime, timezone

from opentelemetry import trace

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_booking_command_repo import (
    IBookingCommandRepo,
)
from bus_ticketing.service.booking.app.service.booking_notification_service import (
    BookingNotificationService,
)
from bus_ticketing.service.booking.app.service.booking_version_guard import BookingVersionGuard
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking


class ConfirmBookingUseCase:
    """
    Confirmation handler for `booking:confirmed` events.

    Flow:
    1. Stamp date_confirmed
    2. Version-checked update of status, date_confirmed and seat_number
    3. E-mail the passenger with the stored record

    Any failure propagates so the consumer redelivers the event.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        version_guard: BookingVersionGuard,
        notification_service: BookingNotificationService,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.version_guard = version_guard
        self.notification_service = notification_service
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def confirm(self, *, booking: Booking) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.confirm_booking',
            attributes={'booking.id': booking.id, 'booking.version': booking.version},
        ):
            confirmed = booking.confirm(now=datetime.now(timezone.utc))

            stored = await self.version_guard.apply(
                booking=confirmed, update=self.booking_command_repo.update_on_confirmed
            )
            await self.notification_service.notify_confirmed(booking=stored)

        Logger.base.info(f'✅ [CONFIRM] Booking {booking.id} confirmed')
        return stored
