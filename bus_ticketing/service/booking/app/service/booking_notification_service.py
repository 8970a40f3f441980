from bus_ticketing.platform.config.email_config import EmailConfig
from bus_ticketing.platform.exception.exceptions import NotFoundError
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.metrics.booking_metrics import metrics
from bus_ticketing.service.booking.app.interface.i_bus_route_query_repo import IBusRouteQueryRepo
from bus_ticketing.service.booking.app.interface.i_notification_sender import (
    INotificationSender,
)
from bus_ticketing.service.booking.app.interface.i_user_account_query_repo import (
    IUserAccountQueryRepo,
)
from bus_ticketing.service.booking.app.service import email_template
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.entity.bus_route_entity import BusRoute
from bus_ticketing.service.booking.domain.entity.user_account_entity import UserAccount


class BookingNotificationService:
    """Looks up the passenger and route of a booking and e-mails the passenger."""

    def __init__(
        self,
        *,
        user_account_query_repo: IUserAccountQueryRepo,
        bus_route_query_repo: IBusRouteQueryRepo,
        notification_sender: INotificationSender,
        email_config: EmailConfig,
    ) -> None:
        self.user_account_query_repo = user_account_query_repo
        self.bus_route_query_repo = bus_route_query_repo
        self.notification_sender = notification_sender
        self.email_config = email_config

    async def _load_recipient_and_route(self, booking: Booking) -> tuple[UserAccount, BusRoute]:
        user = await self.user_account_query_repo.get(user_id=booking.user_id)
        if not user:
            raise NotFoundError(f'user {booking.user_id} of booking {booking.id} not found')

        route = await self.bus_route_query_repo.get(
            route_id=booking.bus_route_id, bus_id=booking.bus_id
        )
        if not route:
            raise NotFoundError(
                f'bus route {booking.bus_route_id} (bus {booking.bus_id}) '
                f'of booking {booking.id} not found'
            )
        return user, route

    async def _send(self, *, kind: str, recipients: list[str], subject: str, body: str) -> None:
        try:
            await self.notification_sender.send(recipients=recipients, subject=subject, body=body)
        except Exception:
            metrics.record_notification(kind=kind, result='failed')
            raise
        metrics.record_notification(kind=kind, result='sent')

    @Logger.io
    async def notify_confirmed(self, *, booking: Booking) -> None:
        user, route = await self._load_recipient_and_route(booking)
        await self._send(
            kind='confirmed',
            recipients=[user.email],
            subject=email_template.confirmed_subject(route=route, booking=booking),
            body=email_template.confirmed_booking(
                user=user,
                route=route,
                booking=booking,
                customer_support=self.email_config.customer_support,
            ),
        )

    @Logger.io
    async def notify_cancelled(self, *, booking: Booking) -> None:
        """Staff cancellations (ADMN- actor) get the apology wording."""
        user, route = await self._load_recipient_and_route(booking)
        template = (
            email_template.staff_cancelled_booking
            if booking.is_staff_cancellation
            else email_template.customer_cancelled_booking
        )
        await self._send(
            kind='cancelled',
            recipients=[user.email],
            subject=email_template.cancelled_subject(route=route, booking=booking),
            body=template(
                user=user,
                route=route,
                booking=booking,
                customer_support=self.email_config.customer_support,
            ),
        )
