"""
Version-checked booking updates for the transition handlers.

The transition event carries the version the validator read and its own
transition id. A handler update only lands on that exact version and stamps
the id on the record; when it does not land, the stored id tells apart a
redelivered event from a lost race.
"""

from typing import Awaitable, Callable, Optional

from bus_ticketing.platform.exception.exceptions import ConflictError, NotFoundError
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.metrics.booking_metrics import metrics
from bus_ticketing.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking


VersionedUpdate = Callable[..., Awaitable[Optional[Booking]]]


class BookingVersionGuard:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @staticmethod
    def _already_applied(*, current: Booking, booking: Booking) -> bool:
        return (
            bool(booking.transition_id)
            and current.transition_id == booking.transition_id
            and current.status == booking.status
            and current.version > booking.version
        )

    @Logger.io
    async def apply(self, *, booking: Booking, update: VersionedUpdate) -> Booking:
        """
        Run `update` against the version carried by `booking`.

        Returns:
            The stored booking after the update, or the already-updated
            record when this event was applied by an earlier delivery

        Raises:
            NotFoundError: The record no longer exists
            ConflictError: Another transition changed the record first
        """
        updated = await update(booking=booking, expected_version=booking.version)
        if updated is not None:
            metrics.record_booking_transition(source=str(booking.status), result='applied')
            return updated

        current = await self.booking_query_repo.get(
            booking_id=booking.id, bus_route_id=booking.bus_route_id
        )
        if current is None:
            raise NotFoundError(
                f'booking {booking.id} (route {booking.bus_route_id}) no longer exists'
            )

        if self._already_applied(current=current, booking=booking):
            Logger.base.info(
                f'♻️ [VERSION] booking {booking.id} already {current.status} '
                f'(v{current.version}), skipping store update'
            )
            metrics.record_booking_transition(source=str(booking.status), result='already_applied')
            return current

        raise ConflictError(
            f'booking {booking.id} was modified by a concurrent transition '
            f'(expected v{booking.version}, found v{current.version} {current.status})'
        )
