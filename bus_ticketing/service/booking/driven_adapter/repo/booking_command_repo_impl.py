from typing import Any, AsyncContextManager, Callable, Optional

from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_booking_command_repo import (
    IBookingCommandRepo,
)
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.driven_adapter.model.booking_model import BookingModel
from bus_ticketing.service.booking.driven_adapter.repo.booking_model_mapper import (
    to_entity,
    to_row,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, booking: Booking, dedup_token: str) -> bool:
        async with self.session_factory() as session:
            stmt = (
                insert(BookingModel)
                .values(**to_row(booking), dedup_token=dedup_token)
                .on_conflict_do_nothing(index_elements=[BookingModel.dedup_token])
                .returning(BookingModel.id)
            )
            result = await session.execute(stmt)
            created = result.scalar_one_or_none() is not None
            await session.commit()
            return created

    async def _versioned_update(
        self, *, booking: Booking, expected_version: int, values: dict[str, Any]
    ) -> Optional[Booking]:
        """UPDATE ... SET values, version = version + 1 WHERE key AND version = expected"""
        async with self.session_factory() as session:
            stmt = (
                update(BookingModel)
                .where(
                    BookingModel.id == booking.id,
                    BookingModel.bus_route_id == booking.bus_route_id,
                    BookingModel.version == expected_version,
                )
                .values(**values, version=BookingModel.version + 1)
                .returning(BookingModel)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(stmt)
            db_booking = result.scalar_one_or_none()
            await session.commit()

            if db_booking is None:
                Logger.base.warning(
                    f'⚠️ [BOOKING_REPO] No row for booking {booking.id} at v{expected_version}'
                )
                return None
            return to_entity(db_booking)

    @Logger.io
    async def update_on_confirmed(
        self, *, booking: Booking, expected_version: int
    ) -> Optional[Booking]:
        return await self._versioned_update(
            booking=booking,
            expected_version=expected_version,
            values={
                'status': str(booking.status),
                'date_confirmed': booking.date_confirmed,
                'seat_number': booking.seat_number,
                'transition_id': booking.transition_id,
            },
        )

    @Logger.io
    async def update_on_cancelled(
        self, *, booking: Booking, expected_version: int
    ) -> Optional[Booking]:
        values: dict[str, Any] = {
            'status': str(booking.status),
            'is_cancelled': booking.is_cancelled,
            'date_confirmed': None,
            'transition_id': booking.transition_id,
        }
        if booking.cancelled:
            values['cancelled_reason'] = booking.cancelled.reason
            values['cancelled_by'] = booking.cancelled.cancelled_by

        return await self._versioned_update(
            booking=booking, expected_version=expected_version, values=values
        )
