from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.driven_adapter.model.booking_model import BookingModel
from bus_ticketing.service.booking.driven_adapter.repo.booking_model_mapper import to_entity


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get(self, *, booking_id: str, bus_route_id: str) -> Optional[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel).where(
                    BookingModel.id == booking_id,
                    BookingModel.bus_route_id == bus_route_id,
                )
            )
            db_booking = result.scalar_one_or_none()

            if not db_booking:
                return None

            return to_entity(db_booking)

    @Logger.io
    async def filter(
        self, *, status: str = '', bus_id: str = '', bus_route_id: str = ''
    ) -> List[Booking]:
        query = select(BookingModel)
        if status:
            query = query.where(BookingModel.status == status)
        if bus_id:
            query = query.where(BookingModel.bus_id == bus_id)
        if bus_route_id:
            query = query.where(BookingModel.bus_route_id == bus_route_id)

        async with self.session_factory() as session:
            result = await session.execute(query.order_by(BookingModel.date_created))
            return [to_entity(db_booking) for db_booking in result.scalars().all()]
