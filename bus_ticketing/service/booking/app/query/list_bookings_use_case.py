from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from bus_ticketing.platform.config.di import Container
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking


class ListBookingsUseCase:
    def __init__(self, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_bookings(
        self, *, status: str = '', bus_id: str = '', bus_route_id: str = ''
    ) -> List[Booking]:
        return await self.booking_query_repo.filter(
            status=status, bus_id=bus_id, bus_route_id=bus_route_id
        )
