from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from bus_ticketing.platform.config.di import Container
from bus_ticketing.platform.exception.exceptions import NotFoundError
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking


class GetBookingUseCase:
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
    async def get_booking(self, *, booking_id: str, bus_route_id: str) -> Booking:
        """Get one booking by its composite key (id, bus_route_id)."""
        booking = await self.booking_query_repo.get(
            booking_id=booking_id, bus_route_id=bus_route_id
        )
        if booking is None:
            Logger.base.warning(f'⚠️ [GET_BOOKING] Booking {booking_id} not found')
            raise NotFoundError('no record(s) found')
        return booking
