from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_bus_route_query_repo import IBusRouteQueryRepo
from bus_ticketing.service.booking.domain.entity.bus_route_entity import BusRoute
from bus_ticketing.service.booking.driven_adapter.model.bus_route_model import BusRouteModel


class BusRouteQueryRepoImpl(IBusRouteQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get(self, *, route_id: str, bus_id: str) -> Optional[BusRoute]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BusRouteModel).where(
                    BusRouteModel.id == route_id,
                    BusRouteModel.bus_id == bus_id,
                )
            )
            route_model = result.scalar_one_or_none()

            if not route_model:
                return None

            return BusRoute(
                id=route_model.id,
                bus_id=route_model.bus_id,
                bus_unit_id=route_model.bus_unit_id,
                from_route=route_model.from_route,
                to_route=route_model.to_route,
                departure_time=route_model.departure_time,
                arrival_time=route_model.arrival_time,
                currency_code=route_model.currency_code,
                rate=route_model.rate,
                active=route_model.active,
                date_created=route_model.date_created,
            )
