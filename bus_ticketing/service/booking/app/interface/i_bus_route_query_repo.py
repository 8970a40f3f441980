from abc import ABC, abstractmethod
from typing import Optional

from bus_ticketing.service.booking.domain.entity.bus_route_entity import BusRoute


class IBusRouteQueryRepo(ABC):
    @abstractmethod
    async def get(self, *, route_id: str, bus_id: str) -> Optional[BusRoute]:
        pass
