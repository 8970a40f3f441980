from abc import ABC, abstractmethod
from typing import List, Optional

from bus_ticketing.service.booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get(self, *, booking_id: str, bus_route_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def filter(
        self, *, status: str = '', bus_id: str = '', bus_route_id: str = ''
    ) -> List[Booking]:
        """Blank filters are ignored; the rest are combined with AND."""
        pass
