"""
Booking Command Repository Interface

Write side of the booking record store. Inserts are idempotent on the
intake dedup token; handler updates are conditional on the version the
transition validator observed.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bus_ticketing.service.booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking, dedup_token: str) -> bool:
        """
        Insert a new booking record.

        Args:
            booking: Booking with identity and creation time assigned
            dedup_token: Token of the queued message that carried the booking

        Returns:
            False if a booking carrying the same dedup token already exists
            (redelivered message), True otherwise
        """
        pass

    @abstractmethod
    async def update_on_confirmed(
        self, *, booking: Booking, expected_version: int
    ) -> Optional[Booking]:
        """
        Set status, date_confirmed and seat_number, bumping the version.

        Returns:
            Updated booking, or None when no record with (id, bus_route_id)
            is at expected_version
        """
        pass

    @abstractmethod
    async def update_on_cancelled(
        self, *, booking: Booking, expected_version: int
    ) -> Optional[Booking]:
        """
        Set status and is_cancelled, clear date_confirmed, bumping the version.

        Returns:
            Updated booking, or None when no record with (id, bus_route_id)
            is at expected_version
        """
        pass
