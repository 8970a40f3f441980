"""
Booking Intake Queue Interface

Delivery queue between the intake validator and the booking worker:
ordered per partition key, at-least-once.
"""

from abc import ABC, abstractmethod

from bus_ticketing.service.booking.domain.domain_event.booking_domain_event import (
    BookingCreationQueued,
)


class IBookingIntakeQueue(ABC):
    @abstractmethod
    async def enqueue(self, *, message: BookingCreationQueued) -> None:
        """
        Enqueue a creation payload unchanged.

        Raises:
            Exception: If the broker rejects the message; the caller sees a 500
        """
        pass
