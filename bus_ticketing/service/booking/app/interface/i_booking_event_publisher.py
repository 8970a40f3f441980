"""
Booking Event Publisher Interface

Use cases depend on this port; topic routing and serialization are the
adapter's concern.
"""

from abc import ABC, abstractmethod

from bus_ticketing.service.booking.domain.domain_event.booking_domain_event import (
    BookingTransitionEvent,
)


class IBookingEventPublisher(ABC):
    @abstractmethod
    async def publish(self, *, event: BookingTransitionEvent) -> None:
        """
        Publish a transition event to the channel of its source tag.

        Raises:
            Exception: If publishing fails
        """
        pass
