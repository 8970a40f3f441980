"""
Booking Event Publisher Implementation

Kafka adapter for IBookingEventPublisher. Each source tag has its own
topic; the booking id is the message key so transitions of one booking
stay ordered.
"""

import orjson

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.message_queue.event_publisher import publish_message
from bus_ticketing.platform.message_queue.kafka_constant_builder import KafkaTopicBuilder
from bus_ticketing.service.booking.app.interface.i_booking_event_publisher import (
    IBookingEventPublisher,
)
from bus_ticketing.service.booking.domain.domain_event.booking_domain_event import (
    BookingTransitionEvent,
)


SOURCE_HEADER = 'source'


class BookingEventPublisherImpl(IBookingEventPublisher):
    @Logger.io
    async def publish(self, *, event: BookingTransitionEvent) -> None:
        source = str(event.source)
        await publish_message(
            topic=KafkaTopicBuilder.booking_transition(source=source),
            key=event.booking.id,
            value=orjson.dumps(event.booking.to_dict()),
            headers={SOURCE_HEADER: source},
        )
