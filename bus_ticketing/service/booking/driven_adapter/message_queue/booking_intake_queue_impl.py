"""
Booking Intake Queue Implementation

Kafka adapter for IBookingIntakeQueue. The creation payload is forwarded
byte for byte; the partition key becomes the message key so every creation
in the group lands on one partition, and the dedup token rides in a header.
"""

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.message_queue.event_publisher import publish_message
from bus_ticketing.platform.message_queue.kafka_constant_builder import KafkaTopicBuilder
from bus_ticketing.service.booking.app.interface.i_booking_intake_queue import (
    IBookingIntakeQueue,
)
from bus_ticketing.service.booking.domain.domain_event.booking_domain_event import (
    BookingCreationQueued,
)


DEDUP_TOKEN_HEADER = 'dedup-token'


class BookingIntakeQueueImpl(IBookingIntakeQueue):
    @Logger.io
    async def enqueue(self, *, message: BookingCreationQueued) -> None:
        await publish_message(
            topic=KafkaTopicBuilder.booking_intake(),
            key=message.partition_key,
            value=message.payload,
            headers={DEDUP_TOKEN_HEADER: message.dedup_token},
        )
