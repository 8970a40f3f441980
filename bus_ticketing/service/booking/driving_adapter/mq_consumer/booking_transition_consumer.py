"""
Booking Transition Consumer

Subscribes to the event bus topics of both source tags and routes each
event to its handler:
- booking:confirmed → ConfirmBookingUseCase
- booking:cancelled → CancelBookingUseCase
"""

from typing import Dict, Optional

import orjson

from bus_ticketing.platform.config.di import container
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.message_queue.base_kafka_consumer import (
    BaseKafkaConsumer,
    MessageHandler,
)
from bus_ticketing.platform.message_queue.kafka_constant_builder import (
    KafkaConsumerGroupBuilder,
    KafkaTopicBuilder,
    ServiceNames,
)
from bus_ticketing.service.booking.app.command.cancel_booking_use_case import (
    CancelBookingUseCase,
)
from bus_ticketing.service.booking.app.command.confirm_booking_use_case import (
    ConfirmBookingUseCase,
)
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.enum.event_source import EventSource


class BookingTransitionConsumer(BaseKafkaConsumer):
    def __init__(self) -> None:
        super().__init__(
            service_name=ServiceNames.BOOKING_HANDLER,
            consumer_group_id=KafkaConsumerGroupBuilder.booking_handler(),
        )
        self.confirmed_topic = KafkaTopicBuilder.booking_transition(source=EventSource.CONFIRMED)
        self.cancelled_topic = KafkaTopicBuilder.booking_transition(source=EventSource.CANCELLED)

        # Use cases (lazy initialization)
        self.confirm_booking_use_case: Optional[ConfirmBookingUseCase] = None
        self.cancel_booking_use_case: Optional[CancelBookingUseCase] = None

    def _initialize_dependencies(self) -> None:
        self.confirm_booking_use_case = container.confirm_booking_use_case()
        self.cancel_booking_use_case = container.cancel_booking_use_case()

    def _get_topic_handlers(self) -> Dict[str, MessageHandler]:
        return {
            self.confirmed_topic: self._handle_confirmed,
            self.cancelled_topic: self._handle_cancelled,
        }

    @staticmethod
    def _decode_booking(value: bytes) -> Booking:
        """Raises ValueError for payloads that are not a booking (dead-lettered, never retried)."""
        return Booking.from_dict(orjson.loads(value))

    async def _handle_confirmed(self, value: bytes, headers: Dict[str, str]) -> None:
        assert self.confirm_booking_use_case is not None
        booking = self._decode_booking(value)
        Logger.base.info(
            f'\033[92m[HANDLER-{self.instance_id}] {EventSource.CONFIRMED} '
            f'booking={booking.id} v{booking.version}\033[0m'
        )
        await self.confirm_booking_use_case.confirm(booking=booking)

    async def _handle_cancelled(self, value: bytes, headers: Dict[str, str]) -> None:
        assert self.cancel_booking_use_case is not None
        booking = self._decode_booking(value)
        Logger.base.info(
            f'\033[91m[HANDLER-{self.instance_id}] {EventSource.CANCELLED} '
            f'booking={booking.id} v{booking.version}\033[0m'
        )
        await self.cancel_booking_use_case.cancel(booking=booking)
