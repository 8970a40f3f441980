"""
Booking Worker Consumer

Consumes queued booking creations from the intake topic and persists them
through ProcessBookingUseCase.
"""

from typing import Dict, Optional

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
from bus_ticketing.service.booking.app.command.process_booking_use_case import (
    ProcessBookingUseCase,
)
from bus_ticketing.service.booking.domain.domain_event.booking_domain_event import (
    BookingCreationQueued,
)
from bus_ticketing.service.booking.driven_adapter.message_queue.booking_intake_queue_impl import (
    DEDUP_TOKEN_HEADER,
)


class BookingIntakeConsumer(BaseKafkaConsumer):
    def __init__(self) -> None:
        super().__init__(
            service_name=ServiceNames.BOOKING_WORKER,
            consumer_group_id=KafkaConsumerGroupBuilder.booking_worker(),
        )
        self.intake_topic = KafkaTopicBuilder.booking_intake()

        # Use case (lazy initialization)
        self.process_booking_use_case: Optional[ProcessBookingUseCase] = None

    def _initialize_dependencies(self) -> None:
        self.process_booking_use_case = container.process_booking_use_case()

    def _get_topic_handlers(self) -> Dict[str, MessageHandler]:
        return {self.intake_topic: self._handle_booking_created}

    async def _handle_booking_created(self, value: bytes, headers: Dict[str, str]) -> None:
        assert self.process_booking_use_case is not None

        # Messages produced without the header fall back to a digest of their content
        dedup_token = headers.get(DEDUP_TOKEN_HEADER) or BookingCreationQueued.content_digest(
            value
        )
        Logger.base.info(
            f'\033[93m[WORKER-{self.instance_id}] Processing creation token={dedup_token}\033[0m'
        )
        await self.process_booking_use_case.process(payload=value, dedup_token=dedup_token)
