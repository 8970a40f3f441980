from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import orjson

from bus_ticketing.platform.config.di import Container
from bus_ticketing.platform.exception.exceptions import DomainError, EmptyPayloadError
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.metrics.booking_metrics import metrics
from bus_ticketing.service.booking.app.interface.i_booking_intake_queue import (
    IBookingIntakeQueue,
)
from bus_ticketing.service.booking.domain.booking_validator import validate_status
from bus_ticketing.service.booking.domain.domain_event.booking_domain_event import (
    BookingCreationQueued,
)


class CreateBookingUseCase:
    """
    Create booking use case - intake side

    Flow:
    1. Reject blank payloads and payloads with an unknown status
    2. Enqueue the raw payload (unchanged) for the booking worker
    3. Return immediately; the record store is never touched here

    Downstream:
    - Booking worker: assigns identity and persists the PENDING record
    """

    def __init__(self, *, intake_queue: IBookingIntakeQueue) -> None:
        self.intake_queue = intake_queue
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        intake_queue: IBookingIntakeQueue = Depends(Provide[Container.booking_intake_queue]),
    ) -> Self:
        return cls(intake_queue=intake_queue)

    @Logger.io
    async def create_booking(self, *, payload: bytes) -> BookingCreationQueued:
        """
        Validate and enqueue a booking creation request.

        Raises:
            EmptyPayloadError: Payload is empty or whitespace only
            DomainError: Payload is not a JSON object
            InvalidStatusError: Status is not PENDING, CONFIRMED or CANCELLED
        """
        if not payload.strip():
            raise EmptyPayloadError()

        try:
            data = orjson.loads(payload)
        except orjson.JSONDecodeError:
            raise DomainError('invalid booking payload') from None
        if not isinstance(data, dict):
            raise DomainError('invalid booking payload')

        validate_status(data.get('status'))

        message = BookingCreationQueued.from_payload(payload=payload)
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'booking.dedup_token': message.dedup_token},
        ):
            await self.intake_queue.enqueue(message=message)

        metrics.record_booking_creation(stage='intake', result='queued')

        Logger.base.info(f'📥 [INTAKE] Queued booking creation (token={message.dedup_token})')
        return message
