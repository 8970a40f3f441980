from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import orjson
import uuid_utils

from bus_ticketing.platform.config.di import Container
from bus_ticketing.platform.exception.exceptions import (
    DomainError,
    EmptyPayloadError,
    IllegalReconfirmationError,
    NotFoundError,
)
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_booking_event_publisher import (
    IBookingEventPublisher,
)
from bus_ticketing.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from bus_ticketing.service.booking.domain.booking_validator import (
    ensure_cancellation_fields,
    resolve_event_source,
    validate_status,
)
from bus_ticketing.service.booking.domain.domain_event.booking_domain_event import (
    BookingTransitionEvent,
)
from bus_ticketing.service.booking.domain.enum.booking_status import BookingStatus
from bus_ticketing.service.booking.domain.value_object.booking_status_change import (
    BookingStatusChange,
)


class UpdateBookingStatusUseCase:
    """
    Transition validator

    Enforces the transition rules against the stored record, merges the
    request onto it and dispatches a typed transition event. The record is
    not written here; the confirmation and cancellation handlers do that.
    """

    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        event_publisher: IBookingEventPublisher,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.event_publisher = event_publisher
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        event_publisher: IBookingEventPublisher = Depends(
            Provide[Container.booking_event_publisher]
        ),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo, event_publisher=event_publisher)

    @staticmethod
    def _parse_change(payload: bytes) -> BookingStatusChange:
        try:
            return BookingStatusChange.from_dict(orjson.loads(payload))
        except ValueError as e:
            raise DomainError(f'invalid status change payload: {e}') from None

    @Logger.io
    async def update_status(
        self, *, booking_id: str, bus_route_id: str, payload: bytes
    ) -> BookingTransitionEvent:
        """
        Validate a status change and publish the matching transition event.

        Raises:
            EmptyPayloadError: Payload is empty or whitespace only
            DomainError: Payload is not a valid status change (checked before the lookup)
            NotFoundError: No booking with (booking_id, bus_route_id)
            IllegalReconfirmationError: Confirming a booking that is cancelled
            InvalidStatusError: Merged status is not a known status
            InvalidEventSourceError: Merged status is not CONFIRMED or CANCELLED
            MissingCancellationFieldsError: Cancellation without reason or cancelled_by
        """
        if not payload.strip():
            raise EmptyPayloadError()

        with self.tracer.start_as_current_span(
            'use_case.update_booking_status',
            attributes={'booking.id': booking_id, 'booking.bus_route_id': bus_route_id},
        ):
            change = self._parse_change(payload)

            current = await self.booking_query_repo.get(
                booking_id=booking_id, bus_route_id=bus_route_id
            )
            if current is None:
                raise NotFoundError("the booking record you're trying to update is non-existent")

            if change.status == BookingStatus.CONFIRMED and current.is_cancelled:
                raise IllegalReconfirmationError()

            if change.status == BookingStatus.CANCELLED:
                change = change.force_cancellation_flag()
                current = current.mark_cancellation_in_flight()

            merged = current.merge_status_change(change=change).stamp_transition(
                transition_id=str(uuid_utils.uuid7())
            )

            status = validate_status(merged.status)
            source = resolve_event_source(status)
            ensure_cancellation_fields(merged)

            event = BookingTransitionEvent(source=source, booking=merged)
            await self.event_publisher.publish(event=event)

        Logger.base.info(
            f'📤 [TRANSITION] {source} published for booking {booking_id} (v{merged.version})'
        )
        return event
