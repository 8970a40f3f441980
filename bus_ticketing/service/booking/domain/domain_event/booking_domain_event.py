"""
Booking Domain Events

BookingCreationQueued travels on the delivery queue to the booking worker.
BookingTransitionEvent travels on the event bus to the confirmation and
cancellation handlers.
"""

from datetime import datetime, timezone
import hashlib

import attrs
import uuid_utils

from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.enum.event_source import EventSource


# All creations share one group so a single stream persists them in submission order
BOOKING_CREATION_GROUP = 'process.booking'


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@attrs.define(frozen=True)
class BookingCreationQueued:
    """Raw creation payload (status already validated) plus its delivery metadata."""

    payload: bytes
    dedup_token: str
    request_id: str = ''
    partition_key: str = BOOKING_CREATION_GROUP
    occurred_at: datetime = attrs.field(factory=_utc_now)

    @classmethod
    def from_payload(
        cls, *, payload: bytes, request_id: str | None = None
    ) -> 'BookingCreationQueued':
        """
        Digest of the payload salted with the id of the accepting call.

        Redeliveries of this message share the token and collapse at the store;
        the same bytes accepted by another call get a different one.
        """
        request_id = request_id or str(uuid_utils.uuid7())
        return cls(
            payload=payload,
            dedup_token=hashlib.md5(request_id.encode() + b':' + payload).hexdigest(),
            request_id=request_id,
        )

    @staticmethod
    def content_digest(payload: bytes) -> str:
        """Token for messages that reach the queue without one (not produced by intake)."""
        return hashlib.md5(payload).hexdigest()


@attrs.define(frozen=True)
class BookingTransitionEvent:
    """Merged booking in its target state, tagged with the source that routes it."""

    source: EventSource
    booking: Booking
    occurred_at: datetime = attrs.field(factory=_utc_now)
