from datetime import datetime
from typing import Any, Optional

import attrs

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.domain.booking_validator import ensure_cancellation_fields
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking


@attrs.define
class CancellationRecord:
    """Audit entry of a cancelled booking; at most one exists per booking_id."""

    id: str
    booking_id: str
    reason: str
    cancelled_by: str
    date_cancelled: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, id: str, booking: Booking, now: datetime) -> 'CancellationRecord':
        ensure_cancellation_fields(booking)
        assert booking.cancelled is not None

        return cls(
            id=id,
            booking_id=booking.id,
            reason=booking.cancelled.reason,
            cancelled_by=booking.cancelled.cancelled_by,
            date_cancelled=now,
        )

    def to_dict(self) -> dict[str, Any]:
        return attrs.asdict(self)
