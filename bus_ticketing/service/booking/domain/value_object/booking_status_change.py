from typing import Any, Optional

import attrs

from bus_ticketing.service.booking.domain.value_object.cancellation_detail import (
    CancellationDetail,
)


@attrs.define(frozen=True)
class BookingStatusChange:
    """
    Incoming status-change request.

    Fields are kept raw: `status` is validated only after it has been merged
    onto the stored booking.
    """

    status: str = ''
    seat_number: str = ''
    is_cancelled: Optional[bool] = None
    cancelled: Optional[CancellationDetail] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'BookingStatusChange':
        if not isinstance(data, dict):
            raise ValueError('status change payload must be a JSON object')

        status = data.get('status') or ''
        seat_number = data.get('seat_number') or ''
        if not isinstance(status, str) or not isinstance(seat_number, str):
            raise ValueError("'status' and 'seat_number' must be strings")

        is_cancelled = data.get('is_cancelled')
        if is_cancelled is not None and not isinstance(is_cancelled, bool):
            raise ValueError("'is_cancelled' must be a boolean")

        cancelled = data.get('cancelled')
        if cancelled is None and ('reason' in data or 'cancelled_by' in data):
            # Flat form: {"status": "CANCELLED", "reason": ..., "cancelled_by": ...}
            cancelled = {key: data.get(key) for key in ('reason', 'cancelled_by')}

        return cls(
            status=status,
            seat_number=seat_number,
            is_cancelled=is_cancelled,
            cancelled=CancellationDetail.from_dict(cancelled),
        )

    def force_cancellation_flag(self) -> 'BookingStatusChange':
        return attrs.evolve(self, is_cancelled=True)
