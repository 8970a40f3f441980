from typing import Any, Optional

import attrs


@attrs.define(frozen=True)
class CancellationDetail:
    """Why and by whom a booking is being cancelled, embedded in the booking payload."""

    reason: str = ''
    cancelled_by: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> Optional['CancellationDetail']:
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ValueError("'cancelled' must be a JSON object")
        reason = data.get('reason') or ''
        cancelled_by = data.get('cancelled_by') or ''
        if not isinstance(reason, str) or not isinstance(cancelled_by, str):
            raise ValueError("'cancelled' fields must be strings")
        return cls(reason=reason, cancelled_by=cancelled_by)

    def to_dict(self) -> dict[str, str]:
        return {'reason': self.reason, 'cancelled_by': self.cancelled_by}

    @property
    def is_empty(self) -> bool:
        return not self.reason and not self.cancelled_by

    def missing_fields(self) -> list[str]:
        return [
            name for name, value in (('reason', self.reason), ('cancelled_by', self.cancelled_by))
            if not value
        ]
