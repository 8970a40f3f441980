from abc import ABC, abstractmethod
from typing import List

from bus_ticketing.service.booking.domain.entity.cancellation_record_entity import (
    CancellationRecord,
)


class ICancellationRecordRepo(ABC):
    @abstractmethod
    async def create_if_absent(self, *, record: CancellationRecord) -> bool:
        """
        Conditional insert keyed on booking_id (unique).

        Returns:
            True if the record was written, False if one already existed
        """
        pass

    @abstractmethod
    async def list_by_booking_id(self, *, booking_id: str) -> List[CancellationRecord]:
        pass
