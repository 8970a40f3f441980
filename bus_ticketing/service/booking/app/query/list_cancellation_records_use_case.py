from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from bus_ticketing.platform.config.di import Container
from bus_ticketing.platform.exception.exceptions import NotFoundError
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_cancellation_record_repo import (
    ICancellationRecordRepo,
)
from bus_ticketing.service.booking.domain.entity.cancellation_record_entity import (
    CancellationRecord,
)


class ListCancellationRecordsUseCase:
    def __init__(self, cancellation_record_repo: ICancellationRecordRepo) -> None:
        self.cancellation_record_repo = cancellation_record_repo

    @classmethod
    @inject
    def depends(
        cls,
        cancellation_record_repo: ICancellationRecordRepo = Depends(
            Provide[Container.cancellation_record_repo]
        ),
    ) -> Self:
        return cls(cancellation_record_repo=cancellation_record_repo)

    @Logger.io
    async def list_records(self, *, booking_id: str) -> List[CancellationRecord]:
        records = await self.cancellation_record_repo.list_by_booking_id(booking_id=booking_id)
        if not records:
            raise NotFoundError('no record(s) found')
        return records
