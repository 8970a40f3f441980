from typing import AsyncContextManager, Callable, List

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_cancellation_record_repo import (
    ICancellationRecordRepo,
)
from bus_ticketing.service.booking.domain.entity.cancellation_record_entity import (
    CancellationRecord,
)
from bus_ticketing.service.booking.driven_adapter.model.cancellation_record_model import (
    CancellationRecordModel,
)


class CancellationRecordRepoImpl(ICancellationRecordRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create_if_absent(self, *, record: CancellationRecord) -> bool:
        """INSERT ... ON CONFLICT (booking_id) DO NOTHING"""
        async with self.session_factory() as session:
            stmt = (
                insert(CancellationRecordModel)
                .values(**record.to_dict())
                .on_conflict_do_nothing(index_elements=[CancellationRecordModel.booking_id])
                .returning(CancellationRecordModel.id)
            )
            result = await session.execute(stmt)
            created = result.scalar_one_or_none() is not None
            await session.commit()
            return created

    @Logger.io
    async def list_by_booking_id(self, *, booking_id: str) -> List[CancellationRecord]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(CancellationRecordModel).where(
                    CancellationRecordModel.booking_id == booking_id
                )
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    @staticmethod
    def _to_entity(db_record: CancellationRecordModel) -> CancellationRecord:
        return CancellationRecord(
            id=db_record.id,
            booking_id=db_record.booking_id,
            reason=db_record.reason,
            cancelled_by=db_record.cancelled_by,
            date_cancelled=db_record.date_cancelled,
        )
