from datetime import datetime, timezone
from typing import Optional

import orjson
import uuid_utils

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.metrics.booking_metrics import metrics
from bus_ticketing.service.booking.app.interface.i_booking_command_repo import (
    IBookingCommandRepo,
)
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking


class ProcessBookingUseCase:
    """
    Booking worker: persists queued creations.

    The status is stored exactly as submitted (already validated at intake).
    Redelivered messages collapse on the dedup token at the store level.
    """

    def __init__(self, *, booking_command_repo: IBookingCommandRepo) -> None:
        self.booking_command_repo = booking_command_repo

    @Logger.io
    async def process(self, *, payload: bytes, dedup_token: str) -> Optional[Booking]:
        """
        Returns:
            The persisted booking, or None when the message was a redelivery

        Raises:
            ValueError: Payload cannot be parsed into a booking
        """
        booking = Booking.from_dict(orjson.loads(payload)).assign_identity(
            id=str(uuid_utils.uuid4()),
            now=datetime.now(timezone.utc),
        )

        created = await self.booking_command_repo.create(booking=booking, dedup_token=dedup_token)
        if not created:
            metrics.record_booking_creation(stage='worker', result='duplicate')
            Logger.base.info(f'♻️ [WORKER] Duplicate delivery ignored (token={dedup_token})')
            return None

        metrics.record_booking_creation(stage='worker', result='persisted')
        Logger.base.info(f'✅ [WORKER] Booking {booking.id} persisted as {booking.status}')
        return booking
