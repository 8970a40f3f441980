from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from bus_ticketing.platform.config.core_setting import settings
from bus_ticketing.platform.database.orm_db_setting import Base


class CancellationRecordModel(Base):
    __tablename__ = settings.BOOKING_CANCELLED_TABLE

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    booking_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    reason: Mapped[str] = mapped_column(String(512), nullable=False)
    cancelled_by: Mapped[str] = mapped_column(String(64), nullable=False)
    date_cancelled: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
