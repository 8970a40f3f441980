from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bus_ticketing.platform.config.core_setting import settings
from bus_ticketing.platform.database.orm_db_setting import Base


class BookingModel(Base):
    __tablename__ = settings.BOOKING_TABLE

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    bus_route_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    bus_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    seat_number: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    travel_date: Mapped[str] = mapped_column(String(64), nullable=False, default='')
    date_created: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    date_confirmed: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_cancelled: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    cancelled_reason: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    cancelled_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    timestamp: Mapped[str] = mapped_column(String(64), nullable=False, default='')
    # Token of the queued message that created this row; redeliveries collide on it
    dedup_token: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    transition_id: Mapped[str] = mapped_column(String(64), nullable=False, default='')
