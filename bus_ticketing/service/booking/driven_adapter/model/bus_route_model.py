from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from bus_ticketing.platform.config.core_setting import settings
from bus_ticketing.platform.database.orm_db_setting import Base


class BusRouteModel(Base):
    __tablename__ = settings.BUS_ROUTE_TABLE

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    bus_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    bus_unit_id: Mapped[str] = mapped_column(String(64), nullable=False)
    from_route: Mapped[str] = mapped_column(String(255), nullable=False)
    to_route: Mapped[str] = mapped_column(String(255), nullable=False)
    departure_time: Mapped[str] = mapped_column(String(32), nullable=False, default='')
    arrival_time: Mapped[str] = mapped_column(String(32), nullable=False, default='')
    currency_code: Mapped[str] = mapped_column(String(3), nullable=False, default='')
    rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal('0'))
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
