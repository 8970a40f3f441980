from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from bus_ticketing.platform.config.core_setting import settings
from bus_ticketing.platform.database.orm_db_setting import Base


class UserAccountModel(Base):
    __tablename__ = settings.USERS_TABLE

    id: Mapped[str] = mapped_column(String(64), primary_key=True)  # ADMN-... / CSTMR-...
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default='')
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default='')
    username: Mapped[str] = mapped_column(String(100), nullable=False, default='')
    user_type: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False, default='')
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
