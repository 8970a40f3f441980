from datetime import datetime
from typing import Optional

import attrs

from bus_ticketing.service.booking.domain.enum.user_type import UserType


@attrs.define
class UserAccount:
    id: str
    email: str
    first_name: str = ''
    last_name: str = ''
    username: str = ''
    user_type: UserType = UserType.CUSTOMER
    address: str = ''
    phone_number: str = ''
    date_created: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()
