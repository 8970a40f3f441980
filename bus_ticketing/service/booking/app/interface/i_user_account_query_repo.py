from abc import ABC, abstractmethod
from typing import Optional

from bus_ticketing.service.booking.domain.entity.user_account_entity import UserAccount


class IUserAccountQueryRepo(ABC):
    @abstractmethod
    async def get(self, *, user_id: str) -> Optional[UserAccount]:
        pass
