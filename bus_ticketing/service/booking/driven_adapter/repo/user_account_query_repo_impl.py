from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_user_account_query_repo import (
    IUserAccountQueryRepo,
)
from bus_ticketing.service.booking.domain.entity.user_account_entity import UserAccount
from bus_ticketing.service.booking.domain.enum.user_type import UserType
from bus_ticketing.service.booking.driven_adapter.model.user_account_model import (
    UserAccountModel,
)


class UserAccountQueryRepoImpl(IUserAccountQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get(self, *, user_id: str) -> Optional[UserAccount]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(UserAccountModel).where(UserAccountModel.id == user_id)
            )
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return self._model_to_entity(user_model)

    def _model_to_entity(self, user_model: UserAccountModel) -> UserAccount:
        return UserAccount(
            id=user_model.id,
            email=user_model.email,
            first_name=user_model.first_name,
            last_name=user_model.last_name,
            username=user_model.username,
            user_type=UserType(user_model.user_type),
            address=user_model.address,
            phone_number=user_model.phone_number,
            date_created=user_model.date_created,
            last_login=user_model.last_login,
        )
