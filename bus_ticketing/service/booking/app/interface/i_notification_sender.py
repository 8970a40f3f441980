from abc import ABC, abstractmethod
from typing import List


class INotificationSender(ABC):
    """Outbound customer notification channel (HTML e-mail)."""

    @abstractmethod
    async def send(self, *, recipients: List[str], subject: str, body: str) -> None:
        pass
