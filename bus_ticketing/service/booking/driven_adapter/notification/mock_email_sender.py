"""Mock e-mail sender that logs instead of sending real e-mails."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_notification_sender import (
    INotificationSender,
)


class MockEmailSender(INotificationSender):
    def __init__(self) -> None:
        self.sent_emails: List[Dict[str, Any]] = []  # Store sent emails for testing

    @Logger.io
    async def send(self, *, recipients: List[str], subject: str, body: str) -> None:
        email_data = {
            'to': recipients,
            'subject': subject,
            'body': body,
            'sent_at': datetime.now(timezone.utc),
        }
        self.sent_emails.append(email_data)

        Logger.base.info(f'📧 MOCK EMAIL SENT | to={", ".join(recipients)} | subject={subject}')
