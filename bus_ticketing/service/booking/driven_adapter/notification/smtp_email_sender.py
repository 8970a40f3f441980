"""
SMTP e-mail sender

smtplib is blocking, so each send runs in a worker thread via anyio.
"""

from email.message import EmailMessage
import smtplib
from typing import List

from anyio import to_thread

from bus_ticketing.platform.config.email_config import EmailConfig
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.interface.i_notification_sender import (
    INotificationSender,
)


class SmtpEmailSender(INotificationSender):
    def __init__(self, *, email_config: EmailConfig, timeout: float = 30.0) -> None:
        self.email_config = email_config
        self.timeout = timeout

    def _build_message(self, *, recipients: List[str], subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message['From'] = self.email_config.username
        message['To'] = ', '.join(recipients)
        message['Subject'] = subject
        message.set_content(body, subtype='html')
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.email_config.server_address, self.email_config.port, timeout=self.timeout
        ) as smtp:
            smtp.starttls()
            smtp.login(
                self.email_config.username, self.email_config.password.get_secret_value()
            )
            smtp.send_message(message)

    @Logger.io
    async def send(self, *, recipients: List[str], subject: str, body: str) -> None:
        """
        Raises:
            smtplib.SMTPException: The server refused the login or the message
            OSError: The server could not be reached
        """
        message = self._build_message(recipients=recipients, subject=subject, body=body)
        await to_thread.run_sync(self._deliver, message)
        Logger.base.info(f'📧 [SMTP] Sent "{subject}" to {len(recipients)} recipient(s)')
