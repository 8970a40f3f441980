import attrs
from pydantic import SecretStr

from bus_ticketing.platform.config.core_setting import Settings


@attrs.define(frozen=True)
class EmailConfig:
    """Outgoing mail (SMTP) settings plus the support address quoted in every e-mail."""

    server_address: str
    port: int
    username: str
    password: SecretStr = attrs.field(repr=False)
    customer_support: str

    @classmethod
    def from_settings(cls, config: Settings) -> 'EmailConfig':
        return cls(
            server_address=config.SMTP_SERVER_ADDRESS,
            port=config.SMTP_PORT,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
            customer_support=config.CUSTOMER_SUPPORT_EMAIL,
        )
