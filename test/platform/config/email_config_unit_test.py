"""
Unit tests for settings-derived configuration
"""

import pytest

from bus_ticketing.platform.config.core_setting import Settings
from bus_ticketing.platform.config.email_config import EmailConfig


pytestmark = pytest.mark.unit


class TestEmailConfig:
    def test_built_from_settings(self):
        # Given
        config = Settings(
            SMTP_SERVER_ADDRESS='smtp.example.com',
            SMTP_PORT=2525,
            SMTP_USERNAME='noreply@example.com',
            SMTP_PASSWORD='smtp-secret',
            CUSTOMER_SUPPORT_EMAIL='support@example.com',
        )

        # When
        email_config = EmailConfig.from_settings(config)

        # Then
        assert email_config.server_address == 'smtp.example.com'
        assert email_config.port == 2525
        assert email_config.password.get_secret_value() == 'smtp-secret'
        assert email_config.customer_support == 'support@example.com'

    def test_password_is_not_in_repr(self):
        config = Settings(SMTP_PASSWORD='smtp-secret')

        assert 'smtp-secret' not in repr(EmailConfig.from_settings(config))


class TestSettings:
    def test_cors_origins_from_comma_separated_string(self):
        config = Settings(BACKEND_CORS_ORIGINS='http://a.example, http://b.example')

        assert config.BACKEND_CORS_ORIGINS == ['http://a.example', 'http://b.example']

    def test_database_url_uses_asyncpg(self):
        config = Settings(POSTGRES_USER='bus', POSTGRES_PASSWORD='pw', POSTGRES_DB='tickets')

        assert config.DATABASE_URL_ASYNC.startswith('postgresql+asyncpg://bus:pw@')
        assert config.DATABASE_URL_ASYNC.endswith('/tickets')
