import os
from pathlib import Path
from typing import List, Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Bus Ticketing'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'bus_ticketing'

    # Connection pool tuning
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds
    DB_POOL_RECYCLE: int = 3600  # seconds
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Record store table names
    BOOKING_TABLE: str = 'booking'
    BOOKING_CANCELLED_TABLE: str = 'booking_cancelled'
    USERS_TABLE: str = 'user_account'
    BUS_ROUTE_TABLE: str = 'bus_route'

    # Kafka
    KAFKA_BOOTSTRAP_SERVERS: str = 'localhost:9092'
    KAFKA_CONSUMER_AUTO_OFFSET_RESET: str = 'earliest'
    KAFKA_CONSUMER_INSTANCE_ID: str = os.getenv(
        'KAFKA_CONSUMER_INSTANCE_ID', f'consumer-{os.getpid()}'
    )
    KAFKA_TOPIC_PARTITIONS: int = 6
    KAFKA_REPLICATION_FACTOR: int = 1  # Set to 1 for development, 3 for production

    # Delivery queue and event bus names
    BOOKING_QUEUE: str = 'booking-intake'
    EVENT_BUS: str = 'bus-ticketing'

    # Consumer redrive policy
    MAX_DELIVERY_ATTEMPTS: int = 5
    REDELIVERY_BACKOFF_SECONDS: float = 1.0

    # Email
    EMAIL_BACKEND: Literal['smtp', 'mock'] = 'mock'
    SMTP_SERVER_ADDRESS: str = 'smtp.gmail.com'
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ''
    SMTP_PASSWORD: SecretStr = SecretStr('')
    CUSTOMER_SUPPORT_EMAIL: str = 'support@bus-ticketing.local'


settings = Settings()  # type: ignore
