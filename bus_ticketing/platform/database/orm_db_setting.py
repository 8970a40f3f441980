"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine/session maker
2. Base: declarative base shared by every model
3. Database: session provider injected into repositories via the DI container
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bus_ticketing.platform.config.core_setting import Settings, settings
from bus_ticketing.platform.logging.loguru_io import Logger


class AsyncEngineManager:
    """
    Manages the SQLAlchemy async engine with event loop awareness.

    Consumers run their handlers on a different loop than the one that
    imported this module, so the engine is rebuilt whenever the running
    loop changes to avoid "Future attached to a different loop" errors.
    """

    def __init__(self, *, config: Settings) -> None:
        self._config = config
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, recreating engine...')
                self._session_maker = None
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        assert self._engine is not None
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
            self._loop = None
            Logger.base.info('🗄️  [DB] Engine disposed')

    def _create_engine(self) -> AsyncEngine:
        return create_async_engine(
            self._config.DATABASE_URL_ASYNC,
            echo=False,
            future=True,
            pool_size=self._config.DB_POOL_SIZE,
            max_overflow=self._config.DB_POOL_MAX_OVERFLOW,
            pool_timeout=self._config.DB_POOL_TIMEOUT,
            pool_recycle=self._config.DB_POOL_RECYCLE,
            pool_pre_ping=self._config.DB_POOL_PRE_PING,
        )


# Global engine manager
_engine_manager = AsyncEngineManager(config=settings)


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


async def dispose_engine() -> None:
    await _engine_manager.dispose()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables() -> None:
    """Create database tables if they don't exist"""
    # Models register themselves on Base.metadata when imported
    from bus_ticketing.service.booking.driven_adapter.model import (  # noqa: F401
        booking_model,
        bus_route_model,
        cancellation_record_model,
        user_account_model,
    )

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️  [DB] Tables ensured')


class Database:
    """Session provider for repositories, resolved through the DI container."""

    def __init__(self, *, engine_manager: AsyncEngineManager = _engine_manager) -> None:
        self._engine_manager = engine_manager

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; rolls back automatically if the block raises."""
        session_maker = self._engine_manager.get_session_maker()
        async with session_maker() as session:
            yield session
