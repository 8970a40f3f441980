"""
Test Configuration

Settings are read once, at import time of bus_ticketing.platform.config.core_setting,
so the test environment has to be in place before any application module is
imported.

Architecture:
- Unit tests (test/**/unit/): in-memory adapters from their own conftest.py,
  never reach Postgres or Kafka
- Integration tests (@pytest.mark.integration): real Postgres test database,
  tables truncated around every test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'bus_ticketing_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'bus_ticketing_test_db_{worker_id}'

    os.environ['EMAIL_BACKEND'] = 'mock'
    os.environ.setdefault('KAFKA_CONSUMER_INSTANCE_ID', 'test-consumer')

    # Redrive policy: no waiting between redeliveries
    os.environ['MAX_DELIVERY_ATTEMPTS'] = '3'
    os.environ['REDELIVERY_BACKOFF_SECONDS'] = '0'

    # Pool size settings for tests
    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402
from typing import Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from bus_ticketing.platform.config.core_setting import settings  # noqa: E402


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


# Set when the test database cannot be reached; integration tests are skipped
_database_unavailable: Optional[str] = None


def pytest_sessionstart(session: pytest.Session) -> None:
    global _database_unavailable
    if _is_unit_test_only_run(session.config):
        return

    try:
        asyncio.run(_setup_test_database())
    except (OSError, asyncio.TimeoutError, SQLAlchemyError) as e:
        _database_unavailable = f'test database unavailable: {e}'


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if item.get_closest_marker('integration') is None:
            continue
        if _database_unavailable:
            item.add_marker(pytest.mark.skip(reason=_database_unavailable))
        else:
            # First, so tables are emptied before any fixture writes to them
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _setup_test_database() -> None:
    db_url = settings.DATABASE_URL_ASYNC

    # Create database if not exists
    postgres_url = db_url.rsplit('/', 1)[0] + '/postgres'
    engine = create_async_engine(
        postgres_url, isolation_level='AUTOCOMMIT', connect_args={'timeout': 5}
    )
    try:
        async with engine.begin() as conn:
            result = await conn.execute(
                text('SELECT 1 FROM pg_database WHERE datname = :name'),
                {'name': settings.POSTGRES_DB},
            )
            if not result.fetchone():
                await conn.execute(text(f'CREATE DATABASE {settings.POSTGRES_DB}'))
    finally:
        await engine.dispose()

    # Reset schema and create tables from the models
    from bus_ticketing.platform.database.orm_db_setting import Base
    from bus_ticketing.service.booking.driven_adapter.model import (  # noqa: F401
        booking_model,
        bus_route_model,
        cancellation_record_model,
        user_account_model,
    )

    reset_engine = create_async_engine(db_url)
    try:
        async with reset_engine.begin() as conn:
            await conn.execute(text('DROP SCHEMA public CASCADE'))
            await conn.execute(text('CREATE SCHEMA public'))
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await reset_engine.dispose()


async def _clean_all_tables() -> None:
    from bus_ticketing.platform.database.orm_db_setting import Base, get_engine

    quoted = [f'"{table.name}"' for table in Base.metadata.sorted_tables]
    if not quoted:
        return
    async with get_engine().begin() as conn:
        await conn.execute(text(f'TRUNCATE {", ".join(quoted)} CASCADE'))


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest_asyncio.fixture
async def clean_database() -> AsyncGenerator[None, None]:
    from bus_ticketing.platform.database.orm_db_setting import dispose_engine

    await _clean_all_tables()
    yield

    # Each test runs on its own event loop; drop the engine bound to this one
    await dispose_engine()
