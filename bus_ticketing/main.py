"""
Booking API - Main Application

HTTP intake and transition validation. Persistence and side effects run in
the consumers started by start_booking_consumer.py.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from bus_ticketing.platform.app_factory import create_app
from bus_ticketing.platform.config.di import cleanup, container, setup
from bus_ticketing.platform.config.wire_modules import WIRE_MODULES
from bus_ticketing.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.message_queue.event_publisher import close_producer


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Booking API] Starting up...')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Booking API] Dependency injection wired')

    await create_db_and_tables()

    Logger.base.info('✅ [Booking API] Startup complete')

    yield

    Logger.base.info('🛑 [Booking API] Shutting down...')

    await close_producer()
    await dispose_engine()

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Booking API] Shutdown complete')


app = create_app(lifespan=lifespan)
