"""
Standalone Booking Consumers Entry Point

Runs the booking worker (intake queue) and the transition handlers
(event bus) in one process.

Usage:
    PYTHONPATH=$PWD python bus_ticketing/service/booking/driving_adapter/mq_consumer/start_booking_consumer.py
"""

import signal
from typing import List

import anyio
import anyio.to_thread
from anyio.from_thread import BlockingPortal

from bus_ticketing.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.message_queue.base_kafka_consumer import BaseKafkaConsumer
from bus_ticketing.platform.message_queue.event_publisher import close_producer
from bus_ticketing.platform.message_queue.kafka_topic_initializer import KafkaTopicInitializer
from bus_ticketing.service.booking.driving_adapter.mq_consumer.booking_intake_consumer import (
    BookingIntakeConsumer,
)
from bus_ticketing.service.booking.driving_adapter.mq_consumer.booking_transition_consumer import (
    BookingTransitionConsumer,
)


async def _run_consumer(consumer: BaseKafkaConsumer, consumers: List[BaseKafkaConsumer]) -> None:
    """Poll in a worker thread; when one consumer exits, stop the others too."""
    try:
        await anyio.to_thread.run_sync(consumer.start)
    finally:
        for other in consumers:
            other.stop()


async def _watch_signals(consumers: List[BaseKafkaConsumer]) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            Logger.base.info(f'🛑 [Booking Consumers] Received signal {signum}')
            for consumer in consumers:
                consumer.stop()
            return


async def main() -> None:
    Logger.base.info('🚀 [Booking Consumers] Starting...')

    KafkaTopicInitializer().ensure_topics_exist()
    await create_db_and_tables()

    consumers: List[BaseKafkaConsumer] = [BookingIntakeConsumer(), BookingTransitionConsumer()]

    try:
        async with BlockingPortal() as portal:
            for consumer in consumers:
                consumer.set_portal(portal)

            async with anyio.create_task_group() as tg:
                tg.start_soon(_watch_signals, consumers)

                async with anyio.create_task_group() as consumer_tg:
                    for consumer in consumers:
                        consumer_tg.start_soon(_run_consumer, consumer, consumers)

                # Consumers are done; stop watching for signals
                tg.cancel_scope.cancel()
    finally:
        await close_producer()
        Logger.base.info('📤 [Booking Consumers] Kafka producer closed')

        await dispose_engine()
        Logger.base.info('👋 [Booking Consumers] Shutdown complete')


if __name__ == '__main__':
    anyio.run(main)
