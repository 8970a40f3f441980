"""
Kafka Message Publisher

Event publishing using confluent-kafka's experimental AsyncIO Producer.
Callers hand over bytes; serialization belongs to the driven adapters.

Features:
- Global async producer instance for connection reuse
- Idempotent producer with acks=all so per-key order survives retries
- Waits for the broker acknowledgement before returning
"""

from typing import Dict, Optional

from confluent_kafka.experimental.aio import AIOProducer
from opentelemetry import trace

from bus_ticketing.platform.config.core_setting import settings
from bus_ticketing.platform.logging.loguru_io import Logger


# Global async producer instance
_global_producer: AIOProducer | None = None


async def _get_global_producer() -> AIOProducer:
    """Get global async producer instance - avoid creating new producer on every publish"""
    global _global_producer
    if _global_producer is None:
        _global_producer = AIOProducer(
            {
                'bootstrap.servers': settings.KAFKA_BOOTSTRAP_SERVERS,
                # === Reliability Settings ===
                'enable.idempotence': True,
                'acks': 'all',
                'retries': 3,
                # === Batching ===
                'linger.ms': 5,
                # === Connection ===
                'max.in.flight.requests.per.connection': 5,
            }
        )
    return _global_producer


async def publish_message(
    *,
    topic: str,
    key: str,
    value: bytes,
    headers: Optional[Dict[str, str]] = None,
) -> None:
    """
    Publish one message and wait until the broker has acknowledged it.

    Messages sharing a key land on the same partition and keep their order.

    Raises:
        KafkaException: If the broker rejects the message
    """
    tracer = trace.get_tracer(__name__)

    with tracer.start_as_current_span(
        'kafka.publish',
        attributes={
            'messaging.system': 'kafka',
            'messaging.destination': topic,
            'messaging.destination_kind': 'topic',
            'messaging.kafka.message_key': key,
        },
    ):
        producer = await _get_global_producer()
        delivery = await producer.produce(
            topic=topic,
            key=key.encode('utf-8'),
            value=value,
            headers=[(name, data.encode('utf-8')) for name, data in (headers or {}).items()],
        )
        await delivery

        Logger.base.info(f'📤 Published {len(value)} bytes to {topic} (key={key})')


async def close_producer() -> None:
    global _global_producer
    if _global_producer is not None:
        await _global_producer.flush()
        await _global_producer.close()
        _global_producer = None
        Logger.base.info('Closed async producer')
