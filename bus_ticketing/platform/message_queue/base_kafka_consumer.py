from abc import ABC, abstractmethod
from threading import Event
import time
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Optional, Tuple

from confluent_kafka import Consumer, KafkaError, KafkaException, Message, Producer, TopicPartition
from opentelemetry import trace
import orjson


if TYPE_CHECKING:
    from anyio.from_thread import BlockingPortal

from bus_ticketing.platform.config.core_setting import settings
from bus_ticketing.platform.exception.exceptions import CustomBaseError
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.message_queue.kafka_constant_builder import KafkaTopicBuilder
from bus_ticketing.platform.metrics.booking_metrics import metrics


# handler(value, headers) -> awaitable, executed on the event loop through the portal
MessageHandler = Callable[[bytes, Dict[str, str]], Awaitable[Any]]


class BaseKafkaConsumer(ABC):
    """
    Poll-loop consumer with manual commits and a redrive policy.

    Messages are handled one at a time, in partition order:
    - success: offset committed
    - CustomBaseError / ValueError: the message can never succeed, dead-lettered at once
    - any other error: seek back and retry after a backoff; dead-lettered
      once MAX_DELIVERY_ATTEMPTS is reached
    """

    # POLL_TIMEOUT_SECONDS: Max time poll() waits for messages
    #   - Too long → slow shutdown; Too short → CPU spin
    POLL_TIMEOUT_SECONDS: float = 0.05
    DLQ_FLUSH_TIMEOUT_SECONDS: float = 10.0

    def __init__(self, *, service_name: str, consumer_group_id: str) -> None:
        self.service_name = service_name
        self.consumer_group_id = consumer_group_id
        self.instance_id = settings.KAFKA_CONSUMER_INSTANCE_ID
        self.max_delivery_attempts = settings.MAX_DELIVERY_ATTEMPTS
        self.redelivery_backoff_seconds = settings.REDELIVERY_BACKOFF_SECONDS

        # Kafka clients
        self.consumer: Optional[Consumer] = None
        self.producer: Optional[Producer] = None  # For sending to DLQ
        self.portal: Optional['BlockingPortal'] = None  # anyio cross-thread bridge
        self.tracer = trace.get_tracer(__name__)

        # Running state control
        self.running = False
        self.stop_event = Event()
        # Failed attempts per (topic, partition, offset) still awaiting redelivery
        self._delivery_attempts: Dict[Tuple[str, int, int], int] = {}

    def set_portal(self, portal: 'BlockingPortal') -> None:
        self.portal = portal

    @abstractmethod
    def _get_topic_handlers(self) -> Dict[str, MessageHandler]:
        """
        Return topic name to handler mapping.

        Example:
            return {
                'booking-intake': self._handle_booking_created,
            }
        """
        pass

    @abstractmethod
    def _initialize_dependencies(self) -> None:
        """Initialize use cases and dependencies before consumer starts."""
        pass

    def _create_consumer(self) -> Consumer:
        """
        Key settings explained:
        - enable.auto.commit: False = commit only after the handler succeeded
        - enable.auto.offset.store: False = seek-back redelivery is not skipped
        """
        return Consumer(
            {
                'bootstrap.servers': settings.KAFKA_BOOTSTRAP_SERVERS,
                'group.id': self.consumer_group_id,
                'client.id': f'{self.service_name}-{self.instance_id}',
                'auto.offset.reset': settings.KAFKA_CONSUMER_AUTO_OFFSET_RESET,
                'enable.auto.commit': False,
                'enable.auto.offset.store': False,
                # Session management (librdkafka default: 45000, 3000)
                'session.timeout.ms': 45000,
                'heartbeat.interval.ms': 15000,
                # Handlers may sit in redelivery backoff between polls
                'max.poll.interval.ms': 300000,
                # Reconnection (librdkafka default: 100, 10000)
                'reconnect.backoff.ms': 1000,
                'reconnect.backoff.max.ms': 30000,
            }
        )

    def _create_producer(self) -> Producer:
        return Producer(
            {
                'bootstrap.servers': settings.KAFKA_BOOTSTRAP_SERVERS,
                'acks': 'all',  # Wait for all replicas to acknowledge
                'retries': 3,
            }
        )

    @staticmethod
    def _decode_headers(msg: Message) -> Dict[str, str]:
        return {name: (value or b'').decode('utf-8') for name, value in (msg.headers() or [])}

    def _send_to_dlq(self, *, msg: Message, error: str, attempts: int) -> None:
        """
        Raises:
            KafkaException: The dead-letter topic did not acknowledge the message
        """
        if not self.producer:
            raise KafkaException(KafkaError(KafkaError._STATE, 'DLQ producer not initialized'))

        dlq_topic = KafkaTopicBuilder.dead_letter(topic=msg.topic())
        dlq_message = {
            'original_message': (msg.value() or b'').decode('utf-8', errors='replace'),
            'original_topic': msg.topic(),
            'original_partition': msg.partition(),
            'original_offset': msg.offset(),
            'error': error,
            'delivery_attempts': attempts,
            'timestamp': time.time(),
            'instance_id': self.instance_id,
        }

        delivery_errors: List[KafkaError] = []

        def on_delivery(err: Optional[KafkaError], _msg: Message) -> None:
            if err is not None:
                delivery_errors.append(err)

        self.producer.produce(
            topic=dlq_topic,
            key=msg.key(),
            value=orjson.dumps(dlq_message),
            headers=msg.headers(),
            on_delivery=on_delivery,
        )
        remaining = self.producer.flush(timeout=self.DLQ_FLUSH_TIMEOUT_SECONDS)
        if delivery_errors:
            raise KafkaException(delivery_errors[0])
        if remaining:
            raise KafkaException(KafkaError(KafkaError._TIMED_OUT, f'{dlq_topic} flush timed out'))

        Logger.base.warning(f'[DLQ] {msg.topic()}@{msg.offset()} → {dlq_topic}: {error}')

    def _record(self, msg: Message, *, result: str, started: float) -> None:
        metrics.record_kafka_message(
            service=self.service_name,
            topic=msg.topic(),
            result=result,
            processing_time=time.monotonic() - started,
        )

    def _commit(self, msg: Message) -> None:
        if self.consumer:
            self.consumer.commit(message=msg, asynchronous=False)

    def _redeliver(self, msg: Message) -> None:
        """Rewind the partition so the next poll() returns this message again."""
        if self.consumer:
            self.consumer.seek(TopicPartition(msg.topic(), msg.partition(), msg.offset()))
        self.stop_event.wait(self.redelivery_backoff_seconds)

    def _dead_letter(self, msg: Message, *, error: str, attempts: int) -> None:
        delivery_key = (msg.topic(), msg.partition(), msg.offset())
        try:
            self._send_to_dlq(msg=msg, error=error, attempts=attempts)
        except (KafkaException, BufferError) as e:
            Logger.base.error(f'[DLQ] Failed to send, message will be redelivered: {e}')
            self._redeliver(msg)
            return

        self._delivery_attempts.pop(delivery_key, None)
        self._commit(msg)

    def _process_message(self, msg: Message, handler: MessageHandler) -> None:
        """
        Run the handler for one message on the event loop and apply the redrive policy.
        """
        if not self.portal:
            raise RuntimeError(f'[{self.service_name}] portal not set')

        topic = msg.topic()
        delivery_key = (topic, msg.partition(), msg.offset())
        attempt = self._delivery_attempts.get(delivery_key, 0) + 1
        started = time.monotonic()

        try:
            with self.tracer.start_as_current_span(
                f'consumer.{topic}',
                attributes={
                    'messaging.system': 'kafka',
                    'messaging.destination': topic,
                    'messaging.kafka.partition': msg.partition(),
                    'messaging.kafka.offset': msg.offset(),
                    'messaging.delivery_attempt': attempt,
                },
            ):
                self.portal.call(handler, msg.value() or b'', self._decode_headers(msg))

        except (CustomBaseError, ValueError) as e:
            Logger.base.warning(f'[{self.service_name}] Rejected {topic}@{msg.offset()}: {e}')
            self._record(msg, result='dead_lettered', started=started)
            self._dead_letter(msg, error=str(e), attempts=attempt)

        except Exception as e:
            if attempt >= self.max_delivery_attempts:
                Logger.base.error(
                    f'[{self.service_name}] Giving up on {topic}@{msg.offset()} '
                    f'after {attempt} attempts: {e}'
                )
                self._record(msg, result='dead_lettered', started=started)
                self._dead_letter(msg, error=str(e), attempts=attempt)
                return

            self._delivery_attempts[delivery_key] = attempt
            self._record(msg, result='retried', started=started)
            Logger.base.warning(
                f'[{self.service_name}] Attempt {attempt}/{self.max_delivery_attempts} failed '
                f'for {topic}@{msg.offset()}, retrying in {self.redelivery_backoff_seconds}s: {e}'
            )
            self._redeliver(msg)

        else:
            self._delivery_attempts.pop(delivery_key, None)
            self._commit(msg)
            self._record(msg, result='committed', started=started)

    def start(self) -> None:
        """Start consumer with retry for topic creation. Blocks until stop()."""
        max_retries, delay = 5, 2

        for attempt in range(1, max_retries + 1):
            try:
                self._initialize_dependencies()
                self.consumer = self._create_consumer()
                self.producer = self._create_producer()

                handlers = self._get_topic_handlers()
                self.consumer.subscribe(list(handlers.keys()))

                Logger.base.info(
                    f'[{self.service_name}-{self.instance_id}] Started | '
                    f'group={self.consumer_group_id} topics={list(handlers.keys())}'
                )

                self.running = True
                self._run_loop(handlers)
                break

            except KafkaException as e:
                if 'UNKNOWN_TOPIC_OR_PART' in str(e) and attempt < max_retries:
                    Logger.base.warning(
                        f'[{self.service_name}] {attempt}/{max_retries}: Topic not ready, retry in {delay}s'
                    )
                    time.sleep(delay)
                    delay *= 2
                else:
                    Logger.base.error(f'[{self.service_name}] Start failed: {e}')
                    raise

            finally:
                self._close_clients()

    def _run_loop(self, handlers: Dict[str, MessageHandler]) -> None:
        while self.running and not self.stop_event.is_set():
            msg = self.consumer.poll(timeout=self.POLL_TIMEOUT_SECONDS)

            if msg is None:
                continue

            if msg.error():
                if msg.error().code() != KafkaError._PARTITION_EOF:
                    Logger.base.error(f'[{self.service_name}] Kafka error: {msg.error()}')
                continue

            handler = handlers.get(msg.topic())
            if handler is None:
                continue

            try:
                self._process_message(msg, handler)
            except KafkaException as e:
                # Commit/seek failures (e.g. partition revoked); the message is redelivered
                Logger.base.error(f'[{self.service_name}] Offset handling failed: {e}')

    def stop(self) -> None:
        """Signal the poll loop to exit; start() closes the clients on its way out."""
        if self.stop_event.is_set():
            return

        Logger.base.info(f'[{self.service_name}] Stopping...')
        self.running = False
        self.stop_event.set()

    def _close_clients(self) -> None:
        # Close consumer (triggers rebalance, other consumers take over partitions)
        if self.consumer:
            try:
                self.consumer.close()
            except KafkaException as e:
                Logger.base.warning(f'[{self.service_name}] Close error: {e}')
            self.consumer = None

        if self.producer:
            self.producer.flush(timeout=5.0)
            self.producer = None

        Logger.base.info(f'[{self.service_name}] Stopped')
