"""
Kafka Topic Initializer
Container-friendly topic creation using confluent-kafka AdminClient

Creates the intake queue, the per-source event bus topics and their
dead-letter topics during consumer startup, so subscription never hits
UNKNOWN_TOPIC_OR_PART.
"""

from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, NewTopic

from bus_ticketing.platform.config.core_setting import settings
from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.platform.message_queue.kafka_constant_builder import KafkaTopicBuilder


class KafkaTopicInitializer:
    def __init__(
        self,
        *,
        bootstrap_servers: str | None = None,
        partitions: int | None = None,
        replication_factor: int | None = None,
    ) -> None:
        self.bootstrap_servers = bootstrap_servers or settings.KAFKA_BOOTSTRAP_SERVERS
        self.partitions = partitions or settings.KAFKA_TOPIC_PARTITIONS
        self.replication_factor = replication_factor or settings.KAFKA_REPLICATION_FACTOR
        self.admin_client = AdminClient({'bootstrap.servers': self.bootstrap_servers})

    def ensure_topics_exist(self) -> bool:
        """
        Ensure all booking topics exist, creating them if needed.

        Returns:
            bool: True if all topics exist or were created successfully
        """
        try:
            required_topics = KafkaTopicBuilder.get_all_topics()

            existing_topics = set(self.admin_client.list_topics(timeout=10).topics.keys())
            topics_to_create = [topic for topic in required_topics if topic not in existing_topics]

            if not topics_to_create:
                Logger.base.info(f'✅ [TOPIC-INIT] All {len(required_topics)} topics already exist')
                return True

            Logger.base.info(
                f'📝 [TOPIC-INIT] Creating {len(topics_to_create)}/{len(required_topics)} missing topics...'
            )

            new_topics = [
                NewTopic(
                    topic=topic,
                    num_partitions=self.partitions,
                    replication_factor=self.replication_factor,
                    config={
                        'cleanup.policy': 'delete',
                        'retention.ms': '604800000',  # 7 days
                    },
                )
                for topic in topics_to_create
            ]

            futures = self.admin_client.create_topics(new_topics, request_timeout=30)

            success_count = 0
            for topic, future in futures.items():
                try:
                    future.result()
                    Logger.base.info(f'✅ [TOPIC-INIT] Created topic: {topic}')
                    success_count += 1
                except KafkaException as e:
                    # Another process may have created it first
                    if e.args[0].code() == KafkaError.TOPIC_ALREADY_EXISTS:
                        Logger.base.info(f'ℹ️  [TOPIC-INIT] Topic already exists: {topic}')
                        success_count += 1
                    else:
                        Logger.base.error(f'❌ [TOPIC-INIT] Failed to create {topic}: {e}')

            return success_count == len(topics_to_create)

        except KafkaException as e:
            Logger.base.error(f'❌ [TOPIC-INIT] Failed to ensure topics exist: {e}')
            return False
