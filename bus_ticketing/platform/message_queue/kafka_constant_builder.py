from bus_ticketing.platform.config.core_setting import settings
from bus_ticketing.service.booking.domain.enum.event_source import EventSource


class ServiceNames:
    """Service name constants"""

    BOOKING_API = 'booking-api'  # HTTP intake + transition validation
    BOOKING_WORKER = 'booking-worker'  # Persists queued creations
    BOOKING_HANDLER = 'booking-handler'  # Confirmation / cancellation side effects


class KafkaTopicBuilder:
    """
    Kafka Topic Naming Unified Builder

    Delivery queue: {BOOKING_QUEUE}
    Event bus:      {EVENT_BUS}______{source with ':' replaced by '.'}
    Dead letters:   {topic}______dlq
    """

    @staticmethod
    def booking_intake() -> str:
        return settings.BOOKING_QUEUE

    @staticmethod
    def booking_transition(*, source: str) -> str:
        """One topic per source tag so each handler subscribes only to its events."""
        return f'{settings.EVENT_BUS}______{source.replace(":", ".")}'

    @staticmethod
    def dead_letter(*, topic: str) -> str:
        return f'{topic}______dlq'

    @staticmethod
    def get_all_topics() -> list[str]:
        topics = [KafkaTopicBuilder.booking_intake()] + [
            KafkaTopicBuilder.booking_transition(source=source) for source in EventSource
        ]
        return topics + [KafkaTopicBuilder.dead_letter(topic=topic) for topic in topics]


class KafkaConsumerGroupBuilder:
    """
    Kafka Consumer Group Naming Unified Builder

    Format: {EVENT_BUS}_____{service_name}
    """

    @staticmethod
    def booking_worker() -> str:
        return f'{settings.EVENT_BUS}_____{ServiceNames.BOOKING_WORKER}'

    @staticmethod
    def booking_handler() -> str:
        return f'{settings.EVENT_BUS}_____{ServiceNames.BOOKING_HANDLER}'
