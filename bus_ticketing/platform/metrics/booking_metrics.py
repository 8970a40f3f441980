from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Booking lifecycle metrics collector

    Tracks consumer throughput and redrive behaviour, booking creations at
    intake and in the worker, transitions applied by the confirmation /
    cancellation handlers, and passenger e-mails.
    """

    def __init__(self) -> None:
        # ========== Kafka Consumer Metrics ==========
        self.kafka_messages_processed = Counter(
            'booking_consumer_messages_total',
            'Consumed messages by outcome',
            ['service', 'topic', 'result'],  # result: committed/retried/dead_lettered
        )

        self.kafka_processing_duration = Histogram(
            'booking_consumer_processing_duration_seconds',
            'Message handler duration',
            ['service', 'topic'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
        )

        # ========== Booking Business Metrics ==========
        self.booking_creations = Counter(
            'booking_creations_total',
            'Booking creations by stage and outcome',
            ['stage', 'result'],  # intake: queued; worker: persisted/duplicate
        )

        self.booking_transitions = Counter(
            'booking_transitions_total',
            'Transition events applied by the handlers',
            ['source', 'result'],  # result: applied/already_applied
        )

        self.notifications = Counter(
            'booking_notifications_total',
            'Passenger e-mails by kind and outcome',
            ['kind', 'result'],  # kind: confirmed/cancelled; result: sent/failed
        )

    # ========== Helper Methods ==========

    def record_kafka_message(
        self, *, service: str, topic: str, result: str, processing_time: float
    ) -> None:
        self.kafka_messages_processed.labels(service=service, topic=topic, result=result).inc()
        self.kafka_processing_duration.labels(service=service, topic=topic).observe(
            processing_time
        )

    def record_booking_creation(self, *, stage: str, result: str) -> None:
        self.booking_creations.labels(stage=stage, result=result).inc()

    def record_booking_transition(self, *, source: str, result: str) -> None:
        self.booking_transitions.labels(source=source, result=result).inc()

    def record_notification(self, *, kind: str, result: str) -> None:
        self.notifications.labels(kind=kind, result=result).inc()


# Global metrics instance
metrics = BookingMetrics()
