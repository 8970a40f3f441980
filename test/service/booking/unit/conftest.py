"""
Booking unit test fixtures

In-memory adapters standing in for Postgres and Kafka. They keep the
store-level guarantees the real adapters rely on:
- booking inserts collapse on the dedup token
- handler updates only land on the expected version
- at most one cancellation record per booking
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import attrs
from pydantic import SecretStr
import pytest

from bus_ticketing.platform.config.email_config import EmailConfig
from bus_ticketing.service.booking.app.command.cancel_booking_use_case import (
    CancelBookingUseCase,
)
from bus_ticketing.service.booking.app.command.confirm_booking_use_case import (
    ConfirmBookingUseCase,
)
from bus_ticketing.service.booking.app.command.create_booking_use_case import (
    CreateBookingUseCase,
)
from bus_ticketing.service.booking.app.command.process_booking_use_case import (
    ProcessBookingUseCase,
)
from bus_ticketing.service.booking.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from bus_ticketing.service.booking.app.interface.i_booking_command_repo import (
    IBookingCommandRepo,
)
from bus_ticketing.service.booking.app.interface.i_booking_event_publisher import (
    IBookingEventPublisher,
)
from bus_ticketing.service.booking.app.interface.i_booking_intake_queue import (
    IBookingIntakeQueue,
)
from bus_ticketing.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from bus_ticketing.service.booking.app.interface.i_bus_route_query_repo import IBusRouteQueryRepo
from bus_ticketing.service.booking.app.interface.i_cancellation_record_repo import (
    ICancellationRecordRepo,
)
from bus_ticketing.service.booking.app.interface.i_user_account_query_repo import (
    IUserAccountQueryRepo,
)
from bus_ticketing.service.booking.app.service.booking_notification_service import (
    BookingNotificationService,
)
from bus_ticketing.service.booking.app.service.booking_version_guard import BookingVersionGuard
from bus_ticketing.service.booking.domain.domain_event.booking_domain_event import (
    BookingCreationQueued,
    BookingTransitionEvent,
)
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.entity.bus_route_entity import BusRoute
from bus_ticketing.service.booking.domain.entity.cancellation_record_entity import (
    CancellationRecord,
)
from bus_ticketing.service.booking.domain.entity.user_account_entity import UserAccount
from bus_ticketing.service.booking.domain.enum.booking_status import BookingStatus
from bus_ticketing.service.booking.domain.enum.user_type import UserType
from bus_ticketing.service.booking.driven_adapter.notification.mock_email_sender import (
    MockEmailSender,
)


CUSTOMER_ID = 'CSTMR-0001'
STAFF_ID = 'ADMN-0001'
BUS_ID = 'BUS-0001'
ROUTE_ID = 'RT-0001'


# ==================== In-memory adapters ====================


class InMemoryBookingStore(IBookingCommandRepo, IBookingQueryRepo):
    def __init__(self) -> None:
        self.rows: Dict[Tuple[str, str], Booking] = {}
        self.dedup_tokens: set[str] = set()

    def seed(self, booking: Booking) -> Booking:
        self.rows[(booking.id, booking.bus_route_id)] = booking
        return booking

    async def create(self, *, booking: Booking, dedup_token: str) -> bool:
        if dedup_token in self.dedup_tokens:
            return False
        self.dedup_tokens.add(dedup_token)
        self.seed(booking)
        return True

    def _versioned_update(
        self, *, booking: Booking, expected_version: int, **values: Any
    ) -> Optional[Booking]:
        key = (booking.id, booking.bus_route_id)
        row = self.rows.get(key)
        if row is None or row.version != expected_version:
            return None
        updated = attrs.evolve(row, version=row.version + 1, **values)
        self.rows[key] = updated
        return updated

    async def update_on_confirmed(
        self, *, booking: Booking, expected_version: int
    ) -> Optional[Booking]:
        return self._versioned_update(
            booking=booking,
            expected_version=expected_version,
            status=BookingStatus(booking.status),
            date_confirmed=booking.date_confirmed,
            seat_number=booking.seat_number,
            transition_id=booking.transition_id,
        )

    async def update_on_cancelled(
        self, *, booking: Booking, expected_version: int
    ) -> Optional[Booking]:
        return self._versioned_update(
            booking=booking,
            expected_version=expected_version,
            status=BookingStatus(booking.status),
            is_cancelled=booking.is_cancelled,
            date_confirmed=None,
            cancelled=booking.cancelled,
            transition_id=booking.transition_id,
        )

    async def get(self, *, booking_id: str, bus_route_id: str) -> Optional[Booking]:
        return self.rows.get((booking_id, bus_route_id))

    async def filter(
        self, *, status: str = '', bus_id: str = '', bus_route_id: str = ''
    ) -> List[Booking]:
        return [
            booking
            for booking in self.rows.values()
            if (not status or booking.status == status)
            and (not bus_id or booking.bus_id == bus_id)
            and (not bus_route_id or booking.bus_route_id == bus_route_id)
        ]


class InMemoryCancellationRecordStore(ICancellationRecordRepo):
    def __init__(self) -> None:
        self.records: Dict[str, CancellationRecord] = {}

    async def create_if_absent(self, *, record: CancellationRecord) -> bool:
        if record.booking_id in self.records:
            return False
        self.records[record.booking_id] = record
        return True

    async def list_by_booking_id(self, *, booking_id: str) -> List[CancellationRecord]:
        record = self.records.get(booking_id)
        return [record] if record else []


class InMemoryUserAccountStore(IUserAccountQueryRepo):
    def __init__(self, *users: UserAccount) -> None:
        self.users = {user.id: user for user in users}

    async def get(self, *, user_id: str) -> Optional[UserAccount]:
        return self.users.get(user_id)


class InMemoryBusRouteStore(IBusRouteQueryRepo):
    def __init__(self, *routes: BusRoute) -> None:
        self.routes = {(route.id, route.bus_id): route for route in routes}

    async def get(self, *, route_id: str, bus_id: str) -> Optional[BusRoute]:
        return self.routes.get((route_id, bus_id))


class RecordingIntakeQueue(IBookingIntakeQueue):
    def __init__(self) -> None:
        self.messages: List[BookingCreationQueued] = []

    async def enqueue(self, *, message: BookingCreationQueued) -> None:
        self.messages.append(message)


class RecordingEventPublisher(IBookingEventPublisher):
    def __init__(self) -> None:
        self.events: List[BookingTransitionEvent] = []

    async def publish(self, *, event: BookingTransitionEvent) -> None:
        self.events.append(event)


# ==================== Sample records ====================


@pytest.fixture
def customer() -> UserAccount:
    return UserAccount(
        id=CUSTOMER_ID,
        email='juan.delacruz@example.com',
        first_name='Juan',
        last_name='Dela Cruz',
        username='juandc',
        user_type=UserType.CUSTOMER,
    )


@pytest.fixture
def bus_route() -> BusRoute:
    return BusRoute(
        id=ROUTE_ID,
        bus_id=BUS_ID,
        bus_unit_id='UNIT-117',
        from_route='Manila',
        to_route='Baguio',
        departure_time='06:30',
        arrival_time='12:45',
        currency_code='PHP',
        rate=Decimal('750.00'),
    )


@pytest.fixture
def pending_booking() -> Booking:
    return Booking(
        id='bk-0001',
        user_id=CUSTOMER_ID,
        bus_id=BUS_ID,
        bus_route_id=ROUTE_ID,
        status=BookingStatus.PENDING,
        seat_number='12',
        travel_date='2026-11-02',
        date_created=datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc),
        timestamp='2026-10-19T08:00:00Z',
        version=0,
    )


@pytest.fixture
def email_config() -> EmailConfig:
    return EmailConfig(
        server_address='smtp.example.com',
        port=587,
        username='noreply@example.com',
        password=SecretStr('smtp-secret'),
        customer_support='support@example.com',
    )


# ==================== Adapters ====================


@pytest.fixture
def booking_store(pending_booking: Booking) -> InMemoryBookingStore:
    store = InMemoryBookingStore()
    store.seed(pending_booking)
    return store


@pytest.fixture
def cancellation_record_store() -> InMemoryCancellationRecordStore:
    return InMemoryCancellationRecordStore()


@pytest.fixture
def user_account_store(customer: UserAccount) -> InMemoryUserAccountStore:
    return InMemoryUserAccountStore(customer)


@pytest.fixture
def bus_route_store(bus_route: BusRoute) -> InMemoryBusRouteStore:
    return InMemoryBusRouteStore(bus_route)


@pytest.fixture
def intake_queue() -> RecordingIntakeQueue:
    return RecordingIntakeQueue()


@pytest.fixture
def event_publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()


@pytest.fixture
def email_sender() -> MockEmailSender:
    return MockEmailSender()


# ==================== Services and use cases ====================


@pytest.fixture
def notification_service(
    user_account_store: InMemoryUserAccountStore,
    bus_route_store: InMemoryBusRouteStore,
    email_sender: MockEmailSender,
    email_config: EmailConfig,
) -> BookingNotificationService:
    return BookingNotificationService(
        user_account_query_repo=user_account_store,
        bus_route_query_repo=bus_route_store,
        notification_sender=email_sender,
        email_config=email_config,
    )


@pytest.fixture
def version_guard(booking_store: InMemoryBookingStore) -> BookingVersionGuard:
    return BookingVersionGuard(booking_query_repo=booking_store)


@pytest.fixture
def create_booking_use_case(intake_queue: RecordingIntakeQueue) -> CreateBookingUseCase:
    return CreateBookingUseCase(intake_queue=intake_queue)


@pytest.fixture
def process_booking_use_case(booking_store: InMemoryBookingStore) -> ProcessBookingUseCase:
    return ProcessBookingUseCase(booking_command_repo=booking_store)


@pytest.fixture
def update_booking_status_use_case(
    booking_store: InMemoryBookingStore, event_publisher: RecordingEventPublisher
) -> UpdateBookingStatusUseCase:
    return UpdateBookingStatusUseCase(
        booking_query_repo=booking_store, event_publisher=event_publisher
    )


@pytest.fixture
def confirm_booking_use_case(
    booking_store: InMemoryBookingStore,
    version_guard: BookingVersionGuard,
    notification_service: BookingNotificationService,
) -> ConfirmBookingUseCase:
    return ConfirmBookingUseCase(
        booking_command_repo=booking_store,
        version_guard=version_guard,
        notification_service=notification_service,
    )


@pytest.fixture
def cancel_booking_use_case(
    booking_store: InMemoryBookingStore,
    cancellation_record_store: InMemoryCancellationRecordStore,
    version_guard: BookingVersionGuard,
    notification_service: BookingNotificationService,
) -> CancelBookingUseCase:
    return CancelBookingUseCase(
        booking_command_repo=booking_store,
        cancellation_record_repo=cancellation_record_store,
        version_guard=version_guard,
        notification_service=notification_service,
    )
