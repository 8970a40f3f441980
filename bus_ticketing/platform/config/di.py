"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from bus_ticketing.platform.config.core_setting import Settings
from bus_ticketing.platform.config.email_config import EmailConfig
from bus_ticketing.platform.database.orm_db_setting import Database
from bus_ticketing.service.booking.app.command.cancel_booking_use_case import (
    CancelBookingUseCase,
)
from bus_ticketing.service.booking.app.command.confirm_booking_use_case import (
    ConfirmBookingUseCase,
)
from bus_ticketing.service.booking.app.command.process_booking_use_case import (
    ProcessBookingUseCase,
)
from bus_ticketing.service.booking.app.service.booking_notification_service import (
    BookingNotificationService,
)
from bus_ticketing.service.booking.app.service.booking_version_guard import BookingVersionGuard
from bus_ticketing.service.booking.driven_adapter.message_queue.booking_event_publisher_impl import (
    BookingEventPublisherImpl,
)
from bus_ticketing.service.booking.driven_adapter.message_queue.booking_intake_queue_impl import (
    BookingIntakeQueueImpl,
)
from bus_ticketing.service.booking.driven_adapter.notification.mock_email_sender import (
    MockEmailSender,
)
from bus_ticketing.service.booking.driven_adapter.notification.smtp_email_sender import (
    SmtpEmailSender,
)
from bus_ticketing.service.booking.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from bus_ticketing.service.booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from bus_ticketing.service.booking.driven_adapter.repo.bus_route_query_repo_impl import (
    BusRouteQueryRepoImpl,
)
from bus_ticketing.service.booking.driven_adapter.repo.cancellation_record_repo_impl import (
    CancellationRecordRepoImpl,
)
from bus_ticketing.service.booking.driven_adapter.repo.user_account_query_repo_impl import (
    UserAccountQueryRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)
    email_config = providers.Singleton(EmailConfig.from_settings, config=config_service)

    # Database (uses AsyncEngineManager with the global settings)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per call)
    booking_command_repo = providers.Singleton(
        BookingCommandRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    cancellation_record_repo = providers.Singleton(
        CancellationRecordRepoImpl, session_factory=database.provided.session
    )
    user_account_query_repo = providers.Singleton(
        UserAccountQueryRepoImpl, session_factory=database.provided.session
    )
    bus_route_query_repo = providers.Singleton(
        BusRouteQueryRepoImpl, session_factory=database.provided.session
    )

    # Message Queue
    booking_intake_queue = providers.Singleton(BookingIntakeQueueImpl)
    booking_event_publisher = providers.Singleton(BookingEventPublisherImpl)

    # Notification channel, picked by EMAIL_BACKEND
    notification_sender = providers.Selector(
        config_service.provided.EMAIL_BACKEND,
        smtp=providers.Singleton(SmtpEmailSender, email_config=email_config),
        mock=providers.Singleton(MockEmailSender),
    )

    # Handler collaborators
    booking_notification_service = providers.Singleton(
        BookingNotificationService,
        user_account_query_repo=user_account_query_repo,
        bus_route_query_repo=bus_route_query_repo,
        notification_sender=notification_sender,
        email_config=email_config,
    )
    booking_version_guard = providers.Singleton(
        BookingVersionGuard, booking_query_repo=booking_query_repo
    )

    # Consumer-side use cases
    process_booking_use_case = providers.Factory(
        ProcessBookingUseCase,
        booking_command_repo=booking_command_repo,
    )
    confirm_booking_use_case = providers.Factory(
        ConfirmBookingUseCase,
        booking_command_repo=booking_command_repo,
        version_guard=booking_version_guard,
        notification_service=booking_notification_service,
    )
    cancel_booking_use_case = providers.Factory(
        CancelBookingUseCase,
        booking_command_repo=booking_command_repo,
        cancellation_record_repo=cancellation_record_repo,
        version_guard=booking_version_guard,
        notification_service=booking_notification_service,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
