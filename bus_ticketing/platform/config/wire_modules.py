"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from bus_ticketing.service.booking.app.command import (
    create_booking_use_case,
    update_booking_status_use_case,
)
from bus_ticketing.service.booking.app.query import (
    get_booking_use_case,
    list_bookings_use_case,
    list_cancellation_records_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    update_booking_status_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    list_cancellation_records_use_case,
]
