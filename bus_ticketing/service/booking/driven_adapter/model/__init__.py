"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from bus_ticketing.service.booking.driven_adapter.model.booking_model import BookingModel
from bus_ticketing.service.booking.driven_adapter.model.bus_route_model import BusRouteModel
from bus_ticketing.service.booking.driven_adapter.model.cancellation_record_model import (
    CancellationRecordModel,
)
from bus_ticketing.service.booking.driven_adapter.model.user_account_model import (
    UserAccountModel,
)

__all__ = [
    'BookingModel',
    'BusRouteModel',
    'CancellationRecordModel',
    'UserAccountModel',
]
