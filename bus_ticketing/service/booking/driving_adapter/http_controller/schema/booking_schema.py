from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CancellationDetailSchema(BaseModel):
    reason: str
    cancelled_by: str


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '3f1c2a9e-6b1d-4a43-9f0e-2d4c5b6a7e81',
                'user_id': 'CSTMR-0001',
                'bus_id': 'BUS-01',
                'bus_route_id': 'RT-MNL-BAG',
                'status': 'CONFIRMED',
                'seat_number': '12,13',
                'travel_date': '2024-05-01',
                'date_created': '2024-04-20T09:15:00Z',
                'date_confirmed': '2024-04-21T10:00:00Z',
                'is_cancelled': None,
                'cancelled': None,
                'timestamp': '2024-04-20T09:14:58Z',
                'version': 1,
            }
        },
    }

    id: str
    user_id: str
    bus_id: str
    bus_route_id: str
    status: str
    seat_number: str
    travel_date: str
    date_created: Optional[datetime] = None
    date_confirmed: Optional[datetime] = None
    is_cancelled: Optional[bool] = None
    cancelled: Optional[CancellationDetailSchema] = None
    timestamp: str = ''
    version: int = 0


class CancellationRecordResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '9a7b6c5d-4e3f-4a2b-8c1d-0e9f8a7b6c5d',
                'booking_id': '3f1c2a9e-6b1d-4a43-9f0e-2d4c5b6a7e81',
                'reason': 'duplicate booking',
                'cancelled_by': 'ADMN-0001',
                'date_cancelled': '2024-04-22T08:00:00Z',
            }
        },
    }

    id: str
    booking_id: str
    reason: str
    cancelled_by: str
    date_cancelled: Optional[datetime] = None
