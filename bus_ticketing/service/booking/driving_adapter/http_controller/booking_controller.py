from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response, status
from opentelemetry import trace

from bus_ticketing.platform.logging.loguru_io import Logger
from bus_ticketing.service.booking.app.command.create_booking_use_case import (
    CreateBookingUseCase,
)
from bus_ticketing.service.booking.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from bus_ticketing.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from bus_ticketing.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from bus_ticketing.service.booking.app.query.list_cancellation_records_use_case import (
    ListCancellationRecordsUseCase,
)
from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
    CancellationDetailSchema,
    CancellationRecordResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _to_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        user_id=booking.user_id,
        bus_id=booking.bus_id,
        bus_route_id=booking.bus_route_id,
        status=str(booking.status),
        seat_number=booking.seat_number,
        travel_date=booking.travel_date,
        date_created=booking.date_created,
        date_confirmed=booking.date_confirmed,
        is_cancelled=booking.is_cancelled,
        cancelled=(
            CancellationDetailSchema(
                reason=booking.cancelled.reason, cancelled_by=booking.cancelled.cancelled_by
            )
            if booking.cancelled
            else None
        ),
        timestamp=booking.timestamp,
        version=booking.version,
    )


@router.post('', status_code=status.HTTP_202_ACCEPTED)
@Logger.io
async def create_booking(
    request: Request,
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> Response:
    """Queue a booking for creation; the record appears once the worker persists it."""
    # Raw body: blank and malformed payloads are judged by the use case
    payload = await request.body()
    with tracer.start_as_current_span('controller.create_booking'):
        await use_case.create_booking(payload=payload)
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.patch('/status', status_code=status.HTTP_202_ACCEPTED)
@Logger.io
async def change_booking_status(
    request: Request,
    booking_id: str = Query(..., alias='id'),
    bus_route_id: str = Query(...),
    use_case: UpdateBookingStatusUseCase = Depends(UpdateBookingStatusUseCase.depends),
) -> Response:
    payload = await request.body()
    with tracer.start_as_current_span('controller.change_booking_status') as span:
        span.set_attribute('booking.id', booking_id)
        span.set_attribute('booking.bus_route_id', bus_route_id)
        await use_case.update_status(
            booking_id=booking_id, bus_route_id=bus_route_id, payload=payload
        )
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.get('', response_model=List[BookingResponse])
@Logger.io
async def list_bookings(
    booking_status: str = Query('', alias='status'),
    bus_id: str = '',
    route_id: str = '',
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_bookings(
        status=booking_status, bus_id=bus_id, bus_route_id=route_id
    )
    return [_to_booking_response(booking) for booking in bookings]


@router.get('/record', response_model=List[BookingResponse])
@Logger.io
async def get_booking_record(
    booking_id: str = Query(..., alias='id'),
    bus_route_id: str = Query(...),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> List[BookingResponse]:
    booking = await use_case.get_booking(booking_id=booking_id, bus_route_id=bus_route_id)
    return [_to_booking_response(booking)]


@router.get('/cancelled', response_model=List[CancellationRecordResponse])
@Logger.io
async def list_cancellation_records(
    booking_id: str,
    use_case: ListCancellationRecordsUseCase = Depends(ListCancellationRecordsUseCase.depends),
) -> List[CancellationRecordResponse]:
    records = await use_case.list_records(booking_id=booking_id)
    return [
        CancellationRecordResponse(
            id=record.id,
            booking_id=record.booking_id,
            reason=record.reason,
            cancelled_by=record.cancelled_by,
            date_cancelled=record.date_cancelled,
        )
        for record in records
    ]
