"""
HTML e-mail bodies for booking notifications.

Bodies are written with plain newlines and tabs, then converted to HTML
line breaks and non-breaking spaces as the last step.
"""

from bus_ticketing.service.booking.domain.entity.booking_entity import Booking
from bus_ticketing.service.booking.domain.entity.bus_route_entity import BusRoute
from bus_ticketing.service.booking.domain.entity.user_account_entity import UserAccount


NBSP = '&nbsp;'
TAB = NBSP * 4


def _to_html(message: str) -> str:
    return message.replace('\n', '<br/>').replace('\t', TAB)


def confirmed_subject(*, route: BusRoute, booking: Booking) -> str:
    return f'BOOKING SCHEDULE: {route.from_route} to {route.to_route} [{booking.travel_date}]'


def cancelled_subject(*, route: BusRoute, booking: Booking) -> str:
    return f'CANCELLED BOOKING: {route.from_route} to {route.to_route} [{booking.travel_date}]'


def booking_details(*, user: UserAccount, route: BusRoute, booking: Booking) -> str:
    """Passenger, bus, seats, departure and arrival block shared by every template."""
    return (
        f'<b>Passenger Name</b>: {user.first_name} {user.last_name}\n'
        f'<b>Bus Number</b>: {route.bus_unit_id}\n'
        f'<b>Seat Number(s)</b>: {booking.seat_number}\n\n'
        '<b>Departure Details</b>\n'
        f'\t\tLocation: {route.from_route}\n'
        f'\t\tTime:{NBSP}{NBSP}\t{route.departure_time}\n\n'
        '<b>Arrival Details</b>\n'
        f'\t\tLocation: {route.to_route}\n'
        f'\t\tTime:{NBSP}{NBSP}\t{route.arrival_time}\n\n'
    )


def confirmed_booking(
    *, user: UserAccount, route: BusRoute, booking: Booking, customer_support: str
) -> str:
    message = (
        f'Hello {user.first_name},\n'
        f'We are pleased to inform you that your booking from <b>{route.from_route}</b> '
        f'to <b>{route.to_route}</b> on <b>{booking.travel_date}</b> has been successfully confirmed.'
        f'{NBSP}Please find below the details of your booking:\n\n'
        + booking_details(user=user, route=route, booking=booking)
        + 'If you have any questions or clarifications regarding your booking, please feel free '
        f'to reach out to our customer support team at {customer_support}. '
        'Thank you and have a pleasant trip!'
    )
    return _to_html(message)


def staff_cancelled_booking(
    *, user: UserAccount, route: BusRoute, booking: Booking, customer_support: str
) -> str:
    message = (
        f'Hello {user.first_name},\n'
        'We regret to inform you that, due to unforeseen circumstances beyond our control, '
        'we must cancel your bus booking with the following details:\n\n'
        + booking_details(user=user, route=route, booking=booking)
        + 'We apologize for any inconvenience caused by this cancellation, and we understand '
        'the impact it may have on your travel plans. Rest assured, our team is working '
        'diligently to address the situation and explore alternative solutions.\n\n'
        'If you have any further questions or require assistance, please feel free to contact '
        f'our customer support team at {customer_support}.\n'
    )
    return _to_html(message)


def customer_cancelled_booking(
    *, user: UserAccount, route: BusRoute, booking: Booking, customer_support: str
) -> str:
    message = (
        f'Hello {user.first_name},\n'
        'We have received your request to cancel your booking with the following details:\n\n'
        + booking_details(user=user, route=route, booking=booking)
        + 'We have processed your cancellation request, and we confirm that your booking has '
        'been successfully canceled as per your instructions.\n'
        'If you have any further questions or require assistance, please feel free to contact '
        f'our customer support team at {customer_support}.\n'
    )
    return _to_html(message)
