"""Transition Event Source Tags"""

from enum import StrEnum


class EventSource(StrEnum):
    CONFIRMED = 'booking:confirmed'
    CANCELLED = 'booking:cancelled'
