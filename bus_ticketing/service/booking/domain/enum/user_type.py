from enum import StrEnum


class UserType(StrEnum):
    ADMIN = 'ADMIN'
    CUSTOMER = 'CUSTOMER'


# Account id prefix of staff actors; their cancellations get the staff wording
STAFF_ID_PREFIX = 'ADMN'
