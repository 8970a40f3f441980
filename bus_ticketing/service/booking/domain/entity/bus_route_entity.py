from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs


@attrs.define
class BusRoute:
    id: str
    bus_id: str
    bus_unit_id: str
    from_route: str
    to_route: str
    departure_time: str = ''
    arrival_time: str = ''
    currency_code: str = ''
    rate: Decimal = Decimal('0')
    active: bool = True
    date_created: Optional[datetime] = None
