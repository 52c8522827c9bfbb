import os
from datetime import date, timedelta

import pytest

# keep test runs from writing rotating log files
os.environ.setdefault("TIKETLOKA_LOG_TO_FILES", "false")

from tiketloka.schemas.booking import Booking, CartLineItem  # noqa: E402
from tiketloka.schemas.destination import Destination  # noqa: E402


@pytest.fixture
def today():
    return date(2025, 12, 15)


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def tomorrow(today):
    return today + timedelta(days=1)


@pytest.fixture
def bromo():
    return Destination.model_validate({
        "id": 1,
        "name": "Bromo Sunrise Tour",
        "price": "100000.00",
        "addons": [
            {"id": 1, "name": "Lunch", "price": "20000.00"},
            {"id": 2, "name": "Jeep", "price": 50000},
            {"id": 3, "name": "Horse ride", "price": "35000"},
        ],
    })


@pytest.fixture
def kawah_ijen():
    return Destination.model_validate({
        "id": 2,
        "name": "Kawah Ijen",
        "price": 50000,
        "addons": [],
    })


@pytest.fixture
def make_row():
    def _make(row_id, destination, quantity=1, addons=None, visit_date="2025-12-20", **extra):
        payload = {
            "id": row_id,
            "destination_id": destination.id,
            "destination": destination.model_dump(by_alias=False),
            "quantity": quantity,
            "visit_date": visit_date,
            "addons": addons,
        }
        payload.update(extra)
        return CartLineItem.model_validate(payload)

    return _make


@pytest.fixture
def pending_booking(bromo, tomorrow):
    return Booking.model_validate({
        "booking_code": "AB12CD34",
        "status": "pending",
        "grand_total": "240000.00",
        "payment_method": "qris",
        "details": [
            {
                "destination": bromo.model_dump(),
                "quantity": 2,
                "price_per_unit": "100000.00",
                "subtotal": "240000.00",
                "visit_date": tomorrow.isoformat(),
                "addons": "[1]",
                "ticket_code": "TKT-1-QWERTY",
            }
        ],
    })
