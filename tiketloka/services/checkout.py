import secrets
import string
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Tuple

from tiketloka.core.config import BOOKING_CODE_LENGTH, QR_PREFIX, TICKET_SUFFIX_LENGTH
from tiketloka.core.exceptions import CheckoutError
from tiketloka.core.logging_config import get_logger
from tiketloka.models.enums import BookingStatus, PaymentMethod
from tiketloka.schemas.booking import Booking, BookingDetail, to_visit_date
from tiketloka.utils.addons import id_keys, normalize_id, parse_addon_selection
from tiketloka.utils.amounts import ZERO, to_amount, to_quantity
from tiketloka.utils.pricing import addon_unit_total, compute_subtotal

logger = get_logger("booking")

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def random_code(length: int) -> str:
    return "".join(secrets.choice(_CODE_ALPHABET) for _ in range(length))


def generate_booking_code(is_code_taken: Optional[Callable[[str], bool]] = None) -> str:
    while True:
        code = random_code(BOOKING_CODE_LENGTH)
        if is_code_taken is None or not is_code_taken(code):
            return code


def generate_ticket_code(destination_id) -> str:
    return f"TKT-{normalize_id(destination_id)}-{random_code(TICKET_SUFFIX_LENGTH)}"


def qr_string(booking_code: str) -> str:
    return f"{QR_PREFIX}|{booking_code}"


def _payment_method(value) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError:
        raise CheckoutError(f"Unsupported payment method: {value!r}")


# ---------------------------------------------------------------------
# ORDER DETAIL
# ---------------------------------------------------------------------
def build_detail(destination, quantity, visit_date, addons) -> BookingDetail:
    """Snapshot the destination price and freeze the subtotal for one line."""
    quantity = to_quantity(quantity)
    if quantity < 1:
        raise CheckoutError("Quantity must be at least 1")

    visit_date = to_visit_date(visit_date)
    if visit_date is None:
        raise CheckoutError("A valid visit date is required")

    selection = parse_addon_selection(addons)
    unit_price = to_amount(destination.base_price)

    # (ticket price + add-ons) * quantity
    subtotal = compute_subtotal(unit_price, addon_unit_total(destination, selection), quantity)

    return BookingDetail(
        destination=destination,
        quantity=quantity,
        visit_date=visit_date,
        selected_addon_ids=selection,
        unit_price=unit_price,
        persisted_subtotal=subtotal,
        ticket_code=generate_ticket_code(destination.id),
    )


def _new_booking(details, payment_method, is_code_taken, now) -> Booking:
    booking_code = generate_booking_code(is_code_taken)
    grand_total = sum((detail.persisted_subtotal for detail in details), ZERO)

    return Booking(
        booking_code=booking_code,
        details=details,
        status=BookingStatus.PENDING,
        grand_total=grand_total,
        payment_method=payment_method,
        qr_string=qr_string(booking_code),
        created_at=now or datetime.now(),
    )


# ---------------------------------------------------------------------
# CHECKOUT (selected cart rows)
# ---------------------------------------------------------------------
def checkout(
    rows,
    cart_ids: Iterable,
    payment_method,
    is_code_taken: Optional[Callable[[str], bool]] = None,
    now: Optional[datetime] = None,
) -> Tuple[Booking, List]:
    """
    Turn the selected cart rows into one pending booking.

    Returns the booking and the ids of the cart rows it consumed; the
    caller removes those rows from the cart.
    """
    method = _payment_method(payment_method)

    wanted = id_keys(cart_ids)
    chosen = [row for row in rows if normalize_id(row.id) in wanted]
    if not chosen:
        raise CheckoutError("No valid cart items were selected")

    details = [
        build_detail(row.destination, row.quantity, row.visit_date, row.selected_addon_ids)
        for row in chosen
    ]
    booking = _new_booking(details, method, is_code_taken, now)

    logger.info(
        f"Checkout | Booking={booking.booking_code} | Items={len(details)} | Total={booking.grand_total}"
    )
    return booking, [row.id for row in chosen]


# ---------------------------------------------------------------------
# BUY NOW (single destination, skips the cart)
# ---------------------------------------------------------------------
def buy_now(
    destination,
    quantity,
    visit_date,
    payment_method,
    addons=None,
    is_code_taken: Optional[Callable[[str], bool]] = None,
    now: Optional[datetime] = None,
    today: Optional[date] = None,
) -> Booking:
    method = _payment_method(payment_method)

    visit = to_visit_date(visit_date)
    if visit is not None and visit < (today or date.today()):
        raise CheckoutError("Cannot book past dates")

    detail = build_detail(destination, quantity, visit_date, addons)
    booking = _new_booking([detail], method, is_code_taken, now)

    logger.info(
        f"Buy now | Booking={booking.booking_code} | Destination={normalize_id(destination.id)} | Total={booking.grand_total}"
    )
    return booking
