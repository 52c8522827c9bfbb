from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"

    @classmethod
    def _missing_(cls, value):
        # older backend rows use payment-style names
        if isinstance(value, str):
            key = value.strip().lower()
            key = {"success": "paid", "failed": "cancelled"}.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        return None


class PaymentMethod(str, Enum):
    QRIS = "qris"
    BANK_TRANSFER = "bank_transfer"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            key = {"bca": "bank_transfer", "transfer": "bank_transfer"}.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        return None


class TicketTab(str, Enum):
    ALL = "all"
    PAID = "paid"
    PENDING = "pending"
    CANCELLED = "cancelled"


EXPIRED_LABEL = "expired"


def parse_status(value):
    """
    Known statuses become ``BookingStatus``; anything else is kept as a
    lower-cased label so a single odd row never breaks a listing.
    """
    if isinstance(value, BookingStatus):
        return value
    if value is None:
        return BookingStatus.PENDING

    label = str(value).strip().lower()
    if not label:
        return BookingStatus.PENDING
    try:
        return BookingStatus(label)
    except ValueError:
        return label


def status_label(status) -> str:
    status = parse_status(status)
    return status.value if isinstance(status, BookingStatus) else status
