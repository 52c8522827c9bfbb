from datetime import date, datetime
from typing import Optional

from tiketloka.core.exceptions import InvalidTransitionError
from tiketloka.core.logging_config import get_logger
from tiketloka.models.enums import EXPIRED_LABEL, BookingStatus, parse_status, status_label
from tiketloka.schemas.booking import Booking
from tiketloka.services.countdown import PaymentCountdown

logger = get_logger("booking")
payment_logger = get_logger("payment")

TERMINAL_STATUSES = (BookingStatus.PAID, BookingStatus.CANCELLED)


# ---------------------------------------------------------------------
# EXPIRY (derived, never stored)
# ---------------------------------------------------------------------
def is_expired(status, detail, today: Optional[date] = None) -> bool:
    if parse_status(status) != BookingStatus.PAID:
        return False
    if detail is None or detail.visit_date is None:
        return False

    # "today" is read on every call, never cached
    today = today or date.today()
    return detail.visit_date < today


def display_status(status, detail=None, today: Optional[date] = None) -> str:
    if is_expired(status, detail, today):
        return EXPIRED_LABEL
    return status_label(status)


# ---------------------------------------------------------------------
# STATE MACHINE
# ---------------------------------------------------------------------
class BookingLifecycle:
    """
    pending -> paid       (confirm_payment, repeatable)
    pending -> cancelled  (cancel)

    paid and cancelled are terminal. The payment countdown lives only
    while the booking is pending.
    """

    def __init__(self, booking: Booking, countdown: Optional[PaymentCountdown] = None):
        self.booking = booking
        self._countdown = None
        if countdown is not None:
            self.attach_countdown(countdown)

    @property
    def status(self):
        return self.booking.status

    @property
    def is_pending(self) -> bool:
        return self.booking.status == BookingStatus.PENDING

    @property
    def countdown(self) -> Optional[PaymentCountdown]:
        return self._countdown

    # ---- COUNTDOWN ----
    def attach_countdown(self, countdown: PaymentCountdown) -> Optional[PaymentCountdown]:
        if not self.is_pending:
            countdown.cancel()
            return None
        if countdown is self._countdown:
            return countdown

        self._release_countdown()
        self._countdown = countdown
        return countdown

    def start_countdown(self, **kwargs) -> Optional[PaymentCountdown]:
        """Create and start a countdown on the running loop (pending only)."""
        countdown = self.attach_countdown(PaymentCountdown(**kwargs))
        if countdown is not None:
            countdown.start()
        return countdown

    def _release_countdown(self):
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def close(self):
        self._release_countdown()

    # ---- TRANSITIONS ----
    def confirm_payment(self, paid_at: Optional[datetime] = None) -> Booking:
        code = self.booking.booking_code

        # ✅ IDEMPOTENCY CHECK
        if self.status == BookingStatus.PAID:
            payment_logger.info(f"Payment already confirmed | Booking={code}")
            return self.booking

        if self.status != BookingStatus.PENDING:
            payment_logger.warning(f"Payment rejected | Booking={code} | Status={status_label(self.status)}")
            raise InvalidTransitionError(code, status_label(self.status), "confirm payment for")

        self.booking.status = BookingStatus.PAID
        self.booking.paid_at = paid_at or datetime.now()
        self._release_countdown()

        payment_logger.info(f"Payment confirmed | Booking={code}")
        return self.booking

    def cancel(self) -> Booking:
        code = self.booking.booking_code

        if self.status != BookingStatus.PENDING:
            logger.warning(f"Cancel rejected | Booking={code} | Status={status_label(self.status)}")
            raise InvalidTransitionError(code, status_label(self.status), "cancel")

        self.booking.status = BookingStatus.CANCELLED
        self._release_countdown()

        logger.info(f"Booking cancelled | Booking={code}")
        return self.booking

    def refresh(self, snapshot: Booking) -> Booking:
        """Adopt a fresh backend snapshot of the same booking."""
        if snapshot.booking_code != self.booking.booking_code:
            raise ValueError(
                f"Snapshot {snapshot.booking_code!r} does not belong to booking {self.booking.booking_code!r}"
            )

        if self.status in TERMINAL_STATUSES and snapshot.status != self.status:
            raise InvalidTransitionError(
                self.booking.booking_code, status_label(self.status), f"move to '{status_label(snapshot.status)}'"
            )

        self.booking = snapshot
        if not self.is_pending:
            self._release_countdown()
        return self.booking

    # ---- VIEW ----
    def is_expired(self, detail, today: Optional[date] = None) -> bool:
        return is_expired(self.status, detail, today)

    def display_status(self, detail=None, today: Optional[date] = None) -> str:
        return display_status(self.status, detail, today)
