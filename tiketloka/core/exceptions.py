"""Booking core exceptions."""


class BookingError(Exception):
    """Base error for the pricing and booking core."""


class InvalidTransitionError(BookingError):
    """A booking status change was rejected by the lifecycle rules."""

    def __init__(self, booking_code, current, action):
        self.booking_code = booking_code
        self.current = current
        self.action = action
        super().__init__(
            f"Cannot {action} booking {booking_code or '<unsaved>'} in status '{current}'"
        )


class CheckoutError(BookingError):
    """Cart or checkout input was rejected before an order could be built."""
