from datetime import date
from decimal import Decimal
from typing import List, NamedTuple, Optional, Union

from tiketloka.models.enums import BookingStatus, TicketTab
from tiketloka.schemas.booking import BookingDetail
from tiketloka.services.lifecycle import display_status
from tiketloka.utils.pricing import price_line_item


class TicketView(NamedTuple):
    detail: BookingDetail
    parent_code: str
    parent_status: Union[BookingStatus, str]
    relative_index: int
    subtotal: Decimal
    status_label: str


def flatten_tickets(bookings, today: Optional[date] = None) -> List[TicketView]:
    """One entry per booking detail, newest booking order preserved."""
    tickets = []
    for booking in bookings:
        for index, detail in enumerate(booking.details):
            tickets.append(
                TicketView(
                    detail=detail,
                    parent_code=booking.booking_code,
                    parent_status=booking.status,
                    relative_index=index,
                    subtotal=price_line_item(detail).subtotal,
                    status_label=display_status(booking.status, detail, today),
                )
            )
    return tickets


def filter_tickets(tickets, tab=TicketTab.ALL, query: str = "") -> List[TicketView]:
    tab = TicketTab(tab)
    needle = (query or "").strip().lower()

    result = []
    for ticket in tickets:
        if tab != TicketTab.ALL and display_status(ticket.parent_status) != tab.value:
            continue
        if needle and not (
            needle in ticket.detail.destination.name.lower()
            or needle in ticket.parent_code.lower()
        ):
            continue
        result.append(ticket)
    return result


def ticket_detail(booking, index) -> Optional[BookingDetail]:
    """Detail shown on the e-ticket page; bad indexes fall back to the first."""
    if not booking.details:
        return None

    try:
        index = int(index)
    except (TypeError, ValueError):
        index = 0

    if 0 <= index < len(booking.details):
        return booking.details[index]
    return booking.details[0]
