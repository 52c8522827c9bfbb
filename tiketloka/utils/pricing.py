from decimal import Decimal
from typing import NamedTuple

from tiketloka.utils.addons import resolve_selected_addons
from tiketloka.utils.amounts import ZERO, to_amount


class LinePrice(NamedTuple):
    unit_base: Decimal
    per_unit_addon_total: Decimal
    computed_subtotal: Decimal
    subtotal: Decimal
    is_persisted: bool


def unit_base_price(item) -> Decimal:
    # price snapshot first, live destination price only if none was taken
    if item.unit_price is not None:
        return to_amount(item.unit_price)
    return to_amount(item.destination.base_price)


def addon_unit_total(destination, selection) -> Decimal:
    addons = resolve_selected_addons(destination.addons, selection)
    return sum((to_amount(addon.price) for addon in addons), ZERO)


def compute_subtotal(unit_base, per_unit_addon_total, quantity) -> Decimal:
    return (to_amount(unit_base) + to_amount(per_unit_addon_total)) * quantity


def price_line_item(item) -> LinePrice:
    """
    Price one cart row or booking detail.

    The backend subtotal wins when it is present and positive; a zero
    subtotal means "not computed yet", never a free order.
    """
    unit_base = unit_base_price(item)
    per_unit_addon_total = addon_unit_total(item.destination, item.selected_addon_ids)
    computed = compute_subtotal(unit_base, per_unit_addon_total, item.quantity)

    persisted = item.persisted_subtotal
    if persisted is not None and persisted > 0:
        return LinePrice(unit_base, per_unit_addon_total, computed, persisted, True)

    return LinePrice(unit_base, per_unit_addon_total, computed, computed, False)


def booking_grand_total(booking) -> Decimal:
    """Total shown on the payment and tickets pages."""
    if booking.grand_total is not None and booking.grand_total > 0:
        return booking.grand_total

    return sum((price_line_item(detail).subtotal for detail in booking.details), ZERO)
