from datetime import date
from decimal import Decimal
from typing import Iterable, List, NamedTuple, Optional, Tuple

from tiketloka.core.exceptions import CheckoutError
from tiketloka.core.logging_config import get_logger
from tiketloka.schemas.booking import CartLineItem, to_visit_date
from tiketloka.utils.addons import id_keys, normalize_id, parse_addon_selection, same_selection
from tiketloka.utils.amounts import ZERO, to_quantity
from tiketloka.utils.pricing import price_line_item

logger = get_logger("cart")


class CartTotals(NamedTuple):
    total_qty: int
    base_subtotal: Decimal
    addon_subtotal: Decimal
    grand_total: Decimal


# ---------------------------------------------------------------------
# SELECTION
# ---------------------------------------------------------------------
class CartSelection:
    """Checkbox state of the cart page. Ids are kept in string form."""

    def __init__(self, ids: Iterable = ()):
        self._ids = id_keys(ids)

    def __contains__(self, item_id):
        return normalize_id(item_id) in self._ids

    def __iter__(self):
        return iter(sorted(self._ids))

    def __len__(self):
        return len(self._ids)

    def __eq__(self, other):
        if isinstance(other, CartSelection):
            return self._ids == other._ids
        return NotImplemented

    def __repr__(self):
        return f"CartSelection({sorted(self._ids)!r})"

    @property
    def ids(self) -> frozenset:
        return frozenset(self._ids)

    def toggle(self, item_id) -> bool:
        key = normalize_id(item_id)
        if key is None:
            return False
        if key in self._ids:
            self._ids.remove(key)
            return False
        self._ids.add(key)
        return True

    def discard(self, item_id):
        self._ids.discard(normalize_id(item_id))

    def is_all_selected(self, items) -> bool:
        keys = [normalize_id(item.id) for item in items]
        return bool(keys) and all(key in self._ids for key in keys)

    def toggle_all(self, items):
        if self.is_all_selected(items):
            self._ids.clear()
        else:
            self._ids = id_keys(item.id for item in items)

    def selected_items(self, items) -> list:
        return [item for item in items if normalize_id(item.id) in self._ids]

    def can_checkout(self, items) -> bool:
        return bool(self.selected_items(items))


# ---------------------------------------------------------------------
# TOTALS
# ---------------------------------------------------------------------
def aggregate(items, selected_ids) -> CartTotals:
    """Totals for the selected cart rows; unselected rows are ignored."""
    wanted = id_keys(selected_ids)

    total_qty = 0
    base_subtotal = ZERO
    addon_subtotal = ZERO

    for item in items:
        if normalize_id(item.id) not in wanted:
            continue

        line = price_line_item(item)
        addon_share = line.per_unit_addon_total * item.quantity
        # a persisted subtotal overrides the base share, add-ons stay as priced
        base_share = line.subtotal - addon_share

        total_qty += item.quantity
        base_subtotal += base_share
        addon_subtotal += addon_share

    return CartTotals(total_qty, base_subtotal, addon_subtotal, base_subtotal + addon_subtotal)


# ---------------------------------------------------------------------
# ADD / REMOVE
# ---------------------------------------------------------------------
def _same_row(row, destination_key, visit_date, selection):
    row_destination = row.destination.id if row.destination.id is not None else row.destination_id
    return (
        normalize_id(row_destination) == destination_key
        and row.visit_date == visit_date
        and same_selection(row.selected_addon_ids, selection)
    )


def _next_row_id(rows):
    return max((row.id for row in rows if isinstance(row.id, int)), default=0) + 1


def add_to_cart(
    rows: List[CartLineItem],
    destination,
    quantity,
    visit_date,
    addons=None,
    today: Optional[date] = None,
) -> Tuple[List[CartLineItem], CartLineItem]:
    """
    Add tickets to the cart.

    Same destination, same visit date and the same add-on choice merge into
    one row; a different add-on choice becomes a separate row.
    """
    quantity = to_quantity(quantity)
    if quantity < 1:
        raise CheckoutError("Quantity must be at least 1")

    visit_date = to_visit_date(visit_date)
    if visit_date is None:
        raise CheckoutError("A valid visit date is required")

    today = today or date.today()
    if visit_date < today:
        raise CheckoutError("Cannot book past dates")

    selection = parse_addon_selection(addons)
    destination_key = normalize_id(destination.id)

    updated = list(rows)
    for index, row in enumerate(updated):
        if _same_row(row, destination_key, visit_date, selection):
            merged = row.model_copy(update={"quantity": row.quantity + quantity})
            updated[index] = merged
            logger.info(
                f"Cart row updated | Row={merged.id} | Destination={destination_key} | Qty={merged.quantity}"
            )
            return updated, merged

    row = CartLineItem(
        id=_next_row_id(updated),
        destination=destination,
        destination_id=destination.id,
        quantity=quantity,
        visit_date=visit_date,
        selected_addon_ids=selection,
    )
    updated.append(row)

    logger.info(
        f"Cart row added | Row={row.id} | Destination={destination_key} | Qty={quantity}"
    )
    return updated, row


def remove_from_cart(rows, row_id, selection: Optional[CartSelection] = None) -> list:
    key = normalize_id(row_id)
    remaining = [row for row in rows if normalize_id(row.id) != key]

    if selection is not None:
        selection.discard(row_id)

    if len(remaining) != len(rows):
        logger.info(f"Cart row removed | Row={key}")
    return remaining
