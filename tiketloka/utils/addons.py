import json
import math
from decimal import Decimal
from typing import Iterable, List, Optional

from tiketloka.core.logging_config import get_logger

logger = get_logger("cart")

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def normalize_id(value) -> Optional[str]:
    """String form of an opaque identifier, so 1, 1.0 and "1" compare equal."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    if isinstance(value, (float, Decimal)):
        if value == int(value):
            return str(int(value))
        return str(value)
    if isinstance(value, str):
        text = value.strip()
        return text or None
    return None


def id_keys(values) -> set:
    """Normalized ids of ``values``; unusable ids are left out."""
    keys = {normalize_id(value) for value in values}
    keys.discard(None)
    return keys


def coerce_id(value):
    """Keep int and str ids as sent; anything else goes through normalize_id."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        return value
    return normalize_id(value)


def parse_addon_selection(selection) -> List[str]:
    """
    Normalize an add-on selection coming off the wire.

    Cart rows store the selection as a JSON string ("[1,2]"), the checkout
    form sends a native list, and some booking rows were encoded twice.
    Whatever arrives, the result is a de-duplicated list of string ids;
    unreadable input means "nothing selected".
    """
    raw = selection

    # a double-encoded column decodes to another JSON string first
    for _ in range(2):
        if not isinstance(raw, str):
            break
        if not raw.strip():
            return []
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.debug(f"Unreadable add-on selection dropped: {selection!r}")
            return []

    if not isinstance(raw, _SEQUENCE_TYPES):
        if raw is not None:
            logger.debug(f"Add-on selection is not a list, ignoring: {selection!r}")
        return []

    ids = []
    seen = set()
    for value in raw:
        key = normalize_id(value)
        if key is None or key in seen:
            continue
        seen.add(key)
        ids.append(key)
    return ids


def _addon_id(addon):
    if isinstance(addon, dict):
        return addon.get("id")
    return getattr(addon, "id", None)


def resolve_selected_addons(catalog: Optional[Iterable], selection) -> list:
    """Return the catalog entries picked by ``selection``, in catalog order."""
    wanted = set(parse_addon_selection(selection))
    if not wanted or not catalog:
        return []

    return [addon for addon in catalog if normalize_id(_addon_id(addon)) in wanted]


def same_selection(left, right) -> bool:
    return set(parse_addon_selection(left)) == set(parse_addon_selection(right))
