from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")


def to_amount(value, default: Decimal = ZERO) -> Decimal:
    """
    Coerce a price-like wire value into a finite Decimal.

    The backend serializes decimal columns as strings ("100000.00") and
    older rows as numbers; anything unreadable becomes ``default`` so a
    bad field can never turn a displayed total into NaN.
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, int):
            amount = Decimal(value)
        elif isinstance(value, float):
            amount = Decimal(repr(value))
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return default
            amount = Decimal(text)
        else:
            return default
    except (InvalidOperation, ValueError):
        return default

    if not amount.is_finite():
        return default
    return amount


def to_optional_amount(value):
    if value is None:
        return None
    return to_amount(value)


def to_quantity(value, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value

    amount = to_amount(value, default=None)
    if amount is None:
        return default
    return int(amount)
