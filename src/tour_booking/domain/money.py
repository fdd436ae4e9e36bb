"""Currency amount helpers."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENTS = Decimal("0.01")


def to_amount(value: object) -> Decimal:
    """Convert a raw price into a non-negative ``Decimal``."""
    if isinstance(value, bool):
        raise ValueError(f"not a price: {value!r}")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"not a price: {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"not a price: {value!r}")
    return amount


def format_amount(amount: Decimal, symbol: str = "₹") -> str:
    """Format an amount with Indian digit grouping, e.g. ``₹1,50,000``."""
    quantized = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    whole, _, fraction = f"{abs(quantized):f}".partition(".")
    grouped = whole[-3:]
    rest = whole[:-3]
    while rest:
        grouped = f"{rest[-2:]},{grouped}"
        rest = rest[:-2]
    if fraction.strip("0"):
        return f"{sign}{symbol}{grouped}.{fraction}"
    return f"{sign}{symbol}{grouped}"
