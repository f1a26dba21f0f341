"""Fixed-point currency helpers.

All amounts are ``decimal.Decimal``. Floats are converted through their
shortest ``repr`` so that ``28.9`` becomes ``Decimal("28.9")`` and not the
binary approximation.

Prices are bounded: below ``MAX_AMOUNT`` and with at most ``MAX_SCALE``
decimal places. Within those bounds every sum, product and quantize the
engine performs fits in ``CONTEXT_DIGITS`` significant digits.
"""

from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)

from ordering.pricing.errors import InvalidPrice

ZERO = Decimal("0")

MAX_AMOUNT = Decimal(10) ** 18
MAX_SCALE = 12
CONTEXT_DIGITS = 60

# Rounds silently; used for quantizing to the currency precision.
MONEY_CONTEXT = Context(
    prec=CONTEXT_DIGITS,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

# Raises ``Inexact`` instead of rounding; used for line and total arithmetic.
EXACT_CONTEXT = Context(
    prec=CONTEXT_DIGITS,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)

ROUNDING_MODES = {
    "half_even": ROUND_HALF_EVEN,
    "half_up": ROUND_HALF_UP,
    "half_down": ROUND_HALF_DOWN,
    "up": ROUND_UP,
    "down": ROUND_DOWN,
    "ceiling": ROUND_CEILING,
    "floor": ROUND_FLOOR,
}


def to_decimal(value, field="unit_price") -> Decimal:
    """Convert a price-like value to a bounded, non-negative ``Decimal``.

    Raises ``InvalidPrice`` for anything else (``None``, booleans, text that
    is not a number, NaN, infinities, negative amounts, amounts of
    ``MAX_AMOUNT`` or more and amounts with more than ``MAX_SCALE`` decimal
    places).
    """
    if value is None or isinstance(value, bool):
        raise InvalidPrice(value, field)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int | float | str):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidPrice(value, field) from None
    else:
        raise InvalidPrice(value, field)

    if not amount.is_finite() or amount < ZERO or amount >= MAX_AMOUNT:
        raise InvalidPrice(value, field)
    if amount != amount.quantize(quantum(MAX_SCALE), rounding=ROUND_DOWN, context=MONEY_CONTEXT):
        raise InvalidPrice(value, field)

    return amount


def quantum(precision: int) -> Decimal:
    """Smallest currency unit for ``precision`` decimal places, e.g. ``0.01``."""
    return Decimal(1).scaleb(-precision, context=MONEY_CONTEXT)


def quantize(amount: Decimal, precision: int, rounding: str) -> Decimal:
    return amount.quantize(quantum(precision), rounding=ROUNDING_MODES[rounding], context=MONEY_CONTEXT)


def format_amount(amount: Decimal, precision: int) -> str:
    return f"{amount:.{precision}f}"
