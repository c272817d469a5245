"""
Decimal helpers -- conversion, validation and rounding for stock math.

Responsibility:
    Single place where raw upstream numbers (ints, floats, numeric strings,
    Decimals, None) become ``Decimal``.  Every engine funnels its inputs
    through these helpers so that no binary floating-point value takes part
    in quantity or money arithmetic.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Floats are converted through ``str()`` so that ``0.111111`` becomes
      ``Decimal("0.111111")`` and not its binary expansion.
    - Money rounding is ROUND_HALF_UP, never banker's rounding.
    - ``ceil_to_multiple`` always rounds toward positive infinity.
    - Rounding helpers widen the context precision instead of failing on
      values with more than 28 significant digits.

Failure modes:
    - ``to_decimal`` raises ``decimal.InvalidOperation`` for unparseable
      strings and ``TypeError`` for unsupported types (including bool).
    - ``as_quantity`` and ``is_valid_decimal`` never raise.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext, localcontext
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a raw upstream number to Decimal.

    Preconditions:
        value is None, int, float, str or Decimal.

    Postconditions:
        None maps to Decimal("0").  The result may be non-finite
        (NaN / Infinity) when the input is; callers decide what to do
        with that.

    Raises:
        InvalidOperation: value is a string that is not a number.
        TypeError: value is a bool or an unsupported type.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # bool is an int subclass; True must not silently become 1
    if isinstance(value, bool):
        raise TypeError(f"Cannot convert bool to Decimal: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        return Decimal(value.strip())
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def is_valid_decimal(value: Any) -> bool:
    """True if value converts to a finite Decimal."""
    try:
        return to_decimal(value).is_finite()
    except (InvalidOperation, TypeError, ValueError):
        return False


def as_quantity(value: Any) -> Decimal:
    """
    Tolerant conversion for stock quantities.

    Missing, unparseable and NaN values read as zero.  Infinities are kept:
    they compare correctly against thresholds.
    """
    try:
        quantity = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    if quantity.is_nan():
        return ZERO
    return quantity


def exact_context(*values: Decimal):
    """
    Local decimal context wide enough to add, subtract, integer-divide or
    quantize the given finite values without losing digits.

    The default 28-digit context raises ``InvalidOperation`` from
    ``quantize`` and ``divmod`` once a result needs more digits than that.
    Non-finite values are ignored.
    """
    finite = [v for v in values if v.is_finite()]
    precision = getcontext().prec
    if finite:
        spread = max(v.adjusted() for v in finite) - min(v.as_tuple().exponent for v in finite)
        precision = max(precision, spread + 2)
    return localcontext(prec=precision)


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """
    Round to ``places`` decimal places, half up.

    Preconditions:
        value is finite.  Any magnitude is accepted.
    """
    exponent = Decimal(1).scaleb(-places)
    with exact_context(value, exponent):
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def ceil_to_multiple(value: Decimal, multiple: Decimal) -> Decimal:
    """
    Round value up to the next multiple: ``ceiling(value / multiple) * multiple``.

    Computed with an exact integer quotient and remainder, so the result is
    never below ``value`` however large it is.

    Preconditions:
        value is finite; multiple > 0 and finite.
    """
    if multiple <= ZERO or not multiple.is_finite():
        raise ValueError(f"multiple must be positive and finite, got {multiple}")
    with exact_context(value, multiple):
        steps, remainder = divmod(value, multiple)
        # Decimal // truncates toward zero; only a positive remainder rounds up
        if remainder > ZERO:
            steps += 1
        return steps * multiple
