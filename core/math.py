"""
core/math.py - Scalar normalization.

CRITICAL: No float allowed for amounts or prices.
On-chain values are unscaled int; human values are Decimal.
Normalization happens once, at the query facade.
"""

from decimal import Context, Decimal, InvalidOperation, ROUND_DOWN, localcontext

from core.constants import DECIMAL_PRECISION, FLOAT_SCALAR, U64_MAX
from core.exceptions import ValidationError


def _context() -> Context:
    """Decimal context wide enough for u256 / 10^12 without rounding."""
    return Context(prec=DECIMAL_PRECISION)


# =============================================================================
# SAFE CONVERSIONS (NO FLOAT)
# =============================================================================

def validate_no_float(value: object, field: str = "value") -> None:
    """Raise ValidationError if value is a float."""
    if isinstance(value, float):
        raise ValidationError(
            "Float values are not allowed. Use int, str, or Decimal.",
            details={"field": field, "value": value, "type": type(value).__name__},
        )


def safe_decimal(value: int | str | Decimal) -> Decimal:
    """
    Safely convert value to Decimal.

    Raises ValidationError if float is passed or conversion fails.
    """
    validate_no_float(value)

    try:
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValidationError(
            f"Cannot convert to Decimal: {value}",
            details={"value": value, "type": type(value).__name__, "error": str(e)},
        )


def validate_u64(value: object, field: str = "value") -> int:
    """Return value if it is an int that fits a Move u64, else raise ValidationError."""
    validate_no_float(value, field)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
        raise ValidationError(
            f"{field} must be an int in [0, 2^64 - 1]: {value!r}",
            details={"field": field, "value": str(value), "type": type(value).__name__},
        )
    return value


def _check_scalar(scalar: int) -> None:
    if isinstance(scalar, bool) or not isinstance(scalar, int) or scalar <= 0:
        raise ValidationError(
            f"Scalar must be a positive int: {scalar!r}",
            details={"scalar": scalar},
        )


def _check_u64(raw: int, field: str, value: object) -> int:
    if raw > U64_MAX:
        raise ValidationError(
            f"{field} {value} does not fit in u64 after scaling",
            details={"field": field, "value": str(value), "raw": str(raw)},
        )
    return raw


def _check_raw(raw: int) -> None:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ValidationError(
            f"Raw on-chain amount must be a non-negative int: {raw!r}",
            details={"raw": raw},
        )


# =============================================================================
# ON-CHAIN -> HUMAN
# =============================================================================

def normalize_amount(raw: int, scalar: int) -> Decimal:
    """
    Convert an unscaled on-chain amount to a human quantity.

    Example: normalize_amount(100, 100) -> Decimal('1')
    """
    _check_raw(raw)
    _check_scalar(scalar)
    with localcontext(_context()):
        return Decimal(raw) / Decimal(scalar)


def normalize_price(raw: int, base_scalar: int, quote_scalar: int) -> Decimal:
    """
    Convert an on-chain price to quote units per base unit.

    price = raw * base_scalar / quote_scalar / FLOAT_SCALAR
    The multiply happens before either divide.
    """
    _check_raw(raw)
    _check_scalar(base_scalar)
    _check_scalar(quote_scalar)
    with localcontext(_context()):
        return Decimal(raw * base_scalar) / Decimal(quote_scalar) / Decimal(FLOAT_SCALAR)


# =============================================================================
# HUMAN -> ON-CHAIN
# =============================================================================

def denormalize_amount(quantity: int | str | Decimal, scalar: int) -> int:
    """
    Convert a human quantity to an unscaled on-chain amount (rounded down).

    Example: denormalize_amount('1.5', 10**9) -> 1500000000
    """
    _check_scalar(scalar)
    value = safe_decimal(quantity)
    if value < 0:
        raise ValidationError(f"Quantity cannot be negative: {quantity}", details={"quantity": str(quantity)})
    with localcontext(_context()):
        raw = int((value * scalar).to_integral_value(rounding=ROUND_DOWN))
    return _check_u64(raw, "quantity", quantity)


def denormalize_price(price: int | str | Decimal, base_scalar: int, quote_scalar: int) -> int:
    """
    Convert a human price to the on-chain fixed point price (rounded down).

    raw = price * FLOAT_SCALAR * quote_scalar / base_scalar
    """
    _check_scalar(base_scalar)
    _check_scalar(quote_scalar)
    value = safe_decimal(price)
    if value < 0:
        raise ValidationError(f"Price cannot be negative: {price}", details={"price": str(price)})
    with localcontext(_context()):
        scaled = value * FLOAT_SCALAR * quote_scalar / Decimal(base_scalar)
        raw = int(scaled.to_integral_value(rounding=ROUND_DOWN))
    return _check_u64(raw, "price", price)
