"""Exact decimal helpers for prices, quantities, and wire payloads.

All monetary values use Decimal. JSON numbers are decoded straight into
Decimal (never through a binary float) so "0.1" on the wire stays 0.1.
"""

import json
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Any

# Enough headroom for satoshi-scale ticks against whole-fiat prices.
_PRECISION = 50


def loads(raw: bytes | str) -> Any:
    """Decode JSON with every non-integer number parsed as Decimal."""
    return json.loads(raw, parse_float=Decimal)


def to_decimal(value: Any) -> Decimal:
    """Convert a decoded JSON scalar to Decimal.

    Floats are routed through ``str`` so a caller passing a Python float
    gets its shortest repr, not its binary expansion. Booleans are rejected.

    Raises:
        ValueError: If the value is not a finite number or numeric string.
    """
    if isinstance(value, bool):
        raise ValueError(f"expected a decimal, got bool {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation as exc:
            raise ValueError(f"invalid decimal {value!r}") from exc
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        raise ValueError(f"expected a decimal, got {type(value).__name__}")
    if not result.is_finite():
        raise ValueError(f"decimal must be finite, got {value!r}")
    return result


def round_to_step(value: Decimal, step: Decimal) -> Decimal:
    """Round a value toward zero to the nearest step increment.

    Decimal integer division truncates toward zero, so this never rounds
    half-up or half-even: 123456.7 with step 10 gives 123450.

    Args:
        value: The raw price or quantity.
        step: The increment (tick size or lot step), must be positive.

    Returns:
        The largest multiple of step not exceeding value in magnitude.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return (value // step) * step


def decimal_places(value: Decimal) -> int:
    """Number of significant fractional digits (0.0010 -> 3, 10 -> 0)."""
    exponent = value.normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


def quantize_down(value: Decimal, scale: int) -> Decimal:
    """Truncate value to ``scale`` fractional digits."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return value.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_DOWN)


def to_fixed_string(value: Decimal, scale: int) -> str:
    """Render value as a fixed-point string with exactly ``scale`` digits.

    Never uses exponent notation: Decimal("1E+2") at scale 2 is "100.00".
    """
    return format(quantize_down(value, scale), "f")
