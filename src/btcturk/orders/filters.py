"""Order validation and normalization against a symbol's filters.

All calculations use Decimal arithmetic exclusively -- no float conversions.
Uses round_to_step for tick rounding (always toward zero, never banker's).

Validation flow, stopping at the first violation:
1. Symbol must be TRADING; price, stop price and quantity must be numbers
2. Price / stop price: range check, tick rounding, scale resolution
3. Quantity: positive, no digits beyond numerator_scale unless the symbol
   allows fractions, min/max amount
4. Notional: price * quantity >= min_exchange_value
5. Quantity <= maximum_order_amount

The market-price warning threshold is informational and never rejects an order.
"""

from decimal import Decimal

from btcturk.decimals import decimal_places, quantize_down, round_to_step, to_decimal
from btcturk.exceptions import (
    FractionalQuantityNotAllowed,
    InvalidOrderValue,
    NotionalTooSmall,
    OrderAmountTooLarge,
    PriceOutOfRange,
    PriceRoundingError,
    QuantityOutOfRange,
    SymbolNotTradable,
)
from btcturk.metadata.types import PriceFilter, Symbol
from btcturk.models import NormalizedOrder


def resolve_price_scale(
    symbol: Symbol, price_filter: PriceFilter | None, unit_scale: int | None = None
) -> int:
    """Number of fractional digits a rounded price is rendered with.

    Tick size is the authoritative price grain; ``denominator_scale`` is the
    default rendering. A tick finer than ``denominator_scale`` widens the
    rendering to the tick's own precision, as long as the price's minimal
    unit can still hold it.

    Args:
        symbol: Symbol being traded.
        price_filter: The symbol's price filter, if any.
        unit_scale: Decimal places of the denominator currency's minimal unit.
            None means ``denominator_scale`` is the minimal unit.

    Raises:
        PriceRoundingError: If the tick needs more digits than the minimal unit has.
    """
    scale = symbol.denominator_scale
    if price_filter is None:
        return scale

    tick_places = decimal_places(price_filter.tick_size)
    allowed = scale if unit_scale is None else max(scale, unit_scale)
    if tick_places > allowed:
        raise PriceRoundingError(symbol.name, price_filter.tick_size, allowed)
    return max(scale, tick_places)


def normalize_price(
    symbol: Symbol, price: Decimal, price_filter: PriceFilter | None
) -> Decimal:
    """Range-check a price and round it toward zero to the tick size.

    The rounded result is itself range-checked: rounding 17 down to a tick of
    10 must not produce a price below a min_price of 15.

    Raises:
        PriceOutOfRange: For non-positive prices, prices outside the filter
            bounds, or prices that round below one tick (or to zero
            at ``denominator_scale`` when there is no filter).
    """
    if price_filter is None:
        if price <= 0:
            raise PriceOutOfRange(symbol.name, price, Decimal("0"), Decimal("Infinity"))
        rounded = quantize_down(price, symbol.denominator_scale)
        if rounded <= 0:
            raise PriceOutOfRange(symbol.name, rounded, Decimal("0"), Decimal("Infinity"))
        return rounded

    min_price, max_price = price_filter.min_price, price_filter.max_price
    if price <= 0 or price < min_price or price > max_price:
        raise PriceOutOfRange(symbol.name, price, min_price, max_price)

    rounded = round_to_step(price, price_filter.tick_size)
    if rounded <= 0 or rounded < min_price:
        raise PriceOutOfRange(symbol.name, rounded, min_price, max_price)
    return rounded


def normalize_quantity(
    symbol: Symbol, quantity: Decimal, price_filter: PriceFilter | None
) -> Decimal:
    """Bring quantity to ``numerator_scale`` and check amount bounds.

    Symbols with ``has_fraction`` truncate excess digits. Symbols without it
    reject any digit beyond ``numerator_scale`` instead of truncating.

    Raises:
        QuantityOutOfRange: For non-positive quantities, quantities that
            truncate to zero, or quantities outside [min_amount, max_amount].
        FractionalQuantityNotAllowed: For excess digits on a no-fraction symbol.
    """
    min_amount = price_filter.min_amount if price_filter else None
    max_amount = price_filter.max_amount if price_filter else None

    if quantity <= 0:
        raise QuantityOutOfRange(symbol.name, quantity, min_amount, max_amount)

    rounded = quantize_down(quantity, symbol.numerator_scale)
    if not symbol.has_fraction and rounded != quantity:
        raise FractionalQuantityNotAllowed(symbol.name, quantity)
    if rounded <= 0:
        raise QuantityOutOfRange(symbol.name, rounded, min_amount, max_amount)

    if min_amount is not None and rounded < min_amount:
        raise QuantityOutOfRange(symbol.name, rounded, min_amount, max_amount)
    if max_amount is not None and rounded > max_amount:
        raise QuantityOutOfRange(symbol.name, rounded, min_amount, max_amount)
    return rounded


def validate_and_normalize(
    symbol: Symbol,
    price: Decimal | None,
    quantity: Decimal,
    *,
    stop_price: Decimal | None = None,
    price_unit_scale: int | None = None,
    enforce_maximum_order_amount: bool = True,
) -> NormalizedOrder:
    """Validate a proposed order and return it rounded for the wire.

    Args:
        symbol: Symbol from the current metadata snapshot.
        price: Limit price, None for market orders.
        quantity: Order quantity in the numerator currency.
        stop_price: Trigger price for stop orders.
        price_unit_scale: Decimal places of the denominator currency's
            minimal unit, used to decide whether a fine tick is representable.
        enforce_maximum_order_amount: Apply ``maximum_order_amount``.

    Returns:
        NormalizedOrder with rounded values and their rendering scales.

    Raises:
        FilterViolation: The first rule the order breaks.
    """
    if not symbol.is_trading:
        raise SymbolNotTradable(symbol.name, symbol.status)

    quantity = _as_decimal(symbol, "quantity", quantity)
    if price is not None:
        price = _as_decimal(symbol, "price", price)
    if stop_price is not None:
        stop_price = _as_decimal(symbol, "stopPrice", stop_price)

    price_filter = symbol.price_filter
    price_scale = symbol.denominator_scale
    rounded_price: Decimal | None = None
    rounded_stop: Decimal | None = None

    if price is not None or stop_price is not None:
        if price is not None:
            rounded_price = normalize_price(symbol, price, price_filter)
        if stop_price is not None:
            rounded_stop = normalize_price(symbol, stop_price, price_filter)
        price_scale = resolve_price_scale(symbol, price_filter, price_unit_scale)

    rounded_qty = normalize_quantity(symbol, quantity, price_filter)

    if (
        price_filter is not None
        and price_filter.min_exchange_value is not None
        and rounded_price is not None
    ):
        notional = rounded_price * rounded_qty
        if notional < price_filter.min_exchange_value:
            raise NotionalTooSmall(symbol.name, notional, price_filter.min_exchange_value)

    maximum = symbol.maximum_order_amount
    if enforce_maximum_order_amount and maximum is not None and rounded_qty > maximum:
        raise OrderAmountTooLarge(symbol.name, rounded_qty, maximum)

    return NormalizedOrder(
        quantity=rounded_qty,
        quantity_scale=symbol.numerator_scale,
        price=rounded_price,
        stop_price=rounded_stop,
        price_scale=price_scale,
    )


def _as_decimal(symbol: Symbol, field_name: str, value: object) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise InvalidOrderValue(symbol.name, field_name, value) from exc
