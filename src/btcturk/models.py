"""Shared enums and value objects for the BtcTurk client.

CRITICAL: All monetary values use Decimal. Never use float for prices, quantities, or amounts.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from btcturk.decimals import to_fixed_string


class OrderSide(str, Enum):
    """Order direction (``orderType`` on the wire)."""

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def _missing_(cls, value: object) -> "OrderSide | None":
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class OrderMethod(str, Enum):
    """Order method (``orderMethod`` on the wire).

    The exchange spells these inconsistently across endpoints
    (``stoplimit``, ``stopLimit``, ``STOP_LIMIT``), so lookup ignores case
    and underscores.
    """

    MARKET = "market"
    LIMIT = "limit"
    STOP_LIMIT = "stoplimit"
    STOP_MARKET = "stopmarket"

    @classmethod
    def _missing_(cls, value: object) -> "OrderMethod | None":
        if isinstance(value, str):
            folded = value.replace("_", "").lower()
            for member in cls:
                if member.value == folded:
                    return member
        return None

    @property
    def requires_price(self) -> bool:
        return self in (OrderMethod.LIMIT, OrderMethod.STOP_LIMIT)

    @property
    def requires_stop_price(self) -> bool:
        return self in (OrderMethod.STOP_LIMIT, OrderMethod.STOP_MARKET)


class SymbolStatus(str, Enum):
    """Known trading statuses. Unknown statuses are kept as plain text on Symbol."""

    TRADING = "TRADING"
    HALTED = "HALTED"
    BREAK = "BREAK"


class CurrencyType(str, Enum):
    """Currency kind."""

    FIAT = "FIAT"
    CRYPTO = "CRYPTO"

    @classmethod
    def _missing_(cls, value: object) -> "CurrencyType | None":
        if isinstance(value, str):
            upper = value.upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None


class PreparationStage(str, Enum):
    """Stage of order preparation an error originated from."""

    LOOKUP = "lookup"
    METHOD = "method"
    FILTER = "filter"
    SIGNING = "signing"


@dataclass(frozen=True)
class NormalizedOrder:
    """Price and quantity after tick/scale rounding, ready for serialization.

    Scales are the number of fractional digits each value is rendered with.
    ``price`` and ``stop_price`` are None for orders that carry no such field.
    """

    quantity: Decimal
    quantity_scale: int
    price: Decimal | None = None
    stop_price: Decimal | None = None
    price_scale: int = 0

    @property
    def notional(self) -> Decimal | None:
        """price * quantity, or None for market orders."""
        if self.price is None:
            return None
        return self.price * self.quantity

    def quantity_str(self) -> str:
        return to_fixed_string(self.quantity, self.quantity_scale)

    def price_str(self) -> str | None:
        if self.price is None:
            return None
        return to_fixed_string(self.price, self.price_scale)

    def stop_price_str(self) -> str | None:
        if self.stop_price is None:
            return None
        return to_fixed_string(self.stop_price, self.price_scale)


@dataclass(frozen=True)
class NewOrder:
    """Exchange acknowledgement of a submitted order."""

    id: int
    date_time: int  # Unix milliseconds
    side: OrderSide
    method: OrderMethod
    pair_symbol: str
    pair_symbol_normalized: str
    new_order_client_id: str
    price: Decimal | None = None
    stop_price: Decimal | None = None
    quantity: Decimal | None = None
