"""Custom exceptions for the BtcTurk client.

Every failure the validation and signing engine can produce lives here so
metadata, filter, signing, and transport modules can share them without
circular imports. All of them are recoverable: the caller decides whether to
retry with corrected parameters.

Each error that can surface from ``OrderRequestBuilder.prepare`` carries a
``stage`` naming the step that rejected the order.
"""

from decimal import Decimal

from btcturk.models import PreparationStage


class BtcTurkError(Exception):
    """Base exception for all client errors."""

    stage: PreparationStage | None = None


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class MetadataError(BtcTurkError):
    """Base for exchange-info loading and lookup failures."""

    stage = PreparationStage.LOOKUP


class MalformedMetadata(MetadataError):
    """Raised when a required metadata field is missing or mistyped.

    A partial metadata set is never loaded: one bad record fails the whole load.
    """


class DuplicateSymbol(MetadataError):
    """Raised when two symbols share an id, name, or normalized name."""

    def __init__(self, key: str) -> None:
        super().__init__(f"duplicate symbol {key!r}")
        self.key = key


class DuplicateCurrency(MetadataError):
    """Raised when two currencies share a symbol (case-insensitive)."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"duplicate currency {symbol!r}")
        self.symbol = symbol


class MetadataNotLoaded(MetadataError):
    """Raised when the metadata store is queried before the first load."""


class SymbolNotFound(MetadataError):
    """Raised when no symbol matches the given name or id."""

    def __init__(self, ref: str | int) -> None:
        super().__init__(f"symbol {ref!r} not found")
        self.ref = ref


class CurrencyNotFound(MetadataError):
    """Raised when no currency matches the given ticker."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"currency {symbol!r} not found")
        self.symbol = symbol


# ---------------------------------------------------------------------------
# Filter violations
# ---------------------------------------------------------------------------


class FilterViolation(BtcTurkError):
    """Base for orders rejected by a symbol's filters."""

    stage = PreparationStage.FILTER

    def __init__(self, symbol: str, message: str) -> None:
        super().__init__(f"{symbol}: {message}")
        self.symbol = symbol


class SymbolNotTradable(FilterViolation):
    """Raised when the symbol status is anything other than TRADING."""

    def __init__(self, symbol: str, status: str) -> None:
        super().__init__(symbol, f"status is {status}, not TRADING")
        self.status = status


class PriceOutOfRange(FilterViolation):
    """Raised when a price falls outside [min_price, max_price]."""

    def __init__(
        self, symbol: str, price: Decimal, min_price: Decimal, max_price: Decimal
    ) -> None:
        super().__init__(
            symbol, f"price {price} outside allowed range [{min_price}, {max_price}]"
        )
        self.price = price
        self.min_price = min_price
        self.max_price = max_price


class PriceRoundingError(FilterViolation):
    """Raised when the tick size is finer than the price's minimal unit."""

    def __init__(self, symbol: str, tick_size: Decimal, unit_scale: int) -> None:
        super().__init__(
            symbol,
            f"tick size {tick_size} cannot be represented with {unit_scale} decimal places",
        )
        self.tick_size = tick_size
        self.unit_scale = unit_scale


class PriceRequired(FilterViolation):
    """Raised when a limit or stop order is missing its price or stop price."""

    def __init__(self, symbol: str, field_name: str, method: str) -> None:
        super().__init__(symbol, f"{field_name} is required for {method} orders")
        self.field_name = field_name


class InvalidOrderValue(FilterViolation):
    """Raised when a quantity or price is not a finite decimal number."""

    def __init__(self, symbol: str, field_name: str, value: object) -> None:
        super().__init__(symbol, f"{field_name} {value!r} is not a valid decimal")
        self.field_name = field_name
        self.value = value


class InvalidOrderSide(FilterViolation):
    """Raised when the order side is neither buy nor sell."""

    def __init__(self, symbol: str, side: object) -> None:
        super().__init__(symbol, f"order side {side!r} must be buy or sell")
        self.side = side


class FractionalQuantityNotAllowed(FilterViolation):
    """Raised when a symbol without fractions receives a non-integral quantity."""

    def __init__(self, symbol: str, quantity: Decimal) -> None:
        super().__init__(symbol, f"quantity {quantity} must be a whole number")
        self.quantity = quantity


class QuantityOutOfRange(FilterViolation):
    """Raised when quantity is non-positive or outside [min_amount, max_amount]."""

    def __init__(
        self,
        symbol: str,
        quantity: Decimal,
        min_amount: Decimal | None = None,
        max_amount: Decimal | None = None,
    ) -> None:
        super().__init__(
            symbol,
            f"quantity {quantity} outside allowed range [{min_amount}, {max_amount}]",
        )
        self.quantity = quantity
        self.min_amount = min_amount
        self.max_amount = max_amount


class NotionalTooSmall(FilterViolation):
    """Raised when price * quantity is below the minimum exchange value."""

    def __init__(self, symbol: str, notional: Decimal, minimum: Decimal) -> None:
        super().__init__(symbol, f"notional {notional} below minimum {minimum}")
        self.notional = notional
        self.minimum = minimum


class OrderAmountTooLarge(FilterViolation):
    """Raised when quantity exceeds the symbol's maximum order amount."""

    def __init__(self, symbol: str, quantity: Decimal, maximum: Decimal) -> None:
        super().__init__(symbol, f"quantity {quantity} exceeds maximum order amount {maximum}")
        self.quantity = quantity
        self.maximum = maximum


# ---------------------------------------------------------------------------
# Order method / signing
# ---------------------------------------------------------------------------


class OrderMethodNotSupported(BtcTurkError):
    """Raised when the symbol does not accept the requested order method."""

    stage = PreparationStage.METHOD

    def __init__(self, symbol: str, method: str) -> None:
        super().__init__(f"{symbol}: order method {method!r} not supported")
        self.symbol = symbol
        self.method = method


class SigningError(BtcTurkError):
    """Base for request authentication failures."""

    stage = PreparationStage.SIGNING


class InvalidSecretEncoding(SigningError):
    """Raised when the API secret is not valid base64."""


# ---------------------------------------------------------------------------
# Transport / response
# ---------------------------------------------------------------------------


class ExchangeRequestError(BtcTurkError):
    """Base for failures after a request has been handed to the transport."""


class TransportError(ExchangeRequestError):
    """Raised when the request could not be sent or no response arrived."""


class AuthenticationRequired(ExchangeRequestError):
    """Raised when a private endpoint is called without API keys."""


class BadStatusCode(ExchangeRequestError):
    """Raised for any HTTP status other than 200.

    ``code`` and ``message`` are taken from the response envelope when the
    body decodes as one.
    """

    def __init__(
        self,
        status_code: int,
        response_text: str,
        code: int | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(
            f"status {status_code} code={code} message={message!r} response={response_text!r}"
        )
        self.status_code = status_code
        self.response_text = response_text
        self.code = code
        self.message = message


class UnsuccessfulResponse(ExchangeRequestError):
    """Raised when the envelope reports ``success: false``."""

    def __init__(self, code: int, message: str | None) -> None:
        super().__init__(f"unsuccessful response code={code} message={message!r}")
        self.code = code
        self.message = message


class NullData(ExchangeRequestError):
    """Raised when a successful envelope carries ``data: null``."""
