"""Exchange-info wire models.

Field names follow Python conventions; aliases map them to the exchange's
camelCase keys. Unknown keys are ignored, required keys are enforced, and
every price or amount is a Decimal. Models are frozen: a Symbol or Currency
never changes after a metadata load, it is only superseded by the next one.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from btcturk.models import CurrencyType, OrderMethod, SymbolStatus

PRICE_FILTER = "PRICE_FILTER"


class WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PriceFilter(WireModel):
    """Price bounds, tick size, and notional/quantity limits for a symbol."""

    filter_type: Literal["PRICE_FILTER"] = PRICE_FILTER
    min_price: Decimal
    max_price: Decimal
    tick_size: Decimal = Field(gt=0)
    min_exchange_value: Decimal | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "PriceFilter":
        if self.max_price < self.min_price:
            raise ValueError(
                f"maxPrice {self.max_price} is below minPrice {self.min_price}"
            )
        return self


class UnknownFilter(WireModel):
    """A filter kind this client does not understand. Kept, never enforced."""

    filter_type: str
    raw: dict[str, Any] = Field(default_factory=dict)


Filter = PriceFilter | UnknownFilter


class Symbol(WireModel):
    """A tradable pair such as BTCTRY (normalized BTC_TRY)."""

    id: int
    name: str
    name_normalized: str
    status: str
    numerator: str
    denominator: str
    numerator_scale: int = Field(ge=0)
    denominator_scale: int = Field(ge=0)
    has_fraction: bool
    filters: tuple[Filter, ...] = ()
    order_methods: frozenset[OrderMethod] = frozenset()
    display_format: str = ""
    commission_from_numerator: bool = False
    order: int = 0
    price_rounding: bool = False
    is_new: bool = False
    market_price_warning_threshold_percentage: Decimal = Decimal("0")
    maximum_order_amount: Decimal | None = None

    @field_validator("filters", mode="before")
    @classmethod
    def _parse_filters(cls, value: Any) -> tuple[Filter, ...]:
        if not isinstance(value, (list, tuple)):
            raise ValueError("filters must be a list")
        parsed: list[Filter] = []
        for item in value:
            if isinstance(item, (PriceFilter, UnknownFilter)):
                parsed.append(item)
                continue
            if not isinstance(item, Mapping):
                raise ValueError("each filter must be an object")
            kind = item.get("filterType")
            if kind == PRICE_FILTER:
                parsed.append(PriceFilter.model_validate(item))
            else:
                parsed.append(UnknownFilter(filter_type=str(kind), raw=dict(item)))
        if sum(isinstance(f, PriceFilter) for f in parsed) > 1:
            raise ValueError("at most one PRICE_FILTER is allowed per symbol")
        return tuple(parsed)

    @field_validator("order_methods", mode="before")
    @classmethod
    def _parse_order_methods(cls, value: Any) -> frozenset[OrderMethod]:
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError("orderMethods must be a list")
        methods = set()
        for item in value:
            try:
                methods.add(OrderMethod(item))
            except ValueError:
                # Methods added by the exchange later are not tradable through
                # this client, but must not fail the load.
                continue
        return frozenset(methods)

    @property
    def price_filter(self) -> PriceFilter | None:
        for item in self.filters:
            if isinstance(item, PriceFilter):
                return item
        return None

    @property
    def is_trading(self) -> bool:
        return self.status.upper() == SymbolStatus.TRADING.value


class Address(WireModel):
    min_len: int | None = None
    max_len: int | None = None


class Tag(WireModel):
    """Memo / destination-tag requirement for chains that need one."""

    enable: bool = False
    name: str | None = None
    min_len: int | None = None
    max_len: int | None = None

    @model_validator(mode="after")
    def _check_name(self) -> "Tag":
        if self.enable and not self.name:
            raise ValueError("tag.name is required when tag.enable is true")
        return self


class Currency(WireModel):
    """Deposit/withdrawal rules for one currency."""

    id: int
    symbol: str
    name: str = ""
    currency_type: CurrencyType
    precision: int = Field(ge=0)
    min_withdrawal: Decimal
    min_deposit: Decimal
    address: Address = Field(default_factory=Address)
    tag: Tag = Field(default_factory=Tag)
    color: str = ""
    is_address_renewable: bool = False
    get_auto_address_disabled: bool = False
    is_partial_withdrawal_enabled: bool = False
    is_new: bool = False

    @field_validator("currency_type", mode="before")
    @classmethod
    def _parse_currency_type(cls, value: Any) -> CurrencyType:
        return CurrencyType(value)

    @field_validator("address", "tag", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_crypto(self) -> bool:
        return self.currency_type is CurrencyType.CRYPTO


class CurrencyOperationBlock(WireModel):
    """Per-currency override disabling withdrawals and/or deposits."""

    currency_symbol: str
    withdrawal_disabled: bool = False
    deposit_disabled: bool = False


class ExchangeInfo(WireModel):
    """The full ``/api/v2/server/exchangeinfo`` document."""

    timezone: str = Field(default="UTC", alias="timeZone")
    server_time: int
    symbols: tuple[Symbol, ...]
    currencies: tuple[Currency, ...] = ()
    currency_operation_blocks: tuple[CurrencyOperationBlock, ...] = ()
