"""Immutable point-in-time view of exchange metadata.

A MetadataSnapshot is built once from an ExchangeInfo document and never
mutated. Lookups are backed by indexes computed at construction, so readers
share a snapshot across threads without locking.
"""

from collections.abc import Mapping
from types import MappingProxyType

from btcturk.exceptions import (
    CurrencyNotFound,
    DuplicateCurrency,
    DuplicateSymbol,
    SymbolNotFound,
)
from btcturk.metadata.types import Currency, CurrencyOperationBlock, ExchangeInfo, Symbol


def _key(value: str) -> str:
    return value.strip().upper()


class MetadataSnapshot:
    """Symbols, currencies, and operation blocks from one metadata load.

    Symbols are ordered by their ``order`` field (ties keep payload order).
    Symbol lookup matches normalized name, exchange name, or id; currency and
    operation-block lookups match the ticker. All string matching ignores case.

    Raises:
        DuplicateSymbol: If two symbols share an id, name, or normalized name.
        DuplicateCurrency: If two currencies share a ticker.
    """

    def __init__(
        self,
        symbols: tuple[Symbol, ...],
        currencies: tuple[Currency, ...] = (),
        operation_blocks: tuple[CurrencyOperationBlock, ...] = (),
        timezone: str = "UTC",
        server_time: int = 0,
    ) -> None:
        self._timezone = timezone
        self._server_time = server_time
        self._symbols = tuple(sorted(symbols, key=lambda s: s.order))

        by_id: dict[int, Symbol] = {}
        by_normalized: dict[str, Symbol] = {}
        by_name: dict[str, Symbol] = {}
        for symbol in self._symbols:
            if symbol.id in by_id:
                raise DuplicateSymbol(str(symbol.id))
            normalized = _key(symbol.name_normalized)
            if normalized in by_normalized:
                raise DuplicateSymbol(symbol.name_normalized)
            name = _key(symbol.name)
            if name in by_name:
                raise DuplicateSymbol(symbol.name)
            by_id[symbol.id] = symbol
            by_normalized[normalized] = symbol
            by_name[name] = symbol
        self._by_id = MappingProxyType(by_id)
        self._by_normalized = MappingProxyType(by_normalized)
        self._by_name = MappingProxyType(by_name)

        by_ticker: dict[str, Currency] = {}
        for currency in currencies:
            ticker = _key(currency.symbol)
            if ticker in by_ticker:
                raise DuplicateCurrency(currency.symbol)
            by_ticker[ticker] = currency
        self._currencies = tuple(currencies)
        self._by_ticker = MappingProxyType(by_ticker)

        # Later blocks for the same ticker win, mirroring the payload order.
        self._operation_blocks = MappingProxyType(
            {_key(block.currency_symbol): block for block in operation_blocks}
        )

    @classmethod
    def from_exchange_info(cls, info: ExchangeInfo) -> "MetadataSnapshot":
        return cls(
            symbols=info.symbols,
            currencies=info.currencies,
            operation_blocks=info.currency_operation_blocks,
            timezone=info.timezone,
            server_time=info.server_time,
        )

    @property
    def timezone(self) -> str:
        return self._timezone

    @property
    def server_time(self) -> int:
        """Exchange clock at the time of the metadata response (Unix ms)."""
        return self._server_time

    @property
    def symbols(self) -> tuple[Symbol, ...]:
        return self._symbols

    @property
    def currencies(self) -> tuple[Currency, ...]:
        return self._currencies

    @property
    def operation_blocks(self) -> Mapping[str, CurrencyOperationBlock]:
        """Operation blocks keyed by upper-cased currency ticker."""
        return self._operation_blocks

    def lookup_symbol(self, ref: str | int) -> Symbol:
        """Find a symbol by normalized name, exchange name, or id.

        ``"btc_try"``, ``"BTCTRY"``, ``1`` and ``"1"`` all resolve the same
        symbol when BTC_TRY has id 1.

        Raises:
            SymbolNotFound: If nothing matches.
        """
        if isinstance(ref, int) and not isinstance(ref, bool):
            symbol = self._by_id.get(ref)
            if symbol is None:
                raise SymbolNotFound(ref)
            return symbol

        key = _key(str(ref))
        symbol = self._by_normalized.get(key) or self._by_name.get(key)
        if symbol is None and key.isdigit():
            symbol = self._by_id.get(int(key))
        if symbol is None:
            raise SymbolNotFound(ref)
        return symbol

    def lookup_currency(self, symbol: str) -> Currency:
        """Find a currency by ticker, ignoring case.

        Raises:
            CurrencyNotFound: If nothing matches.
        """
        currency = self._by_ticker.get(_key(symbol))
        if currency is None:
            raise CurrencyNotFound(symbol)
        return currency

    def operation_block(self, symbol: str) -> CurrencyOperationBlock | None:
        return self._operation_blocks.get(_key(symbol))

    def can_withdraw(self, symbol: str) -> bool:
        """False when an operation block disables withdrawals for the currency."""
        self.lookup_currency(symbol)
        block = self.operation_block(symbol)
        return block is None or not block.withdrawal_disabled

    def can_deposit(self, symbol: str) -> bool:
        """False when an operation block disables deposits for the currency."""
        self.lookup_currency(symbol)
        block = self.operation_block(symbol)
        return block is None or not block.deposit_disabled

    def symbols_for_currency(self, symbol: str) -> list[Symbol]:
        """All pairs with the currency on either side, in ``order``."""
        ticker = _key(symbol)
        return [
            s
            for s in self._symbols
            if _key(s.numerator) == ticker or _key(s.denominator) == ticker
        ]

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return (
            f"MetadataSnapshot(symbols={len(self._symbols)}, "
            f"currencies={len(self._currencies)}, server_time={self._server_time})"
        )
