"""Exchange metadata layer -- wire models, immutable snapshots, and the store."""

from btcturk.metadata.snapshot import MetadataSnapshot
from btcturk.metadata.store import MetadataStore, parse_exchange_info
from btcturk.metadata.types import (
    Currency,
    CurrencyOperationBlock,
    ExchangeInfo,
    PriceFilter,
    Symbol,
    UnknownFilter,
)

__all__ = [
    "Currency",
    "CurrencyOperationBlock",
    "ExchangeInfo",
    "MetadataSnapshot",
    "MetadataStore",
    "PriceFilter",
    "Symbol",
    "UnknownFilter",
    "parse_exchange_info",
]
