"""Exchange metadata store with atomic snapshot swaps.

Holds exactly one MetadataSnapshot at a time. A refresh parses the new
document completely, then replaces the reference in a single assignment, so
a reader that grabbed ``current()`` keeps a consistent view for as long as it
holds it, and never sees a half-built snapshot. Refreshes are serialized by
a lock; reads take no lock.

The store performs no network I/O: callers hand it the raw exchange-info
document obtained by whatever transport they use.
"""

import json
import threading
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from btcturk import decimals
from btcturk.exceptions import MalformedMetadata, MetadataNotLoaded
from btcturk.logging import get_logger
from btcturk.metadata.snapshot import MetadataSnapshot
from btcturk.metadata.types import Currency, ExchangeInfo, Symbol

logger = get_logger(__name__)


def parse_exchange_info(raw: bytes | str | Mapping[str, Any]) -> MetadataSnapshot:
    """Parse an exchange-info document into a snapshot.

    Args:
        raw: JSON bytes/text, or an already-decoded mapping. Decoded mappings
            should carry Decimal (not float) for fractional numbers.

    Raises:
        MalformedMetadata: On invalid JSON or a missing/mistyped required field.
        DuplicateSymbol: If two symbols collide on id or name.
        DuplicateCurrency: If two currencies collide on ticker.
    """
    if isinstance(raw, (bytes, bytearray, str)):
        try:
            document = decimals.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedMetadata(f"exchange info is not valid JSON: {exc}") from exc
    else:
        document = raw

    if not isinstance(document, Mapping):
        raise MalformedMetadata("exchange info must be a JSON object")

    try:
        info = ExchangeInfo.model_validate(document)
    except ValidationError as exc:
        raise MalformedMetadata(f"invalid exchange info: {exc}") from exc

    return MetadataSnapshot.from_exchange_info(info)


class MetadataStore:
    """Single-snapshot holder shared by order builders and callers."""

    def __init__(self) -> None:
        self._snapshot: MetadataSnapshot | None = None
        self._version = 0
        self._write_lock = threading.Lock()

    @property
    def version(self) -> int:
        """Number of successful loads so far."""
        return self._version

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def load(self, raw: bytes | str | Mapping[str, Any]) -> MetadataSnapshot:
        """Parse raw metadata and make it the current snapshot.

        On any error the previous snapshot stays current.
        """
        with self._write_lock:
            snapshot = parse_exchange_info(raw)
            previous = self._snapshot
            self._snapshot = snapshot
            self._version += 1
            version = self._version

        logger.info(
            "metadata_loaded",
            version=version,
            symbols=len(snapshot.symbols),
            currencies=len(snapshot.currencies),
            server_time=snapshot.server_time,
            replaced=previous is not None,
        )
        return snapshot

    def current(self) -> MetadataSnapshot:
        """Return the latest snapshot.

        Raises:
            MetadataNotLoaded: Before the first successful load.
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise MetadataNotLoaded("exchange metadata has not been loaded")
        return snapshot

    def lookup_symbol(self, ref: str | int) -> Symbol:
        return self.current().lookup_symbol(ref)

    def lookup_currency(self, symbol: str) -> Currency:
        return self.current().lookup_currency(symbol)
