"""Order request builder -- metadata lookup, filters, and signing in one step.

``prepare`` turns a raw order intent into a signed, ready-to-send request or
raises the error of the stage that rejected it (``exc.stage``). Nothing here
touches the network: the result is handed to a transport by the caller.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from btcturk.auth.keys import ApiKeys
from btcturk.auth.nonce import MonotonicNonce
from btcturk.auth.signer import sign
from btcturk.exceptions import (
    BtcTurkError,
    CurrencyNotFound,
    InvalidOrderSide,
    OrderMethodNotSupported,
    PriceRequired,
)
from btcturk.logging import get_logger
from btcturk.metadata.snapshot import MetadataSnapshot
from btcturk.metadata.store import MetadataStore
from btcturk.metadata.types import Symbol
from btcturk.models import NormalizedOrder, OrderMethod, OrderSide
from btcturk.orders.filters import validate_and_normalize

logger = get_logger(__name__)

ORDER_PATH = "/api/v1/order"


@dataclass(frozen=True)
class SignedRequest:
    """A fully authenticated request envelope.

    Carries only what the transport needs. ``params`` is set for requests
    that pass their arguments in the query string (DELETE). ``headers`` and
    ``params`` are read-only mappings.
    """

    method: str
    path: str
    body: bytes
    headers: Mapping[str, str] = field(repr=False)
    nonce: int
    params: Mapping[str, str] | None = None


def encode_order_body(
    symbol: Symbol,
    side: OrderSide,
    method: OrderMethod,
    order: NormalizedOrder,
    client_order_id: str | None = None,
) -> bytes:
    """Serialize a normalized order into the submit-order JSON body.

    Decimals go out as fixed-point strings at the symbol's scales; absent
    fields are omitted.
    """
    body: dict[str, str] = {"quantity": order.quantity_str()}
    price = order.price_str()
    if price is not None:
        body["price"] = price
    stop_price = order.stop_price_str()
    if stop_price is not None:
        body["stopPrice"] = stop_price
    if client_order_id:
        body["newOrderClientId"] = client_order_id
    body["orderMethod"] = method.value
    body["orderType"] = side.value
    body["pairSymbol"] = symbol.name
    return json.dumps(body, separators=(",", ":")).encode()


class OrderRequestBuilder:
    """Composes the metadata store, filter engine, and signer.

    Args:
        store: Metadata store holding the current snapshot.
        nonce: Stamp source; each prepared request consumes one stamp.
        sign_body: Include the body in the signed message. Off by default because
            the exchange signs only the key and stamp.
        enforce_maximum_order_amount: Apply symbols' maximum_order_amount.
    """

    def __init__(
        self,
        store: MetadataStore,
        nonce: MonotonicNonce | None = None,
        *,
        sign_body: bool = False,
        enforce_maximum_order_amount: bool = True,
    ) -> None:
        self._store = store
        self._nonce = nonce or MonotonicNonce()
        self._sign_body = sign_body
        self._enforce_maximum_order_amount = enforce_maximum_order_amount

    def prepare(
        self,
        symbol_ref: str | int,
        side: OrderSide | str,
        order_method: OrderMethod | str,
        quantity: Decimal,
        price: Decimal | None = None,
        stop_price: Decimal | None = None,
        *,
        keys: ApiKeys,
        client_order_id: str | None = None,
    ) -> SignedRequest:
        """Validate an order intent and sign it for submission.

        Market orders ignore ``price``; only stop orders keep ``stop_price``.

        Raises:
            MetadataError: Store not loaded or symbol unknown (stage ``lookup``).
            OrderMethodNotSupported: Method unknown or not offered by the symbol
                (stage ``method``).
            FilterViolation: Side, price, quantity or notional rejected (stage ``filter``).
            SigningError: Secret could not be used (stage ``signing``).
        """
        symbol_name = str(symbol_ref)
        side_name = _enum_value(side)
        method_name = _enum_value(order_method)
        try:
            snapshot = self._store.current()
            symbol = snapshot.lookup_symbol(symbol_ref)
            symbol_name = symbol.name

            try:
                method = OrderMethod(order_method)
            except ValueError:
                raise OrderMethodNotSupported(symbol.name, method_name) from None
            if method not in symbol.order_methods:
                raise OrderMethodNotSupported(symbol.name, method.value)
            try:
                side = OrderSide(side)
            except ValueError:
                raise InvalidOrderSide(symbol.name, side) from None
            side_name, method_name = side.value, method.value

            if method.requires_price and price is None:
                raise PriceRequired(symbol.name, "price", method.value)
            if method.requires_stop_price and stop_price is None:
                raise PriceRequired(symbol.name, "stopPrice", method.value)

            normalized = validate_and_normalize(
                symbol,
                price if method.requires_price else None,
                quantity,
                stop_price=stop_price if method.requires_stop_price else None,
                price_unit_scale=_denominator_precision(snapshot, symbol),
                enforce_maximum_order_amount=self._enforce_maximum_order_amount,
            )
            body = encode_order_body(symbol, side, method, normalized, client_order_id)
            request = self.prepare_signed("POST", ORDER_PATH, body, keys=keys)
        except BtcTurkError as exc:
            logger.warning(
                "order_rejected",
                symbol=symbol_name,
                side=side_name,
                method=method_name,
                stage=exc.stage.value if exc.stage else None,
                reason=str(exc),
            )
            raise

        logger.info(
            "order_prepared",
            symbol=symbol.name,
            side=side.value,
            method=method.value,
            quantity=normalized.quantity_str(),
            price=normalized.price_str(),
            stop_price=normalized.stop_price_str(),
            nonce=request.nonce,
        )
        return request

    def prepare_signed(
        self,
        method: str,
        path: str,
        body: bytes = b"",
        params: Mapping[str, str] | None = None,
        *,
        keys: ApiKeys,
    ) -> SignedRequest:
        """Sign an arbitrary private request with the next stamp.

        Raises:
            InvalidSecretEncoding: If the secret is not base64.
        """
        nonce = self._nonce.next_nonce()
        headers = sign(
            keys.public_key,
            keys.private_key,
            nonce,
            body,
            include_body=self._sign_body,
        )
        return SignedRequest(
            method=method.upper(),
            path=path,
            body=body,
            headers=MappingProxyType(dict(headers)),
            nonce=nonce,
            params=MappingProxyType(dict(params)) if params is not None else None,
        )


def _denominator_precision(snapshot: MetadataSnapshot, symbol: Symbol) -> int | None:
    try:
        return snapshot.lookup_currency(symbol.denominator).precision
    except CurrencyNotFound:
        return None


def _enum_value(value: object) -> str:
    return str(getattr(value, "value", value))
