"""BtcTurk exchange client.

Wires the metadata store, order builder, and a transport together:
refresh exchange info, submit validated and signed orders, cancel orders.
All validation and signing happen before the transport is touched.
"""

from decimal import Decimal

from btcturk.auth.keys import ApiKeys
from btcturk.auth.nonce import MonotonicNonce
from btcturk.auth.signer import CONTENT_TYPE_HEADER, JSON_CONTENT_TYPE
from btcturk.config import ExchangeSettings, ValidationSettings
from btcturk.exceptions import AuthenticationRequired
from btcturk.exchange.response import decode, decode_new_order, unwrap
from btcturk.exchange.transport import HttpxTransport, Transport, TransportResponse
from btcturk.logging import get_logger
from btcturk.metadata.snapshot import MetadataSnapshot
from btcturk.metadata.store import MetadataStore
from btcturk.models import NewOrder, OrderMethod, OrderSide
from btcturk.orders.builder import ORDER_PATH, OrderRequestBuilder, SignedRequest

logger = get_logger(__name__)

EXCHANGE_INFO_PATH = "/api/v2/server/exchangeinfo"


class BtcTurkClient:
    """Concrete BtcTurk client over an injectable transport.

    Args:
        settings: Exchange settings (keys, base URL, timeout, client order id).
        transport: Transport to send requests through. Defaults to httpx.
        store: Metadata store; share one store between clients to share metadata.
        nonce: Stamp source for private requests.
        validation: Pre-trade validation switches.
    """

    def __init__(
        self,
        settings: ExchangeSettings,
        *,
        transport: Transport | None = None,
        store: MetadataStore | None = None,
        nonce: MonotonicNonce | None = None,
        validation: ValidationSettings | None = None,
    ) -> None:
        self._settings = settings
        self._keys = settings.api_keys()
        self._transport = transport or HttpxTransport(settings)
        self._store = store or MetadataStore()
        validation = validation or ValidationSettings()
        self._builder = OrderRequestBuilder(
            self._store,
            nonce or MonotonicNonce(),
            sign_body=settings.sign_body,
            enforce_maximum_order_amount=validation.enforce_maximum_order_amount,
        )

    @property
    def store(self) -> MetadataStore:
        return self._store

    @property
    def builder(self) -> OrderRequestBuilder:
        return self._builder

    def set_keys(self, keys: ApiKeys | None) -> None:
        """Replace the API keys; None removes them."""
        self._keys = keys

    async def __aenter__(self) -> "BtcTurkClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Clean up transport resources."""
        await self._transport.close()
        logger.info("btcturk_client_closed")

    async def refresh_metadata(self) -> MetadataSnapshot:
        """Fetch exchange info and swap it into the store.

        Raises:
            ExchangeRequestError: Transport, status, or envelope failure.
            MetadataError: The document is malformed; the old snapshot stays.
        """
        response = await self._transport.send_request(
            "GET",
            EXCHANGE_INFO_PATH,
            headers={CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE},
        )
        data = unwrap(decode(response))
        return self._store.load(data)

    async def submit_order(
        self,
        symbol: str | int,
        side: OrderSide | str,
        method: OrderMethod | str,
        quantity: Decimal,
        price: Decimal | None = None,
        stop_price: Decimal | None = None,
    ) -> NewOrder:
        """Validate, sign, and submit an order.

        Raises:
            AuthenticationRequired: No API keys configured.
            BtcTurkError: Any preparation stage failure (see OrderRequestBuilder).
            ExchangeRequestError: The exchange or transport rejected the request.
        """
        request = self._builder.prepare(
            symbol,
            side,
            method,
            quantity,
            price,
            stop_price,
            keys=self._require_keys(),
            client_order_id=self._settings.client_order_id,
        )
        data = unwrap(decode(await self._send(request)))
        order = decode_new_order(data)
        logger.info(
            "order_submitted",
            order_id=order.id,
            symbol=order.pair_symbol,
            side=order.side.value,
            method=order.method.value,
        )
        return order

    async def market_buy(self, symbol: str | int, quantity: Decimal) -> NewOrder:
        return await self.submit_order(symbol, OrderSide.BUY, OrderMethod.MARKET, quantity)

    async def market_sell(self, symbol: str | int, quantity: Decimal) -> NewOrder:
        return await self.submit_order(symbol, OrderSide.SELL, OrderMethod.MARKET, quantity)

    async def limit_buy(
        self, symbol: str | int, price: Decimal, quantity: Decimal
    ) -> NewOrder:
        return await self.submit_order(
            symbol, OrderSide.BUY, OrderMethod.LIMIT, quantity, price=price
        )

    async def limit_sell(
        self, symbol: str | int, price: Decimal, quantity: Decimal
    ) -> NewOrder:
        return await self.submit_order(
            symbol, OrderSide.SELL, OrderMethod.LIMIT, quantity, price=price
        )

    async def stop_limit_buy(
        self, symbol: str | int, price: Decimal, stop_price: Decimal, quantity: Decimal
    ) -> NewOrder:
        return await self.submit_order(
            symbol,
            OrderSide.BUY,
            OrderMethod.STOP_LIMIT,
            quantity,
            price=price,
            stop_price=stop_price,
        )

    async def stop_limit_sell(
        self, symbol: str | int, price: Decimal, stop_price: Decimal, quantity: Decimal
    ) -> NewOrder:
        return await self.submit_order(
            symbol,
            OrderSide.SELL,
            OrderMethod.STOP_LIMIT,
            quantity,
            price=price,
            stop_price=stop_price,
        )

    async def cancel_order(self, order_id: int) -> None:
        """Cancel an open order by exchange id.

        Raises:
            AuthenticationRequired: No API keys configured.
            ExchangeRequestError: The exchange or transport rejected the request.
        """
        request = self._builder.prepare_signed(
            "DELETE",
            ORDER_PATH,
            params={"id": str(order_id)},
            keys=self._require_keys(),
        )
        response = decode(await self._send(request))
        if not isinstance(response, dict) or response.get("success") is not True:
            # Cancel returns data: null on success, so only the flag is checked.
            unwrap(response)
        logger.info("order_cancelled", order_id=order_id)

    def _require_keys(self) -> ApiKeys:
        if self._keys is None:
            raise AuthenticationRequired("endpoint requires API keys")
        return self._keys

    async def _send(self, request: SignedRequest) -> TransportResponse:
        return await self._transport.send_request(
            request.method,
            request.path,
            request.headers,
            request.body,
            request.params,
        )
