"""Decoding of the exchange's ``{data, success, message, code}`` envelope."""

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from btcturk import decimals
from btcturk.exceptions import (
    BadStatusCode,
    ExchangeRequestError,
    NullData,
    UnsuccessfulResponse,
)
from btcturk.exchange.transport import TransportResponse
from btcturk.models import NewOrder, OrderMethod, OrderSide


def decode(response: TransportResponse) -> Any:
    """Check the status and decode the body with Decimal numbers.

    Raises:
        BadStatusCode: For any status other than 200.
        ExchangeRequestError: If a 200 body is not valid JSON.
    """
    if response.status_code != 200:
        code, message = _envelope_fields(response.content)
        raise BadStatusCode(response.status_code, response.text, code, message)
    try:
        return decimals.loads(response.content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ExchangeRequestError(f"response is not valid JSON: {exc}") from exc


def unwrap(payload: Any) -> Any:
    """Return ``data`` from a decoded envelope.

    Raises:
        UnsuccessfulResponse: ``success`` is false.
        NullData: ``data`` is null on a successful response.
        ExchangeRequestError: The payload is not an envelope at all.
    """
    if not isinstance(payload, Mapping) or "success" not in payload:
        raise ExchangeRequestError("response is not a data envelope")
    if not payload["success"]:
        raise UnsuccessfulResponse(int(payload.get("code") or 0), payload.get("message"))
    data = payload.get("data")
    if data is None:
        raise NullData("null data field")
    return data


def _envelope_fields(content: bytes) -> tuple[int | None, str | None]:
    try:
        payload = decimals.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, None
    if not isinstance(payload, Mapping):
        return None, None
    code = payload.get("code")
    message = payload.get("message")
    return (
        int(code) if isinstance(code, int) else None,
        str(message) if message is not None else None,
    )


def _optional_decimal(data: Mapping[str, Any], key: str) -> Decimal | None:
    value = data.get(key)
    return None if value is None else decimals.to_decimal(value)


def decode_new_order(data: Any) -> NewOrder:
    """Build a NewOrder from submit-order ``data``.

    Raises:
        ExchangeRequestError: On missing or mistyped fields.
    """
    if not isinstance(data, Mapping):
        raise ExchangeRequestError("submit order data must be an object")
    try:
        return NewOrder(
            id=int(data["id"]),
            date_time=int(data["datetime"]),
            side=OrderSide(data["type"]),
            method=OrderMethod(data["method"]),
            pair_symbol=str(data["pairSymbol"]),
            pair_symbol_normalized=str(data["pairSymbolNormalized"]),
            new_order_client_id=str(data.get("newOrderClientId") or ""),
            price=_optional_decimal(data, "price"),
            stop_price=_optional_decimal(data, "stopPrice"),
            quantity=_optional_decimal(data, "quantity"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ExchangeRequestError(f"malformed submit order response: {exc!r}") from exc
