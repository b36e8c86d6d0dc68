"""Order layer -- filter validation and signed request preparation."""

from btcturk.orders.builder import OrderRequestBuilder, SignedRequest, encode_order_body
from btcturk.orders.filters import (
    normalize_price,
    normalize_quantity,
    resolve_price_scale,
    validate_and_normalize,
)

__all__ = [
    "OrderRequestBuilder",
    "SignedRequest",
    "encode_order_body",
    "normalize_price",
    "normalize_quantity",
    "resolve_price_scale",
    "validate_and_normalize",
]
