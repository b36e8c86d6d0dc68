"""Exchange access layer -- transport abstraction, response envelope, and client."""

from btcturk.exchange.btcturk_client import EXCHANGE_INFO_PATH, BtcTurkClient
from btcturk.exchange.transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    "BtcTurkClient",
    "EXCHANGE_INFO_PATH",
    "HttpxTransport",
    "Transport",
    "TransportResponse",
]
