"""Abstract HTTP transport and its httpx implementation.

The validation engine never sends anything itself. Client code depends only
on the Transport interface, keeping httpx details isolated here so tests can
swap in an in-memory transport.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from btcturk.config import ExchangeSettings
from btcturk.exceptions import TransportError
from btcturk.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP response: status and undecoded body bytes."""

    status_code: int
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(ABC):
    """Abstract base class for HTTP transports."""

    @abstractmethod
    async def send_request(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        body: bytes = b"",
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        """Send one request and return the raw response.

        Raises:
            TransportError: If no response was received.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        ...


class HttpxTransport(Transport):
    """Transport backed by ``httpx.AsyncClient``.

    Args:
        settings: Base URL and timeout.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        settings: ExchangeSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=httpx.Timeout(settings.timeout_seconds),
            transport=transport,
        )

    async def send_request(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        body: bytes = b"",
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        try:
            response = await self._client.request(
                method,
                path,
                headers=dict(headers),
                content=body or None,
                params=dict(params) if params else None,
            )
        except httpx.HTTPError as exc:
            logger.warning("http_request_failed", method=method, path=path, error=str(exc))
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        logger.debug(
            "http_request",
            method=method,
            path=path,
            status=response.status_code,
        )
        return TransportResponse(status_code=response.status_code, content=response.content)

    async def close(self) -> None:
        await self._client.aclose()
