"""HTTP Transport for NDJSON surface exchanges."""

from typing import Any, Protocol

import httpx

from a2ui_client.core import TransportError, get_logger, get_settings, inject_trace_context, trace_operation_async
from a2ui_client.core.json import safe_json_dumps
from a2ui_client.monitoring import metrics_collector

logger = get_logger(__name__)


class Transport(Protocol):
    """What the dispatcher needs from the network layer."""

    async def get(self, url: str) -> str:
        """Fetch a raw NDJSON payload."""
        ...

    async def post(self, url: str, body: dict[str, Any]) -> str:
        """Send a JSON body and return the raw NDJSON response."""
        ...


class HttpTransport:
    """
    Async HTTP transport for agent servers.
    Redirects are followed. Other non-success statuses and network failures
    surface as TransportError; nothing is retried.
    """

    def __init__(self, timeout: float | None = None, client: httpx.AsyncClient | None = None) -> None:
        """
        Initialize transport.

        Args:
            timeout: Request timeout in seconds (defaults to settings)
            client: Preconfigured httpx client (owned by the caller)
        """
        self.timeout = timeout or get_settings().request_timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)

        logger.debug("transport_init", timeout=self.timeout)

    async def get(self, url: str) -> str:
        return await self._request("GET", url)

    async def post(self, url: str, body: dict[str, Any]) -> str:
        return await self._request(
            "POST",
            url,
            content=safe_json_dumps(body).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    async def _request(self, method: str, url: str, headers: dict[str, str] | None = None, **kwargs: Any) -> str:
        status = "error"

        def record(duration: float) -> None:
            metrics_collector.record_http(method, status, duration)

        with metrics_collector.measure_duration(record):
            async with trace_operation_async("http_request", method=method, url=url) as span:
                request_headers = {"Accept": "application/x-ndjson", **(headers or {})}
                inject_trace_context(request_headers)

                try:
                    response = await self._client.request(method, url, headers=request_headers, **kwargs)
                    status = str(response.status_code)
                    if span is not None:
                        span.set_status(response.status_code)
                    response.raise_for_status()
                except httpx.HTTPStatusError as e:
                    code = e.response.status_code
                    logger.warning("http_status_error", method=method, url=url, status=code)
                    raise TransportError(f"HTTP {code}", url, code) from e
                except httpx.HTTPError as e:
                    logger.warning("http_error", method=method, url=url, error=str(e))
                    raise TransportError(str(e) or type(e).__name__, url) from e

        return response.text

    async def close(self) -> None:
        """Close HTTP client"""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
