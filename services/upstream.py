"""HTTP relaying of prepared requests to their targets."""

import asyncio
import time

import httpx
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from core.exceptions import UpstreamError, UpstreamTimeoutError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import RelayRequest

# Recomputed by httpx for the body actually sent
FRAMING_HEADERS = frozenset({"content-length", "transfer-encoding"})


class UpstreamClient:
    """Relay requests to arbitrary targets with streaming responses."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        header_builder: HeaderBuilder,
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._headers = header_builder
        self._timeout = timeout

    async def relay(
        self,
        prepared: RelayRequest,
        logger: RequestLogger,
    ) -> StreamingResponse:
        """Send the request and stream the upstream response back.

        Raises:
            UpstreamError: the target is not an absolute URL.
            UpstreamTimeoutError: no response head within the timeout,
                redirects included.
        """
        url = httpx.URL(prepared.target_url)
        if not url.is_absolute_url:
            raise UpstreamError(f"Invalid URL: {prepared.target_url}", target_url=prepared.target_url)

        headers = {
            key: value
            for key, value in prepared.headers.items()
            if key.lower() not in FRAMING_HEADERS
        }
        req = self._client.build_request(
            prepared.method,
            url,
            headers=headers,
            content=prepared.body,
        )
        # Only the projected headers go out, not the client defaults
        outbound = {key.lower() for key in headers}
        for key in self._client.headers.keys():
            if key not in outbound:
                req.headers.pop(key, None)

        started = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                self._client.send(req, stream=True, follow_redirects=True),
                timeout=self._timeout,
            )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamTimeoutError("Upstream timeout", target_url=prepared.target_url) from e
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.log_relay(
            prepared.method,
            prepared.target_url,
            response.status_code,
            prepared.headers,
            elapsed_ms=elapsed_ms,
        )

        streaming = StreamingResponse(
            response.aiter_raw(),
            status_code=response.status_code,
            background=BackgroundTask(self._cleanup_streaming, response),
        )
        for key, value in self._headers.build_response_headers(response.headers.multi_items()):
            streaming.headers.append(key, value)
        return streaming

    async def _cleanup_streaming(self, response: httpx.Response) -> None:
        """Clean up streaming resources."""
        await response.aclose()
