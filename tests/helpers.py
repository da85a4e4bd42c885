"""Test doubles shared by the test modules."""

from collections.abc import Callable
from typing import Any

import httpx
from fastapi import Request, Response
from fastapi.responses import PlainTextResponse


class RecordingLogger:
    """RequestLogger that keeps every call for assertions."""

    def __init__(self) -> None:
        self.preflights: list[str] = []
        self.statics: list[tuple[str, bool]] = []
        self.relays: list[dict[str, Any]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_preflight(self, path: str) -> None:
        self.preflights.append(path)

    def log_static(self, path: str, *, reserved: bool) -> None:
        self.statics.append((path, reserved))

    def log_relay(self, method, target_url, status, headers, *, elapsed_ms) -> None:
        self.relays.append(
            {"method": method, "target_url": target_url, "status": status, "headers": headers}
        )

    def log_error(self, target: str, status: int, message: str) -> None:
        self.errors.append((target, status, message))


class RecordingStaticSite:
    """Static fallback stub that records the paths it served."""

    def __init__(self) -> None:
        self.paths: list[str] = []

    async def __call__(self, request: Request) -> Response:
        self.paths.append(request.url.path)
        return PlainTextResponse("static site", status_code=200)


class _UnreadBody(httpx.AsyncByteStream):
    """Response body that has not been read yet, as a network transport returns it."""

    def __init__(self, content: bytes) -> None:
        self._content = content

    async def __aiter__(self):
        yield self._content


class UpstreamRecorder:
    """httpx MockTransport handler that records requests it receives."""

    def __init__(self, handler: Callable[[httpx.Request], Any] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200, text="upstream ok"))

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._handler(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            stream=_UnreadBody(response.content),
        )
