"""Shared protocol definitions."""

from typing import Protocol

from fastapi import Request, Response


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_preflight(self, path: str) -> None: ...
    def log_static(self, path: str, *, reserved: bool) -> None: ...
    def log_relay(
        self,
        method: str,
        target_url: str,
        status: int,
        headers: dict[str, str],
        *,
        elapsed_ms: float,
    ) -> None: ...
    def log_error(self, target: str, status: int, message: str) -> None: ...


class StaticFallback(Protocol):
    """Serves requests that carry no proxy target."""

    async def __call__(self, request: Request) -> Response: ...
