"""Shared request data types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RelayRequest:
    """Prepared data for an upstream request."""

    method: str
    target_url: str
    headers: dict[str, str]
    body: bytes | None = None
