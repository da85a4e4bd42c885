"""Forwarding orchestration for proxy requests."""

from collections.abc import Iterable

from core.headers import HeaderBuilder
from core.request_types import RelayRequest
from core.target import TargetResolver

BODYLESS_METHODS = ("GET", "HEAD")


def carries_body(method: str) -> bool:
    """Check if the inbound body should be relayed for this method."""
    return method.upper() not in BODYLESS_METHODS


class ForwardingService:
    """Resolve proxy targets and prepare outbound requests."""

    def __init__(
        self,
        resolver: TargetResolver,
        header_builder: HeaderBuilder,
    ) -> None:
        self._resolver = resolver
        self._headers = header_builder

    def resolve(
        self,
        raw_path: str,
        query_string: str,
        url_param: str | None,
    ) -> str | None:
        """Resolve the target URL for an inbound request."""
        return self._resolver.resolve(raw_path, query_string, url_param)

    def prepare(
        self,
        method: str,
        target_url: str,
        headers: Iterable[tuple[str, str]],
        body: bytes | None,
    ) -> RelayRequest:
        """Prepare the outbound request for the resolved target."""
        method = method.upper()
        return RelayRequest(
            method=method,
            target_url=target_url,
            headers=self._headers.build_upstream_headers(headers),
            body=body if carries_body(method) else None,
        )
