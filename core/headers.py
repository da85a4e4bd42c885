"""Header construction for upstream requests and relayed responses."""

from collections.abc import Iterable

EXCLUDED_REQUEST_HEADERS = frozenset({"host", "origin", "referer", "cookie"})

# Connection-scoped headers of the upstream hop
HOP_BY_HOP_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
})

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Max-Age": "86400",
    "Access-Control-Expose-Headers": "*",
}

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def cors_headers() -> dict[str, str]:
    """Return a fresh copy of the CORS header set."""
    return dict(CORS_HEADERS)


class HeaderBuilder:
    """Build outbound request headers and relayed response headers."""

    def build_upstream_headers(self, items: Iterable[tuple[str, str]]) -> dict[str, str]:
        """Copy inbound headers, dropping host, origin, referer and cookie.

        Repeated headers are joined into one comma-separated value.
        """
        upstream: dict[str, str] = {}
        for key, value in items:
            if key.lower() in EXCLUDED_REQUEST_HEADERS:
                continue
            if key in upstream:
                upstream[key] = f"{upstream[key]}, {value}"
            else:
                upstream[key] = value
        return upstream

    def build_response_headers(
        self,
        upstream_items: Iterable[tuple[str, str]],
    ) -> list[tuple[str, str]]:
        """Upstream headers with CORS and no-cache values forced on top."""
        overrides = {**CORS_HEADERS, **NO_CACHE_HEADERS}
        overridden = {key.lower() for key in overrides}
        headers = [
            (key, value)
            for key, value in upstream_items
            if key.lower() not in overridden and key.lower() not in HOP_BY_HOP_HEADERS
        ]
        headers.extend(overrides.items())
        return headers
