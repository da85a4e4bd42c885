"""Target URL resolution - decides whether a request is a proxy request."""

import re
from urllib.parse import unquote

from core.exceptions import TargetDecodeError

RESERVED_STATIC_PATHS = frozenset({
    "/",
    "/index.html",
    "/logo.ico",
    "/logo.gif",
    "/_headers",
    "/wrangler.toml",
    "/wrangler.json",
})

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_component(value: str) -> str:
    """Percent-decode a URL component, rejecting malformed escapes.

    Unlike ``unquote_plus`` a ``+`` is kept as-is.
    """
    if _MALFORMED_ESCAPE.search(value):
        raise TargetDecodeError("URI malformed")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as e:
        raise TargetDecodeError("URI malformed") from e


def is_reserved_static_path(path: str) -> bool:
    """Check if the path belongs to the static site."""
    return path in RESERVED_STATIC_PATHS


class TargetResolver:
    """Extract the absolute target URL from an inbound request."""

    def resolve(
        self,
        raw_path: str,
        query_string: str,
        url_param: str | None,
    ) -> str | None:
        """Return the target URL, or None if this is not a proxy request.

        ``raw_path`` is the still percent-encoded request path and
        ``url_param`` the once-decoded ``url`` query parameter.
        """
        candidate = self._candidate(raw_path, query_string, url_param)
        if not candidate:
            return None
        if candidate.startswith("http"):
            return candidate
        return decode_component(candidate)

    def _candidate(
        self,
        raw_path: str,
        query_string: str,
        url_param: str | None,
    ) -> str | None:
        if url_param:
            return url_param

        remainder = raw_path[1:] if raw_path.startswith("/") else raw_path
        if not remainder.startswith("http"):
            return None
        search = f"?{query_string}" if query_string else ""
        return decode_component(remainder) + search
