"""Default static collaborator for requests without a proxy target."""

from pathlib import Path

from fastapi import Request, Response
from fastapi.responses import FileResponse, PlainTextResponse

from core.exceptions import ConfigurationError


class StaticSite:
    """Serve files from a directory, or 404 everything when none is set."""

    def __init__(self, root: str | Path | None = None, index: str = "index.html") -> None:
        self._root = Path(root).expanduser().resolve() if root else None
        if self._root is not None and not self._root.is_dir():
            raise ConfigurationError(f"Static root is not a directory: {self._root}")
        self._index = index

    async def __call__(self, request: Request) -> Response:
        if self._root is None:
            return PlainTextResponse("Not Found", status_code=404)

        file_path = self._lookup(request.url.path)
        if file_path is None:
            return PlainTextResponse("Not Found", status_code=404)
        if request.method not in ("GET", "HEAD"):
            return PlainTextResponse(
                "Method Not Allowed",
                status_code=405,
                headers={"Allow": "GET, HEAD"},
            )
        return FileResponse(file_path)

    def _lookup(self, path: str) -> Path | None:
        """Map a URL path to a file under the root, or None."""
        relative = path.lstrip("/")
        if not relative or relative.endswith("/"):
            relative += self._index

        candidate = (self._root / relative).resolve()
        if not candidate.is_relative_to(self._root):
            return None
        if candidate.is_dir():
            candidate = candidate / self._index
        return candidate if candidate.is_file() else None
