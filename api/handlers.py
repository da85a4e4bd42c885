"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse

from core.config import Config
from core.exceptions import TargetDecodeError, UpstreamTimeoutError
from core.headers import cors_headers
from core.protocols import RequestLogger
from core.target import is_reserved_static_path
from services.forwarding_service import carries_body

TIMEOUT_MESSAGE = "代理请求超时"
FAILURE_TEMPLATE = "代理请求失败: {message}"


def _raw_path(request: Request) -> str:
    """Return the request path before percent-decoding."""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return request.url.path
    return raw_path.split(b"?", 1)[0].decode("latin-1")


def _url_param(request: Request) -> str | None:
    """Return the first `url` query parameter, like URLSearchParams.get."""
    values = request.query_params.getlist("url")
    return values[0] if values else None


def _preflight_response() -> Response:
    return Response(status_code=204, headers=cors_headers())


def _timeout_response() -> Response:
    return PlainTextResponse(TIMEOUT_MESSAGE, status_code=504, headers=cors_headers())


def _failure_response(error: Exception) -> Response:
    message = str(error) or type(error).__name__
    return PlainTextResponse(
        FAILURE_TEMPLATE.format(message=message),
        status_code=500,
        headers=cors_headers(),
    )


async def handle_proxy(
    request: Request,
    config: Config,
    logger: RequestLogger,
) -> Response:
    """Handle any request: pre-flight, relay, or static fallback."""
    if request.method == "OPTIONS":
        logger.log_preflight(request.url.path)
        return _preflight_response()

    forwarding = request.app.state.forwarding_service
    try:
        target_url = forwarding.resolve(
            _raw_path(request),
            request.url.query,
            _url_param(request),
        )
    except TargetDecodeError as e:
        logger.log_error(request.url.path, 500, str(e))
        return _failure_response(e)

    if not target_url:
        path = request.url.path
        logger.log_static(path, reserved=is_reserved_static_path(path))
        return await request.app.state.static_fallback(request)

    try:
        body = await request.body() if carries_body(request.method) else None
        prepared = forwarding.prepare(request.method, target_url, request.headers.items(), body)
        return await request.app.state.upstream_client.relay(prepared, logger)
    except UpstreamTimeoutError:
        logger.log_error(target_url, 504, "Upstream timeout")
        return _timeout_response()
    except Exception as e:  # noqa: BLE001
        logger.log_error(target_url, 500, str(e) or type(e).__name__)
        return _failure_response(e)
