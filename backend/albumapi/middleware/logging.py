"""
Album API — Access Log Middleware
==================================

What:  One access line per album request, naming the route and what the
       backend call came to.
How:   Pure ASGI middleware. Wraps `send` to catch the status from
       "http.response.start", times the downstream app, then logs the route
       template (e.g. /albums/{album_id}) rather than the raw path, so lines
       for different ids group together.

Status → outcome → level:
    2xx          ok             INFO
    404          not found      INFO
    other 4xx    rejected       WARNING
    5xx          backend error  ERROR

/health is not logged. Request bodies are never logged.
"""

import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from albumapi.middleware.request_id import request_id_var

logger = logging.getLogger("albumapi.access")

UNLOGGED_PATHS = {"/health"}


def outcome_for(status: int) -> tuple:
    """Map a response status to (outcome label, log level)."""
    if status >= 500:
        return "backend error", logging.ERROR
    if status == 404:
        return "not found", logging.INFO
    if status >= 400:
        return "rejected", logging.WARNING
    return "ok", logging.INFO


def _route_path(scope: Scope) -> str:
    route = scope.get("route")
    return getattr(route, "path", None) or scope["path"]


class RequestLoggingMiddleware:
    """Logs method, route, status, outcome and duration of each request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] in UNLOGGED_PATHS:
            await self.app(scope, receive, send)
            return

        status = 500
        start_time = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            # An exception escaping the app is logged as the 500 it becomes
            duration_ms = (time.perf_counter() - start_time) * 1000
            outcome, level = outcome_for(status)
            logger.log(
                level,
                "[%s] %s %s → %d %s (%.1fms)",
                request_id_var.get(""),
                scope["method"],
                _route_path(scope),
                status,
                outcome,
                duration_ms,
            )
