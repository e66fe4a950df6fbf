"""
Per-application request sequence counter.

The number is only used for human-readable response messages.
"""

from __future__ import annotations

import logging
import threading

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestCounter:
    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value


class RequestCounterMiddleware:
    """
    Counts every HTTP request that reaches routing and stores its number in
    `request.state.request_number`, then logs one access line per request.
    OPTIONS preflights are answered by the CORS middleware before they get
    here, so they are not counted.
    """

    def __init__(self, app: ASGIApp, counter: RequestCounter) -> None:
        self.app = app
        self.counter = counter

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        number = self.counter.increment()
        scope.setdefault("state", {})["request_number"] = number
        status_code = 500

        async def send_with_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        finally:
            logger.info(
                "request method=%s path=%s status=%s n=%s",
                scope["method"],
                scope["path"],
                status_code,
                number,
            )


def request_number(request: Request) -> int:
    return int(getattr(request.state, "request_number", 0))
