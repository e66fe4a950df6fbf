"""
HTTP plumbing shared by both services: JSON responses, permissive CORS
headers, uniform `{"error": ...}` bodies and bounded JSON body reading.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.datastructures import MutableHeaders
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ROUTE_NOT_FOUND = "Route not found."
INVALID_JSON = "Invalid JSON format"
BODY_TOO_LARGE = "Request body too large"
INTERNAL_ERROR = "Internal server error"


def json_response(status_code: int, payload: Any) -> JSONResponse:
    """
    Serialize `payload` as JSON. CORS headers are set here as well because
    500 responses are rendered outside the middleware stack.
    """
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(payload),
        headers=dict(CORS_HEADERS),
    )


def error_response(status_code: int, message: str) -> JSONResponse:
    return json_response(status_code, {"error": message})


class CORSHeadersMiddleware:
    """
    Answers every OPTIONS request with 204 and stamps the CORS headers on
    every other response.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            response = Response(status_code=204, headers=dict(CORS_HEADERS))
            await response(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in CORS_HEADERS.items():
                    headers[name] = value
            await send(message)

        await self.app(scope, receive, send_with_cors)


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods share one answer.
    if exc.status_code == 405 or (exc.status_code == 404 and exc.detail == "Not Found"):
        return error_response(404, ROUTE_NOT_FOUND)
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = str(errors[0].get("msg")) if errors else "Invalid request"
    return error_response(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return error_response(500, INTERNAL_ERROR)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


async def read_body(request: Request, *, max_bytes: int) -> bytes:
    """
    Read the whole request body, refusing anything over `max_bytes`.
    """
    declared = request.headers.get("content-length", "").strip()
    if declared.isdigit() and int(declared) > max_bytes:
        raise HTTPException(status_code=413, detail=BODY_TOO_LARGE)

    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > max_bytes:
            raise HTTPException(status_code=413, detail=BODY_TOO_LARGE)
        chunks.append(chunk)
    return b"".join(chunks)


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON.
    raise ValueError(f"Invalid JSON constant: {name}")


async def read_json_body(request: Request, *, max_bytes: int) -> Any:
    """
    Parse the request body as JSON. Empty, malformed or `null` bodies are a 400.
    """
    raw = await read_body(request, max_bytes=max_bytes)
    try:
        payload = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError):
        raise HTTPException(status_code=400, detail=INVALID_JSON)
    if payload is None:
        raise HTTPException(status_code=400, detail=INVALID_JSON)
    return payload
