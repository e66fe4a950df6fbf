"""
SQL-proxy API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from core import http

from . import service

router = APIRouter()


@router.get("/sql")
async def read_sql(q: str | None = Query(default=None)) -> JSONResponse:
    return http.json_response(200, await service.read_query(q))


@router.post("/sql")
async def write_sql(request: Request) -> JSONResponse:
    payload = await http.read_json_body(request, max_bytes=request.app.state.settings.max_body_bytes)
    return http.json_response(201, await service.write_query(payload))

