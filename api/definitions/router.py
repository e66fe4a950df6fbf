"""
Dictionary API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from core import counter, http

from . import service
from .repository import DefinitionStore

router = APIRouter()


def get_store(request: Request) -> DefinitionStore:
    return request.app.state.definition_store


@router.get("/api/definitions/")
@router.get("/api/definitions", include_in_schema=False)
async def get_definitions(
    request: Request,
    word: str = Query(default=""),
    store: DefinitionStore = Depends(get_store),
) -> JSONResponse:
    """
    List every entry, or look one up (case-insensitive) with `?word=`.
    """
    number = counter.request_number(request)
    if not word:
        return http.json_response(200, service.list_entries(store, request_number=number))
    return http.json_response(200, service.get_entry(store, word, request_number=number))


@router.post("/api/definitions/")
@router.post("/api/definitions", include_in_schema=False)
async def create_definition(
    request: Request,
    store: DefinitionStore = Depends(get_store),
) -> JSONResponse:
    payload = await http.read_json_body(request, max_bytes=request.app.state.settings.max_body_bytes)
    result = service.create_entry(store, payload, request_number=counter.request_number(request))
    return http.json_response(201, result)
