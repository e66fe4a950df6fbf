"""
SQL-proxy service: forwards guarded SQL text to PostgreSQL.

    uvicorn sql_main:app --port 3001
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from core import db, http
from core.config import Settings, load_settings, normalize_base_path
from core.logging_config import setup_logging
from sql_proxy import router as sql_router
from sql_proxy import service as sql_service

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, *, connect: bool = True) -> FastAPI:
    """
    Build one SQL-proxy instance. With `connect=True` the DB pool is opened
    during startup and a failed connection aborts it.
    """
    settings = settings or load_settings(default_port=3001, default_base_path="/api")
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if not connect:
            yield
            return
        # Eager connect: an unreachable database is a fatal startup error.
        await db.init_pool(settings)
        try:
            yield
        finally:
            await db.close_pool()

    app = FastAPI(title="Lexicon SQL proxy", lifespan=lifespan, redirect_slashes=False)
    app.state.settings = settings

    http.install_error_handlers(app)
    app.add_middleware(http.CORSHeadersMiddleware)

    app.include_router(sql_router.router, prefix=normalize_base_path(settings.base_path), tags=["sql"])

    @app.get("/health")
    async def health() -> JSONResponse:
        status_code, payload = await sql_service.health()
        return http.json_response(status_code, payload)

    return app


app = create_app()


def run() -> None:
    settings: Settings = app.state.settings
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
