"""
Dictionary service: in-memory word/definition API.

    uvicorn main:app --port 3000
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from core import http
from core.config import Settings, load_settings, normalize_base_path
from core.counter import RequestCounter, RequestCounterMiddleware
from core.logging_config import setup_logging
from definitions import router as definitions_router
from definitions.repository import DefinitionStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: DefinitionStore | None = None) -> FastAPI:
    """
    Build one dictionary service instance. Store and counter live on
    `app.state`, so several instances can coexist in one process.
    """
    settings = settings or load_settings(default_port=3000, default_base_path="")
    setup_logging(settings.log_level)

    app = FastAPI(title="Lexicon dictionary API", redirect_slashes=False)
    app.state.settings = settings
    app.state.definition_store = store if store is not None else DefinitionStore()
    app.state.request_counter = RequestCounter()

    http.install_error_handlers(app)
    # Added last runs first: CORS/OPTIONS wraps the counter.
    app.add_middleware(RequestCounterMiddleware, counter=app.state.request_counter)
    app.add_middleware(http.CORSHeadersMiddleware)

    app.include_router(
        definitions_router.router,
        prefix=normalize_base_path(settings.base_path),
        tags=["definitions"],
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    settings: Settings = app.state.settings
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
