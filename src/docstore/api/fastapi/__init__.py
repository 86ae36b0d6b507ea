import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docstore.api.fastapi.middleware.errors.catchall import CatchAllExceptionMiddleware
from docstore.api.fastapi.middleware.errors.handlers import register_error_handlers
from docstore.api.fastapi.middleware.request_size_limit import RequestSizeLimitMiddleware
from docstore.api.fastapi.routers import health
from docstore.app.core.env import get_env
from docstore.app.settings import AppSettings, get_app_settings
from docstore.db.integration import attach_db
from docstore.db.routers import health as db_health
from docstore.db.settings import DBSettings
from docstore.documents.router import router as documents_router

logger = logging.getLogger(__name__)


def create_app(
        app_settings: AppSettings | None = None,
        db_settings: DBSettings | None = None,
) -> FastAPI:
    """Build the HTTP app: middlewares, error handlers, routes and the DB lifespan.

    Serve it with ``uvicorn --factory docstore.api.fastapi:create_app`` or
    ``docstore serve``.
    """
    settings = app_settings or get_app_settings()

    app = FastAPI(title=settings.name, version=settings.version)

    # Starlette runs the last-added middleware first: size check, then CORS, then catch-all.
    app.add_middleware(CatchAllExceptionMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_payload_bytes)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(db_health.router)
    app.include_router(documents_router, prefix=settings.api_prefix)

    attach_db(app, db_settings)

    logger.info(f"{settings.version} version of {settings.name} initialized [env: {get_env()}]")
    return app


__all__ = ["create_app"]
