"""
Users API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_middleware
from api.routes import health_router
from api.routes import router as users_router
from auth.routes import router as auth_router
from config.settings import get_settings
from database.session import get_database
from utils.errors import StoreError

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "asyncio", "httpx", "httpcore"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to the store before serving; refuse to start if that fails."""
    database = get_database()
    try:
        await database.connect()
    except StoreError:
        logger.critical("Cannot reach the database — aborting startup")
        raise
    logger.info("Application ready to accept requests.")

    yield

    await database.dispose()
    logger.info("Shutdown complete.")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.debug)

    app = FastAPI(
        title="API de Usuarios",
        version="1.0.0",
        description="API REST con operaciones CRUD para gestión de usuarios.",
        lifespan=lifespan,
        docs_url="/api-docs",
        redoc_url="/api-docs/redoc",
        openapi_url="/api-docs/openapi.json",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    # Routes — login first so "/usuarios/login" is never read as an id
    app.include_router(auth_router, prefix="/usuarios")
    app.include_router(users_router, prefix="/usuarios")
    app.include_router(health_router)

    return app


app = create_app()

if __name__ == "__main__":
    _settings = get_settings()
    logger.info("Documentation at http://%s:%d/api-docs", _settings.host, _settings.port)
    uvicorn.run(
        "main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
        log_level="debug" if _settings.debug else "info",
    )
