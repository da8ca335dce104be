# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import RedisError

from . import __version__
from .api import (
    auth_router,
    editor_router,
    health_router,
    notes_router,
    public_router,
    sharing_router,
)
from .config import get_settings
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .database import create_tables

setup_logging()
logger = get_logger("main")

settings = get_settings()

API_PREFIX = "/api"
ROUTERS = (
    auth_router,
    notes_router,
    sharing_router,
    public_router,
    editor_router,
    health_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting MarkNote",
        extra={"version": __version__, "environment": settings.environment},
    )

    redis_client = get_redis_client()
    try:
        await redis_client.connect()
    except (RedisError, OSError) as e:
        # logout revocation and rate limits are off until Redis is back
        logger.warning(f"Running without Redis: {e}")

    # tests run against their own in-memory database
    if os.getenv("MARKNOTE_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping table creation (MARKNOTE_SKIP_LIFESPAN_DB=1)")
    else:
        await create_tables()
        logger.info("Database tables created/verified")

    yield

    logger.info("Shutting down MarkNote")
    await redis_client.disconnect()


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        description="Markdown notes with public share links",
        version=__version__,
        lifespan=lifespan,
    )

    application.add_middleware(LoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in ROUTERS:
        application.include_router(router, prefix=API_PREFIX)

    @application.get("/")
    async def root():
        return {"message": "MarkNote API"}

    @application.get(f"{API_PREFIX}/")
    async def api_root():
        return {
            "message": "MarkNote API",
            "version": __version__,
            "documentation": {"swagger_ui": "/docs", "redoc": "/redoc"},
            "endpoints": {
                "authentication": f"{API_PREFIX}/auth/",
                "notes": f"{API_PREFIX}/notes/",
                "sharing": f"{API_PREFIX}/notes/{{note_id}}/share",
                "public": f"{API_PREFIX}/share/{{share_token}}",
                "editor": f"{API_PREFIX}/editor/",
                "health": f"{API_PREFIX}/health/",
            },
        }

    # liveness probe without touching the database
    @application.get("/health")
    async def basic_health():
        return {"status": "ok"}

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("marknote.main:app", host=settings.host, port=settings.port, reload=settings.reload)
