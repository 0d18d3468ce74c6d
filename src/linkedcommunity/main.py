"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown of the database pool.
Middleware, CORS, error handlers and routers are all registered here.

Run it with uvicorn's factory mode:
    uvicorn linkedcommunity.main:create_app --factory --port 5000
or via the CLI:
    linkedcommunity serve
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkedcommunity import __version__
from linkedcommunity.api import api_router
from linkedcommunity.config import Settings
from linkedcommunity.db.engine import build_engine, build_session_factory, init_models
from linkedcommunity.errors import register_exception_handlers
from linkedcommunity.log import configure_logging
from linkedcommunity.middleware.request_id import RequestIdMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown. uvicorn turns SIGINT/SIGTERM into a shutdown, so the
    pool is drained by engine.dispose() on both signals.
    """
    settings: Settings = app.state.settings
    logger.info(
        "app.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    if settings.auto_create_tables:
        await init_models(engine)
        logger.info("app.tables_ready")

    yield

    logger.info("app.shutdown")
    await engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application.

    Settings() raises if JWT_SECRET is missing, so a misconfigured
    process never starts serving.
    """
    settings = settings or Settings()
    configure_logging(settings)

    app = FastAPI(
        title="LinkedCommunity API",
        description="Profiles, posts and likes for a small professional network",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app
