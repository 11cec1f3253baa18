"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mood import MoodStore
from observability import log_metrics_summary
from web.deps import get_config
from web.routes import moods, users
from web.user_store import init_db

logger = structlog.get_logger()


def _verify_jwt_secret() -> None:
    """Refuse to start without a signing secret."""
    if not get_config().auth.jwt_secret:
        logger.critical("JWT_SECRET not set")
        raise RuntimeError("JWT_SECRET required")


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    init_db(config.paths.db_path)
    MoodStore(config.paths.db_path)
    _verify_jwt_secret()
    logger.info("web.startup", db_path=str(config.paths.db_path))
    yield
    log_metrics_summary()
    logger.info("web.shutdown")


app = FastAPI(
    title="QuietMind",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_config().web.frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(moods.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
