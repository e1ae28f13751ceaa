"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.logging_config import setup_logging
from observability import log_metrics_summary
from web.deps import get_config
from web.routes import chat, moods, trends
from web.user_store import init_db

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging(json_mode=config.logging.json_mode, level=config.logging.level)
    if not os.getenv("NEXTAUTH_SECRET"):
        logger.critical("NEXTAUTH_SECRET env var not set")
        raise RuntimeError("NEXTAUTH_SECRET required")
    init_db(config.paths.db_path)
    logger.info("web.startup", db_path=str(config.paths.db_path), llm_provider=config.llm.provider)
    yield
    log_metrics_summary()
    logger.info("web.shutdown")


app = FastAPI(
    title="Mindful Chat",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origin
frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(moods.router)
app.include_router(trends.router)
app.include_router(chat.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
