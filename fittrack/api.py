# -*- coding: utf-8 -*-
"""
fittrack API

Exercise log with a recent-workouts index, the daily exercise reset, and the
food macro table with its categorization.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .app_db import init_app_db
from .exercise.api import router as exercise_router
from .nutrition.api import router as nutrition_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="fittrack",
    description="Exercise log, recent workouts, daily reset and food macros",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.db_path)
    logger.info("fittrack database ready at %s", settings.db_path)


# Ensure the DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.db_path)

app.include_router(exercise_router)
app.include_router(nutrition_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("FITTRACK_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("FITTRACK_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("fittrack.api:app", host=host, port=port, reload=False)
