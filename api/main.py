"""
api/main.py — punkt wejścia FastAPI.

Lifespan:
  - Tworzy bezstanowy Calculator (parser + evaluator) z limitami z Settings
  - Udostępnia go routerom przez app.state
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adapters.calculator import Calculator
from api.routers import calc
from api.schemas import HealthResponse
from config import Settings

logger = logging.getLogger("prove_calc")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # Adapter bezstanowy, tworzony raz
    app.state.calculator = Calculator.from_settings(settings)

    logger.info(
        "ProveCalc API ready (max_nesting=%d, max_tree_depth=%d, max_ast_depth=%d).",
        settings.max_nesting,
        settings.max_tree_depth,
        settings.max_ast_depth,
    )
    yield

    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(calc.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(status="ok", version=settings.app_version)

    return app


app = create_app()
