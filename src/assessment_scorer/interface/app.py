"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from assessment_scorer.interface.dependencies import shutdown, startup
from assessment_scorer.interface.error_handlers import register_error_handlers
from assessment_scorer.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Candidate Assessment Scorer",
        version="1.0.0",
        description=(
            "Takes a candidate's GitHub repository URL and optional AI prompt "
            "transcript and returns a rubric-based score with evidence, "
            "feedback and recommendations."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
