"""
Prospector - FastAPI Backend
REST API over one Workspace: profile, services, search, saved prospects, emails.

Run: uvicorn prospector.api.app:create_app --factory --reload --port 8000
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prospector import config
from prospector.agents.error_handler import user_message_for
from prospector.api.routers import emails, profile, prospects, search, services
from prospector.errors import (
    BulkRunInProgressError,
    ExtractionError,
    ParseError,
    PreconditionError,
    SchemaError,
)
from prospector.logging_config import setup_logging
from prospector.workspace import Workspace

logger = logging.getLogger("prospector.api")


def _error_body(error) -> dict:
    return {"detail": user_message_for(error), "error_type": type(error).__name__}


def create_app(workspace: Workspace = None) -> FastAPI:
    """Build the API around a workspace. Without one, a SQLite-backed workspace
    with no generation backend is opened at config.DB_PATH."""
    setup_logging()
    if workspace is None:
        workspace = Workspace.sqlite(config.DB_PATH)

    app = FastAPI(
        title="Prospector",
        description="Prospect search, lead tracking and outreach email generation API.",
        version="1.0.0",
    )
    app.state.workspace = workspace

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── ROUTERS ─────────────────────────────────────────────
    app.include_router(profile.router)
    app.include_router(services.router)
    app.include_router(search.router)
    app.include_router(prospects.router)
    app.include_router(emails.router)

    # ─── ERROR MAPPING ───────────────────────────────────────

    @app.exception_handler(BulkRunInProgressError)
    async def bulk_in_progress(request: Request, exc: BulkRunInProgressError):
        return JSONResponse(status_code=409, content=_error_body(exc))

    @app.exception_handler(PreconditionError)
    async def precondition_failed(request: Request, exc: PreconditionError):
        return JSONResponse(status_code=400, content=_error_body(exc))

    async def bad_model_response(request: Request, exc):
        logger.warning("Unusable model response on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=502, content=_error_body(exc))

    for exc_class in (ExtractionError, ParseError, SchemaError):
        app.add_exception_handler(exc_class, bad_model_response)

    # ─── HEALTH CHECK ────────────────────────────────────────

    @app.get("/api/health")
    def health():
        ws = app.state.workspace
        return {
            "status": "healthy",
            "persistence": type(ws.persistence).__name__,
            "generator_configured": ws.generator is not None,
            "prospects": len(ws.prospects),
            "emails": len(ws.emails),
            "services": len(ws.services),
            "bulk_state": ws.runner.state.value,
        }

    return app


def main():
    import uvicorn

    config.validate(strict=True)
    uvicorn.run("prospector.api.app:create_app", factory=True,
                host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    main()
