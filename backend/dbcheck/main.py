import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dbcheck.core.config import Settings, get_settings
from dbcheck.routers import compat, diagnostic
from dbcheck.services.diagnostic.diagnostic_service import DiagnosticEngine

def create_app(settings: Optional[Settings] = None, engine: Optional[DiagnosticEngine] = None) -> FastAPI:
    """Build the API. Run with `uvicorn dbcheck.main:create_app --factory`."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="dbcheck API",
        version="0.1.0",
        description="Table health, consistency checks and advisory reports for the shop database.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_methods=["*"], allow_headers=["*"],
    )
    app.state.diagnostic_engine = engine or DiagnosticEngine.from_settings(settings)

    app.include_router(diagnostic.router)
    app.include_router(compat.router)

    @app.get("/healthz", tags=["meta"])
    def healthz():
        return {"status": "ok"}

    return app
