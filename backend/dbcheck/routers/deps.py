# dbcheck/routers/deps.py
from fastapi import HTTPException, Request

from dbcheck.core.errors import FatalConfigurationError
from dbcheck.db.store import DiagnosticStore
from dbcheck.services.diagnostic.diagnostic_service import DiagnosticEngine

def get_diagnostic_engine(request: Request) -> DiagnosticEngine:
    return request.app.state.diagnostic_engine

def get_store(request: Request) -> DiagnosticStore:
    engine: DiagnosticEngine = request.app.state.diagnostic_engine
    try:
        return engine.require_store()
    except FatalConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))
