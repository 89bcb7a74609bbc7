# dbcheck/routers/diagnostic.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from dbcheck.core.errors import FatalConfigurationError
from dbcheck.routers.deps import get_diagnostic_engine
from dbcheck.schemas.diagnostic import (
    DiagnosticReportResponse,
    QuickHealthResponse,
    ReportSummary,
    TableHealthOut,
)
from dbcheck.services.diagnostic.diagnostic_service import DiagnosticEngine
from dbcheck.services.diagnostic.models.model import DiagnosticReport
from dbcheck.services.diagnostic.utils.report_format import format_report

router = APIRouter(prefix="/diagnostic", tags=["diagnostic"])

def _report_payload(report: DiagnosticReport) -> DiagnosticReportResponse:
    return DiagnosticReportResponse(
        tables={
            name: TableHealthOut(
                exists=t.exists,
                row_count=t.row_count,
                sample_row=None if t.sample_row is None else dict(t.sample_row),
                columns=list(t.columns),
                column_kinds=t.column_kinds(),
            )
            for name, t in report.tables.items()
        },
        issues=list(report.issues),
        recommendations=list(report.recommendations),
        summary=ReportSummary(
            total_tables=report.total_tables,
            active_tables=report.active_tables,
            total_rows=report.total_rows,
            issue_count=len(report.issues),
        ),
    )

def _run(engine: DiagnosticEngine, timeout: Optional[float]) -> DiagnosticReport:
    try:
        return engine.run_diagnostic(timeout=timeout)
    except FatalConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.get("", response_model=DiagnosticReportResponse)
def run_diagnostic(
    timeout: Optional[float] = Query(None, gt=0, description="Deadline in seconds for the whole run"),
    engine: DiagnosticEngine = Depends(get_diagnostic_engine),
) -> DiagnosticReportResponse:
    return _report_payload(_run(engine, timeout))

@router.get("/text", response_class=PlainTextResponse)
def run_diagnostic_text(
    timeout: Optional[float] = Query(None, gt=0),
    engine: DiagnosticEngine = Depends(get_diagnostic_engine),
) -> str:
    return format_report(_run(engine, timeout))

@router.get("/quick", response_model=QuickHealthResponse)
def quick_check(engine: DiagnosticEngine = Depends(get_diagnostic_engine)) -> QuickHealthResponse:
    try:
        health = engine.quick_check()
    except FatalConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return QuickHealthResponse(ready=health.ready, message=health.message)
