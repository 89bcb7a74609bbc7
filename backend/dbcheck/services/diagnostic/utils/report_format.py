from __future__ import annotations
from typing import List

from dbcheck.services.diagnostic.models.model import DiagnosticReport

def format_report(report: DiagnosticReport) -> str:
    """Render a report as plain text. Pure: no I/O, no mutation."""
    lines: List[str] = [
        "📊 Database Diagnostic Report",
        f"{report.active_tables}/{report.total_tables} tables active • "
        f"{report.total_rows} rows • {len(report.issues)} issue(s)",
        "",
        "📋 Tables",
    ]
    for name, info in report.tables.items():
        status = "✅" if info.exists else "❌"
        lines.append(f"  {status} {name}: {info.row_count} rows")
        if info.sample_row and info.row_count > 0:
            lines.append(f"     Sample columns: {', '.join(info.columns)}")

    if report.issues:
        lines += ["", "⚠️ Issues Found"]
        lines += [f"  - {issue}" for issue in report.issues]

    if report.recommendations:
        lines += ["", "💡 Recommendations"]
        lines += [f"  - {rec}" for rec in report.recommendations]

    return "\n".join(lines)
