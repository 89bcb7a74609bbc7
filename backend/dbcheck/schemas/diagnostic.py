from datetime import date, datetime
from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field

CellOut = Union[bool, int, float, datetime, date, str, None]

class TableHealthOut(BaseModel):
    exists: bool
    row_count: int = Field(0, ge=0)
    sample_row: Optional[Dict[str, CellOut]] = None
    columns: List[str] = Field(default_factory=list)
    column_kinds: Dict[str, Literal["string", "number", "bool", "null", "timestamp"]] = Field(default_factory=dict)

class ReportSummary(BaseModel):
    total_tables: int
    active_tables: int
    total_rows: int
    issue_count: int

class DiagnosticReportResponse(BaseModel):
    tables: Dict[str, TableHealthOut] = Field(default_factory=dict)
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    summary: ReportSummary

class QuickHealthResponse(BaseModel):
    ready: bool
    message: str

class SampleDataResponse(BaseModel):
    user: Optional[Dict[str, CellOut]] = None
    customer: Optional[Dict[str, CellOut]] = None
    employee: Optional[Dict[str, CellOut]] = None
    service: Optional[Dict[str, CellOut]] = None

class HashMethodResponse(BaseModel):
    email: str
    method: Literal["bcrypt", "plain", "unknown"]

class ProfileCheckResponse(BaseModel):
    user_id: int
    role: str
    has_profile: bool

class EmployeeOut(BaseModel):
    id: int
    name: str
    department: Optional[str] = None
