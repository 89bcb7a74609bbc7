from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Tuple, Union
import math

import pandas as pd

Cell = Union[str, int, float, bool, datetime, date, None]
SampleRow = Dict[str, Cell]

HashFormat = Literal["bcrypt", "non-bcrypt"]
HashMethod = Literal["bcrypt", "plain", "unknown"]


def to_cell(value: Any) -> Cell:
    """Normalize a raw store value into the Cell union."""
    if value is None or isinstance(value, (bool, str, int)):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else float(value)
    if value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if hasattr(value, "item"):  # numpy scalars
        return to_cell(value.item())
    return str(value)


def to_sample_row(raw: Mapping[str, Any]) -> SampleRow:
    return {str(k): to_cell(v) for k, v in raw.items()}


def cell_kind(value: Cell) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (datetime, date)):
        return "timestamp"
    return "string"


# --------------------- Catalog --------------------- #

@dataclass(frozen=True)
class ForeignKeyRelation:
    child: str
    child_fk: str
    parent: str
    parent_key: str
    child_label: str
    parent_label: str

    @property
    def label(self) -> str:
        return f"{self.child}.{self.child_fk} -> {self.parent}.{self.parent_key}"


@dataclass(frozen=True)
class ProfileLink:
    role: str
    table: str
    fk_column: str = "user_id"


@dataclass(frozen=True)
class Catalog:
    tables: Tuple[str, ...]
    relations: Tuple[ForeignKeyRelation, ...] = ()
    profile_links: Tuple[ProfileLink, ...] = ()
    users_table: str = "users"
    services_table: str = "services"
    hash_column: str = "password_hash"

    def __post_init__(self) -> None:
        known = set(self.tables)
        if len(known) != len(self.tables):
            raise ValueError("Catalog tables must be unique")
        referenced = [self.users_table]
        for r in self.relations:
            referenced += [r.child, r.parent]
        referenced += [p.table for p in self.profile_links]
        missing = [t for t in referenced if t not in known]
        if missing:
            raise ValueError(f"Catalog references undeclared table(s): {', '.join(missing)}")

    def profile_tables(self) -> Tuple[str, ...]:
        return (self.users_table, *(p.table for p in self.profile_links))


# --------------------- Probe results --------------------- #

@dataclass(frozen=True)
class TableHealth:
    exists: bool
    row_count: int = 0
    sample_row: Optional[Mapping[str, Cell]] = None
    columns: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.row_count < 0:
            raise ValueError("row_count must be >= 0")
        if not self.exists and (self.row_count != 0 or self.sample_row is not None):
            raise ValueError("a missing table cannot carry rows or a sample")
        if self.sample_row is not None:
            object.__setattr__(self, "sample_row", MappingProxyType(dict(self.sample_row)))

    def column_kinds(self) -> Dict[str, str]:
        """Value kind of each sampled column, in column order."""
        if self.sample_row is None:
            return {}
        return {c: cell_kind(v) for c, v in self.sample_row.items()}

    @classmethod
    def missing(cls) -> "TableHealth":
        return cls(exists=False)


@dataclass(frozen=True)
class TableInspection:
    """Outcome of one table task: health plus existence-phase issues."""
    table: str
    health: TableHealth
    issues: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OrphanRow:
    id: Cell
    fk_value: Cell


@dataclass(frozen=True)
class UserProfileFlags:
    id: Cell
    email: Optional[str]
    role: Optional[str]
    has_customer_profile: bool = False
    has_employee_profile: bool = False

    def has_profile_for(self, role: str) -> bool:
        if role == "customer":
            return self.has_customer_profile
        if role == "employee":
            return self.has_employee_profile
        return True


@dataclass(frozen=True)
class EmployeeSummary:
    id: Cell
    name: str
    department: Optional[str] = None


# --------------------- Report --------------------- #

@dataclass(frozen=True)
class DiagnosticReport:
    tables: Mapping[str, TableHealth]
    issues: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))
        object.__setattr__(self, "issues", tuple(self.issues))
        object.__setattr__(self, "recommendations", tuple(self.recommendations))

    @property
    def total_tables(self) -> int:
        return len(self.tables)

    @property
    def active_tables(self) -> int:
        return sum(1 for t in self.tables.values() if t.exists and t.row_count > 0)

    @property
    def total_rows(self) -> int:
        return sum(t.row_count for t in self.tables.values())


@dataclass(frozen=True)
class QuickHealth:
    ready: bool
    message: str

