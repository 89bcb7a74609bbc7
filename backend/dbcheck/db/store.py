# dbcheck/db/store.py
from __future__ import annotations
from typing import Any, List, Optional, Protocol

import pandas as pd
from sqlalchemy import text
from sqlalchemy.engine import Engine

from dbcheck.constants.sql_query import (
    SQL_ACTIVE_SERVICE_NAMES,
    SQL_AFTER_CLAUSE,
    SQL_AVAILABLE_EMPLOYEES,
    SQL_COUNT,
    SQL_HAS_PROFILE,
    SQL_ORPHANS_PAGE,
    SQL_PASSWORD_HASH,
    SQL_SAMPLE,
    SQL_USER_PROFILE_FLAGS,
)
from dbcheck.core.config import Settings
from dbcheck.db.engine import get_engine
from dbcheck.services.diagnostic.models.model import (
    Catalog,
    EmployeeSummary,
    OrphanRow,
    SampleRow,
    UserProfileFlags,
    to_cell,
    to_sample_row,
)

class DiagnosticStore(Protocol):
    """Read-only operations the diagnostic engine needs. Failures raise."""

    def count(self, table: str) -> int: ...

    def sample(self, table: str, limit: int = 1) -> List[SampleRow]: ...

    def query_orphans(
        self, child_table: str, child_fk: str, parent_table: str, parent_key: str
    ) -> List[OrphanRow]: ...

    def query_user_profile_flags(self) -> List[UserProfileFlags]: ...

    def fetch_password_hash(self, email: str) -> Optional[str]: ...

    def has_profile(self, profile_table: str, fk_column: str, user_id: Any) -> bool: ...

    def active_service_names(self) -> List[str]: ...

    def available_employees(self) -> List[EmployeeSummary]: ...


class SqlStore:
    """DiagnosticStore over any SQLAlchemy engine."""

    def __init__(
        self,
        engine: Engine,
        catalog: Catalog,
        *,
        orphan_batch_size: int = 1000,
        child_id_column: str = "id",
    ):
        self.engine = engine
        self.catalog = catalog
        self.orphan_batch_size = orphan_batch_size
        self.child_id_column = child_id_column
        self._preparer = engine.dialect.identifier_preparer

    @classmethod
    def from_settings(cls, settings: Settings, catalog: Catalog) -> "SqlStore":
        return cls(get_engine(settings), catalog, orphan_batch_size=settings.ORPHAN_BATCH_SIZE)

    def _q(self, name: str) -> str:
        return self._preparer.quote(name)

    def count(self, table: str) -> int:
        with self.engine.connect() as conn:
            n = conn.execute(text(SQL_COUNT.format(table=self._q(table)))).scalar_one()
        return int(n or 0)

    def sample(self, table: str, limit: int = 1) -> List[SampleRow]:
        sql = SQL_SAMPLE.format(table=self._q(table), limit=int(limit))
        with self.engine.connect() as conn:
            df = pd.read_sql_query(text(sql), con=conn)
        # records keep the select's column order
        return [to_sample_row(r) for r in df.to_dict(orient="records")]

    def query_orphans(
        self, child_table: str, child_fk: str, parent_table: str, parent_key: str
    ) -> List[OrphanRow]:
        """Anti-join paged on the child id so large tables are scanned in batches."""
        fmt = {
            "child": self._q(child_table),
            "child_fk": self._q(child_fk),
            "child_id": self._q(self.child_id_column),
            "parent": self._q(parent_table),
            "parent_key": self._q(parent_key),
            "limit": self.orphan_batch_size,
        }
        first_page = text(SQL_ORPHANS_PAGE.format(after_clause="", **fmt))
        next_page = text(
            SQL_ORPHANS_PAGE.format(after_clause=SQL_AFTER_CLAUSE.format(**fmt), **fmt)
        )

        out: List[OrphanRow] = []
        with self.engine.connect() as conn:
            rows = conn.execute(first_page).mappings().all()
            while rows:
                out.extend(OrphanRow(id=to_cell(r["id"]), fk_value=to_cell(r["fk_value"])) for r in rows)
                if len(rows) < self.orphan_batch_size:
                    break
                rows = conn.execute(next_page, {"after": rows[-1]["id"]}).mappings().all()
        return out

    def query_user_profile_flags(self) -> List[UserProfileFlags]:
        links = {p.role: p for p in self.catalog.profile_links}
        customer = links["customer"]
        employee = links["employee"]
        sql = SQL_USER_PROFILE_FLAGS.format(
            users=self._q(self.catalog.users_table),
            customers=self._q(customer.table),
            customer_fk=self._q(customer.fk_column),
            employees=self._q(employee.table),
            employee_fk=self._q(employee.fk_column),
        )
        with self.engine.connect() as conn:
            rows = conn.execute(text(sql)).mappings().all()
        return [
            UserProfileFlags(
                id=to_cell(r["id"]),
                email=r["email"],
                role=r["role"],
                has_customer_profile=bool(r["has_customer_profile"]),
                has_employee_profile=bool(r["has_employee_profile"]),
            )
            for r in rows
        ]

    def fetch_password_hash(self, email: str) -> Optional[str]:
        sql = SQL_PASSWORD_HASH.format(
            hash_column=self._q(self.catalog.hash_column),
            users=self._q(self.catalog.users_table),
        )
        with self.engine.connect() as conn:
            value = conn.execute(text(sql), {"email": email}).scalar()
        return None if value is None else str(value)

    def has_profile(self, profile_table: str, fk_column: str, user_id: Any) -> bool:
        sql = SQL_HAS_PROFILE.format(table=self._q(profile_table), fk_column=self._q(fk_column))
        with self.engine.connect() as conn:
            return conn.execute(text(sql), {"user_id": user_id}).first() is not None

    def active_service_names(self) -> List[str]:
        sql = SQL_ACTIVE_SERVICE_NAMES.format(services=self._q(self.catalog.services_table))
        with self.engine.connect() as conn:
            return [str(name) for name in conn.execute(text(sql), {"active": True}).scalars()]

    def available_employees(self) -> List[EmployeeSummary]:
        employees = next(p.table for p in self.catalog.profile_links if p.role == "employee")
        sql = SQL_AVAILABLE_EMPLOYEES.format(employees=self._q(employees))
        with self.engine.connect() as conn:
            rows = conn.execute(text(sql), {"available": True}).mappings().all()
        return [
            EmployeeSummary(
                id=to_cell(r["id"]),
                name=" ".join(str(p) for p in (r["first_name"], r["last_name"]) if p),
                department=r["department"],
            )
            for r in rows
        ]
