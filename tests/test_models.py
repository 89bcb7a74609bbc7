from datetime import datetime
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from dbcheck.services.diagnostic.models.model import (
    Catalog,
    ForeignKeyRelation,
    TableHealth,
    cell_kind,
    to_cell,
)


def test_missing_table_cannot_carry_rows():
    with pytest.raises(ValueError):
        TableHealth(exists=False, row_count=3)
    with pytest.raises(ValueError):
        TableHealth(exists=False, sample_row={"id": 1})


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        TableHealth(exists=True, row_count=-1)


def test_to_cell_normalizes_store_values():
    assert to_cell(np.int64(4)) == 4 and type(to_cell(np.int64(4))) is int
    assert to_cell(np.bool_(True)) is True
    assert to_cell(float("nan")) is None
    assert to_cell(pd.NaT) is None
    assert to_cell(Decimal("12.50")) == 12.5
    assert to_cell(b"abc") == "abc"
    ts = to_cell(pd.Timestamp("2024-03-01 10:00"))
    assert isinstance(ts, datetime) and not isinstance(ts, pd.Timestamp)


def test_cell_kind():
    assert [cell_kind(v) for v in (None, True, 3, 2.5, datetime(2024, 1, 1), "x")] == [
        "null", "bool", "number", "number", "timestamp", "string",
    ]


def test_sample_row_is_read_only():
    source = {"id": 1, "email": "a@b.test", "created_at": None}
    health = TableHealth(exists=True, row_count=1, sample_row=source, columns=tuple(source))
    source["email"] = "changed@b.test"
    assert health.sample_row["email"] == "a@b.test"
    with pytest.raises(TypeError):
        health.sample_row["email"] = "x"
    assert health.column_kinds() == {"id": "number", "email": "string", "created_at": "null"}
    assert TableHealth(exists=True).column_kinds() == {}


def test_catalog_rejects_undeclared_relation_tables():
    with pytest.raises(ValueError):
        Catalog(
            tables=("users",),
            relations=(ForeignKeyRelation("customers", "user_id", "users", "id", "customer", "user"),),
        )
