from __future__ import annotations
import logging
from concurrent.futures import Future
from typing import Optional, Tuple

from dbcheck.db.store import DiagnosticStore
from dbcheck.services.diagnostic.models.model import SampleRow, TableHealth, TableInspection
from dbcheck.services.diagnostic.utils.prober import probe_table

logger = logging.getLogger(__name__)

def sample_table(store: DiagnosticStore, table: str) -> Tuple[Optional[SampleRow], Tuple[str, ...]]:
    """First row of the table and its ordered columns; (None, ()) when empty or unreadable."""
    try:
        rows = store.sample(table, limit=1)
    except Exception as e:
        # count already succeeded: keep the table, drop the sample
        logger.warning("Sample failed for table %r: %s", table, e)
        return None, ()
    if not rows:
        return None, ()
    row = dict(rows[0])
    return row, tuple(row.keys())

def inspect_table(
    store: DiagnosticStore,
    table: str,
    probed: Optional[Future] = None,
) -> TableInspection:
    """Probe, then sample only when the probe found the table.

    If `probed` is given, it receives the sample-less inspection as soon as the
    count is known, so callers can keep the count when sampling stalls.
    """
    exists, row_count, issue = probe_table(store, table)
    if not exists:
        inspection = TableInspection(table=table, health=TableHealth.missing(), issues=(issue,) if issue else ())
        if probed is not None:
            probed.set_result(inspection)
        return inspection

    if probed is not None:
        probed.set_result(TableInspection(table=table, health=TableHealth(exists=True, row_count=row_count)))
    sample_row, columns = sample_table(store, table)
    health = TableHealth(exists=True, row_count=row_count, sample_row=sample_row, columns=columns)
    return TableInspection(table=table, health=health)
