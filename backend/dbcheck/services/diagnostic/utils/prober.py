from __future__ import annotations
import logging
from typing import Optional, Tuple

from dbcheck.db.store import DiagnosticStore

logger = logging.getLogger(__name__)

def access_issue(table: str) -> str:
    return f"Table '{table}' might not exist or is not accessible"

def probe_table(store: DiagnosticStore, table: str) -> Tuple[bool, int, Optional[str]]:
    """Exact row count for one table.

    Returns (exists, row_count, issue). Store errors are converted into
    exists=False plus an access issue and never leave this function.
    """
    try:
        n = int(store.count(table))
    except Exception as e:
        logger.warning("Probe failed for table %r: %s", table, e)
        return False, 0, access_issue(table)
    return True, max(n, 0), None
