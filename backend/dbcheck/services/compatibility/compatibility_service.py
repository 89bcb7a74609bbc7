from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from dbcheck.constants.catalog import DEFAULT_CATALOG, SAMPLE_TABLES, SETUP_TABLES
from dbcheck.db.store import DiagnosticStore
from dbcheck.services.diagnostic.models.model import Catalog, EmployeeSummary, HashMethod, SampleRow
from dbcheck.services.diagnostic.utils.content import classify_password_hash
from dbcheck.services.diagnostic.utils.prober import probe_table
from dbcheck.services.diagnostic.utils.sampler import sample_table

logger = logging.getLogger(__name__)

def check_database_setup(store: DiagnosticStore) -> Dict[str, bool]:
    """Per core table: does it exist and hold at least one row?"""
    checks: Dict[str, bool] = {}
    for table in SETUP_TABLES:
        exists, row_count, _ = probe_table(store, table)
        checks[table] = exists and row_count > 0
    return checks

def get_sample_data(store: DiagnosticStore) -> Dict[str, Optional[SampleRow]]:
    """First row of each core entity table, None where empty or unreadable."""
    return {entity: sample_table(store, table)[0] for entity, table in SAMPLE_TABLES.items()}

def get_existing_service_names(store: DiagnosticStore) -> List[str]:
    """Names of active services, alphabetical."""
    try:
        return store.active_service_names()
    except Exception as e:
        logger.warning("Service name lookup failed: %s", e)
        return []

def get_available_employees(store: DiagnosticStore) -> List[EmployeeSummary]:
    try:
        return store.available_employees()
    except Exception as e:
        logger.warning("Available employee lookup failed: %s", e)
        return []

def detect_password_hash_method(store: DiagnosticStore, email: str) -> HashMethod:
    try:
        value = store.fetch_password_hash(email)
    except Exception as e:
        logger.warning("Password hash lookup failed for %s: %s", email, e)
        return "unknown"
    return classify_password_hash(value)

def verify_user_profile(
    store: DiagnosticStore,
    user_id: Any,
    role: str,
    catalog: Catalog = DEFAULT_CATALOG,
) -> bool:
    """True when the role needs no profile or the user's profile row exists."""
    link = next((p for p in catalog.profile_links if p.role == role), None)
    if link is None:
        return True
    try:
        return store.has_profile(link.table, link.fk_column, user_id)
    except Exception as e:
        logger.warning("Profile lookup failed for user %s (%s): %s", user_id, role, e)
        return False
