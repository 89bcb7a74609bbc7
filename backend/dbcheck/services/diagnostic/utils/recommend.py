from __future__ import annotations
from typing import List, Mapping, Sequence

from dbcheck.services.diagnostic.models.model import Catalog, TableHealth
from dbcheck.services.diagnostic.utils.content import sampled_hash_format

REC_CREATE_ADMIN = "No users found. Create at least one admin user to get started."
REC_SEED_SERVICES = "No services found. Add services to your catalog (Oil Change, Brake Service, etc.)"
REC_HASH_FORMAT = (
    "Password hashes do not appear to be bcrypt format. "
    "Review hash handling for legacy credentials or plan a migration to bcrypt."
)

def _empty(tables: Mapping[str, TableHealth], name: str) -> bool:
    t = tables.get(name)
    return t is not None and t.row_count == 0

def recommend(
    tables: Mapping[str, TableHealth],
    issues: Sequence[str],
    catalog: Catalog,
) -> List[str]:
    """Advisory text for a finished run. Rules are independent and applied in order."""
    out: List[str] = []
    if _empty(tables, catalog.users_table):
        out.append(REC_CREATE_ADMIN)
    if _empty(tables, catalog.services_table):
        out.append(REC_SEED_SERVICES)
    if sampled_hash_format(tables, catalog) == "non-bcrypt":
        out.append(REC_HASH_FORMAT)
    return out
