from __future__ import annotations
import logging
from typing import List, Mapping, Sequence

from dbcheck.db.store import DiagnosticStore
from dbcheck.services.diagnostic.models.model import (
    Catalog,
    ForeignKeyRelation,
    TableHealth,
    UserProfileFlags,
)
from dbcheck.services.diagnostic.utils.prober import access_issue

logger = logging.getLogger(__name__)

def all_exist(tables: Mapping[str, TableHealth], names: Sequence[str]) -> bool:
    return all(tables.get(n) is not None and tables[n].exists for n in names)

# --------------------- Orphans --------------------- #

def orphan_issue(relation: ForeignKeyRelation, k: int) -> str:
    return f"Found {k} {relation.child_label}(s) without a {relation.parent_label} account"

def check_orphans(
    store: DiagnosticStore,
    relation: ForeignKeyRelation,
    tables: Mapping[str, TableHealth],
) -> List[str]:
    if not all_exist(tables, (relation.child, relation.parent)):
        return []
    try:
        orphans = store.query_orphans(
            relation.child, relation.child_fk, relation.parent, relation.parent_key
        )
    except Exception as e:
        logger.warning("Orphan query failed for %s: %s", relation.label, e)
        return [access_issue(relation.child)]

    k = len(orphans)
    if k:
        logger.info("%d orphan(s) for %s", k, relation.label)
        return [orphan_issue(relation, k)]
    return []

# --------------------- Profile links --------------------- #

def profile_issues(users: Sequence[UserProfileFlags], catalog: Catalog) -> List[str]:
    issues: List[str] = []
    for u in users:
        for link in catalog.profile_links:
            if u.role == link.role and not u.has_profile_for(link.role):
                article = "an" if link.role[:1] in "aeiou" else "a"
                who = u.email if u.email else f"#{u.id}"
                issues.append(f"User {who} is {article} {link.role} but has no {link.role} profile")
    return issues

def check_profile_links(
    store: DiagnosticStore,
    catalog: Catalog,
    tables: Mapping[str, TableHealth],
) -> List[str]:
    if not catalog.profile_links or not all_exist(tables, catalog.profile_tables()):
        return []
    try:
        users = store.query_user_profile_flags()
    except Exception as e:
        logger.warning("Profile flag query failed: %s", e)
        return [access_issue(catalog.users_table)]
    return profile_issues(users, catalog)
