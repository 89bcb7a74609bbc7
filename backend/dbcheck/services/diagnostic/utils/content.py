from __future__ import annotations
from typing import Mapping, Optional

from dbcheck.constants.regex_constants import _BCRYPT, _PLAIN_MAX_LEN
from dbcheck.services.diagnostic.models.model import (
    Catalog,
    Cell,
    HashFormat,
    HashMethod,
    TableHealth,
)

def is_bcrypt(value: str) -> bool:
    return bool(_BCRYPT.match(value))

def classify_hash_format(value: str) -> HashFormat:
    return "bcrypt" if is_bcrypt(value) else "non-bcrypt"

def classify_password_hash(value: Optional[Cell]) -> HashMethod:
    """Heuristic guess at how one stored credential was written. Not a security check."""
    if value is None or value == "":
        return "unknown"
    s = str(value)
    if is_bcrypt(s):
        return "bcrypt"
    if len(s) < _PLAIN_MAX_LEN:
        return "plain"
    return "unknown"

def sampled_hash_format(tables: Mapping[str, TableHealth], catalog: Catalog) -> Optional[HashFormat]:
    """Format of the users table's sampled hash, or None when nothing was sampled."""
    users = tables.get(catalog.users_table)
    if users is None or users.sample_row is None:
        return None
    value = users.sample_row.get(catalog.hash_column)
    if value is None or value == "":
        return None
    return classify_hash_format(str(value))
