from dbcheck.constants.catalog import DEFAULT_CATALOG
from dbcheck.services.diagnostic.models.model import TableHealth
from dbcheck.services.diagnostic.utils.recommend import (
    REC_CREATE_ADMIN,
    REC_HASH_FORMAT,
    REC_SEED_SERVICES,
    recommend,
)


def _tables(users_rows=1, services_rows=1, hash_value="$2b$10$abc"):
    users_sample = {"id": 1, "password_hash": hash_value} if users_rows else None
    return {
        "users": TableHealth(
            exists=True, row_count=users_rows, sample_row=users_sample,
            columns=tuple(users_sample or ()),
        ),
        "services": TableHealth(exists=True, row_count=services_rows),
    }


def test_healthy_store_needs_nothing():
    assert recommend(_tables(), [], DEFAULT_CATALOG) == []


def test_rules_apply_in_fixed_order():
    tables = _tables(users_rows=0, services_rows=0)
    assert recommend(tables, [], DEFAULT_CATALOG) == [REC_CREATE_ADMIN, REC_SEED_SERVICES]


def test_missing_services_table_still_recommends_seeding():
    tables = _tables()
    tables["services"] = TableHealth.missing()
    assert recommend(tables, [], DEFAULT_CATALOG) == [REC_SEED_SERVICES]


def test_non_bcrypt_sample_gives_one_recommendation():
    recs = recommend(_tables(hash_value="mypassword123"), [], DEFAULT_CATALOG)
    assert recs == [REC_HASH_FORMAT]


def test_deterministic():
    tables = _tables(users_rows=1, services_rows=0, hash_value="plain")
    issues = ["Found 2 customer(s) without a user account"]
    assert recommend(tables, issues, DEFAULT_CATALOG) == recommend(dict(tables), list(issues), DEFAULT_CATALOG)
