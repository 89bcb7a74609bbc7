from dbcheck.constants.catalog import DEFAULT_CATALOG
from dbcheck.services.diagnostic.models.model import (
    ForeignKeyRelation,
    TableHealth,
    UserProfileFlags,
)
from dbcheck.services.diagnostic.utils.consistency import (
    check_orphans,
    check_profile_links,
    profile_issues,
)

CUSTOMERS_USERS = ForeignKeyRelation("customers", "user_id", "users", "id", "customer", "user")

PRESENT = TableHealth(exists=True, row_count=1)


def _present(*names):
    return {n: PRESENT for n in names}


def test_single_orphan_reported_once(make_store):
    store = make_store({
        "customers": [{"id": 1, "user_id": 5}, {"id": 2, "user_id": 99}],
        "users": [{"id": 5}],
    })
    issues = check_orphans(store, CUSTOMERS_USERS, _present("customers", "users"))
    assert issues == ["Found 1 customer(s) without a user account"]


def test_many_orphans_still_one_issue(make_store):
    store = make_store({
        "customers": [{"id": i, "user_id": 100 + i} for i in range(4)],
        "users": [],
    })
    issues = check_orphans(store, CUSTOMERS_USERS, _present("customers", "users"))
    assert issues == ["Found 4 customer(s) without a user account"]


def test_null_foreign_key_is_not_an_orphan(make_store):
    store = make_store({"customers": [{"id": 1, "user_id": None}], "users": []})
    assert check_orphans(store, CUSTOMERS_USERS, _present("customers", "users")) == []


def test_orphan_check_gated_on_existence(make_store):
    store = make_store()
    tables = {"customers": PRESENT, "users": TableHealth.missing()}
    assert check_orphans(store, CUSTOMERS_USERS, tables) == []
    assert not any(c[0] == "orphans" for c in store.calls)


def test_orphan_query_error_uses_access_wording(make_store):
    store = make_store(orphan_failing=True)
    issues = check_orphans(store, CUSTOMERS_USERS, _present("customers", "users"))
    assert issues == ["Table 'customers' might not exist or is not accessible"]


def test_customer_without_profile():
    users = [UserProfileFlags(id=7, email="a@b.test", role="customer", has_customer_profile=False)]
    assert profile_issues(users, DEFAULT_CATALOG) == [
        "User a@b.test is a customer but has no customer profile"
    ]


def test_user_without_email_is_named_by_id():
    users = [UserProfileFlags(id=12, email=None, role="employee")]
    assert profile_issues(users, DEFAULT_CATALOG) == [
        "User #12 is an employee but has no employee profile"
    ]


def test_linked_and_admin_users_are_fine():
    users = [
        UserProfileFlags(id=1, email="c@b.test", role="customer", has_customer_profile=True),
        UserProfileFlags(id=2, email="e@b.test", role="employee", has_employee_profile=True),
        UserProfileFlags(id=3, email="root@b.test", role="admin"),
    ]
    assert profile_issues(users, DEFAULT_CATALOG) == []


def test_profile_check_reads_store(make_store):
    tables = {
        "users": [
            {"id": 1, "email": "cara@shop.test", "role": "customer"},
            {"id": 2, "email": "eve@shop.test", "role": "employee"},
        ],
        "customers": [],
        "employees": [{"id": 1, "user_id": 2}],
    }
    store = make_store(tables)
    issues = check_profile_links(store, DEFAULT_CATALOG, _present("users", "customers", "employees"))
    assert issues == ["User cara@shop.test is a customer but has no customer profile"]


def test_profile_check_skipped_when_profile_table_missing(make_store):
    store = make_store()
    tables = {"users": PRESENT, "customers": PRESENT, "employees": TableHealth.missing()}
    assert check_profile_links(store, DEFAULT_CATALOG, tables) == []
    assert ("profiles",) not in store.calls


def test_profile_query_error_is_not_a_finding(make_store):
    store = make_store(profile_failing=True)
    issues = check_profile_links(store, DEFAULT_CATALOG, _present("users", "customers", "employees"))
    assert issues == ["Table 'users' might not exist or is not accessible"]
