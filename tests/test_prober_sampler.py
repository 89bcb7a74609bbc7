from dbcheck.services.diagnostic.utils.prober import probe_table
from dbcheck.services.diagnostic.utils.sampler import inspect_table, sample_table


def test_probe_counts_rows(make_store):
    store = make_store()
    assert probe_table(store, "users") == (True, 3, None)


def test_probe_failure_is_converted_to_issue(make_store):
    store = make_store(failing={"parts"})
    exists, row_count, issue = probe_table(store, "parts")
    assert (exists, row_count) == (False, 0)
    assert issue == "Table 'parts' might not exist or is not accessible"


def test_inspect_skips_sample_for_missing_table(make_store):
    store = make_store({"users": []})
    inspection = inspect_table(store, "feedback")
    assert inspection.health.exists is False
    assert inspection.health.row_count == 0
    assert inspection.health.sample_row is None
    assert ("sample", "feedback") not in store.calls
    assert len(inspection.issues) == 1 and "feedback" in inspection.issues[0]


def test_empty_table_is_valid_and_silent(make_store):
    store = make_store({"services": []})
    inspection = inspect_table(store, "services")
    assert inspection.health.exists is True
    assert inspection.health.row_count == 0
    assert inspection.health.sample_row is None
    assert inspection.health.columns == ()
    assert inspection.issues == ()


def test_sample_keeps_column_order(make_store):
    store = make_store()
    row, columns = sample_table(store, "users")
    assert columns == ("id", "email", "role", "password_hash")
    assert row["email"] == "admin@shop.test"


def test_sample_failure_keeps_count(make_store):
    store = make_store(sample_failing={"users"})
    inspection = inspect_table(store, "users")
    assert inspection.health.exists is True
    assert inspection.health.row_count == 3
    assert inspection.health.sample_row is None
    assert inspection.health.columns == ()
    assert inspection.issues == ()
