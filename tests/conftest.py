import pytest
from sqlalchemy import create_engine, text

from dbcheck.core.config import Settings

from fakes import FakeStore, healthy_tables, BCRYPT_HASH


@pytest.fixture
def settings():
    return Settings(_env_file=None, DATABASE_URL=None, DIAGNOSTIC_TIMEOUT_S=10, QUICK_CHECK_TIMEOUT_S=2)


@pytest.fixture
def make_store():
    created = []

    def _make(tables=None, **kwargs):
        store = FakeStore(healthy_tables() if tables is None else tables, **kwargs)
        created.append(store)
        return store

    yield _make
    for store in created:
        store.release.set()


SHOP_DDL = [
    """CREATE TABLE users (
        id INTEGER PRIMARY KEY, email TEXT NOT NULL, role TEXT NOT NULL,
        password_hash TEXT, created_at TEXT
    )""",
    "CREATE TABLE customers (id INTEGER PRIMARY KEY, user_id INTEGER, first_name TEXT)",
    """CREATE TABLE employees (
        id INTEGER PRIMARY KEY, user_id INTEGER, first_name TEXT, last_name TEXT,
        department TEXT, is_available BOOLEAN
    )""",
    "CREATE TABLE vehicles (id INTEGER PRIMARY KEY, customer_id INTEGER, make TEXT, year INTEGER)",
    "CREATE TABLE services (id INTEGER PRIMARY KEY, name TEXT, price REAL, is_active BOOLEAN)",
    "CREATE TABLE appointments (id INTEGER PRIMARY KEY, vehicle_id INTEGER, status TEXT)",
]


@pytest.fixture
def shop_db(tmp_path):
    """File-backed SQLite shop database with a few deliberate defects.

    Defects: customer 2 points at missing user 99, vehicle 2 at missing
    customer 42, and employee user eve@shop.test has no employee row.
    Only six catalog tables exist.
    """
    url = f"sqlite:///{tmp_path / 'shop.db'}"
    engine = create_engine(url, future=True)
    with engine.begin() as conn:
        for ddl in SHOP_DDL:
            conn.execute(text(ddl))
        conn.execute(
            text("INSERT INTO users (id, email, role, password_hash, created_at) VALUES (:i, :e, :r, :p, :c)"),
            [
                {"i": 1, "e": "admin@shop.test", "r": "admin", "p": BCRYPT_HASH, "c": "2024-01-02"},
                {"i": 2, "e": "cara@shop.test", "r": "customer", "p": "mypassword123", "c": None},
                {"i": 3, "e": "eve@shop.test", "r": "employee", "p": BCRYPT_HASH, "c": None},
            ],
        )
        conn.execute(
            text("INSERT INTO customers (id, user_id, first_name) VALUES (:i, :u, :f)"),
            [{"i": 1, "u": 2, "f": "Cara"}, {"i": 2, "u": 99, "f": "Ghost"}],
        )
        conn.execute(
            text("INSERT INTO vehicles (id, customer_id, make, year) VALUES (:i, :c, :m, :y)"),
            [{"i": 1, "c": 1, "m": "Volvo", "y": 2019}, {"i": 2, "c": 42, "m": "Fiat", "y": 2008}],
        )
    engine.dispose()
    return url
