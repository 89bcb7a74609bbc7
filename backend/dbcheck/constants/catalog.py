from dbcheck.services.diagnostic.models.model import Catalog, ForeignKeyRelation, ProfileLink

EXPECTED_TABLES = (
    "users",
    "customers",
    "employees",
    "vehicles",
    "services",
    "appointments",
    "projects",
    "service_logs",
    "project_logs",
    "parts",
    "service_parts",
    "feedback",
    "notifications",
    "messages",
    "audit_logs",
)

FOREIGN_KEYS = (
    ForeignKeyRelation("customers", "user_id", "users", "id", "customer", "user"),
    ForeignKeyRelation("employees", "user_id", "users", "id", "employee", "user"),
    ForeignKeyRelation("vehicles", "customer_id", "customers", "id", "vehicle", "customer"),
)

PROFILE_LINKS = (
    ProfileLink(role="customer", table="customers"),
    ProfileLink(role="employee", table="employees"),
)

DEFAULT_CATALOG = Catalog(
    tables=EXPECTED_TABLES,
    relations=FOREIGN_KEYS,
    profile_links=PROFILE_LINKS,
)

# Tables reported by the setup check, each "ready" when it exists and has rows.
SETUP_TABLES = ("users", "customers", "employees", "vehicles", "appointments", "services")

# Tables whose first row is returned by the sample-data lookup, keyed by entity.
SAMPLE_TABLES = {
    "user": "users",
    "customer": "customers",
    "employee": "employees",
    "service": "services",
}
