# Templates take identifiers already quoted by the dialect's preparer.

SQL_COUNT = "SELECT COUNT(*) FROM {table}"

SQL_SAMPLE = "SELECT * FROM {table} LIMIT {limit:d}"

SQL_ORPHANS_PAGE = """
    SELECT c.{child_id} AS id, c.{child_fk} AS fk_value
    FROM {child} c
    WHERE c.{child_fk} IS NOT NULL
{after_clause}
      AND NOT EXISTS (
          SELECT 1 FROM {parent} p WHERE p.{parent_key} = c.{child_fk}
      )
    ORDER BY c.{child_id}
    LIMIT {limit:d}
"""

SQL_USER_PROFILE_FLAGS = """
    SELECT u.id AS id,
           u.email AS email,
           u.role AS role,
           EXISTS (SELECT 1 FROM {customers} c WHERE c.{customer_fk} = u.id) AS has_customer_profile,
           EXISTS (SELECT 1 FROM {employees} e WHERE e.{employee_fk} = u.id) AS has_employee_profile
    FROM {users} u
    ORDER BY u.id
"""

SQL_PASSWORD_HASH = "SELECT {hash_column} FROM {users} WHERE email = :email LIMIT 1"

SQL_HAS_PROFILE = "SELECT 1 FROM {table} WHERE {fk_column} = :user_id LIMIT 1"

SQL_AFTER_CLAUSE = "      AND c.{child_id} > :after"

SQL_ACTIVE_SERVICE_NAMES = "SELECT name FROM {services} WHERE is_active = :active ORDER BY name"

SQL_AVAILABLE_EMPLOYEES = """
    SELECT id, first_name, last_name, department
    FROM {employees}
    WHERE is_available = :available
    ORDER BY first_name
"""
