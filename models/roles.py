"""
Fixed database roles layered over the bookstore tables.

- admin    (bs_admin):    ALL on every table, WITH GRANT OPTION
- staff    (bs_staff):    operational writes (customers, orders, lines),
                          append-only order history, address updates,
                          read-only catalog and lookup tables
- readonly (bs_readonly): SELECT on every table

The role -> privilege map is static; enforcement belongs to the engine.
On MySQL/MariaDB roles are accounts 'bs_<role>'@'<host>', on PostgreSQL
LOGIN roles. SQLite has no access-control layer and is skipped.
Passwords come from configuration and are only ever passed as bind values.
"""
import logging
import re

from sqlalchemy import text
from sqlalchemy.dialects import mysql, postgresql

from models.base_model import Base
from models.db_storage import DEFAULT_DATABASE

logger = logging.getLogger(__name__)

ADMIN = "admin"
STAFF = "staff"
READONLY = "readonly"
ROLES = (ADMIN, STAFF, READONLY)

ROLE_USERS = {
    ADMIN: "bs_admin",
    STAFF: "bs_staff",
    READONLY: "bs_readonly",
}

SELECT, INSERT, UPDATE, DELETE = "SELECT", "INSERT", "UPDATE", "DELETE"
ALL = "ALL"
TABLE_PRIVILEGES = frozenset({SELECT, INSERT, UPDATE, DELETE})

DEFAULT_HOST = "localhost"

STAFF_GRANTS = {
    "Customer": (SELECT, INSERT, UPDATE),
    "cust_order": (SELECT, INSERT, UPDATE),
    "order_line": (SELECT, INSERT, UPDATE),
    "order_history": (SELECT, INSERT),
    "address": (SELECT, UPDATE),
    "book": (SELECT,),
    "author": (SELECT,),
    "book_author": (SELECT,),
    "book_language": (SELECT,),
    "publisher": (SELECT,),
    "shipping_method": (SELECT,),
    "order_status": (SELECT,),
    "country": (SELECT,),
    "address_status": (SELECT,),
}

_ACCOUNT_PART = re.compile(r"^[\w.%-]+$")


def all_tables():
    return [table.name for table in Base.metadata.sorted_tables]


def role_privileges(role: str) -> dict:
    """{table: privileges} for a role; database-wide roles list every table."""
    if role == ADMIN:
        return {table: (ALL,) for table in all_tables()}
    if role == STAFF:
        return dict(STAFF_GRANTS)
    if role == READONLY:
        return {table: (SELECT,) for table in all_tables()}
    raise ValueError(f"Unknown role: {role!r}")


def privileges_for(role: str, table: str) -> frozenset:
    """Effective table privileges of role on table (ALL expanded)."""
    granted = role_privileges(role).get(table, ())
    if ALL in granted:
        return TABLE_PRIVILEGES
    return frozenset(granted)


def is_allowed(role: str, table: str, privilege: str) -> bool:
    return privilege.upper() in privileges_for(role, table)


def has_grant_option(role: str) -> bool:
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role!r}")
    return role == ADMIN


def _check_account_part(value: str) -> str:
    if not _ACCOUNT_PART.match(value):
        raise ValueError(f"Invalid account name or host: {value!r}")
    return value


def mysql_account(role: str, host: str = DEFAULT_HOST) -> str:
    user = ROLE_USERS[role]
    return f"'{_check_account_part(user)}'@'{_check_account_part(host)}'"


def create_user_statement(role: str, dialect: str, host: str = DEFAULT_HOST) -> str:
    """CREATE statement for a role's account; the password is the :password bind."""
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role!r}")
    if dialect in ("mysql", "mariadb"):
        return f"CREATE USER IF NOT EXISTS {mysql_account(role, host)} IDENTIFIED BY :password"
    if dialect == "postgresql":
        quote = postgresql.dialect().identifier_preparer.quote_identifier
        return f"CREATE ROLE {quote(ROLE_USERS[role])} LOGIN PASSWORD :password"
    raise ValueError(f"Roles are not supported on {dialect}")


def grant_statements(role: str, dialect: str, database: str = DEFAULT_DATABASE,
                     host: str = DEFAULT_HOST) -> list:
    """GRANT statements giving role its privilege set on the given dialect."""
    privileges = role_privileges(role)
    option = " WITH GRANT OPTION" if has_grant_option(role) else ""

    if dialect in ("mysql", "mariadb"):
        quote = mysql.dialect().identifier_preparer.quote_identifier
        account = mysql_account(role, host)
        db = quote(database)
        if role == ADMIN:
            return [f"GRANT ALL PRIVILEGES ON {db}.* TO {account}{option}"]
        if role == READONLY:
            return [f"GRANT SELECT ON {db}.* TO {account}"]
        return [
            f"GRANT {', '.join(privs)} ON {db}.{quote(table)} TO {account}"
            for table, privs in privileges.items()
        ]

    if dialect == "postgresql":
        quote = postgresql.dialect().identifier_preparer.quote_identifier
        grantee = quote(ROLE_USERS[role])
        if role == ADMIN:
            return [
                f"GRANT ALL PRIVILEGES ON ALL TABLES IN SCHEMA public TO {grantee}{option}",
                f"GRANT ALL PRIVILEGES ON ALL SEQUENCES IN SCHEMA public TO {grantee}{option}",
            ]
        if role == READONLY:
            return [f"GRANT SELECT ON ALL TABLES IN SCHEMA public TO {grantee}"]
        statements = [
            f"GRANT {', '.join(privs)} ON {quote(table)} TO {grantee}"
            for table, privs in privileges.items()
        ]
        # serial primary keys: INSERT needs the sequences
        statements.append(f"GRANT USAGE, SELECT ON ALL SEQUENCES IN SCHEMA public TO {grantee}")
        return statements

    raise ValueError(f"Roles are not supported on {dialect}")


def _pg_role_exists(conn, role: str) -> bool:
    found = conn.execute(
        text("SELECT 1 FROM pg_roles WHERE rolname = :name"), {"name": ROLE_USERS[role]}
    ).first()
    return found is not None


def apply_roles(engine, credentials: dict, host: str | None = None,
                database: str | None = None) -> list:
    """
    Create the three accounts (if missing) and grant their privileges.
    credentials maps role name -> password. Runs in one transaction.
    Returns the roles applied ([] when the engine has no access control).
    """
    dialect = engine.dialect.name
    if dialect not in ("mysql", "mariadb", "postgresql"):
        logger.warning("%s has no access-control layer; skipping roles", dialect)
        return []

    missing = [role for role in ROLES if not credentials.get(role)]
    if missing:
        raise ValueError(f"No password configured for role(s): {', '.join(missing)}")

    host = host or DEFAULT_HOST
    database = database or engine.url.database or DEFAULT_DATABASE
    with engine.begin() as conn:
        for role in ROLES:
            if dialect == "postgresql" and _pg_role_exists(conn, role):
                logger.info("Role %s already exists", ROLE_USERS[role])
            else:
                conn.execute(
                    text(create_user_statement(role, dialect, host)),
                    {"password": credentials[role]},
                )
            for statement in grant_statements(role, dialect, database, host):
                conn.execute(text(statement))
            logger.info("Granted %s privileges to %s", role, ROLE_USERS[role])
        if dialect in ("mysql", "mariadb"):
            conn.execute(text("FLUSH PRIVILEGES"))
    return list(ROLES)
