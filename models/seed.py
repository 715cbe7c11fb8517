"""
Idempotent seed data for the lookup tables.

Each lookup table is upserted by its natural key: existing rows get their
non-key columns overwritten with the seeded values, missing rows are inserted.
Running seed_lookup_tables() any number of times converges to the same
contents.

- Native upserts where the natural key is declared unique:
  SQLite / PostgreSQL: INSERT ... ON CONFLICT (key) DO UPDATE
  MySQL / MariaDB:     INSERT ... ON DUPLICATE KEY UPDATE
- Otherwise select, then update or insert through the ORM. This covers
  shipping_method (method_name is not unique), unknown dialects, and tables
  where an updated column carries its own unique key (book_language.language_name):
  a row is matched by its natural key first, then by each such column, so a
  pre-existing (NULL, 'English') language row is adopted instead of colliding.
"""
import logging
from collections import namedtuple
from decimal import Decimal

from sqlalchemy import PrimaryKeyConstraint, UniqueConstraint, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from models.language import BookLanguage
from models.address_status import AddressStatus
from models.order_status import OrderStatus
from models.shipping_method import ShippingMethod
from models.country import Country
from models.schemas.seed import (
    LanguageSeedSchema,
    AddressStatusSeedSchema,
    OrderStatusSeedSchema,
    ShippingMethodSeedSchema,
    CountrySeedSchema,
)

logger = logging.getLogger(__name__)

LookupSeed = namedtuple("LookupSeed", ["model", "key", "update_cols", "schema", "rows"])

SEED_DATA = (
    LookupSeed(
        BookLanguage,
        "language_code",
        ("language_name",),
        LanguageSeedSchema,
        [
            {"language_code": "en", "language_name": "English"},
            {"language_code": "es", "language_name": "Spanish"},
            {"language_code": "fr", "language_name": "French"},
        ],
    ),
    LookupSeed(
        AddressStatus,
        "address_status",
        (),
        AddressStatusSeedSchema,
        [{"address_status": s} for s in ("Current", "Old", "Billing", "Shipping")],
    ),
    LookupSeed(
        OrderStatus,
        "status_value",
        (),
        OrderStatusSeedSchema,
        [
            {"status_value": s}
            for s in ("Pending", "Processing", "Shipped", "Delivered", "Cancelled", "Returned")
        ],
    ),
    LookupSeed(
        ShippingMethod,
        "method_name",
        ("cost",),
        ShippingMethodSeedSchema,
        [
            {"method_name": "Standard", "cost": Decimal("5.00")},
            {"method_name": "Express", "cost": Decimal("15.00")},
            {"method_name": "Next Day", "cost": Decimal("25.00")},
        ],
    ),
    LookupSeed(
        Country,
        "country_name",
        (),
        CountrySeedSchema,
        [{"country_name": c} for c in ("United States", "Canada", "United Kingdom", "Kenya")],
    ),
)

# Label column used to resolve each lookup value to its id
LOOKUP_LABELS = {seed.model: seed.key for seed in SEED_DATA}


def has_unique_key(table, column_name: str) -> bool:
    """True when column_name alone is covered by a UNIQUE or PRIMARY KEY constraint."""
    for constraint in table.constraints:
        if isinstance(constraint, (UniqueConstraint, PrimaryKeyConstraint)):
            if [col.name for col in constraint.columns] == [column_name]:
                return True
    return any(col.name == column_name and col.unique for col in table.columns)


def _native_upsert(session, dialect: str, table, rows, key, update_cols):
    if dialect in ("sqlite", "postgresql"):
        insert = sqlite_insert if dialect == "sqlite" else pg_insert
        stmt = insert(table).values(rows)
        if update_cols:
            stmt = stmt.on_conflict_do_update(
                index_elements=[key],
                set_={col: stmt.excluded[col] for col in update_cols},
            )
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=[key])
    else:
        stmt = mysql_insert(table).values(rows)
        # MySQL needs at least one assignment; rewriting the key is a no-op
        cols = update_cols or (key,)
        stmt = stmt.on_duplicate_key_update({col: stmt.inserted[col] for col in cols})
    session.execute(stmt)


def _find_existing(session, model, row, match_cols):
    for col in match_cols:
        obj = session.execute(select(model).where(getattr(model, col) == row[col])).scalars().first()
        if obj is not None:
            return obj
    return None


def _orm_upsert(session, model, rows, key, update_cols, alt_keys=()):
    match_cols = (key, *alt_keys)
    for row in rows:
        obj = _find_existing(session, model, row, match_cols)
        if obj is None:
            session.add(model(**row))
            continue
        # matched on an alternate key: the natural key is rewritten too
        for col in (key, *update_cols):
            setattr(obj, col, row[col])
    session.flush()


def upsert_rows(session, model, rows, key, update_cols=()):
    """Insert rows, or update update_cols of the row sharing the same natural key."""
    if not rows:
        return 0
    table = model.__table__
    dialect = session.get_bind().dialect.name
    # ON CONFLICT (key) would not catch a collision on these
    alt_keys = tuple(col for col in update_cols if has_unique_key(table, col))
    native = dialect in ("sqlite", "postgresql", "mysql", "mariadb")
    if native and has_unique_key(table, key) and not alt_keys:
        _native_upsert(session, dialect, table, rows, key, update_cols)
    else:
        _orm_upsert(session, model, rows, key, update_cols, alt_keys)
    return len(rows)


def seed_lookup_tables(session, seeds=SEED_DATA):
    """
    Validate and upsert every lookup table. Not committed here.
    Returns {table name: rows processed}.
    """
    counts = {}
    # flush pending ORM changes before the core statements, expire afterwards so
    # objects already in the identity map are reloaded with the seeded values
    session.flush()
    for seed in seeds:
        rows = seed.schema(many=True).load(seed.rows)
        counts[seed.model.__tablename__] = upsert_rows(
            session, seed.model, rows, seed.key, seed.update_cols
        )
        logger.info("Seeded %s: %d rows", seed.model.__tablename__, counts[seed.model.__tablename__])
    session.expire_all()
    return counts


def lookup_map(session, model) -> dict:
    """{label: id} for a lookup table, e.g. {'Pending': 1, ...} for OrderStatus."""
    label_col = getattr(model, LOOKUP_LABELS[model])
    pk_col = getattr(model, model.primary_key_name())
    return {label: pk for label, pk in session.execute(select(label_col, pk_col)).all()}


def lookup_id(session, model, label: str) -> int:
    """Resolve a lookup label to its id; unknown labels raise LookupError."""
    try:
        return lookup_map(session, model)[label]
    except KeyError:
        raise LookupError(f"{model.__tablename__}: unknown value {label!r}") from None
