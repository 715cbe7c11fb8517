#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixin for the bookstore schema.

- Declarative Base shared by every table (book, Customer, cust_order, ...)
- BaseModel mixin: kwargs init, save() / delete() wired to DBStorage,
  to_dict() that formats dates and decimals for JSON responses

Notes:
- Primary keys are declared per table (language_id, book_id, ...) because the
  column names are part of the persisted layout clients query against.
- Timestamps such as Customer.created_at use server-side defaults
  (CURRENT_TIMESTAMP) so the database, not Python, sets them.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

# Importing 'models' gives access to the global 'storage' instance (DBStorage)
import models

from sqlalchemy import MetaData, inspect
from sqlalchemy.orm import declarative_base

TIME_FMT = "%Y-%m-%dT%H:%M:%S.%f"

# Table options applied on MySQL/MariaDB; ignored by other dialects
MYSQL_TABLE_ARGS = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}

# Declarative base for all models
Base = declarative_base(metadata=MetaData())


def table_args(*constraints, comment: str | None = None) -> tuple:
    """Build a __table_args__ tuple: constraints first, options dict last."""
    options = dict(MYSQL_TABLE_ARGS)
    if comment:
        options["comment"] = comment
    return (*constraints, options)


class BaseModel:
    """
    Base mixin for all persistent models.

    - save(), delete() wired to DBStorage
    - to_dict() with __class__ and date/decimal formatting
    """

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        Server defaults (created_at, order_date, status_date) are filled on insert.
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)

    @classmethod
    def primary_key_name(cls) -> str:
        """Name of the single-column primary key (e.g. 'book_id')."""
        return inspect(cls).primary_key[0].name

    def __str__(self) -> str:
        """Human-friendly representation including primary key and fields."""
        pk = inspect(self).identity
        return f"[{self.__class__.__name__}] ({pk[0] if pk else None}) {self.to_dict()}"

    def save(self):
        """Add the instance to the session and commit through DBStorage."""
        models.storage.new(self)
        models.storage.save()

    def delete(self):
        """
        Hard delete the current instance using DBStorage.
        Engine-level RESTRICT / CASCADE / SET NULL rules apply on flush.
        Not committed here; the caller decides when to commit.
        """
        models.storage.delete(self)

    def to_dict(self) -> dict:
        """
        Return a dictionary of column values suitable for API responses:
        - Adds __class__
        - Formats datetimes to TIME_FMT, dates to ISO, decimals to strings
        - Only column attributes; relationships are left out
        """
        loaded = self.__dict__
        d = {
            attr.key: loaded[attr.key]
            for attr in inspect(self.__class__).column_attrs
            if attr.key in loaded
        }
        for key, value in d.items():
            if isinstance(value, datetime):
                d[key] = value.strftime(TIME_FMT)
            elif isinstance(value, date):
                d[key] = value.isoformat()
            elif isinstance(value, Decimal):
                d[key] = str(value)
        d["__class__"] = self.__class__.__name__
        return d
