"""
Persistence configuration for the generated model.

Copied verbatim into the output package by schema_to_orm. Connection
parameters come from the environment.
"""

from __future__ import annotations

import os

from sqlalchemy import URL, Engine, Numeric, create_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """Declarative base shared by every generated entity."""


class BigIntColumn(TypeDecorator):
    """Arbitrary-precision integer column (NUMERIC), read back as `int`."""

    impl = Numeric
    cache_ok = True

    def process_result_value(self, value, dialect):
        return None if value is None else int(value)


def connection_url() -> URL:
    return URL.create(
        drivername=os.environ.get("DB_DRIVER", "postgresql+psycopg2"),
        host=os.environ.get("DB_HOST", "localhost"),
        port=int(os.environ.get("DB_PORT", "5432")),
        username=os.environ.get("DB_USER", "postgres"),
        password=os.environ.get("DB_PASS", "postgres"),
        database=os.environ.get("DB_NAME", "postgres"),
    )


def create_db_engine(**kwargs) -> Engine:
    return create_engine(connection_url(), **kwargs)
