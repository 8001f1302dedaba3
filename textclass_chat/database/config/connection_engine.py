"""
Connection Engine (SQLAlchemy)

Purpose
-------
Centralizes database initialization for the application:
- Builds a SQLAlchemy connection URL from environment-backed settings.
- Creates the Engine (connection pool + SQL execution entry point).
- Defines shared MetaData for table and schema objects.
- Exposes a Declarative Base class for ORM models.

Notes
-----
- The engine is built on demand by `build_engine(settings)` and handed to the
  stores by the application factory; nothing in the package holds an ambient
  connection.
- All ORM models must inherit from `declarativeBase` to participate in schema
  creation.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.schema import MetaData

from textclass_chat.database.config.config import Settings


def build_connection_url(settings: Settings) -> URL:
    """Construct the SQLAlchemy connection URL using values from Settings."""
    return URL.create(
        drivername=settings.DB_DRIVER_NAME,
        username=settings.DB_USERNAME,
        password=settings.DB_PASSWORD,
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        database=settings.DB_DATABASE_NAME,
    )


def build_engine(settings: Settings) -> Engine:
    """
    Create the Engine object: core interface to the database.
    Responsible for managing connections, executing SQL, and pooling.
    """
    url = build_connection_url(settings)
    if url.get_backend_name() == "sqlite":
        # FastAPI runs sync endpoints in a threadpool
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


metadata = MetaData()
"""
Metadata object: Stores schema-level information about tables, constraints, indexes, etc. Shared across all models.
"""

declarativeBase = declarative_base(metadata=metadata)
"""Declarative Base: Root class for ORM models.
All model classes should inherit from this to gain ORM features and automatic schema generation.
"""
