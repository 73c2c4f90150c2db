"""Database bootstrap helpers shared by the stores."""

from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from shopadmin.common.config import settings


# Single SQLAlchemy engine per process.
engine = create_engine(settings.database_url, pool_pre_ping=True)
# `expire_on_commit=False` keeps snapshots readable after the session closes.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""

    pass


def create_schema(bind=None) -> None:
    """Create every shop table on `bind` (defaults to the process engine)."""

    # Model modules register their tables on `Base.metadata` when imported.
    import shopadmin.services.customers.models  # noqa: F401
    import shopadmin.services.payments.models  # noqa: F401

    Base.metadata.create_all(bind or engine)


def missing_tables(bind, required: list[str]) -> list[str]:
    """Return the subset of `required` table names absent from `bind`."""

    existing = set(inspect(bind).get_table_names())
    return [name for name in required if name not in existing]
