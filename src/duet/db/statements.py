"""Transaction and dialect-specific statement helpers used by the services."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

# Scalar "largest argument" function; SQLite's max() is scalar when given several arguments.
_GREATEST: dict[str, Callable[..., Any]] = {
    "postgresql": func.greatest,
    "sqlite": func.max,
}


def _for_dialect(db: Session, table: dict[str, Callable[..., Any]]) -> Callable[..., Any]:
    dialect = db.get_bind().dialect.name
    try:
        return table[dialect]
    except KeyError as err:
        raise NotImplementedError(f"ON CONFLICT upserts are not supported on {dialect}") from err


def insert_for(db: Session) -> Callable[..., Any]:
    """Return the ``insert`` construct supporting ON CONFLICT for the session's dialect.

    Raises:
        NotImplementedError: If the bound database has no ON CONFLICT support.
    """
    return _for_dialect(db, _INSERTS)


def greatest_for(db: Session) -> Callable[..., Any]:
    """Return the SQL function selecting the largest of its arguments.

    Raises:
        NotImplementedError: If the bound database has no ON CONFLICT support.
    """
    return _for_dialect(db, _GREATEST)


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Commit the session's work on success, roll it back on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
