"""Classification of driver errors raised by SQLAlchemy.

Only unique-constraint violations are classified; every other fault is
passed through to the caller unmodified.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

# SQLite: "UNIQUE constraint failed"; PostgreSQL: SQLSTATE 23505;
# MySQL: error 1062 "Duplicate entry".
_UNIQUE_MARKERS = ("unique constraint", "duplicate entry", "duplicate key")
_PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: BaseException) -> bool:
    """True if *exc* is an IntegrityError caused by a unique constraint."""
    if not isinstance(exc, IntegrityError):
        return False
    pgcode = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    if pgcode is not None:
        return pgcode == _PG_UNIQUE_VIOLATION
    message = str(exc.orig).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)
