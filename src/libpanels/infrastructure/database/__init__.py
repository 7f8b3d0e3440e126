"""Database engine, schema, and error classification via SQLAlchemy Core."""

from libpanels.infrastructure.database.engine import create_db_engine, init_database
from libpanels.infrastructure.database.errors import is_unique_violation
from libpanels.infrastructure.database.schema import (
    library_panel_dashboards,
    library_panels,
    metadata,
)

__all__ = [
    "create_db_engine",
    "init_database",
    "is_unique_violation",
    "library_panel_dashboards",
    "library_panels",
    "metadata",
]
