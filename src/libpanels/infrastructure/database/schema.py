"""SQLAlchemy Core table definitions for the libpanels database.

Two tables: ``library_panels`` holds the panels themselves and
``library_panel_dashboards`` joins a panel to the dashboards using it.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

library_panels = Table(
    "library_panels",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uid", Text, nullable=False, unique=True),
    Column("org_id", Integer, nullable=False),
    Column("folder_id", Integer, nullable=False, default=0, server_default="0"),
    Column("name", Text, nullable=False),
    Column("model", Text, nullable=False),  # JSON, opaque
    Column("created", Text, nullable=False),
    Column("updated", Text, nullable=False),
    Column("created_by", Integer, nullable=False),
    Column("updated_by", Integer, nullable=False),
    UniqueConstraint("org_id", "folder_id", "name"),
)

# library_panel_id is not a storage-level foreign key: deleting a panel
# leaves its connection rows in place (see check_connections). org_id is
# copied from the panel so those rows stay scoped to their organization.
library_panel_dashboards = Table(
    "library_panel_dashboards",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("library_panel_id", Integer, nullable=False),
    Column("org_id", Integer, nullable=False),
    Column("dashboard_id", Integer, nullable=False),
    Column("created", Text, nullable=False),
    Column("created_by", Integer, nullable=False),
    UniqueConstraint("library_panel_id", "dashboard_id"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_library_panels_org_uid", library_panels.c.org_id, library_panels.c.uid)
Index("ix_library_panel_dashboards_dashboard", library_panel_dashboards.c.dashboard_id)
