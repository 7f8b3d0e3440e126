"""Shared pytest fixtures and test helpers for libpanels tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from libpanels.config.settings import LibpanelsSettings
from libpanels.domain.context import RequestContext
from libpanels.infrastructure.database.engine import init_database
from libpanels.infrastructure.store import PanelStore
from libpanels.services.panels import LibraryPanelService


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's LIBPANELS_* environment out of the tests."""
    monkeypatch.delenv("LIBPANELS_CONFIG", raising=False)
    monkeypatch.delenv("LIBPANELS_DATABASE__URL", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with both tables created."""
    engine = init_database(f"sqlite:///{tmp_path / 'test.db'}")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings(tmp_path: Path) -> LibpanelsSettings:
    return LibpanelsSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def store(settings: LibpanelsSettings) -> Generator[PanelStore]:
    """Store on a temp SQLite database."""
    s = PanelStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def service(store: PanelStore) -> LibraryPanelService:
    return LibraryPanelService(store)


@pytest.fixture
def ctx() -> RequestContext:
    """Actor 42 in organization 1."""
    return RequestContext(user_id=42, org_id=1)


@pytest.fixture
def other_org_ctx() -> RequestContext:
    """Actor 7 in organization 2."""
    return RequestContext(user_id=7, org_id=2)


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def create_panel(
    service: LibraryPanelService,
    ctx: RequestContext,
    name: str,
    **kwargs: Any,
) -> dict[str, Any]:
    """Create a panel via LibraryPanelService, asserting success."""
    kwargs.setdefault("model", {"type": "graph"})
    result = service.create_panel(ctx, name=name, **kwargs)
    assert result.ok, result.error
    return result.data
