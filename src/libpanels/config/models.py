"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, libpanels.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """[database] section.

    ``url`` is any SQLAlchemy URL. When empty, a SQLite file under the
    data directory is used.
    """

    model_config = {"frozen": True}

    url: str = ""
    echo: bool = False


class ActorConfig(BaseModel):
    """[actor] section: identity used by the CLI when no flag overrides it."""

    model_config = {"frozen": True}

    user_id: int = 1
    org_id: int = 1
    timeout: float | None = None  # seconds per request; None means no deadline
