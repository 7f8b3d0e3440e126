"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs : CLI flags passed by Click
  2. Env vars    : ``LIBPANELS_*`` prefix (``LIBPANELS_DATABASE__URL``)
  3. TOML file   : ``libpanels.toml`` discovered via walk-up
  4. Code defaults: baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from libpanels.config.discovery import find_config
from libpanels.config.models import ActorConfig, DatabaseConfig

DB_FILENAME = "libpanels.db"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``libpanels.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class LibpanelsSettings(BaseSettings):
    """Settings for the libpanels store and CLI.

    Attributes:
        data_dir: Directory holding the default SQLite database
            (``{project_root}/.libpanels``).
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LIBPANELS_",
        "env_nested_delimiter": "__",
    }

    data_dir: Path = Field(default_factory=lambda: Path.cwd() / ".libpanels")
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    actor: ActorConfig = Field(default_factory=ActorConfig)

    @property
    def resolved_database_url(self) -> str:
        """``database.url`` if set, else a SQLite file in ``data_dir``."""
        if self.database.url:
            return self.database.url
        return f"sqlite:///{self.data_dir / DB_FILENAME}"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> LibpanelsSettings:
        """Construct settings from a CLI invocation.

        Discovers ``libpanels.toml`` via walk-up (or explicit *config_path*).
        The data directory defaults to ``.libpanels`` next to the config
        file, or under *project_root* / cwd when there is none.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        root = project_root
        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        cli_flags.setdefault("data_dir", root / ".libpanels")

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
