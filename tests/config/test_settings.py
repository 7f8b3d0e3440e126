"""Tests for LibpanelsSettings and config discovery."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from libpanels.config.discovery import find_config
from libpanels.config.settings import LibpanelsSettings


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / "libpanels.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / "libpanels.toml").resolve()

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("")
        monkeypatch.setenv("LIBPANELS_CONFIG", str(cfg))
        assert find_config(tmp_path / "elsewhere") == cfg

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LIBPANELS_CONFIG", str(tmp_path / "absent.toml"))
        assert find_config(tmp_path) is None


class TestLibpanelsSettings:
    def test_defaults(self, tmp_path: Path) -> None:
        settings = LibpanelsSettings.from_cli(project_root=tmp_path)
        assert settings.data_dir == tmp_path / ".libpanels"
        assert settings.actor.org_id == 1
        assert settings.actor.user_id == 1
        assert settings.actor.timeout is None
        assert settings.resolved_database_url == (
            f"sqlite:///{tmp_path / '.libpanels' / 'libpanels.db'}"
        )

    def test_toml_sections(self, tmp_path: Path) -> None:
        (tmp_path / "libpanels.toml").write_text(
            '[database]\nurl = "sqlite:///custom.db"\necho = true\n\n'
            "[actor]\norg_id = 5\nuser_id = 8\ntimeout = 2.5\n"
        )
        settings = LibpanelsSettings.from_cli(project_root=tmp_path)
        assert settings.config_path == (tmp_path / "libpanels.toml").resolve()
        assert settings.resolved_database_url == "sqlite:///custom.db"
        assert settings.database.echo is True
        assert settings.actor.org_id == 5
        assert settings.actor.user_id == 8
        assert settings.actor.timeout == 2.5

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "libpanels.toml").write_text("[actor]\norg_id = 5\n")
        monkeypatch.setenv("LIBPANELS_ACTOR__ORG_ID", "9")
        settings = LibpanelsSettings.from_cli(project_root=tmp_path)
        assert settings.actor.org_id == 9

    def test_cli_flags_win(self, tmp_path: Path) -> None:
        settings = LibpanelsSettings.from_cli(project_root=tmp_path, json_output=True, quiet=True)
        assert settings.json_output is True
        assert settings.quiet is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text("[actor]\nuser_id = 77\n")
        settings = LibpanelsSettings.from_cli(config_path=str(cfg), project_root=tmp_path)
        assert settings.actor.user_id == 77

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "libpanels.toml").write_text("[actor\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            LibpanelsSettings.from_cli(project_root=tmp_path)

    def test_frozen(self, tmp_path: Path) -> None:
        settings = LibpanelsSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]
