"""Tests for the unified settings priority chain."""

from pathlib import Path

import click
import pytest

from roomdir.config.settings import RoomdirSettings


class TestFromCli:
    def test_toml_domain(self, data_root: Path) -> None:
        settings = RoomdirSettings.from_cli(data_root=data_root)
        assert settings.domain == "example.org"
        assert settings.config_path == (data_root / "roomdir.toml").resolve()
        assert settings.data_root == data_root

    def test_defaults_without_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        nested = tmp_path / "empty"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = RoomdirSettings.from_cli(config_path=str(nested / "missing.toml"))
        assert settings.domain == "localhost"
        assert settings.config_path is None
        assert settings.data_root == Path.cwd()

    def test_data_root_is_config_parent(
        self, data_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        nested = data_root / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = RoomdirSettings.from_cli()
        assert settings.data_root == data_root.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[server]\ndomain = "custom.net"\n')
        settings = RoomdirSettings.from_cli(config_path=str(path))
        assert settings.domain == "custom.net"
        assert settings.data_root == tmp_path

    def test_env_overrides_toml(self, data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROOMDIR_SERVER__DOMAIN", "env.example.org")
        settings = RoomdirSettings.from_cli(data_root=data_root)
        assert settings.domain == "env.example.org"

    def test_cli_domain_overrides_env(
        self, data_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ROOMDIR_SERVER__DOMAIN", "env.example.org")
        settings = RoomdirSettings.from_cli(data_root=data_root, domain="cli.example.org")
        assert settings.domain == "cli.example.org"

    def test_cli_flags(self, data_root: Path) -> None:
        settings = RoomdirSettings.from_cli(data_root=data_root, json_output=True, verbose=True)
        assert settings.json_output
        assert settings.verbose
        assert not settings.quiet

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "roomdir.toml").write_text("[server\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            RoomdirSettings.from_cli(data_root=tmp_path)

    def test_sections_from_toml(self, data_root: Path) -> None:
        (data_root / "roomdir.toml").write_text(
            '[server]\ndomain = "example.org"\n\n[database]\nbusy_timeout_ms = 250\n'
        )
        settings = RoomdirSettings.from_cli(data_root=data_root)
        assert settings.database.busy_timeout_ms == 250
        assert settings.plugins.enabled


class TestTomlValidation:
    def test_bad_domain_names_file_and_field(self, tmp_path: Path) -> None:
        path = tmp_path / "roomdir.toml"
        path.write_text('[server]\ndomain = "not a domain"\n')
        with pytest.raises(click.ClickException) as exc_info:
            RoomdirSettings.from_cli(data_root=tmp_path)
        message = exc_info.value.message
        assert f"Invalid configuration in {path.resolve()}" in message
        assert "server.domain" in message
        assert "Invalid server name" in message

    def test_bad_busy_timeout(self, tmp_path: Path) -> None:
        (tmp_path / "roomdir.toml").write_text("[database]\nbusy_timeout_ms = -5\n")
        with pytest.raises(click.ClickException, match="database.busy_timeout_ms"):
            RoomdirSettings.from_cli(data_root=tmp_path)

    def test_env_still_overrides_other_fields(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "roomdir.toml").write_text(
            '[server]\ndomain = "example.org"\n\n[database]\nfilename = "file.db"\n'
        )
        monkeypatch.setenv("ROOMDIR_DATABASE__BUSY_TIMEOUT_MS", "750")
        settings = RoomdirSettings.from_cli(data_root=tmp_path)
        assert settings.database.filename == "file.db"
        assert settings.database.busy_timeout_ms == 750
        assert settings.domain == "example.org"
