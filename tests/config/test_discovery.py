"""Tests for config file discovery and loading."""

from pathlib import Path

import pytest

from roomdir.config.discovery import CONFIG_ENV_VAR, find_config, load_config


class TestFindConfig:
    def test_in_start_directory(self, tmp_path: Path) -> None:
        (tmp_path / "roomdir.toml").write_text("")
        assert find_config(tmp_path) == (tmp_path / "roomdir.toml").resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / "roomdir.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / "roomdir.toml").resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "roomdir.toml").write_text("")
        other = tmp_path / "elsewhere.toml"
        other.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "roomdir.toml"
        path.write_text('[server]\ndomain = "example.org"\n\n[plugins]\nenabled = false\n')
        config = load_config(path)
        assert config.server.domain == "example.org"
        assert config.plugins.enabled is False

    def test_discovered(self, tmp_path: Path) -> None:
        (tmp_path / "roomdir.toml").write_text('[database]\nbusy_timeout_ms = 500\n')
        assert load_config(cwd=tmp_path).database.busy_timeout_ms == 500

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "roomdir.toml"
        path.write_text("")
        assert load_config(path).server.domain == "localhost"
