"""Shared pytest fixtures and test helpers for roomdir tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from roomdir.config.settings import RoomdirSettings
from roomdir.infrastructure.database.engine import init_database
from roomdir.infrastructure.homeserver import Homeserver
from roomdir.services.requests import RequestContext

DOMAIN = "example.org"
ALICE = "@alice:example.org"
BOB = "@bob:example.org"


@pytest.fixture(autouse=True)
def _clear_roomdir_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ROOMDIR_* environment out of the tests."""
    for name in ("ROOMDIR_CONFIG", "ROOMDIR_SERVER__DOMAIN", "ROOMDIR_DATA_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Temporary data root with a roomdir.toml naming the test domain."""
    (tmp_path / "roomdir.toml").write_text(f'[server]\ndomain = "{DOMAIN}"\n')
    return tmp_path


@pytest.fixture
def homeserver(data_root: Path) -> Iterator[Homeserver]:
    """Fully initialized homeserver on a temp directory, plugins loaded."""
    settings = RoomdirSettings.from_cli(data_root=data_root)
    hs = Homeserver(settings)
    hs.init_plugins()
    try:
        yield hs
    finally:
        hs.close()


@pytest.fixture
def _isolated_root(data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp data root so the CLI uses an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test classes.
    """
    monkeypatch.chdir(data_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_request(alias_token: str | None, *, caller: str | None = None) -> RequestContext:
    """Build a request context on the test domain."""
    return RequestContext(caller=caller, alias_token=alias_token, domain=DOMAIN)


def register_room(homeserver: Homeserver, creator: str = ALICE, **kwargs: str) -> str:
    """Register a room via RoomService, asserting success. Returns the room ID."""
    from roomdir.services.rooms import RoomService

    result = RoomService(homeserver).register_room(creator, **kwargs)
    assert result.ok, result.error
    return str(result.data["room_id"])


def bind_alias(homeserver: Homeserver, token: str, room_id: str, owner: str = ALICE) -> None:
    """Bind an alias via DirectoryService, asserting success."""
    from roomdir.services.directory import DirectoryService

    result = DirectoryService(homeserver).bind(make_request(token, caller=owner), room_id, owner)
    assert result.ok, result.error
