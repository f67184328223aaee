"""Tests for BaseService hook dispatch."""

from roomdir.infrastructure.homeserver import Homeserver
from roomdir.plugins.hookspecs import hookimpl
from roomdir.services.base import BaseService


class _Failing:
    @hookimpl
    def post_alias_unbind(self, alias: str, owner: str) -> None:
        raise ValueError("nope")


class TestDispatchEvent:
    def test_collects_warning(self, homeserver: Homeserver) -> None:
        assert homeserver.plugin_manager is not None
        homeserver.plugin_manager.register_plugin(_Failing())
        warnings: list[str] = []
        BaseService(homeserver)._dispatch_event(
            "post_alias_unbind", {"alias": "#a:example.org", "owner": "@a:example.org"}, warnings
        )
        assert warnings == ["Plugin hook post_alias_unbind failed"]

    def test_no_plugins_no_warnings(self, homeserver: Homeserver) -> None:
        warnings: list[str] = []
        BaseService(homeserver)._dispatch_event(
            "post_alias_unbind", {"alias": "#a:example.org", "owner": "@a:example.org"}, warnings
        )
        assert warnings == []
