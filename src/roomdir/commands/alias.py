"""Command group: resolve, bind, and unbind room aliases."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import click

from roomdir.commands._base import RoomdirGroup

if TYPE_CHECKING:
    from roomdir.commands._context import AppContext
    from roomdir.services.result import ServiceResult


@click.group(
    cls=RoomdirGroup,
    examples="""\
  roomdir alias resolve my_room
  roomdir alias bind my_room --room-id '!abc:example.org' --as @alice:example.org
  roomdir alias unbind my_room --as @alice:example.org""",
)
def alias() -> None:
    """Resolve, bind, and unbind room aliases."""


@alias.command(
    examples="""\
  roomdir alias resolve my_room
  roomdir alias resolve '#my_room:example.org'
  roomdir --json alias resolve my_room""",
)
@click.argument("alias_token")
@click.pass_obj
def resolve(app: AppContext, alias_token: str) -> None:
    """Look up the room ALIAS_TOKEN points at."""
    from roomdir.services.directory import DirectoryService

    request = app.request(alias_token=alias_token)
    result = app.call(
        "resolve_alias",
        lambda: DirectoryService(app.homeserver).resolve(request),
    )
    app.emit(result)


@alias.command(
    examples="""\
  roomdir alias bind my_room --room-id '!abc:example.org' --as @alice:example.org
  roomdir alias bind my_room --body '{"room_id": "!abc:example.org"}' --as @alice:example.org
  roomdir alias bind my_room --body - --as @alice:example.org < body.json""",
)
@click.argument("alias_token")
@click.option("--room-id", default=None, help="Room to bind the alias to.")
@click.option("--body", default=None, help="Raw JSON request body ('-' reads stdin).")
@click.option("--as", "caller", default=None, help="Authenticated caller user ID.")
@click.pass_obj
def bind(
    app: AppContext,
    alias_token: str,
    room_id: str | None,
    body: str | None,
    caller: str | None,
) -> None:
    """Bind ALIAS_TOKEN to a room owned by the caller."""
    from roomdir.services.directory import DirectoryService
    from roomdir.services.guards import require_caller

    if (room_id is None) == (body is None):
        raise click.UsageError("Provide exactly one of --room-id or --body.")
    if body == "-":
        body = click.get_text_stream("stdin").read()

    request = app.request(alias_token=alias_token, caller=caller)

    def action() -> ServiceResult:
        owner = require_caller(request, op="bind_alias")
        svc = DirectoryService(app.homeserver)
        if body is not None:
            return svc.bind_from_body(request, body, owner)
        # exactly one of --room-id and --body was checked above
        return svc.bind(request, cast(str, room_id), owner)

    app.emit(app.call("bind_alias", action))


@alias.command(
    examples="""\
  roomdir alias unbind my_room --as @alice:example.org""",
)
@click.argument("alias_token")
@click.option("--as", "caller", default=None, help="Authenticated caller user ID.")
@click.pass_obj
def unbind(app: AppContext, alias_token: str, caller: str | None) -> None:
    """Remove the caller's binding for ALIAS_TOKEN."""
    from roomdir.services.directory import DirectoryService
    from roomdir.services.guards import require_caller

    request = app.request(alias_token=alias_token, caller=caller)

    def action() -> ServiceResult:
        owner = require_caller(request, op="unbind_alias")
        return DirectoryService(app.homeserver).unbind(request, owner)

    app.emit(app.call("unbind_alias", action))
