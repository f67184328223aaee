"""Command group: register and inspect rooms known to the directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roomdir.commands._base import RoomdirGroup

if TYPE_CHECKING:
    from roomdir.commands._context import AppContext
    from roomdir.services.result import ServiceResult


@click.group(
    cls=RoomdirGroup,
    examples="""\
  roomdir room register --as @alice:example.org
  roomdir room show '!abc:example.org'""",
)
def room() -> None:
    """Register and inspect rooms."""


@room.command(
    examples="""\
  roomdir room register --as @alice:example.org
  roomdir room register --room-id '!abc:example.org' --as @alice:example.org""",
)
@click.option("--room-id", default=None, help="Explicit room ID (generated if omitted).")
@click.option("--as", "caller", default=None, help="Authenticated caller user ID.")
@click.pass_obj
def register(app: AppContext, room_id: str | None, caller: str | None) -> None:
    """Register a room so aliases can be bound to it."""
    from roomdir.services.guards import require_caller
    from roomdir.services.rooms import RoomService

    request = app.request(caller=caller)

    def action() -> ServiceResult:
        creator = require_caller(request, op="register_room")
        return RoomService(app.homeserver).register_room(creator, room_id=room_id)

    app.emit(app.call("register_room", action))


@room.command()
@click.argument("room_id")
@click.pass_obj
def show(app: AppContext, room_id: str) -> None:
    """Show a registered room."""
    from roomdir.services.rooms import RoomService

    app.emit(app.call("show_room", lambda: RoomService(app.homeserver).show_room(room_id)))
