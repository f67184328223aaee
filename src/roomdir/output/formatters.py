"""Format a ServiceResult for the requested output mode.

- JSON (``--json``): the full ServiceResult model, indented.
- Quiet (``-q``): one line, ``OK: op`` or ``ERROR: op: message``.
- Human (default): status line followed by the result data as a table.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from roomdir.output.console import KEY_STYLES, create_console, get_output

if TYPE_CHECKING:
    from roomdir.services.result import ServiceResult


def _cell(key: str, value: Any) -> Text:
    if isinstance(value, list):
        return Text(", ".join(str(v) for v in value))
    if isinstance(value, dict):
        return Text(_json.dumps(value, separators=(",", ":")))
    return Text(str(value), style=KEY_STYLES.get(key, ""))


def _render_human(result: ServiceResult) -> str:
    console = create_console()

    if result.ok:
        console.print(Text("OK", style="rd.ok"), Text(result.op, style="rd.op"))
        if result.data:
            table = Table(show_header=False, box=None, pad_edge=False)
            table.add_column(style="rd.key")
            table.add_column()
            for key, value in result.data.items():
                table.add_row(key, _cell(key, value))
            console.print(table)
        return get_output(console).rstrip("\n")

    error = result.error
    console.print(Text("ERROR", style="rd.error"), Text(result.op, style="rd.op"))
    if error is not None:
        console.print(Text(f"  [{error.code}]", style="rd.code"), Text(error.message))
    meta = result.meta or {}
    if "errcode" in meta:
        console.print(Text(f"  {meta['errcode']} (HTTP {meta['http_status']})", style="rd.key"))
    return get_output(console).rstrip("\n")


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a ServiceResult for display."""
    if json_output:
        return result.model_dump_json(indent=2)
    if quiet:
        if result.ok:
            return f"OK: {result.op}"
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    return _render_human(result)
