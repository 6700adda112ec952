"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op``.  ``validate`` and ``lifecycle``
render their payload for failed results too, since a failed validation is
still a full report; other failures use the generic error line.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from recordcheck.output.console import STATUS_STYLES, create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from recordcheck.services.result import ServiceResult

    Renderer = Callable[[ServiceResult, Console], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    renderer = _OP_RENDERERS.get(result.op)

    if result.ok:
        (renderer or _render_generic)(result, console)
    elif renderer is not None and result.data:
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if result.op == "generate_booking" and result.ok:
        items = result.data.get("items", [])
        return "\n".join(json.dumps(item, separators=(",", ":")) for item in items)
    if result.op == "validate" and result.data:
        return "VALID" if result.ok else f"INVALID: {result.data.get('summary', {})}"
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    if result.ok:
        label = Text("OK", style="rc.ok")
    else:
        label = Text("FAILED", style="rc.error")
    console.print(label, Text(f"  {result.op}", style="rc.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="rc.key")
    v = Text(str(value), style="rc.path" if key in ("schema", "path") else "")
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error / generic ───────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rc.error")
    op = Text(f"  {result.op}", style="rc.op")
    console.print(label, op, Text(" — "), Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)


# ── Validation ────────────────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console) -> None:
    """Render a validation report with type and value errors grouped."""
    d = result.data
    label = Text("VALID", style="rc.ok") if d.get("valid") else Text("INVALID", style="rc.error")
    console.print(label, Text(f"  {d.get('schema', '')}", style="rc.path"))

    issues = d.get("issues", [])
    for category, title in (("type", "type errors"), ("value", "value errors")):
        group = [i for i in issues if i.get("category") == category]
        if not group:
            continue
        console.print(f"\n[bold]{title}[/bold]")
        for issue in group:
            console.print(
                Text.assemble(
                    "  ",
                    (str(issue.get("code", "")), "rc.error"),
                    " ",
                    (str(issue.get("path", "")), "rc.path"),
                    f": {issue.get('message', '')}",
                )
            )

    summary = d.get("summary", {})
    console.print(
        f"\n{summary.get('typeErrorCount', 0)} type errors, "
        f"{summary.get('valueErrorCount', 0)} value errors"
    )


# ── Lifecycle ─────────────────────────────────────────────────────────


def _render_lifecycle(result: ServiceResult, console: Console) -> None:
    """Render lifecycle steps as a table."""
    _status_line(console, result)
    d = result.data
    _field(console, "base_url", d.get("base_url", ""))
    if d.get("booking_id") is not None:
        _field(console, "booking_id", d["booking_id"])

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Step", no_wrap=True)
    table.add_column("Status")
    table.add_column("HTTP", justify="right")
    table.add_column("Expected", justify="right")
    table.add_column("ms", justify="right")
    table.add_column("Message")
    for step in d.get("steps", []):
        status = str(step.get("status", ""))
        table.add_row(
            str(step.get("step", "")),
            Text(status, style=STATUS_STYLES.get(status, "")),
            str(step.get("status_code", "")),
            str(step.get("expected_status", "")),
            str(step.get("elapsed_ms", "")),
            Text(str(step.get("message", ""))),
        )
    console.print(table)
    console.print(
        f"{d.get('passed', 0)} passed, {d.get('failed', 0)} failed, {d.get('skipped', 0)} skipped"
    )


# ── Generate ──────────────────────────────────────────────────────────


def _render_generate(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))
    for item in result.data.get("items", []):
        console.print(json.dumps(item, indent=2), markup=False)


# ── Schema ────────────────────────────────────────────────────────────


def _render_schema_list(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for name in result.data.get("schemas", []):
        console.print(f"  {name}")


def _render_schema_show(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "schema", result.data.get("name", ""))
    if result.data.get("description"):
        _field(console, "description", result.data["description"])

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Path", style="rc.path", no_wrap=True)
    table.add_column("Type", style="rc.type")
    table.add_column("Required")
    table.add_column("Format")
    table.add_column("Compare")
    for row in result.data.get("fields", []):
        table.add_row(
            str(row.get("path", "")),
            str(row.get("type", "")),
            "yes" if row.get("required") else "no",
            str(row.get("format") or ""),
            str(row.get("compare", "")),
        )
    console.print(table)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "validate": _render_validate,
    "lifecycle": _render_lifecycle,
    "generate_booking": _render_generate,
    "schema_list": _render_schema_list,
    "schema_show": _render_schema_show,
}
