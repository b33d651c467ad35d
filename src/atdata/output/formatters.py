"""Format ServiceResult for the terminal.

Three modes, picked by :class:`OutputSettings`:
- JSON (``--json``): the pydantic dump of the result
- quiet (``-q``): just the encoded output, or a one-line status
- human (default): rich key/value rendering
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.text import Text

from atdata.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from atdata.services.result import ServiceResult

_FIELD_STYLES: dict[str, str] = {
    "output": "atd.output",
    "cid": "atd.cid",
}


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult according to *settings* (default: human)."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return _format_quiet(result)
    return _format_human(result, verbose=settings.verbose)


def _format_quiet(result: ServiceResult) -> str:
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"
    if "output" in result.data:
        return str(result.data["output"])
    if result.data.get("absent"):
        return "absent"
    return str(result.data.get("cid") or result.data.get("hex") or f"OK: {result.op}")


def _format_human(result: ServiceResult, *, verbose: bool) -> str:
    console = create_console()
    if result.ok:
        console.print(Text("OK", style="atd.ok"), Text(f"  {result.op}", style="atd.op"))
        for key, value in result.data.items():
            _field(console, key, value)
    else:
        console.print(Text("ERROR", style="atd.error"), Text(f"  {result.op}", style="atd.op"))
        if result.error is not None:
            _field(console, "code", result.error.code)
            _field(console, "message", result.error.message)
            if verbose:
                for key, value in result.error.detail.items():
                    _field(console, key, value)
    for warning in result.warnings:
        console.print(Text(f"  warning: {warning}", style="atd.warning"))
    return get_output(console).rstrip("\n")


def _field(console: Console, key: str, value: Any) -> None:
    if key == "absent" and value is True:
        rendered = Text("absent (null)", style="atd.absent")
    else:
        rendered = Text(str(value), style=_FIELD_STYLES.get(key, ""))
    console.print(Text(f"  {key}: ", style="atd.key"), rendered, sep="")
