"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich output, colors) or machines
(--json).  Quiet mode prints only the generated document, which makes
``dtoinit -q skeleton pkg.mod:Dto > sample.json`` the piping idiom.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from dtoinit.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Rendering switches derived from the CLI flags and [output] config."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    indent: int = 2
    sort_keys: bool = False


def dump_document(value: Any, settings: OutputSettings) -> str:
    """Serialize a generated document with the configured layout."""
    indent = settings.indent or None
    return _json.dumps(value, indent=indent, sort_keys=settings.sort_keys, ensure_ascii=False)


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output switches; when given, *json_output* is ignored.
        json_output: Shortcut for ``OutputSettings(json_output=True)``.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)

    if settings.json_output:
        return result.model_dump_json(indent=settings.indent or None)
    if settings.quiet:
        return _format_quiet(result, settings)

    from dtoinit.output.renderers import render_result

    return render_result(result, settings=settings)


def _format_quiet(result: ServiceResult, settings: OutputSettings) -> str:
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if "value" in result.data:
        return dump_document(result.data["value"], settings)
    fields = result.data.get("fields")
    if isinstance(fields, list):
        return "\n".join(str(item.get("name", "")) for item in fields)
    return f"OK: {result.op}"
