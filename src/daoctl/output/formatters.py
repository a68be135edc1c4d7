"""Human/JSON output helpers.

The CLI renders ServiceResult for humans (indented key/value text) or
machines (--json). Nothing here knows about individual operations.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from daoctl.services.result import ServiceResult


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _format_data_human(data: dict[str, Any], indent: int = 2) -> str:
    """Format result data as indented key-value pairs, one level of nesting."""
    pad = " " * indent
    lines: list[str] = []
    for key, value in data.items():
        if isinstance(value, dict) and value and indent == 2:
            lines.append(f"{pad}{key}:")
            lines.append(_format_data_human(value, indent + 2))
        else:
            lines.append(f"{pad}{key}: {_format_value(value)}")
    return "\n".join(lines)


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: Return JSON instead of human-readable text.
        quiet: Human mode only: print the status line without data.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if result.ok:
        parts = [f"OK: {result.op}"]
        if result.data and not quiet:
            parts.append(_format_data_human(result.data))
        return "\n".join(parts)
    if result.error is None:
        return f"ERROR: {result.op}: unknown error"
    parts = [f"ERROR: {result.op}: [{result.error.code}] {result.error.message}"]
    if result.error.detail and not quiet:
        parts.append(_format_data_human(result.error.detail))
    return "\n".join(parts)
