"""Report formatters — text (one header per pipeline) and NDJSON."""

import json
from typing import Callable

from logchain.models import Record

Result = dict[str, list[Record]]

FORMATS = ("text", "json")


def format_text(result: Result) -> list[str]:
    """Return report lines:

        Pipeline 1
            1| second message
            0| first message
    """
    lines = []
    for pipeline_id, records in result.items():
        lines.append(f"Pipeline {pipeline_id}")
        for record in records:
            lines.append(f"    {record.id}| {record.decoded_body}")
    return lines


def format_json(result: Result) -> list[str]:
    """Return NDJSON — one object per pipeline, compatible with jq."""
    return [
        json.dumps({
            "pipeline_id": pipeline_id,
            "messages": [{"id": r.id, "body": r.decoded_body} for r in records],
        })
        for pipeline_id, records in result.items()
    ]


def get_formatter(output_format: str = "text") -> Callable[[Result], list[str]]:
    """Factory that returns the formatter for *output_format*."""
    if output_format == "text":
        return format_text
    if output_format == "json":
        return format_json
    raise ValueError(f"Unknown output format: {output_format!r} (expected one of {FORMATS})")
