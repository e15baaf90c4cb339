"""Generic output formatting for data display."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table


class OutputFormat(str, Enum):
    table = "table"
    json = "json"


@dataclass
class Column:
    header: str
    key: str
    style: str | None = None
    justify: str | None = None
    max_width: int | None = None


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def render(
    data: list[dict[str, Any]],
    format: OutputFormat,
    columns: list[Column] | None = None,
    footer: str | None = None,
) -> None:
    """Render list data as JSON or Rich table.

    For JSON: prints indented JSON to stdout.
    For table: builds a Rich table using column specs for styling (max_width, justify, style).
    The footer (e.g. "Showing 5 issues") is only printed in table mode.
    """
    if format == OutputFormat.json:
        print_json(data)
        return

    console = Console()

    if not data:
        return

    if columns is None:
        columns = [Column(header=key, key=key) for key in data[0]]

    table = Table(show_header=True, header_style="bold")
    for col in columns:
        kwargs: dict[str, Any] = {}
        if col.style is not None:
            kwargs["style"] = col.style
        if col.justify is not None:
            kwargs["justify"] = col.justify
        if col.max_width is not None:
            kwargs["max_width"] = col.max_width
        table.add_column(col.header, **kwargs)

    for row in data:
        values = [str(row.get(col.key, "")) for col in columns]
        table.add_row(*values)

    console.print(table)
    if footer:
        console.print(f"\n{footer}")


def pagination_footer(count: int, pagination: dict[str, str]) -> str:
    footer = f"Showing {count} issues"
    if "next" in pagination:
        footer += f"\nNext page: --cursor {pagination['next']}"
    if "prev" in pagination:
        footer += f"\nPrevious page: --cursor {pagination['prev']}"
    return footer
