"""
Console Previewer.

Prints a table's schema as a tree and its first rows as a rich table.
Observability only; nothing parses this output.

Example output:

    root
     |-- short_name: string
     |-- overall: integer

    +----------------------+
    | short_name | overall |
    |------------+---------|
    |   L. Messi |      93 |
    +----------------------+
"""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional, TextIO

from rich import box
from rich.console import Console
from rich.table import Table

NULL_TEXT = "null"


def render_schema(schema: Dict[str, str]) -> str:
    """Render ``name -> type`` as a ``root / |-- name: type`` tree."""
    lines = ["root"]
    lines.extend(f" |-- {name}: {type_name}" for name, type_name in schema.items())
    return "\n".join(lines)


def build_table(
    columns: List[str],
    rows: List[Dict[str, Any]],
    truncate: Optional[int] = None,
) -> Table:
    """Build an ASCII-bordered, right-aligned table of ``rows``."""

    def cell(value: Any) -> str:
        text = NULL_TEXT if value is None else str(value)
        if truncate is not None and len(text) > truncate:
            text = text[: max(truncate - 3, 0)] + "..."
        return text

    table = Table(box=box.ASCII, show_header=True, header_style="bold")
    for name in columns:
        table.add_column(name, justify="right", no_wrap=True, overflow="ignore")
    for row in rows:
        table.add_row(*(cell(row.get(name)) for name in columns))
    if not rows:
        table.caption = "(no rows)"
    return table


class ConsolePreviewer:
    """Writes schema trees and row tables to a text stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        truncate: Optional[int] = None,
    ) -> None:
        """
        Initialize previewer.

        Args:
            stream: Output stream (defaults to stdout at call time)
            truncate: Maximum cell width; None disables truncation
        """
        self._stream = stream
        self.truncate = truncate

    def _console(self) -> Console:
        return Console(
            file=self._stream or sys.stdout,
            width=10_000,
            color_system=None,
            highlight=False,
            soft_wrap=True,
        )

    def show_schema(self, schema: Dict[str, str]) -> None:
        stream = self._stream or sys.stdout
        stream.write(render_schema(schema) + "\n\n")

    def show(self, schema: Dict[str, str], rows: List[Dict[str, Any]]) -> None:
        self.show_schema(schema)
        self._console().print(build_table(list(schema), rows, self.truncate))
