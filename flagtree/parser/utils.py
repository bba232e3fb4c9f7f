# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rendering helpers shared by the help output of `Args`, `Command` and `MultiCommand`.

Functions:
- render_labels: Format value placeholders as italic upper-case markup.
- print_table: Print a two-column, indented table of (term, description) rows.
"""
from typing import Iterable, Sequence

from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.table import Table


def render_labels(labels: Iterable[str]) -> str:
    """Return ` [italic]LABEL[/italic]` markup for every label."""
    return "".join(f" [italic]{escape(label.upper())}[/italic]" for label in labels)


def print_table(console: Console, rows: Sequence[tuple[str, str]]) -> None:
    """
    Print rows as a borderless two-column table indented by two spaces.

    Row terms may contain Rich markup; descriptions are printed verbatim.
    """
    if not rows:
        return
    table = Table.grid(padding=(0, 2))
    table.add_column(no_wrap=True)
    table.add_column()
    for term, description in rows:
        table.add_row(term, escape(description))
    console.print(Padding(table, (0, 0, 0, 2)))
