# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ExpectedArg`, one entry of a scope's positional argument queue.

Entries are matched in declaration order. An entry with `arity=0` consumes
every remaining positional token and is satisfied only at end of input; an
entry with `arity=k` is satisfied as soon as `k` tokens are pending.
"""
from __future__ import annotations

from dataclasses import dataclass

from flagtree.completion import Completer
from flagtree.parser.flag import Handler


@dataclass
class ExpectedArg:
    """
    Represents an expected positional argument.

    Attributes:
        label (str): Name shown in usage lines.
        handler (Handler): Receives the matched values.
        arity (int): Number of values; 0 means "all remaining".
        optional (bool): True if the entry may be left unmatched at end of input.
        completer (Completer | None): Completion callback for the values.
    """

    label: str
    handler: Handler
    arity: int = 1
    optional: bool = False
    completer: Completer | None = None

    def get_usage_text(self) -> str:
        """Return the usage fragment for this argument, e.g. `PATHS...` or `NAME?`."""
        text = self.label.upper()
        if self.arity == 0:
            text += "..."
        if self.optional:
            text += "?"
        return text
