# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass, one named option of a parsing scope.

A flag is matched either by its long name (`--name`) or by its optional single
character short name (`-n`). Once matched it consumes `arity` following tokens
and passes them, as raw strings, to its handler.

Key Attributes:
- `long_name`: Unique key within a scope's registry, without leading dashes.
- `short_name`: Optional single character.
- `labels`: Value placeholder names, used in help output.
- `arity`: Fixed number of values, or `ARITY_ANY` to consume every remaining token.
- `handler`: Called once with the list of consumed values.
- `completer`: Called in completion mode for the value under the cursor.
- `category`: Help grouping; hidden categories are left out of help and completion.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Final

from flagtree.completion import CompletionContext, Completer
from flagtree.exceptions import FlagDefinitionError, UsageError
from flagtree.hash_type import HashType, parse_hash_type

ARITY_ANY: Final = "*"

CATEGORY_DEFAULT: Final = "default"
CATEGORY_HIDDEN: Final = "hidden"
CATEGORY_HELP: Final = "help"

Handler = Callable[[list[str]], None]


@dataclass
class Flag:
    """
    Represents a command-line flag.

    Attributes:
        long_name (str): Long name, matched as `--long_name`.
        handler (Handler): Receives the consumed values.
        short_name (str | None): Single character, matched as `-x`.
        description (str): Help text.
        labels (list[str]): Placeholder names for the values.
        arity (int | str | None): Number of values, `ARITY_ANY`, or None to use `len(labels)`.
        completer (Completer | None): Completion callback for the values.
        category (str): Help category.
    """

    long_name: str
    handler: Handler
    short_name: str | None = None
    description: str = ""
    labels: list[str] = field(default_factory=list)
    arity: int | str | None = None
    completer: Completer | None = None
    category: str = CATEGORY_DEFAULT

    def __post_init__(self) -> None:
        if self.arity is None:
            self.arity = len(self.labels)

    @property
    def takes_any(self) -> bool:
        return self.arity == ARITY_ANY

    @property
    def display_name(self) -> str:
        return f"--{self.long_name}"

    def validate(self) -> None:
        """Check the registration invariants of this flag."""
        if not self.long_name:
            raise FlagDefinitionError("Flag long name must not be empty")
        if self.long_name.startswith("-"):
            raise FlagDefinitionError(
                f"Flag long name '{self.long_name}' must not start with '-'"
            )
        if self.short_name is not None and len(self.short_name) != 1:
            raise FlagDefinitionError(
                f"Flag '{self.display_name}' short name must be a single character"
            )
        if self.takes_any:
            return
        if not isinstance(self.arity, int) or self.arity < 0:
            raise FlagDefinitionError(
                f"Flag '{self.display_name}' arity must be a non-negative int "
                "or ARITY_ANY"
            )
        if len(self.labels) != self.arity:
            raise FlagDefinitionError(
                f"Flag '{self.display_name}' has arity {self.arity} "
                f"but {len(self.labels)} label(s)"
            )

    @classmethod
    def hash_type_flag(
        cls,
        long_name: str,
        on_hash_type: Callable[[HashType], None],
        short_name: str | None = None,
    ) -> Flag:
        """
        Build a flag selecting a hash algorithm.

        Unknown algorithm names raise `UsageError`. In completion mode the
        algorithm names matching the typed prefix are offered.
        """

        def handler(values: list[str]) -> None:
            hash_type = parse_hash_type(values[0])
            if hash_type is None:
                raise UsageError(f"unknown hash type '{values[0]}'")
            on_hash_type(hash_type)

        def completer(context: CompletionContext, index: int, prefix: str) -> None:
            context.add_matching(HashType.names(), prefix)

        return cls(
            long_name=long_name,
            short_name=short_name,
            description="hash algorithm ('md5', 'sha1', 'sha256', or 'sha512')",
            labels=["hash-algo"],
            handler=handler,
            completer=completer,
        )
