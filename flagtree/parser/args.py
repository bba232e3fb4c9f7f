# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Args`, the parsing scope at the core of Flagtree.

An `Args` instance owns one flag registry (indexed by long and short name) and
one queue of expected positional arguments. `parse_cmdline()` expands the raw
argument vector and walks it once:

- A token starting with `-` (and not after `--`) goes to `process_flag()`,
  which consumes the flag and its values and calls the flag's handler.
- Any other token is accumulated and offered to `process_args()`, which
  satisfies the front of the positional queue once its arity is met.
- At the end of input the queue receives the finish signal.

Completion is threaded through every step via a `CompletionContext`: the token
carrying the completion marker makes the dispatchers collect candidates
(long flag names, short flags, values from completers) instead of failing.

Public Interface:
- `add_flag(flag)`: Register a flag. Registering a long name twice replaces
  the earlier flag.
- `mk_flag(...)` / `mk_value_flag(...)`: Register flags that store into attributes.
- `expect_arg(...)` / `expect_args(...)`: Queue positional arguments.
- `expect_path_arg(...)` / `expect_path_args(...)`: Same, with path completion.
- `parse_cmdline(tokens, completion_index)`: Parse an argument vector.
- `print_help(program_name)`: Render usage, summary and flags with Rich.

Example Usage:
    args = Args()
    args.mk_flag("verbose", "Print more.", dest="verbose", short_name="v")
    args.expect_args("files", dest="files")
    args.parse_cmdline(["-v", "a.txt", "b.txt"])
    # args.verbose is True, args.files == ["a.txt", "b.txt"]
"""
from __future__ import annotations

from collections import deque
from typing import Any, Sequence

from rich.console import Console
from rich.markup import escape

from flagtree.completion import CompletionContext, Completer, complete_path
from flagtree.console import console
from flagtree.exceptions import UsageError
from flagtree.logger import logger
from flagtree.parser.expected_arg import ExpectedArg
from flagtree.parser.flag import (
    CATEGORY_DEFAULT,
    CATEGORY_HELP,
    CATEGORY_HIDDEN,
    Flag,
)
from flagtree.parser.tokenizer import Token, expand_tokens
from flagtree.parser.utils import print_table, render_labels
from flagtree.signals import HelpSignal


class Args:
    """
    A parsing scope: one flag registry plus one positional argument queue.

    Attributes:
        long_flags (dict[str, Flag]): Flags by long name.
        short_flags (dict[str, Flag]): Flags by short name.
        expected_args (deque[ExpectedArg]): Positional arguments still to match.
        hidden_categories (set[str]): Flag categories left out of help and completion.
        context (CompletionContext): Completion state of the running parse.
        help_requested (bool): True once `--help` was seen.
    """

    def __init__(self) -> None:
        self.console: Console = console
        self.long_flags: dict[str, Flag] = {}
        self.short_flags: dict[str, Flag] = {}
        self.expected_args: deque[ExpectedArg] = deque()
        self.hidden_categories: set[str] = {CATEGORY_HIDDEN}
        self.context: CompletionContext = CompletionContext()
        self.help_requested: bool = False
        self._add_help()

    def _add_help(self) -> None:
        self.add_flag(
            Flag(
                long_name="help",
                description="Show usage information.",
                handler=self._request_help,
                category=CATEGORY_HELP,
            )
        )

    def _request_help(self, values: list[str]) -> None:
        self.help_requested = True
        if not self.context.active:
            raise HelpSignal()

    def description(self) -> str:
        """One-line summary shown in help output."""
        return ""

    def add_flag(self, flag: Flag) -> None:
        """
        Register a flag.

        A flag registered under an existing long name replaces the earlier one.

        Raises:
            FlagDefinitionError: If the flag violates its registration invariants.
        """
        flag.validate()
        if flag.long_name in self.long_flags:
            logger.debug("Flag '%s' registered again; replacing it", flag.display_name)
        self.long_flags[flag.long_name] = flag
        if flag.short_name:
            self.short_flags[flag.short_name] = flag

    def mk_flag(
        self,
        long_name: str,
        description: str,
        dest: str,
        value: Any = True,
        short_name: str | None = None,
        category: str = CATEGORY_DEFAULT,
    ) -> None:
        """Register a switch that sets attribute `dest` to `value` when present."""

        def handler(values: list[str]) -> None:
            setattr(self, dest, value)

        self.add_flag(
            Flag(
                long_name=long_name,
                short_name=short_name,
                description=description,
                handler=handler,
                category=category,
            )
        )

    def mk_value_flag(
        self,
        long_name: str,
        label: str,
        description: str,
        dest: str,
        short_name: str | None = None,
        completer: Completer | None = None,
        category: str = CATEGORY_DEFAULT,
    ) -> None:
        """Register a flag taking one value, stored in attribute `dest`."""

        def handler(values: list[str]) -> None:
            setattr(self, dest, values[0])

        self.add_flag(
            Flag(
                long_name=long_name,
                short_name=short_name,
                description=description,
                labels=[label],
                handler=handler,
                completer=completer,
                category=category,
            )
        )

    def expect_arg(
        self,
        label: str,
        dest: str,
        optional: bool = False,
        completer: Completer | None = None,
    ) -> None:
        """Queue a single positional argument stored in attribute `dest`."""

        def handler(values: list[str]) -> None:
            setattr(self, dest, values[0])

        self.expected_args.append(
            ExpectedArg(
                label=label,
                handler=handler,
                arity=1,
                optional=optional,
                completer=completer,
            )
        )

    def expect_args(
        self, label: str, dest: str, completer: Completer | None = None
    ) -> None:
        """Queue a positional argument taking all remaining values, stored in `dest`."""

        def handler(values: list[str]) -> None:
            setattr(self, dest, values)

        self.expected_args.append(
            ExpectedArg(label=label, handler=handler, arity=0, completer=completer)
        )

    def expect_path_arg(self, label: str, dest: str, optional: bool = False) -> None:
        self.expect_arg(label, dest, optional=optional, completer=complete_path)

    def expect_path_args(self, label: str, dest: str) -> None:
        self.expect_args(label, dest, completer=complete_path)

    def parse_cmdline(
        self,
        tokens: Sequence[str],
        completion_index: int | None = None,
        context: CompletionContext | None = None,
    ) -> CompletionContext:
        """
        Parse an argument vector into flag and argument handler calls.

        Args:
            tokens (Sequence[str]): Arguments without the program name.
            completion_index (int | None): 1-based index of the token to complete.
            context (CompletionContext | None): Completion state to use. A new one
                is created when omitted; it is active if `completion_index` is set.

        Returns:
            CompletionContext: The context used for the parse, holding any candidates.

        Raises:
            UsageError: If the tokens do not match the registered flags and arguments.
            HelpSignal: If `--help` was given outside completion mode.
        """
        if context is None:
            context = CompletionContext(active=completion_index is not None)
        self.context = context
        stream = expand_tokens(
            tokens,
            completion_index=completion_index if context.active else None,
            marker=context.marker,
        )
        logger.debug("Parsing %d token(s): %s", len(stream), [t.text for t in stream])

        pending: list[str] = []
        pos = 0
        while pos < len(stream):
            token = stream[pos]
            if not token.literal and token.text.startswith("-"):
                new_pos = self.process_flag(stream, pos, context)
                if new_pos is None:
                    if context.needs_completion(token.text) is None:
                        raise UsageError(f"unrecognised flag '{token.text}'")
                    new_pos = pos + 1
                pos = new_pos
                continue
            pending.append(token.text)
            pos += 1
            if self.process_args(pending, False, context):
                pending = []

        self.process_args(pending, True, context)
        return context

    def process_flag(
        self, tokens: list[Token], pos: int, context: CompletionContext
    ) -> int | None:
        """
        Dispatch the flag at `tokens[pos]`.

        Returns:
            int | None: The position after the flag and its values, or None if
            the token is not a flag of this scope.
        """
        token = tokens[pos].text
        prefix = context.needs_completion(token)

        if token.startswith("--"):
            if prefix is not None:
                context.add_matching(
                    (
                        name
                        for name, flag in self.long_flags.items()
                        if flag.category not in self.hidden_categories
                    ),
                    prefix[2:],
                    template="--{}",
                )
            name = context.strip_marker(token)[2:]
            flag = self.long_flags.get(name)
            if flag is None:
                return None
            return self._process_values(f"--{name}", flag, tokens, pos, context)

        if token.startswith("-") and len(token) == 2:
            flag = self.short_flags.get(token[1])
            if flag is None:
                return None
            return self._process_values(token, flag, tokens, pos, context)

        if prefix == "-":
            context.add("--")
            for short_name in self.short_flags:
                context.add(f"-{short_name}")

        return None

    def _process_values(
        self,
        name: str,
        flag: Flag,
        tokens: list[Token],
        pos: int,
        context: CompletionContext,
    ) -> int:
        pos += 1
        values: list[str] = []
        while flag.takes_any or len(values) < flag.arity:
            if pos >= len(tokens):
                if flag.takes_any:
                    break
                raise UsageError(f"flag '{name}' requires {flag.arity} argument(s)")
            value = tokens[pos].text
            prefix = context.needs_completion(value)
            if prefix is not None:
                if flag.completer:
                    flag.completer(context, len(values), prefix)
                value = prefix
            values.append(value)
            pos += 1
        logger.debug("Flag '%s' matched with values %s", name, values)
        flag.handler(values)
        return pos

    def process_args(
        self, pending: list[str], finish: bool, context: CompletionContext
    ) -> bool:
        """
        Offer the pending positional tokens to the front of the argument queue.

        Args:
            pending (list[str]): Positional tokens not yet consumed.
            finish (bool): True once the end of input was reached.

        Returns:
            bool: True if the pending tokens were consumed.

        Raises:
            UsageError: On an unexpected argument, or when required arguments are
            missing at the end of input.
        """
        if not self.expected_args:
            if pending:
                raise UsageError(
                    f"unexpected argument '{context.strip_marker(pending[0])}'"
                )
            return True

        expected = self.expected_args[0]
        consumed = False

        if (expected.arity == 0 and finish) or (
            expected.arity > 0 and len(pending) == expected.arity
        ):
            values: list[str] = []
            completing = False
            for index, value in enumerate(pending):
                prefix = context.needs_completion(value)
                if prefix is not None:
                    completing = True
                    if expected.completer:
                        expected.completer(context, index, prefix)
                    value = prefix
                values.append(value)
            if not completing:
                logger.debug(
                    "Argument '%s' matched with values %s", expected.label, values
                )
                expected.handler(values)
            self.expected_args.popleft()
            consumed = True

        if finish and self.expected_args and not self.expected_args[0].optional:
            raise UsageError("more arguments are required")

        return consumed

    def get_usage(self, program_name: str) -> str:
        """Return the usage line markup, e.g. `prog FLAGS... PATH NAMES...`."""
        usage = f"{escape(program_name)} [italic]FLAGS...[/italic]"
        for expected in self.expected_args:
            usage += f" [italic]{escape(expected.get_usage_text())}[/italic]"
        return usage

    def print_help(self, program_name: str) -> None:
        """
        Print usage, summary and flags for this scope using Rich output.
        """
        self.console.print(f"[bold]Usage:[/bold] {self.get_usage(program_name)}")

        summary = self.description()
        if summary:
            self.console.print(f"\n[bold]Summary:[/bold] {escape(summary)}.")

        if self.long_flags:
            self.console.print("\n[bold]Flags:[/bold]")
            self.print_flags()

    def print_flags(self) -> None:
        """Print a table of all visible flags, sorted by long name."""
        rows = []
        for name, flag in sorted(self.long_flags.items()):
            if flag.category in self.hidden_categories:
                continue
            short = f"-{escape(flag.short_name)}, " if flag.short_name else "    "
            rows.append(
                (
                    f"{short}--{escape(name)}{render_labels(flag.labels)}",
                    flag.description,
                )
            )
        print_table(self.console, rows)

    def __str__(self) -> str:
        """Return a human-readable summary of the scope state."""
        return (
            f"{type(self).__name__}(flags={len(self.long_flags)}, "
            f"short_flags={len(self.short_flags)}, "
            f"expected_args={len(self.expected_args)})"
        )

    def __repr__(self) -> str:
        return str(self)
