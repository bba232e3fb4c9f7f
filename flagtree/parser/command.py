# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines `Command` and `MultiCommand`, the units an application's command line
is built from.

A `Command` is an `Args` scope with a description, a help category, optional
usage examples, and a `run()` method executed after a successful parse.

A `MultiCommand` additionally owns a mapping of sub-command names to
zero-argument factories. Its only positional argument is the sub-command name:
once that name is parsed the factory is called and every later flag and
argument is offered to the new sub-command's own scope. Flags registered on
the `MultiCommand` itself are always tried first, so they stay valid on either
side of the sub-command name.

Example:
    class Build(Command):
        def __init__(self):
            super().__init__()
            self.mk_flag("dry-run", "Only show what would be built.", dest="dry_run")

        def description(self):
            return "build a target"

        def run(self):
            ...

    app = MultiCommand({"build": Build})
    app.parse_cmdline(["build", "--dry-run"])
    name, command = app.command   # ("build", <Build>)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from rich.markup import escape

from flagtree.completion import CompletionContext
from flagtree.exceptions import UsageError
from flagtree.logger import logger
from flagtree.parser.args import Args
from flagtree.parser.expected_arg import ExpectedArg
from flagtree.parser.flag import CATEGORY_DEFAULT
from flagtree.parser.tokenizer import Token
from flagtree.parser.utils import print_table


@dataclass(frozen=True)
class Example:
    """A usage example shown in command help."""

    description: str
    command: str


class Command(Args):
    """
    A named parsing scope that can be run.

    Subclasses register their flags and arguments in `__init__` and override
    `description()`, `category()`, `examples()` and `run()` as needed.
    """

    def category(self) -> str:
        return CATEGORY_DEFAULT

    def examples(self) -> list[Example]:
        return []

    def run(self) -> None:
        """Execute the command after a successful parse."""
        raise NotImplementedError(f"{type(self).__name__} does not implement run()")

    def print_help(self, program_name: str) -> None:
        super().print_help(program_name)

        examples = self.examples()
        if examples:
            self.console.print("\n[bold]Examples:[/bold]")
            for example in examples:
                self.console.print(f"\n  {escape(example.description)}")
                self.console.print(f"  $ {escape(example.command)}")


CommandFactory = Callable[[], Command]


class MultiCommand(Command):
    """
    A command dispatching to one of several named sub-commands.

    Attributes:
        commands (dict[str, CommandFactory]): Sub-command factories by name.
        command (tuple[str, Command] | None): The selected sub-command, set once
            while parsing.
        categories (dict[str, str]): Help headings by command category.
    """

    def __init__(self, commands: Mapping[str, CommandFactory]) -> None:
        super().__init__()
        self.commands: dict[str, CommandFactory] = dict(commands)
        self.command: tuple[str, Command] | None = None
        self.categories: dict[str, str] = {CATEGORY_DEFAULT: "Available commands"}
        self.expected_args.append(
            ExpectedArg(
                label="command",
                handler=self._select_command,
                arity=1,
                optional=True,
                completer=self._complete_command,
            )
        )

    def _complete_command(
        self, context: CompletionContext, index: int, prefix: str
    ) -> None:
        context.add_matching(self.commands, prefix)

    def _select_command(self, values: list[str]) -> None:
        assert self.command is None, "sub-command selected twice"
        name = values[0]
        factory = self.commands.get(name)
        if factory is None:
            raise UsageError(f"'{name}' is not a recognised command")
        instance = factory()
        instance.context = self.context
        logger.debug("Selected sub-command '%s'", name)
        self.command = (name, instance)

    def process_flag(
        self, tokens: list[Token], pos: int, context: CompletionContext
    ) -> int | None:
        new_pos = super().process_flag(tokens, pos, context)
        if new_pos is None and self.command:
            new_pos = self.command[1].process_flag(tokens, pos, context)
        return new_pos

    def process_args(
        self, pending: list[str], finish: bool, context: CompletionContext
    ) -> bool:
        if self.command:
            return self.command[1].process_args(pending, finish, context)
        return super().process_args(pending, finish, context)

    def selected(self) -> Command:
        """Return the innermost selected command, or self if none was selected."""
        if self.command is None:
            return self
        command = self.command[1]
        if isinstance(command, MultiCommand):
            return command.selected()
        return command

    def run(self) -> None:
        if self.command is None:
            raise UsageError("no command specified")
        self.command[1].run()

    def print_help(self, program_name: str) -> None:
        if self.command:
            name, command = self.command
            command.print_help(f"{program_name} {name}")
            return

        self.console.print(
            f"[bold]Usage:[/bold] {escape(program_name)} "
            "[italic]COMMAND FLAGS... ARGS...[/italic]"
        )

        summary = self.description()
        if summary:
            self.console.print(f"\n[bold]Summary:[/bold] {escape(summary)}.")

        self.console.print("\n[bold]Common flags:[/bold]")
        self.print_flags()

        by_category: dict[str, dict[str, Command]] = {}
        for name, factory in sorted(self.commands.items()):
            command = factory()
            by_category.setdefault(command.category(), {})[name] = command

        ordered = [category for category in self.categories if category in by_category]
        ordered += sorted(
            category for category in by_category if category not in ordered
        )
        for category in ordered:
            heading = self.categories.get(category, category.capitalize())
            self.console.print(f"\n[bold]{escape(heading)}:[/bold]")
            rows = [
                (escape(name), command.description())
                for name, command in by_category[category].items()
                if command.description()
            ]
            print_table(self.console, rows)
