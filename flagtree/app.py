# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `RootCommand`, the top-level scope of the `flagtree` program, and
`build_root()`, which assembles it from the built-in commands and the
commands declared in a configuration file.

Global flags:
- `-v`, `--verbose`: Enable debug logging.
- `--log-mode MODE`: Choose "cli" (Rich) or "json" log output.

Both take effect as soon as they are parsed, so the rest of the parse is
already traced.
"""
from __future__ import annotations

from functools import partial
from typing import Callable

from flagtree.commands import CompletionCommand, HashCommand
from flagtree.completion import CompletionContext
from flagtree.config import FlagtreeSettings
from flagtree.exceptions import UsageError
from flagtree.parser.command import Command, MultiCommand
from flagtree.parser.flag import Flag
from flagtree.utils import LOG_MODES, setup_logging


class RootCommand(MultiCommand):
    """The `flagtree` program: global flags plus the configured sub-commands."""

    def __init__(
        self,
        commands: dict[str, Callable[[], Command]],
        settings: FlagtreeSettings,
    ) -> None:
        super().__init__(commands)
        self.settings = settings
        self.verbose = False
        self.log_mode: str | None = settings.log_mode
        self.hidden_categories = set(settings.hidden_categories)
        self.categories.update(settings.categories)
        self.add_flag(
            Flag(
                long_name="verbose",
                short_name="v",
                description="Enable debug logging.",
                handler=self._set_verbose,
            )
        )
        self.add_flag(
            Flag(
                long_name="log-mode",
                description="Log output format ('cli' or 'json').",
                labels=["mode"],
                handler=self._set_log_mode,
                completer=self._complete_log_mode,
            )
        )

    def _set_verbose(self, values: list[str]) -> None:
        self.verbose = True
        self.configure_logging()

    def _set_log_mode(self, values: list[str]) -> None:
        if values[0] not in LOG_MODES:
            raise UsageError(f"unknown log mode '{values[0]}'")
        self.log_mode = values[0]
        self.configure_logging()

    def _complete_log_mode(
        self, context: CompletionContext, index: int, prefix: str
    ) -> None:
        context.add_matching(LOG_MODES, prefix)

    def configure_logging(self) -> None:
        """Apply the current `--verbose` and `--log-mode` values to log output."""
        if self.context.active:
            return
        setup_logging(mode=self.log_mode, verbose=self.verbose)

    def description(self) -> str:
        return self.settings.description


def build_root(settings: FlagtreeSettings) -> RootCommand:
    """
    Build the `flagtree` command tree.

    Commands declared in `settings` take precedence over built-in commands of
    the same name.
    """
    commands: dict[str, Callable[[], Command]] = {
        "hash": HashCommand,
        "completion": partial(
            CompletionCommand,
            program=settings.program or "flagtree",
            env_var=settings.completion_env_var,
        ),
    }
    commands.update(settings.command_factories())
    return RootCommand(commands, settings)
