# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Runs a command tree as a program: parsing, shell completion and exit codes.

`run_command()` is the outermost boundary of a Flagtree program:

- When the completion environment variable holds a token index, the command
  line is parsed in completion mode and the candidates are written to stdout,
  one per line, after a first line of `filenames` or `no-filenames`. Usage
  errors are ignored in this mode.
- Otherwise the command line is parsed and the selected command is run.
  `--help` prints help and exits 0; a `UsageError` is printed to stderr and
  exits 1.

`bash_completion_script()` returns the shell glue for the completion protocol.
"""
from __future__ import annotations

import os
import re
import sys
from typing import Mapping, Sequence

from rich.markup import escape

from flagtree.completion import COMPLETION_MARKER, CompletionContext
from flagtree.config import DEFAULT_COMPLETION_ENV_VAR, FlagtreeSettings
from flagtree.console import error_console
from flagtree.exceptions import FlagtreeError, UsageError
from flagtree.logger import logger
from flagtree.parser.args import Args
from flagtree.signals import HelpSignal
from flagtree.utils import get_program_invocation


def get_completion_index(env: Mapping[str, str], env_var: str) -> int | None:
    """Return the 1-based completion index requested through `env_var`, if any."""
    raw = env.get(env_var)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", env_var, raw)
        return None


def complete(
    command: Args,
    argv: Sequence[str],
    completion_index: int,
    marker: str = COMPLETION_MARKER,
) -> CompletionContext:
    """
    Parse `argv` in completion mode and return the collected candidates.

    Usage errors raised by the partial command line are ignored. An index
    outside `argv` yields no candidates.
    """
    context = CompletionContext.for_completion(marker)
    if not 1 <= completion_index <= len(argv):
        logger.warning(
            "Completion index %d is out of range for %d argument(s)",
            completion_index,
            len(argv),
        )
        return context
    try:
        command.parse_cmdline(argv, completion_index=completion_index, context=context)
    except UsageError as error:
        logger.debug("Ignoring usage error during completion: %s", error)
    logger.debug("Completion candidates: %s", context.sorted_candidates())
    return context


def _report_error(error: FlagtreeError, program: str) -> int:
    error_console.print(f"[bold red]error:[/bold red] {escape(str(error))}")
    if isinstance(error, UsageError):
        error_console.print(f"Try '{escape(program)} --help' for more information.")
    return 1


def run_command(
    command: Args,
    argv: Sequence[str] | None = None,
    env: Mapping[str, str] | None = None,
    program_name: str | None = None,
    settings: FlagtreeSettings | None = None,
) -> int:
    """
    Parse and run `command`, returning the process exit status.

    Args:
        command (Args): The top-level scope, usually a `Command` or `MultiCommand`.
        argv (Sequence[str] | None): Arguments without the program name.
            Defaults to `sys.argv[1:]`.
        env (Mapping[str, str] | None): Environment. Defaults to `os.environ`.
        program_name (str | None): Name used in help and error messages.
        settings (FlagtreeSettings | None): Completion protocol settings.

    Returns:
        int: 0 on success, on `--help` and for completion requests; 1 on error.
    """
    settings = settings or FlagtreeSettings()
    argv = list(sys.argv[1:] if argv is None else argv)
    env = os.environ if env is None else env
    program = program_name or settings.program or get_program_invocation()

    completion_index = get_completion_index(env, settings.completion_env_var)
    if completion_index is not None:
        context = complete(command, argv, completion_index, settings.completion_marker)
        lines = ["filenames" if context.path_completions else "no-filenames"]
        lines.extend(context.sorted_candidates())
        sys.stdout.write("\n".join(lines) + "\n")
        return 0

    try:
        command.parse_cmdline(argv)
    except HelpSignal:
        command.print_help(program)
        return 0
    except UsageError as error:
        return _report_error(error, program)

    try:
        if not hasattr(command, "run"):
            return 0
        command.run()
    except FlagtreeError as error:
        return _report_error(error, program)
    return 0


def bash_completion_script(
    program: str, env_var: str = DEFAULT_COMPLETION_ENV_VAR
) -> str:
    """Return a bash script registering completion for `program`."""
    function = "_flagtree_complete_" + re.sub(r"\W", "_", program)
    return f"""\
{function}() {{
    local have_type="" line
    COMPREPLY=()
    while IFS= read -r line; do
        if [[ -z $have_type ]]; then
            have_type=1
            if [[ $line == filenames ]]; then
                compopt -o filenames
            fi
        else
            COMPREPLY+=("$line")
        fi
    done < <({env_var}=$COMP_CWORD "${{COMP_WORDS[@]}}" 2>/dev/null)
}}
complete -F {function} {program}
"""
