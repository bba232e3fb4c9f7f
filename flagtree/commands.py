# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Built-in sub-commands of the `flagtree` program.

- `HashCommand` (`flagtree hash`): Print file digests.
- `CompletionCommand` (`flagtree completion`): Print the shell completion script.
"""
from __future__ import annotations

from rich.markup import escape

from flagtree.completion import CompletionContext
from flagtree.config import DEFAULT_COMPLETION_ENV_VAR
from flagtree.exceptions import FlagtreeError, UsageError
from flagtree.hash_type import HashType, hash_file
from flagtree.logger import logger
from flagtree.parser.command import Command, Example
from flagtree.parser.flag import Flag
from flagtree.runner import bash_completion_script

SHELLS = ("bash",)


class HashCommand(Command):
    """Print the digest of one or more files."""

    def __init__(self) -> None:
        super().__init__()
        self.hash_type: HashType = HashType.SHA256
        self.paths: list[str] = []
        self.add_flag(Flag.hash_type_flag("type", self._set_hash_type, short_name="t"))
        self.expect_path_args("paths", dest="paths")

    def _set_hash_type(self, hash_type: HashType) -> None:
        self.hash_type = hash_type

    def description(self) -> str:
        return "print the cryptographic hash of files"

    def examples(self) -> list[Example]:
        return [
            Example(
                description="To print the SHA-256 hash of a file:",
                command="flagtree hash ./setup.py",
            ),
            Example(
                description="To print the MD5 hashes of several files:",
                command="flagtree hash -t md5 a.txt b.txt",
            ),
        ]

    def run(self) -> None:
        if not self.paths:
            raise UsageError("no paths given")
        for path in self.paths:
            logger.debug("Hashing '%s' with %s", path, self.hash_type)
            try:
                digest = hash_file(path, self.hash_type)
            except OSError as error:
                raise FlagtreeError(
                    f"cannot read '{path}': {error.strerror}"
                ) from error
            self.console.print(f"{digest}  {escape(path)}", soft_wrap=True)


class CompletionCommand(Command):
    """Print the shell script that enables completion for a program."""

    def __init__(
        self, program: str = "flagtree", env_var: str = DEFAULT_COMPLETION_ENV_VAR
    ) -> None:
        super().__init__()
        self.program = program
        self.env_var = env_var
        self.shell = "bash"
        self.expect_arg(
            "shell", dest="shell", optional=True, completer=self._complete_shell
        )

    def _complete_shell(
        self, context: CompletionContext, index: int, prefix: str
    ) -> None:
        context.add_matching(SHELLS, prefix)

    def description(self) -> str:
        return "print the shell completion script"

    def examples(self) -> list[Example]:
        return [
            Example(
                description="To enable completion in the current bash session:",
                command='eval "$(flagtree completion bash)"',
            ),
        ]

    def run(self) -> None:
        if self.shell not in SHELLS:
            raise UsageError(f"unsupported shell '{self.shell}'")
        self.console.print(
            bash_completion_script(self.program, self.env_var),
            markup=False,
            highlight=False,
            soft_wrap=True,
            end="",
        )
