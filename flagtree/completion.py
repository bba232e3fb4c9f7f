# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Shell completion state shared by every dispatcher during one parse.

A `CompletionContext` is created by the caller and passed through the whole
parse. When it is active, exactly one input token carries the private
`COMPLETION_MARKER` suffix. Dispatchers use `needs_completion()` to recognise
that token and hand its un-marked prefix to a completer, which adds candidate
strings to the context.

Contents:
- `CompletionContext`: The completion channel (mode flag + candidate set).
- `Completer`: Callable signature shared by flag and argument completers.
- `complete_path`: Filesystem completer based on `glob`.

Completers never raise. A failed lookup simply contributes no candidates.
"""
from __future__ import annotations

import glob
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable

from flagtree.logger import logger

COMPLETION_MARKER = "___COMPLETE___"


@dataclass
class CompletionContext:
    """
    Collects completion candidates for the token under the cursor.

    Attributes:
        active (bool): True when the current parse is a completion request.
        marker (str): Suffix identifying the token being completed.
        candidates (set[str]): Collected candidates; duplicates collapse.
        path_completions (bool): True once a filesystem completer ran, telling
            the shell to treat candidates as file names.
    """

    active: bool = False
    marker: str = COMPLETION_MARKER
    candidates: set[str] = field(default_factory=set)
    path_completions: bool = False

    @classmethod
    def for_completion(cls, marker: str = COMPLETION_MARKER) -> CompletionContext:
        """Return a context in completion mode."""
        return cls(active=True, marker=marker)

    def needs_completion(self, token: str) -> str | None:
        """
        Return the un-marked prefix if `token` is the completion target.

        Returns None when completion is inactive or the token is not marked.
        """
        if not self.active:
            return None
        index = token.find(self.marker)
        if index == -1:
            return None
        return token[:index]

    def strip_marker(self, token: str) -> str:
        """Return `token` without the completion marker."""
        prefix = self.needs_completion(token)
        return token if prefix is None else prefix

    def add(self, candidate: str) -> None:
        self.candidates.add(candidate)

    def add_matching(
        self, names: Iterable[str], prefix: str, template: str = "{}"
    ) -> None:
        """Add every name starting with `prefix`, formatted through `template`."""
        for name in names:
            if name.startswith(prefix):
                self.candidates.add(template.format(name))

    def sorted_candidates(self) -> list[str]:
        return sorted(self.candidates)


Completer = Callable[[CompletionContext, int, str], None]


def complete_path(context: CompletionContext, index: int, prefix: str) -> None:
    """
    Complete a filesystem path.

    Expands a leading `~` and adds every match of `prefix*`.
    """
    context.path_completions = True
    pattern = os.path.expanduser(prefix) + "*"
    try:
        matches = glob.glob(pattern)
    except OSError as error:
        logger.debug("Path completion for '%s' failed: %s", prefix, error)
        return
    logger.debug("Path completion for '%s' found %d match(es)", prefix, len(matches))
    for match in matches:
        context.add(match)
