# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `FlagtreeCompleter`, a Prompt Toolkit completer backed by the same
completion protocol the shell integration uses.

For every keystroke the completer:
- splits the text before the cursor into tokens with `shlex`,
- adds an empty token when the cursor sits after whitespace,
- parses the tokens in completion mode on a fresh command tree,
- yields the collected candidates, inserting the longest common prefix when
  several candidates share one and quoting candidates that contain spaces.

Example:
    session = PromptSession(completer=FlagtreeCompleter(build_app))
"""
from __future__ import annotations

import os
import shlex
from typing import Callable, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from flagtree.completion import COMPLETION_MARKER
from flagtree.parser.args import Args
from flagtree.runner import complete


class FlagtreeCompleter(Completer):
    """
    Prompt Toolkit completer for a Flagtree command tree.

    Args:
        factory (Callable[[], Args]): Builds a fresh top-level scope. Scopes are
            consumed by parsing, so a new one is built for every completion.
        marker (str): Completion marker used while parsing.
    """

    def __init__(self, factory: Callable[[], Args], marker: str = COMPLETION_MARKER):
        self.factory = factory
        self.marker = marker

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        """
        Compute completions for the current user input.

        Yields:
            Completion: One or more completions matching the current stub text.
        """
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return

        cursor_at_end_of_token = not text or text.endswith((" ", "\t"))
        if cursor_at_end_of_token:
            tokens.append("")
        stub = tokens[-1]

        context = complete(self.factory(), tokens, len(tokens), self.marker)
        yield from self._yield_lcp_completions(context.sorted_candidates(), stub)

    def _ensure_quote(self, text: str) -> str:
        """
        Quote a suggestion containing whitespace so it survives tokenization.
        """
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(
        self, suggestions: list[str], stub: str
    ) -> Iterable[Completion]:
        """
        Yield completions for the current stub using longest-common-prefix logic.

        Behavior:
        - If only one match → yield it fully.
        - If multiple matches share a longer prefix → insert the prefix, but also
            display all matches in the menu.
        - If no shared prefix → list all matches individually.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
        elif len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
