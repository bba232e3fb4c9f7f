# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token expansion for the Flagtree parser.

`expand_tokens()` turns the raw argument vector into the token stream the
parse loop consumes:

- Compound short flags are split: `-qlf` -> `-q -l -f`, `-j3` -> `-j 3`.
- The first literal `--` is dropped and every later token is marked literal,
  which disables flag recognition for it.
- When completion is requested, the completion marker is appended to the
  requested token before it is split, so a cluster typed up to the cursor
  (`-qj<M>`) expands to `-q -j <M>` and the flags before the cursor are still
  dispatched.

The function is pure: the input sequence is never modified.
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from flagtree.completion import COMPLETION_MARKER


class Token(NamedTuple):
    """One token of the expanded stream."""

    text: str
    literal: bool = False


def _is_short_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


def split_short_flags(text: str) -> list[str]:
    """
    Split a compound short-flag cluster into separate tokens.

    Tokens that are not clusters (`""`, `-`, `-x`, `--long`, `-1`) are
    returned unchanged as a single-item list.
    """
    if len(text) <= 2 or text[0] != "-" or not _is_short_letter(text[1]):
        return [text]
    pieces = [text[:2]]
    for offset in range(2, len(text)):
        char = text[offset]
        if _is_short_letter(char):
            pieces.append(f"-{char}")
        else:
            pieces.append(text[offset:])
            break
    return pieces


def expand_tokens(
    tokens: Sequence[str],
    completion_index: int | None = None,
    marker: str = COMPLETION_MARKER,
) -> list[Token]:
    """
    Expand a raw argument vector.

    Args:
        tokens (Sequence[str]): Arguments without the program name.
        completion_index (int | None): 1-based index of the token being completed.
        marker (str): Completion marker appended to that token.

    Returns:
        list[Token]: The expanded stream.

    Raises:
        ValueError: If `completion_index` does not point at a token.
    """
    if completion_index is not None and not 1 <= completion_index <= len(tokens):
        raise ValueError(
            f"Completion index {completion_index} is out of range for "
            f"{len(tokens)} argument(s)"
        )

    expanded: list[Token] = []
    literal = False
    for position, text in enumerate(tokens, start=1):
        if position == completion_index:
            text += marker
        if literal:
            expanded.append(Token(text, literal=True))
            continue
        if text == "--":
            literal = True
            continue
        expanded.extend(Token(piece) for piece in split_short_flags(text))
    return expanded
