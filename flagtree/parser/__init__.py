"""
Flagtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .args import Args
from .command import Command, Example, MultiCommand
from .expected_arg import ExpectedArg
from .flag import ARITY_ANY, CATEGORY_DEFAULT, CATEGORY_HELP, CATEGORY_HIDDEN, Flag
from .tokenizer import Token, expand_tokens

__all__ = [
    "ARITY_ANY",
    "Args",
    "CATEGORY_DEFAULT",
    "CATEGORY_HELP",
    "CATEGORY_HIDDEN",
    "Command",
    "Example",
    "ExpectedArg",
    "Flag",
    "MultiCommand",
    "Token",
    "expand_tokens",
]
