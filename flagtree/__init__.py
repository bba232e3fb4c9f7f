"""
Flagtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .completion import CompletionContext
from .exceptions import FlagtreeError, UsageError
from .parser import (
    ARITY_ANY,
    Args,
    Command,
    Example,
    ExpectedArg,
    Flag,
    MultiCommand,
)
from .runner import run_command

logger = logging.getLogger("flagtree")


__all__ = [
    "ARITY_ANY",
    "Args",
    "Command",
    "CompletionContext",
    "Example",
    "ExpectedArg",
    "Flag",
    "FlagtreeError",
    "MultiCommand",
    "UsageError",
    "run_command",
]
