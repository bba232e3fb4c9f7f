# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Flagtree CLI framework.

These exceptions separate mistakes made by the person typing a command line
from mistakes made by the developer building one.

All exceptions inherit from `FlagtreeError`, the base exception for the framework.

Exception Hierarchy:
- FlagtreeError
    ├── UsageError
    ├── FlagDefinitionError
    └── ConfigError

`UsageError` is the only error raised while parsing. It propagates to the
outermost caller, which is expected to print it and exit with a non-zero status
(see `flagtree.runner.run_command`).
"""


class FlagtreeError(Exception):
    """Base exception for the Flagtree framework."""


class UsageError(FlagtreeError):
    """Exception raised when the command line does not match what a scope expects."""


class FlagDefinitionError(FlagtreeError):
    """Exception raised when a flag or argument is registered with invalid metadata."""


class ConfigError(FlagtreeError):
    """Exception raised when a configuration file cannot be turned into a command tree."""
