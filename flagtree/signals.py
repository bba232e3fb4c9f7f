# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Flagtree CLI framework.

Signals inherit from `FlowSignal`, which is a subclass of `BaseException`
so they bypass `except Exception` blocks in command code.

Signals:
- HelpSignal: `--help` was given; stop parsing so the runner can print help.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Flagtree.

    These are not errors. They end a parse early once the user got what they
    asked for.
    """


class HelpSignal(FlowSignal):
    """Raised by `--help` to stop parsing; `run_command()` prints the help."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)
