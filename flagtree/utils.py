# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py

Logging and process helpers for Flagtree programs.

`setup_logging()` may be called repeatedly: global flags such as `--verbose`
and `--log-mode` reconfigure log output while the command line is still being
parsed, so the parser's own debug traces reach the chosen handler. Only
handlers installed by a previous call are replaced.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pythonjsonlogger.json
from rich.logging import RichHandler

from flagtree.console import error_console

LOG_MODES = ("cli", "json")
HANDLER_PREFIX = "flagtree."
CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def get_program_invocation() -> str:
    """Return the program name to show in usage hints."""
    script = sys.argv[0] if sys.argv else ""
    if os.path.basename(script) == "__main__.py":
        return f"python -m {os.path.basename(os.path.dirname(script))}"
    return os.path.basename(script) or "flagtree"


def running_in_container() -> bool:
    if os.path.exists("/.dockerenv"):
        return True
    try:
        content = Path("/proc/1/cgroup").read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in content for marker in CONTAINER_MARKERS)


def resolve_log_mode(mode: str | None = None) -> str:
    """
    Pick the log mode: `mode`, else `FLAGTREE_LOG_MODE`, else "json" inside a
    container and "cli" elsewhere.

    Raises:
        ValueError: If the resulting mode is not one of `LOG_MODES`.
    """
    if not mode:
        mode = os.getenv("FLAGTREE_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")
    return mode


def _remove_flagtree_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if (handler.get_name() or "").startswith(HANDLER_PREFIX):
            root.removeHandler(handler)
            handler.close()


def setup_logging(
    mode: str | None = None,
    verbose: bool = False,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
) -> None:
    """
    Configure (or reconfigure) log output for a Flagtree program.

    Args:
        mode (str | None): "cli" for Rich logs on stderr, "json" for JSON lines
            on stderr. Resolved with `resolve_log_mode()`.
        verbose (bool): Show debug messages on the console instead of warnings
            and errors only.
        log_filename (str | None): Also log everything at debug level to this file.
        json_log_to_file (bool): Format file logs as JSON instead of plain text.

    Raises:
        ValueError: If an invalid logging `mode` is passed.
    """
    mode = resolve_log_mode(mode)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    _remove_flagtree_handlers(root)

    if mode == "cli":
        console_handler: logging.Handler = RichHandler(
            console=error_console,
            rich_tracebacks=True,
            show_time=verbose,
            show_path=False,
            markup=False,
            log_time_format="[%H:%M:%S]",
        )
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_FORMAT))
    console_handler.set_name(f"{HANDLER_PREFIX}console")
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.set_name(f"{HANDLER_PREFIX}file")
        file_handler.setLevel(logging.DEBUG)
        if json_log_to_file:
            file_handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_FORMAT))
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        root.addHandler(file_handler)

    logging.getLogger("flagtree").debug(
        "Logging configured: mode=%s verbose=%s", mode, verbose
    )
