"""
Flagtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from rich.markup import escape

from flagtree.app import build_root
from flagtree.config import FlagtreeSettings, loader
from flagtree.console import error_console
from flagtree.exceptions import ConfigError
from flagtree.runner import run_command


def find_flagtree_config() -> Path | None:
    candidates = [
        Path.cwd() / "flagtree.yaml",
        Path.cwd() / "flagtree.toml",
        Path.cwd() / ".flagtree.yaml",
        Path.cwd() / ".flagtree.toml",
        Path(os.environ.get("FLAGTREE_CONFIG", "flagtree.yaml")),
        Path.home() / ".config" / "flagtree" / "flagtree.yaml",
        Path.home() / ".config" / "flagtree" / "flagtree.toml",
        Path.home() / ".flagtree.yaml",
        Path.home() / ".flagtree.toml",
    ]
    return next((p for p in candidates if p.exists()), None)


def bootstrap() -> Path | None:
    config_path = find_flagtree_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def main(
    argv: Sequence[str] | None = None, env: Mapping[str, str] | None = None
) -> int:
    config_path = bootstrap()
    try:
        settings = loader(config_path) if config_path else FlagtreeSettings()
        if settings.program is None:
            settings.program = "flagtree"
        root = build_root(settings)
    except ConfigError as error:
        error_console.print(f"[bold red]error:[/bold red] {escape(str(error))}")
        return 1

    root.configure_logging()

    return run_command(
        root, argv, env=env, program_name=settings.program, settings=settings
    )


if __name__ == "__main__":
    sys.exit(main())
