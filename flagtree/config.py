# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Flagtree command trees.

A YAML or TOML file can name the program, tune the completion protocol and
declare sub-commands by dotted import path:

    program: deploy
    description: deploy services to the cluster
    categories:
      ops: Operations
    commands:
      - name: rollout
        command: deploy_tasks.Rollout
      - name: status
        command: deploy_tasks.Status
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable, Literal

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from flagtree.completion import COMPLETION_MARKER
from flagtree.exceptions import ConfigError
from flagtree.logger import logger
from flagtree.parser.command import Command
from flagtree.parser.flag import CATEGORY_HIDDEN

DEFAULT_COMPLETION_ENV_VAR = "FLAGTREE_GET_COMPLETIONS"


def import_command(dotted_path: str) -> Callable[[], Command]:
    """Dynamically imports a Command class or factory from a dotted path like 'my.module.Cmd'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid command path: '{dotted_path}'")
    try:
        module = importlib.import_module(module_path)
    except ImportError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        factory = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error
    if isinstance(factory, type) and not issubclass(factory, Command):
        raise ConfigError(f"'{dotted_path}' is not a Command subclass")
    if not callable(factory):
        raise ConfigError(f"'{dotted_path}' is not callable")
    return factory


class CommandEntry(BaseModel):
    """One sub-command declared in a configuration file."""

    name: str
    command: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value or value.startswith("-") or any(char.isspace() for char in value):
            raise ValueError(f"Invalid command name: {value!r}")
        return value


class FlagtreeSettings(BaseModel):
    """Flagtree program settings."""

    program: str | None = None
    description: str = ""
    completion_env_var: str = DEFAULT_COMPLETION_ENV_VAR
    completion_marker: str = COMPLETION_MARKER
    log_mode: Literal["cli", "json"] | None = None
    hidden_categories: list[str] = Field(default_factory=lambda: [CATEGORY_HIDDEN])
    categories: dict[str, str] = Field(default_factory=dict)
    commands: list[CommandEntry] = Field(default_factory=list)

    @field_validator("completion_env_var", "completion_marker")
    @classmethod
    def validate_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("completion_marker")
    @classmethod
    def validate_marker(cls, value: str) -> str:
        if value[0].isascii() and value[0].isalpha():
            raise ValueError("must not start with a letter")
        return value

    @model_validator(mode="after")
    def validate_unique_commands(self) -> FlagtreeSettings:
        names = [entry.name for entry in self.commands]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate command names: {', '.join(duplicates)}")
        return self

    def command_factories(self) -> dict[str, Callable[[], Command]]:
        """Import every declared command."""
        return {entry.name: import_command(entry.command) for entry in self.commands}


def loader(file_path: Path | str) -> FlagtreeSettings:
    """
    Load Flagtree settings from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        FlagtreeSettings: The validated settings.

    Raises:
        ConfigError: If the file is missing, has an unsupported format, or its
            content does not validate.
    """
    path = Path(file_path)
    if not path.is_file():
        raise ConfigError(f"No such config file: {file_path}")

    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config: Any = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise ConfigError(f"Could not parse {path}: {error}") from error

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a mapping.\n"
            "Example:\n"
            "program: 'my-cli'\n"
            "commands:\n"
            "  - name: 'build'\n"
            "    command: 'my_module.Build'"
        )

    try:
        settings = FlagtreeSettings.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid configuration in {path}:\n{error}") from error
    logger.debug("Loaded %d command(s) from %s", len(settings.commands), path)
    return settings
