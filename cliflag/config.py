# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Loads flag and argument declarations from YAML or TOML files.

Example (YAML):
    flags:
      - name: config
        alias: c
        help_value: FILE
        description: Settings file
        constraints: [required, path_regular_file, valid_json]
      - name: ports
        help_value: PORTS
        constraints: "int|allow_many|many_separator_colon"
        on_match: my_package.handlers.on_ports
    arguments:
      - name: target
        help_value: TARGET
        constraints: required|alphanumeric|allow_dots
"""
from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

import toml
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from cliflag.constraints import Constraint
from cliflag.exceptions import ConfigError, FlagSpecError, FlagValidationError
from cliflag.flag_spec import FlagSpec
from cliflag.logger import logger


def import_callback(dotted_path: str) -> Callable[..., Any]:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid callback path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(f"Could not import '{dotted_path}': {error}") from error
    try:
        callback = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigError(f"Module '{module_path}' has no attribute '{attr}'") from error
    if not callable(callback):
        raise ConfigError(f"Callback '{dotted_path}' is not callable")
    return callback


class RawFlag(BaseModel):
    """Raw flag model for cliflag configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str
    alias: str = ""
    help_value: str = ""
    description: str = ""
    constraints: Any = Constraint.STRING
    on_match: str | None = None

    @field_validator("constraints", mode="before")
    @classmethod
    def validate_constraints(cls, value: Any) -> Constraint:
        try:
            return Constraint.parse(value)
        except TypeError as error:
            raise ValueError(str(error)) from error

    def to_flag_spec(self) -> FlagSpec:
        return FlagSpec(
            name=self.name,
            alias=self.alias,
            help_value=self.help_value,
            description=self.description,
            constraints=self.constraints,
            on_match=import_callback(self.on_match) if self.on_match else None,
        )


def convert_flags(raw_flags: list[dict[str, Any]], section: str) -> list[FlagSpec]:
    if not isinstance(raw_flags, list):
        raise ConfigError(f"'{section}' must be a list of flag definitions")
    specs = []
    for index, entry in enumerate(raw_flags):
        if not isinstance(entry, dict):
            raise ConfigError(f"{section}[{index}] must be a mapping")
        try:
            specs.append(RawFlag(**entry).to_flag_spec())
        except ValidationError as error:
            raise ConfigError(f"Invalid entry {section}[{index}]: {error}") from error
        except FlagSpecError as error:
            raise ConfigError(f"Invalid entry {section}[{index}]: {error}") from error
    return specs


@dataclass
class FlagConfig:
    """Flag and positional argument declarations loaded from a config file."""

    flags: list[FlagSpec] = field(default_factory=list)
    arguments: list[FlagSpec] = field(default_factory=list)

    def __post_init__(self) -> None:
        names: set[str] = set()
        aliases: set[str] = set()
        for spec in [*self.flags, *self.arguments]:
            if spec.name in names:
                raise ConfigError(f"Duplicate flag name: '{spec.name}'")
            names.add(spec.name)
            if spec.alias:
                if spec.alias in aliases:
                    raise ConfigError(f"Duplicate flag alias: '{spec.alias}'")
                aliases.add(spec.alias)

    def get(self, name: str) -> FlagSpec | None:
        """Return the flag or argument declared under `name`, if any."""
        for spec in [*self.flags, *self.arguments]:
            if spec.name == name:
                return spec
        return None

    def get_by_alias(self, alias: str) -> FlagSpec | None:
        """Return the flag declared with short form `alias`, if any."""
        for spec in self.flags:
            if spec.alias and spec.alias == alias:
                return spec
        return None

    def validate_values(
        self,
        long_values: Mapping[str, str] | None = None,
        short_values: Mapping[str, str] | None = None,
        argument_values: Mapping[str, str] | None = None,
    ) -> list[FlagValidationError]:
        """
        Validate every declaration and collect one error per failing flag.

        Args:
            long_values (Mapping[str, str] | None): Values keyed by flag name.
            short_values (Mapping[str, str] | None): Values keyed by flag alias.
            argument_values (Mapping[str, str] | None): Positional values keyed
                by argument name.

        Returns:
            list[FlagValidationError]: Empty when everything is valid.
        """
        long_values = long_values or {}
        short_values = short_values or {}
        argument_values = argument_values or {}
        errors = []
        for spec in self.arguments:
            error = spec.validate_value(True, argument_values.get(spec.name, ""), "")
            if error is not None:
                errors.append(error)
        for spec in self.flags:
            short_value = short_values.get(spec.alias, "") if spec.alias else ""
            error = spec.validate_value(
                False, long_values.get(spec.name, ""), short_value
            )
            if error is not None:
                errors.append(error)
        return errors


def load_flag_specs(file_path: Path | str) -> FlagConfig:
    """
    Load flag declarations from a YAML or TOML file.

    The file should contain a mapping with a `flags` list and, optionally,
    an `arguments` list. Each entry needs at least a `name`.

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        FlagConfig: The declared flags and positional arguments.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file format is unsupported or its content is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a mapping with a list of flags.\n"
            "Example:\n"
            "flags:\n"
            "  - name: 'config'\n"
            "    alias: 'c'\n"
            "    constraints: 'required|path_file'"
        )

    config = FlagConfig(
        flags=convert_flags(raw_config.get("flags", []), "flags"),
        arguments=convert_flags(raw_config.get("arguments", []), "arguments"),
    )
    logger.debug(
        "Loaded %d flags and %d arguments from %s",
        len(config.flags),
        len(config.arguments),
        path,
    )
    return config
