# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `FlagSpec` dataclass: one declared command-line flag or positional
argument and the rules its value has to satisfy.

A `FlagSpec` is built once from a name, an optional short alias, a help
placeholder, a description and a `Constraint` set. The surrounding parser
resolves the raw strings given through `--name` and `-alias` and asks the
spec whether they are acceptable. The spec never looks at other flags or at
parser state, and it never calls its `on_match` callback; that belongs to
whatever dispatches commands.

Validation order (the first violated rule is reported):
1. `--name` and `-alias` both given
2. a required, value-bearing flag is missing
3. STRING flags: accepted
4. optional flags without a value: accepted
5. type checks: PATH_FILE, PATH_REGULAR_FILE (+ VALID_JSON), PATH_DIR,
   INT / FLOAT / ALPHANUMERIC patterns; EMAIL, FQDN and BOOL are accepted as-is

Example:
    spec = FlagSpec(
        "ports", "p", "PORTS", "Ports to open",
        Constraint.REQUIRED | Constraint.INT | Constraint.ALLOW_MANY,
    )
    spec.validate_value(False, "80,443", "")  # None
    spec.validate_value(False, "80,", "")     # FlagValidationError(...)
"""
from __future__ import annotations

import json
import os
import stat
from dataclasses import dataclass, field
from typing import Any, Callable

from cliflag.constraints import (
    Constraint,
    check_constraints,
    flag_type,
    is_require_value,
)
from cliflag.exceptions import (
    FlagSpecError,
    FlagValidationError,
    PatternBuildError,
    ValidationErrorKind,
)
from cliflag.logger import logger
from cliflag.patterns import build_value_pattern


def _reject_constant(constant: str) -> Any:
    raise ValueError(f"{constant} is not valid JSON")


def _stat(path: str) -> os.stat_result | None:
    """Return the stat result for `path`, or None when nothing is there."""
    try:
        return os.stat(path)
    except (FileNotFoundError, NotADirectoryError, ValueError):
        return None


@dataclass(frozen=True)
class FlagSpec:
    """
    Represents a declared command-line flag.

    Attributes:
        name (str): Long-form identifier, used as `--name`.
        alias (str): Short-form identifier, used as `-alias`. Empty when there is none.
        help_value (str): Placeholder shown in help; names positional arguments in errors.
        description (str): Help text for the flag.
        constraints (Constraint): Rules the value must satisfy. Integers, names and
            iterables accepted by `Constraint.parse` are coerced on construction.
        on_match (Callable | None): Callback for the command dispatcher. Never
            invoked during validation and ignored by equality.
    """

    name: str
    alias: str = ""
    help_value: str = ""
    description: str = ""
    constraints: Constraint = Constraint.STRING
    on_match: Callable[..., Any] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise FlagSpecError("Flag name must be a non-empty string")
        if not isinstance(self.alias, str):
            raise FlagSpecError(f"Alias of flag '{self.name}' must be a string")
        if self.on_match is not None and not callable(self.on_match):
            raise FlagSpecError(f"on_match of flag '{self.name}' must be callable")
        try:
            constraints = check_constraints(Constraint.parse(self.constraints))
        except (TypeError, ValueError) as error:
            raise FlagSpecError(
                f"Invalid constraints for flag '{self.name}': {error}"
            ) from error
        except FlagSpecError as error:
            logger.debug("Rejected declaration of flag '%s': %s", self.name, error)
            raise
        object.__setattr__(self, "constraints", constraints)

    @property
    def type_constraint(self) -> Constraint:
        """The type constraint of this flag."""
        governing = flag_type(self.constraints)
        assert governing is not None
        return governing

    def get_help_line(self) -> str:
        """Return the line shown for this flag in a fixed-width help listing."""
        line = " "
        if self.alias == "":
            line += " \t"
        else:
            line += f" -{self.alias},\t"
        line += f" --{self.name} {self.help_value} \t{self.description}\n"
        return line

    def is_require_value(self) -> bool:
        """Return True when the flag needs a value (every type except BOOL, EMAIL, FQDN)."""
        return is_require_value(self.constraints)

    def validate_value(
        self, is_arg: bool, long_value: str = "", short_value: str = ""
    ) -> FlagValidationError | None:
        """
        Check the raw values given through `--name` and `-alias`.

        Args:
            is_arg (bool): True when validating a positional argument; changes
                only how the flag is named in error messages.
            long_value (str): Value given through the long form, "" if absent.
            short_value (str): Value given through the short form, "" if absent.

        Returns:
            FlagValidationError | None: The first violated rule, or None when
            the value is acceptable. The error is returned, not raised.
        """
        if long_value and short_value:
            return self._reject(
                ValidationErrorKind.CONFLICTING_FORMS,
                f"Both -{self.alias} and --{self.name} passed",
            )

        category = "Argument" if is_arg else "Flag"
        label = self.help_value if is_arg else self.name
        required = bool(self.constraints & Constraint.REQUIRED)

        if required and not long_value and not short_value and self.is_require_value():
            return self._reject(
                ValidationErrorKind.MISSING_REQUIRED, f"{category} {label} is missing"
            )

        governing = self.type_constraint
        if governing is Constraint.STRING:
            return None

        value = long_value or short_value
        if not required and not value:
            return None

        if governing is Constraint.PATH_FILE:
            return self._check_path_file(value, label)
        if governing is Constraint.PATH_REGULAR_FILE:
            return self._check_regular_file(value, label)
        if governing is Constraint.PATH_DIR:
            return self._check_directory(value, label)
        if governing in (Constraint.INT, Constraint.FLOAT, Constraint.ALPHANUMERIC):
            return self._check_pattern(value, category, label)
        # EMAIL, FQDN and BOOL carry no format checks.
        return None

    def ensure_valid(
        self, is_arg: bool, long_value: str = "", short_value: str = ""
    ) -> None:
        """Like `validate_value`, but raise the `FlagValidationError` instead of returning it."""
        error = self.validate_value(is_arg, long_value, short_value)
        if error is not None:
            raise error

    def _reject(
        self, kind: ValidationErrorKind, message: str, value: str | None = None
    ) -> FlagValidationError:
        logger.debug("Flag '%s' rejected value %r: %s", self.name, value, message)
        return FlagValidationError(kind, message, flag=self.name, value=value)

    def _unreachable(self, value: str, label: str) -> FlagValidationError:
        return self._reject(
            ValidationErrorKind.FILE_UNREADABLE,
            f"Path {value} from {label} cannot be accessed",
            value,
        )

    def _check_path_file(self, value: str, label: str) -> FlagValidationError | None:
        try:
            if _stat(value) is None:
                return self._reject(
                    ValidationErrorKind.PATH_NOT_FOUND,
                    f"File {value} from {label} does not exist",
                    value,
                )
        except OSError:
            return self._unreachable(value, label)
        return None

    def _check_regular_file(self, value: str, label: str) -> FlagValidationError | None:
        try:
            info = _stat(value)
        except OSError:
            return self._unreachable(value, label)
        if info is None:
            return self._reject(
                ValidationErrorKind.PATH_NOT_FOUND,
                f"File {value} from {label} does not exist",
                value,
            )
        if not stat.S_ISREG(info.st_mode):
            return self._reject(
                ValidationErrorKind.NOT_A_REGULAR_FILE,
                f"Path {value} from {label} is not a regular file",
                value,
            )
        if self.constraints & Constraint.VALID_JSON:
            return self._check_json(value, label)
        return None

    def _check_json(self, value: str, label: str) -> FlagValidationError | None:
        try:
            with open(value, "rb") as json_file:
                data = json_file.read()
        except OSError:
            return self._reject(
                ValidationErrorKind.FILE_UNREADABLE,
                f"{value} {label} cannot be opened",
                value,
            )
        try:
            json.loads(
                data.decode("utf-8"),
                parse_int=str,
                parse_float=str,
                parse_constant=_reject_constant,
            )
        except (ValueError, RecursionError):
            return self._reject(
                ValidationErrorKind.INVALID_JSON,
                f"{value} {label} is not a valid JSON",
                value,
            )
        return None

    def _check_directory(self, value: str, label: str) -> FlagValidationError | None:
        try:
            info = _stat(value)
        except OSError:
            return self._unreachable(value, label)
        if info is None:
            return self._reject(
                ValidationErrorKind.PATH_NOT_FOUND,
                f"Directory {value} from {label} does not exist",
                value,
            )
        if not stat.S_ISDIR(info.st_mode):
            return self._reject(
                ValidationErrorKind.NOT_A_DIRECTORY,
                f"Path {value} from {label} is not a directory",
                value,
            )
        return None

    def _check_pattern(
        self, value: str, category: str, label: str
    ) -> FlagValidationError | None:
        message = f"{category} {label} has invalid value"
        try:
            pattern = build_value_pattern(self.constraints)
        except PatternBuildError:
            return self._reject(
                ValidationErrorKind.INTERNAL_PATTERN_ERROR, message, value
            )
        if pattern.match(value) is None:
            return self._reject(ValidationErrorKind.PATTERN_MISMATCH, message, value)
        return None
