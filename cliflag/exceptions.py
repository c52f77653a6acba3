# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by cliflag.

Declaration problems (an illegal constraint combination, a broken config file)
are raised as soon as they are detected. Value problems are different: a
`FlagSpec` hands a `FlagValidationError` back to its caller so the caller can
decide whether to abort or to collect errors across several flags.

All exceptions inherit from `CliFlagError`, the base exception for the package.

Exception Hierarchy:
- CliFlagError
    ├── FlagSpecError
    │   └── ConstraintError
    ├── PatternBuildError
    ├── ConfigError
    └── FlagValidationError
"""
from __future__ import annotations

from enum import Enum


class ValidationErrorKind(Enum):
    """Category of a rejected flag value."""

    CONFLICTING_FORMS = "conflicting_forms"
    MISSING_REQUIRED = "missing_required"
    PATH_NOT_FOUND = "path_not_found"
    NOT_A_REGULAR_FILE = "not_a_regular_file"
    NOT_A_DIRECTORY = "not_a_directory"
    FILE_UNREADABLE = "file_unreadable"
    INVALID_JSON = "invalid_json"
    PATTERN_MISMATCH = "pattern_mismatch"
    INTERNAL_PATTERN_ERROR = "internal_pattern_error"

    def __str__(self) -> str:
        return self.value


class CliFlagError(Exception):
    """Base exception for cliflag."""


class FlagSpecError(CliFlagError):
    """Exception raised when a flag declaration itself is invalid."""


class ConstraintError(FlagSpecError):
    """Exception raised when a flag is declared with an illegal constraint set."""


class PatternBuildError(CliFlagError):
    """Exception raised when no value pattern can be built for a constraint set."""


class ConfigError(CliFlagError):
    """Exception raised when a flag declaration file cannot be used."""


class FlagValidationError(CliFlagError):
    """
    A value rejected by a `FlagSpec`.

    Attributes:
        kind (ValidationErrorKind): Which rule the value violated.
        flag (str): Name of the flag that rejected the value.
        value (str | None): The offending value, if one was supplied.
    """

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        *,
        flag: str,
        value: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.flag = flag
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlagValidationError):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.message == other.message
            and self.flag == other.flag
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.message, self.flag, self.value))

    def __repr__(self) -> str:
        return (
            f"FlagValidationError(kind={self.kind.name}, flag={self.flag!r}, "
            f"message={self.message!r})"
        )
