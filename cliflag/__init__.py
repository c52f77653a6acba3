"""
Cliflag

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .constraints import Constraint, check_constraints, is_require_value
from .exceptions import (
    CliFlagError,
    ConfigError,
    ConstraintError,
    FlagSpecError,
    FlagValidationError,
    PatternBuildError,
    ValidationErrorKind,
)
from .flag_spec import FlagSpec
from .logger import logger
from .patterns import build_value_pattern

__version__ = "0.1.0"

__all__ = [
    "Constraint",
    "FlagSpec",
    "FlagValidationError",
    "ValidationErrorKind",
    "CliFlagError",
    "ConfigError",
    "ConstraintError",
    "FlagSpecError",
    "PatternBuildError",
    "build_value_pattern",
    "check_constraints",
    "is_require_value",
    "logger",
]
