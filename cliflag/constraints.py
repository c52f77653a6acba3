# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Constraint`, the composable set of rules a `FlagSpec` validates against.

Each member is one bit of the established flag protocol. Callers OR them together
to declare a flag, e.g. `Constraint.REQUIRED | Constraint.PATH_FILE | Constraint.MUST_EXIST`
or `Constraint.INT | Constraint.ALLOW_MANY | Constraint.MANY_SEPARATOR_COLON`.
Plain integer masks built from the same numeric values are accepted as well.

Members fall into four families:
- Presence: REQUIRED
- Type (exactly one per flag): STRING, PATH_FILE, BOOL, INT, FLOAT, ALPHANUMERIC,
  EMAIL, FQDN, PATH_DIR, PATH_REGULAR_FILE
- Type modifiers: MUST_EXIST (PATH_FILE), VALID_JSON (PATH_REGULAR_FILE),
  ALLOW_DOTS / ALLOW_UNDERSCORE / ALLOW_HYPHEN (ALPHANUMERIC)
- Multiplicity: ALLOW_MANY with MANY_SEPARATOR_COLON or MANY_SEPARATOR_SEMICOLON
  (INT, FLOAT, ALPHANUMERIC; comma when no separator is chosen)

`check_constraints()` rejects combinations that cannot be validated meaningfully,
so a bad declaration fails when the flag is built instead of when a user runs it.

Example:
    Constraint.parse("required|int|allow_many") → REQUIRED|INT|ALLOW_MANY
    Constraint.parse(["TypeAlphanumeric", "AllowHyphen"]) → ALPHANUMERIC|ALLOW_HYPHEN
"""
from __future__ import annotations

import re
from enum import IntFlag
from typing import Any, Iterable

from cliflag.exceptions import ConstraintError


class Constraint(IntFlag):
    """
    A single validation rule, or an OR-combination of rules.

    Members:
        REQUIRED: The flag must be given a value.
        STRING: Any string; no checks beyond presence.
        PATH_FILE: Path that must exist (any entry type).
        BOOL: Presence-only switch.
        INT: One or more digits.
        FLOAT: Digits, a decimal point, digits.
        ALPHANUMERIC: Letters and digits, optionally extended.
        MUST_EXIST: Existence marker for PATH_FILE.
        ALLOW_MANY: Value is a delimited list of INT/FLOAT/ALPHANUMERIC items.
        MANY_SEPARATOR_COLON: Use ':' between items.
        MANY_SEPARATOR_SEMICOLON: Use ';' between items.
        ALLOW_DOTS: Allow '.' in ALPHANUMERIC values.
        ALLOW_UNDERSCORE: Allow '_' in ALPHANUMERIC values.
        ALLOW_HYPHEN: Allow '-' in ALPHANUMERIC values.
        EMAIL: E-mail address, accepted without format checks.
        FQDN: Domain name, accepted without format checks.
        PATH_DIR: Path to an existing directory.
        PATH_REGULAR_FILE: Path to an existing regular file.
        VALID_JSON: PATH_REGULAR_FILE contents must parse as JSON.
    """

    REQUIRED = 1
    STRING = 8
    PATH_FILE = 16
    BOOL = 32
    INT = 64
    FLOAT = 128
    ALPHANUMERIC = 256
    MUST_EXIST = 512
    ALLOW_MANY = 1024
    MANY_SEPARATOR_COLON = 2048
    MANY_SEPARATOR_SEMICOLON = 4096
    ALLOW_DOTS = 8192
    ALLOW_UNDERSCORE = 16384
    ALLOW_HYPHEN = 32768
    EMAIL = 65536
    FQDN = 131072
    PATH_DIR = 262144
    PATH_REGULAR_FILE = 524288
    VALID_JSON = 1048576

    @classmethod
    def choices(cls) -> list[Constraint]:
        """Return a list of all single-bit constraints."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "many_separator_semi_colon": "many_separator_semicolon",
            "anum": "alphanumeric",
            "alnum": "alphanumeric",
            "dir": "path_dir",
        }
        return aliases.get(value, value)

    @classmethod
    def _from_name(cls, name: str) -> Constraint:
        normalized = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name.strip())
        normalized = normalized.replace("-", "_").replace(" ", "_").lower()
        if normalized.startswith("type_"):
            normalized = normalized[len("type_") :]
        normalized = cls._get_alias(normalized)
        try:
            return cls[normalized.upper()]
        except KeyError:
            valid = ", ".join(member.name.lower() for member in cls.choices())
            raise ValueError(
                f"Invalid {cls.__name__}: '{name}'. Must be one of: {valid}"
            ) from None

    @classmethod
    def parse(cls, value: Any) -> Constraint:
        """
        Coerce `value` into a `Constraint`.

        Accepts a `Constraint`, a plain integer mask, a member name, a
        `|`-separated string of names, or an iterable of any of these.

        Raises:
            ValueError: If a name is not a known constraint.
            TypeError: If the value cannot be interpreted at all.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise TypeError("Constraint cannot be built from a bool")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            result = cls(0)
            for part in value.split("|"):
                if part.strip():
                    result |= cls._from_name(part)
            return result
        if isinstance(value, Iterable):
            result = cls(0)
            for item in value:
                result |= cls.parse(item)
            return result
        raise TypeError(f"Cannot build a Constraint from {type(value).__name__}")

    def names(self) -> list[str]:
        """Return the member names set in this constraint, in bit order."""
        return [member.name for member in type(self) if member in self]  # type: ignore[misc]

    def __str__(self) -> str:
        return "|".join(self.names()) or "0"


TYPE_CONSTRAINTS = (
    Constraint.STRING
    | Constraint.PATH_FILE
    | Constraint.BOOL
    | Constraint.INT
    | Constraint.FLOAT
    | Constraint.ALPHANUMERIC
    | Constraint.EMAIL
    | Constraint.FQDN
    | Constraint.PATH_DIR
    | Constraint.PATH_REGULAR_FILE
)

VALUE_TYPES = (
    Constraint.STRING
    | Constraint.PATH_FILE
    | Constraint.PATH_REGULAR_FILE
    | Constraint.PATH_DIR
    | Constraint.INT
    | Constraint.FLOAT
    | Constraint.ALPHANUMERIC
)

MANY_TYPES = Constraint.INT | Constraint.FLOAT | Constraint.ALPHANUMERIC

ALPHANUMERIC_EXTENSIONS = (
    Constraint.ALLOW_DOTS | Constraint.ALLOW_UNDERSCORE | Constraint.ALLOW_HYPHEN
)

SEPARATORS = Constraint.MANY_SEPARATOR_COLON | Constraint.MANY_SEPARATOR_SEMICOLON

_ALL_BITS = sum(member.value for member in Constraint)

# Order in which type checks are evaluated.
_TYPE_PRECEDENCE = (
    Constraint.STRING,
    Constraint.PATH_FILE,
    Constraint.PATH_REGULAR_FILE,
    Constraint.PATH_DIR,
    Constraint.INT,
    Constraint.FLOAT,
    Constraint.ALPHANUMERIC,
    Constraint.EMAIL,
    Constraint.FQDN,
    Constraint.BOOL,
)


def flag_type(constraints: Constraint) -> Constraint | None:
    """Return the type constraint that governs validation, if any is set."""
    for member in _TYPE_PRECEDENCE:
        if constraints & member:
            return member
    return None


def is_require_value(constraints: Constraint) -> bool:
    """Return True when the declared type needs a value alongside the flag."""
    return bool(constraints & VALUE_TYPES)


def check_constraints(constraints: Constraint) -> Constraint:
    """
    Reject constraint sets that cannot be validated meaningfully.

    Args:
        constraints (Constraint): The combined constraint set of one flag.

    Returns:
        Constraint: The same constraint set, unchanged.

    Raises:
        ConstraintError: If the combination is illegal.
    """
    unknown = int(constraints) & ~_ALL_BITS
    if unknown:
        raise ConstraintError(f"Unknown constraint bits: {unknown:#x}")

    types = [member for member in _TYPE_PRECEDENCE if constraints & member]
    if not types:
        raise ConstraintError(
            f"No type constraint set in {constraints!s}; "
            f"choose one of: {TYPE_CONSTRAINTS!s}"
        )
    if len(types) > 1:
        raise ConstraintError(
            "Only one type constraint may be set, got: "
            + "|".join(str(member.name) for member in types)
        )

    if constraints & Constraint.MUST_EXIST and not constraints & Constraint.PATH_FILE:
        raise ConstraintError("MUST_EXIST requires PATH_FILE")
    if (
        constraints & Constraint.VALID_JSON
        and not constraints & Constraint.PATH_REGULAR_FILE
    ):
        raise ConstraintError("VALID_JSON requires PATH_REGULAR_FILE")
    if (
        constraints & ALPHANUMERIC_EXTENSIONS
        and not constraints & Constraint.ALPHANUMERIC
    ):
        raise ConstraintError(
            "ALLOW_DOTS, ALLOW_UNDERSCORE and ALLOW_HYPHEN require ALPHANUMERIC"
        )
    if constraints & Constraint.ALLOW_MANY and not constraints & MANY_TYPES:
        raise ConstraintError("ALLOW_MANY requires INT, FLOAT or ALPHANUMERIC")
    if constraints & SEPARATORS and not constraints & Constraint.ALLOW_MANY:
        raise ConstraintError("A many-value separator requires ALLOW_MANY")
    if constraints & SEPARATORS == SEPARATORS:
        raise ConstraintError(
            "MANY_SEPARATOR_COLON and MANY_SEPARATOR_SEMICOLON are exclusive"
        )
    return constraints
