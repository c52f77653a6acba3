# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds the regular expressions used to validate INT, FLOAT and ALPHANUMERIC values.

A value pattern is built from two pieces:
- an instance pattern matching one item of the declared type, and
- when ALLOW_MANY is set, a repetition of `separator + instance`.

Both ends are anchored, so the whole value has to match. The builder only
looks at the constraint set, which keeps it testable without a `FlagSpec`.

Functions:
- build_instance_pattern: Pattern source for a single item.
- get_separator: Delimiter between items of a many-value flag.
- build_value_pattern: Compiled, anchored matcher for a full value.
"""
from __future__ import annotations

import functools
import re

from cliflag.constraints import Constraint
from cliflag.exceptions import PatternBuildError
from cliflag.logger import logger

INT_PATTERN = "[0-9]+"
FLOAT_PATTERN = r"[0-9]{1,16}\.[0-9]{1,16}"
ALPHANUMERIC_CLASS = "0-9a-zA-Z"

_ALPHANUMERIC_EXTRAS = (
    (Constraint.ALLOW_UNDERSCORE, "_"),
    (Constraint.ALLOW_DOTS, r"\."),
    (Constraint.ALLOW_HYPHEN, r"\-"),
)


def build_instance_pattern(constraints: Constraint) -> str:
    """
    Return the pattern source for one item of the declared type.

    INT wins over FLOAT, and FLOAT over ALPHANUMERIC, when more than one is set.

    Raises:
        PatternBuildError: If none of INT, FLOAT or ALPHANUMERIC is set.
    """
    if constraints & Constraint.INT:
        return INT_PATTERN
    if constraints & Constraint.FLOAT:
        return FLOAT_PATTERN
    if constraints & Constraint.ALPHANUMERIC:
        extras = "".join(
            chars for constraint, chars in _ALPHANUMERIC_EXTRAS if constraints & constraint
        )
        return f"[{ALPHANUMERIC_CLASS}{extras}]+"
    raise PatternBuildError(f"No value pattern for constraints {constraints!s}")


def get_separator(constraints: Constraint) -> str:
    """Return the delimiter between items of a many-value flag."""
    if constraints & Constraint.MANY_SEPARATOR_COLON:
        return ":"
    if constraints & Constraint.MANY_SEPARATOR_SEMICOLON:
        return ";"
    return ","


@functools.lru_cache(maxsize=None)
def build_value_pattern(constraints: Constraint) -> re.Pattern[str]:
    """
    Compile the anchored pattern a full value has to match.

    Args:
        constraints (Constraint): Constraint set of the flag being validated.

    Returns:
        re.Pattern[str]: Use `.match()`; the pattern is anchored at both ends.

    Raises:
        PatternBuildError: If the pattern cannot be built or compiled.
    """
    instance = build_instance_pattern(constraints)
    if constraints & Constraint.ALLOW_MANY:
        separator = re.escape(get_separator(constraints))
        source = rf"\A{instance}(?:{separator}{instance})*\Z"
    else:
        source = rf"\A{instance}\Z"
    try:
        pattern = re.compile(source)
    except re.error as error:
        raise PatternBuildError(f"Invalid value pattern {source!r}: {error}") from error
    logger.debug("Built value pattern %r for %s", source, constraints)
    return pattern
