# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rich-based help listing for a set of `FlagSpec` declarations.

`FlagSpec.get_help_line()` produces the tab-separated line used by plain
text listings; `render_help()` prints the same columns through a rich
`Console`, grouping positional arguments before flags.
"""
from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.markup import escape

from cliflag.console import console as default_console
from cliflag.flag_spec import FlagSpec


def get_flag_text(spec: FlagSpec) -> str:
    """Return the flag column, e.g. `-c, --config FILE`."""
    text = f"--{spec.name}"
    if spec.alias:
        text = f"-{spec.alias}, {text}"
    if spec.help_value:
        text = f"{text} {spec.help_value}"
    return text


def get_argument_text(spec: FlagSpec) -> str:
    """Return the positional column: the placeholder, falling back to the name."""
    return spec.help_value or spec.name


def _print_row(console: Console, column: str, description: str) -> None:
    if description and len(column) > 30:
        description = f"\n{'':<33}{description}"
    console.print(escape(f"  {column:<30} {description}"))


def render_help(
    flags: Iterable[FlagSpec],
    arguments: Iterable[FlagSpec] = (),
    console: Console | None = None,
) -> None:
    """
    Print the help listing for the given declarations.

    Args:
        flags (Iterable[FlagSpec]): Named flags, listed under "flags:".
        arguments (Iterable[FlagSpec]): Positional arguments, listed first.
        console (Console | None): Target console; the shared console by default.
    """
    console = console or default_console
    arguments = list(arguments)
    flags = list(flags)

    if arguments:
        console.print("[bold]arguments:[/bold]")
        for spec in arguments:
            _print_row(console, get_argument_text(spec), spec.description)
    if flags:
        console.print("[bold]flags:[/bold]")
        for spec in flags:
            _print_row(console, get_flag_text(spec), spec.description)
