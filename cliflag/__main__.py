"""
Cliflag

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging
import os
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Callable, Sequence

from rich.markup import escape

from cliflag.config import FlagConfig, load_flag_specs
from cliflag.console import console, error_console
from cliflag.exceptions import ConfigError
from cliflag.flag_spec import FlagSpec
from cliflag.help import render_help
from cliflag.logger import logger
from cliflag.utils import setup_logging, split_assignment


def find_cliflag_config() -> Path | None:
    candidates = [
        Path.cwd() / "cliflag.yaml",
        Path.cwd() / "cliflag.toml",
        Path.cwd() / ".cliflag.yaml",
        Path.cwd() / ".cliflag.toml",
    ]
    if os.environ.get("CLIFLAG_CONFIG"):
        candidates.append(Path(os.environ["CLIFLAG_CONFIG"]))
    return next((p for p in candidates if p.exists()), None)


def get_parser() -> ArgumentParser:
    root_parser = ArgumentParser(
        prog="cliflag",
        description="Validate command-line values against declared flags.",
        epilog="Declarations are read from cliflag.yaml or cliflag.toml by default.",
    )
    root_parser.add_argument(
        "-c", "--config", type=Path, help="Path to a YAML or TOML flag declaration file"
    )
    root_parser.add_argument(
        "--log-mode", choices=["cli", "json"], help="Console logging format"
    )
    root_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = root_parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Validate values against the declarations",
        description="Validate values and report every flag that rejects its value.",
    )
    check_parser.add_argument(
        "--set",
        dest="long_values",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Value passed through --NAME",
    )
    check_parser.add_argument(
        "--short",
        dest="short_values",
        action="append",
        default=[],
        metavar="ALIAS=VALUE",
        help="Value passed through -ALIAS",
    )
    check_parser.add_argument(
        "--arg",
        dest="argument_values",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Value of a positional argument",
    )
    subparsers.add_parser("help", help="Show the help listing for the declarations")
    return root_parser


def _collect(
    assignments: list[str],
    lookup: Callable[[str], FlagSpec | None],
    prefix: str,
) -> dict[str, str]:
    values = {}
    for assignment in assignments:
        name, value = split_assignment(assignment)
        if lookup(name) is None:
            raise ConfigError(f"Unknown flag {prefix}{name}")
        values[name] = value
    return values


def check_values(config: FlagConfig, args: Namespace) -> int:
    flags = {spec.name: spec for spec in config.flags}
    arguments = {spec.name: spec for spec in config.arguments}
    try:
        long_values = _collect(args.long_values, flags.get, "--")
        short_values = _collect(args.short_values, config.get_by_alias, "-")
        argument_values = _collect(args.argument_values, arguments.get, "")
    except (ValueError, ConfigError) as error:
        error_console.print(f"[bold red]error:[/] {escape(str(error))}")
        return 2

    errors = config.validate_values(long_values, short_values, argument_values)
    for error in errors:
        error_console.print(f"[red]✗[/] {escape(error.message)}")
    if errors:
        logger.info("%d value(s) rejected", len(errors))
        return 1
    console.print("[green]✓[/] All values are valid")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = get_parser().parse_args(argv)
    setup_logging(
        mode=args.log_mode,
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    config_path = args.config or find_cliflag_config()
    if config_path is None:
        error_console.print(
            "[bold red]error:[/] No flag declarations found. "
            "Pass --config or create cliflag.yaml."
        )
        return 2
    try:
        config = load_flag_specs(config_path)
    except (FileNotFoundError, ConfigError) as error:
        error_console.print(f"[bold red]error:[/] {escape(str(error))}")
        return 2

    if args.command == "help":
        render_help(config.flags, config.arguments)
        return 0
    return check_values(config, args)


if __name__ == "__main__":
    sys.exit(main())
