"""SVCS command line.

One invocation runs exactly one command: `config`, `add`, `log`,
`commit` or `checkout`. Without a command (or with `--help`) the
command list is printed.
"""

from __future__ import annotations

import argparse
import os
import sys
from enum import Enum
from typing import Callable

from .. import __version__
from ..core.controller import CommandResult, SvcsController
from ..utils.env import get_project_root


COMMAND_SPACE = 11


class Command(str, Enum):
    """Available commands, in help order."""

    CONFIG = ("config", "Get and set a username.")
    ADD = ("add", "Add a file to the index.")
    LOG = ("log", "Show commit logs.")
    COMMIT = ("commit", "Save changes.")
    CHECKOUT = ("checkout", "Restore a file.")

    def __new__(cls, name: str, description: str):
        obj = str.__new__(cls, name)
        obj._value_ = name
        obj.description = description
        return obj


def _first(args: list[str]) -> str | None:
    return args[0] if args else None


HANDLERS: dict[Command, Callable[[SvcsController, list[str]], CommandResult]] = {
    Command.CONFIG: lambda controller, args: controller.config(_first(args)),
    Command.ADD: lambda controller, args: controller.add(_first(args)),
    Command.LOG: lambda controller, args: controller.show_log(),
    Command.COMMIT: lambda controller, args: controller.commit(_first(args)),
    Command.CHECKOUT: lambda controller, args: controller.checkout(_first(args)),
}


def resolve_command(name: str) -> Command | None:
    try:
        return Command(name)
    except ValueError:
        return None


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svcs",
        description="SVCS - a small local version control system",
        add_help=False,
    )
    parser.add_argument(
        "--help",
        "-h",
        action="store_true",
        help="Show the command list",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument("command", nargs="?")
    parser.add_argument("arguments", nargs=argparse.REMAINDER)
    return parser


def format_help() -> str:
    lines = ["These are SVCS commands:"]
    for cmd in Command:
        lines.append(cmd.value.ljust(COMMAND_SPACE) + cmd.description)
    return "\n".join(lines)


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.debug:
        os.environ["SVCS_DEBUG"] = "1"

    controller = SvcsController(project_root=get_project_root())
    init_result = controller.init()
    if not init_result.success:
        print(f"Error: {init_result.message}", file=sys.stderr)
        return 1

    if parsed.help or not parsed.command:
        print(format_help())
        return 0

    command = resolve_command(parsed.command)
    if command is None:
        print(f"'{parsed.command}' is not a SVCS command.")
        return 0

    result = HANDLERS[command](controller, parsed.arguments)
    return _print_result(result)


def _print_result(result: CommandResult) -> int:
    if result.fatal:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1
    print(result.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
