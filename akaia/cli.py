"""Command-line entry point: global options, subcommands and usage errors."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

INSTRUCTION = """AKAIA OS CLI

Usage: akaia [--debug] SUBCOMMAND

Options:
\t--debug\tPrint supplied arguments after execution.

SUBCOMMAND is one of:
\tusage
\thello [--name NAME]
\tnear [...NEAR_CLI_ARGS]
"""


class UsageError(Exception):
    """Raised when the command line cannot be understood."""


class UnknownOptionError(UsageError):
    """An option that the current command does not accept."""

    def __init__(self, option: str) -> None:
        super().__init__(f"unknown option {option}")
        self.option = option


class UnknownCommandError(UsageError):
    """A subcommand name that does not exist."""

    def __init__(self, command: str) -> None:
        super().__init__(f"unknown command {json.dumps(command, ensure_ascii=False)}")
        self.command = command


class MissingCommandError(UsageError):
    """No subcommand was given."""

    def __init__(self) -> None:
        super().__init__("missing command")


@dataclass(frozen=True)
class UsageCommand:
    """The ``usage`` subcommand."""


@dataclass(frozen=True)
class HelloCommand:
    """The ``hello`` subcommand and the name it greeted, if one was given."""

    name: str | None = None


@dataclass(frozen=True)
class NearCommand:
    """The ``near`` subcommand with the arguments meant for the NEAR CLI."""

    args: list[str] = field(default_factory=list)


Command = UsageCommand | HelloCommand | NearCommand


@dataclass(frozen=True)
class Arguments:
    """The outcome of a parsed and executed command line."""

    debug: bool
    command: Command


class _ArgCursor:
    """Walks through arguments, telling options apart from positionals."""

    def __init__(self, args: Iterable[str]) -> None:
        self._rest = list(args)
        self._ended = False
        self._option: str | None = None
        self._attached: str | None = None

    def next_opt(self) -> str | None:
        if self._attached is not None:
            raise UsageError(f"option does not require a value: {self._option}")
        if self._ended or not self._rest or not self._rest[0].startswith("-") or self._rest[0] == "-":
            return None
        arg = self._rest.pop(0)
        if arg == "--":
            self._ended = True
            return None
        if arg.startswith("--"):
            name, sep, value = arg.partition("=")
            self._option, self._attached = name, (value if sep else None)
        else:
            self._option, self._attached = arg[:2], (arg[2:] or None)
        return self._option

    def value(self) -> str:
        if self._attached is not None:
            value, self._attached = self._attached, None
            return value
        if self._rest:
            return self._rest.pop(0)
        raise UsageError(f"option requires a value: {self._option}")

    def next_positional(self) -> str | None:
        return self._rest.pop(0) if self._rest else None

    def positionals(self) -> list[str]:
        rest, self._rest = self._rest, []
        return rest


def run_usage() -> UsageCommand:
    """Print the usage instructions."""
    print(INSTRUCTION)
    return UsageCommand()


def _hello(cursor: _ArgCursor) -> HelloCommand:
    name = None
    while (option := cursor.next_opt()) is not None:
        if option != "--name":
            raise UnknownOptionError(option)
        name = cursor.value()
    print(f"Hello, {name if name is not None else 'stranger'}!")
    return HelloCommand(name=name)


def _near(cursor: _ArgCursor) -> NearCommand:
    args = cursor.positionals()
    print(sys.argv[0] if sys.argv and sys.argv[0] else "./near")
    return NearCommand(args=args)


def run_hello(args: Sequence[str]) -> HelloCommand:
    """Greet the person named by ``--name``, or a stranger."""
    return _hello(_ArgCursor(args))


def run_near(args: Sequence[str]) -> NearCommand:
    """Collect the arguments meant for the NEAR CLI and show its path."""
    return _near(_ArgCursor(args))


def execute_command(argv: Sequence[str]) -> Arguments:
    """Parse global options, then run the chosen subcommand."""
    cursor = _ArgCursor(argv)
    debug = False
    while (option := cursor.next_opt()) is not None:
        if option != "--debug":
            raise UnknownOptionError(option)
        debug = True

    command_name = cursor.next_positional()
    if command_name is None:
        raise MissingCommandError()

    if command_name == "usage":
        command: Command = run_usage()
    elif command_name == "hello":
        command = _hello(cursor)
    elif command_name == "near":
        command = _near(cursor)
    else:
        raise UnknownCommandError(command_name)

    return Arguments(debug=debug, command=command)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    try:
        arguments = execute_command(sys.argv[1:] if argv is None else argv)
    except UsageError as error:
        print(f"Usage error: {error}\n")
        run_usage()
        return 1
    if arguments.debug:
        print(f"\n{arguments!r}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())