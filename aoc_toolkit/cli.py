"""Command-line entry point: parse a subcommand and dispatch it."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from aoc_toolkit import commands
from aoc_toolkit.day import Day

_U8_PATTERN = re.compile(r"\+?[0-9]+")
_U8_MAX = 255


@dataclass(frozen=True)
class AppArguments:
    """A parsed subcommand with its options."""

    command: str
    day: Day | None = None
    release: bool = False
    dhat: bool = False
    submit: int | None = None
    run_all: bool = False
    store: bool = False


class _ArgumentList:
    """Consumes arguments in the order the parser asks for them."""

    def __init__(self, argv: Sequence[str]) -> None:
        self._args = list(argv)

    def subcommand(self) -> str | None:
        if not self._args or self._args[0].startswith("-"):
            return None
        return self._args.pop(0)

    def contains(self, flag: str) -> bool:
        if flag in self._args:
            self._args.remove(flag)
            return True
        return False

    def free_day(self) -> Day:
        day = self.optional_free_day()
        if day is None:
            raise ValueError("free-standing argument is missing")
        return day

    def optional_free_day(self) -> Day | None:
        if not self._args:
            return None
        value = self._args.pop(0)
        try:
            return Day.parse(value)
        except ValueError as exc:
            raise ValueError(f"failed to parse '{value}': {exc}") from None

    def optional_u8(self, key: str) -> int | None:
        for index, arg in enumerate(self._args):
            if arg == key:
                if index + 1 >= len(self._args):
                    raise ValueError(f"the '{key}' option doesn't have an associated value")
                value = self._args[index + 1]
                del self._args[index : index + 2]
                return _parse_u8(value)
            if arg.startswith(f"{key}="):
                del self._args[index]
                return _parse_u8(arg[len(key) + 1 :])
        return None

    def remaining(self) -> list[str]:
        return list(self._args)


def _parse_u8(value: str) -> int:
    if not _U8_PATTERN.fullmatch(value) or int(value) > _U8_MAX:
        raise ValueError(f"failed to parse '{value}': invalid digit or number too large")
    return int(value)


def parse_args(argv: Sequence[str]) -> AppArguments:
    """Parse arguments (without the program name) into :class:`AppArguments`.

    Exits with status 1 on a missing or unknown subcommand; raises ValueError
    when an argument cannot be parsed.
    """
    args = _ArgumentList(argv)
    command = args.subcommand()

    if command == "all":
        parsed = AppArguments("all", release=args.contains("--release"))
    elif command == "time":
        run_all = args.contains("--all")
        store = args.contains("--store")
        parsed = AppArguments(
            "time", day=args.optional_free_day(), run_all=run_all, store=store
        )
    elif command in ("download", "read"):
        parsed = AppArguments(command, day=args.free_day())
    elif command == "solve":
        day = args.free_day()
        release = args.contains("--release")
        submit = args.optional_u8("--submit")
        dhat = args.contains("--dhat")
        parsed = AppArguments("solve", day=day, release=release, dhat=dhat, submit=submit)
    elif command is None:
        print("No command specified.", file=sys.stderr)
        raise SystemExit(1)
    else:
        print(f"Unknown command: {command}", file=sys.stderr)
        raise SystemExit(1)

    remaining = args.remaining()
    if remaining:
        listed = ", ".join(f'"{arg}"' for arg in remaining)
        print(f"Warning: unknown argument(s): [{listed}].", file=sys.stderr)

    return parsed


def main(argv: Sequence[str] | None = None) -> None:
    """Parse the command line and run the chosen subcommand."""
    try:
        args = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from None

    if args.command == "all":
        commands.handle_all(args.release)
    elif args.command == "time":
        commands.handle_time(args.day, args.run_all, args.store)
    elif args.command == "download":
        commands.handle_download(args.day)
    elif args.command == "read":
        commands.handle_read(args.day)
    elif args.command == "solve":
        commands.handle_solve(args.day, args.release, args.dhat, args.submit)


if __name__ == "__main__":
    main()