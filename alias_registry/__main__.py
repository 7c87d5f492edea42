"""Entry point for the alias registry CLI."""

from __future__ import annotations

import argparse
import csv
import io
import json
import sys

import yaml
from rich.table import Table

from . import __version__
from .constants import WORKING_DIR_DEFAULT, WORKING_DIR_MAP
from .errors import AliasError
from .log import enable_verbose_logging, logger
from .persistence import AliasDefinition, AliasDict
from .platform import abbreviate_home
from .preferences import load_settings
from .terminal import Terminal

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOOP = 2

# ---------------------------------------------------------------------------
# Listing formats
# ---------------------------------------------------------------------------


def _rows(aliases: AliasDict) -> list[tuple[str, str, str, str, str]]:
    """Return ``(alias, instance, command, context, working_dir)`` sorted rows."""
    rows = []
    for context_name, context in aliases.items():
        for alias, definition in context.items():
            rows.append(
                (
                    alias,
                    definition.instance,
                    definition.command,
                    context_name,
                    definition.working_directory,
                )
            )
    return sorted(rows, key=lambda row: (row[3], row[0]))


def _list_table(aliases: AliasDict, terminal: Terminal) -> None:
    rows = _rows(aliases)
    if not rows:
        terminal.print("No aliases defined.")
        return
    table = Table("Alias", "Instance", "Command", "Context", "Working directory")
    for alias, instance, command, context_name, working_dir in rows:
        if context_name == aliases.active_context:
            context_name += "*"
        table.add_row(alias, instance, command, context_name, working_dir)
    terminal.out.print(table)


def _list_csv(aliases: AliasDict, terminal: Terminal) -> None:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Alias", "Instance", "Command", "Context", "Working directory"])
    writer.writerows(_rows(aliases))
    terminal.print(buf.getvalue().rstrip("\n"))


def _list_json(aliases: AliasDict, terminal: Terminal) -> None:
    terminal.print(json.dumps(aliases.to_json(), indent=2, ensure_ascii=False, sort_keys=True))


def _list_yaml(aliases: AliasDict, terminal: Terminal) -> None:
    terminal.print(yaml.safe_dump(aliases.to_json(), sort_keys=True).rstrip("\n"))


_FORMATTERS = {
    "table": _list_table,
    "csv": _list_csv,
    "json": _list_json,
    "yaml": _list_yaml,
}

# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_alias(args: argparse.Namespace, aliases: AliasDict, terminal: Terminal) -> int:
    instance, sep, command = args.definition.partition(":")
    if not sep or not instance or not command:
        terminal.error("Alias definition must be in the form INSTANCE:COMMAND")
        return EXIT_ERROR
    working_dir = WORKING_DIR_DEFAULT if args.no_map_working_directory else WORKING_DIR_MAP
    if not aliases.add_alias(args.name, AliasDefinition(instance, command, working_dir)):
        terminal.error(
            f"Alias '{args.name}' already exists in context '{aliases.active_context}'"
        )
        return EXIT_NOOP
    return EXIT_OK


def _cmd_unalias(args: argparse.Namespace, aliases: AliasDict, terminal: Terminal) -> int:
    missing = [name for name in args.names if not aliases.exists_alias(name)]
    if missing:
        terminal.error(f"Nonexistent alias: {', '.join(missing)}")
        return EXIT_NOOP
    for name in args.names:
        aliases.remove_alias(name)
    return EXIT_OK


def _cmd_aliases(args: argparse.Namespace, aliases: AliasDict, terminal: Terminal) -> int:
    _FORMATTERS[args.format](aliases, terminal)
    return EXIT_OK


def _cmd_prefer(args: argparse.Namespace, aliases: AliasDict, terminal: Terminal) -> int:
    aliases.set_active_context(args.context)
    # Switching alone is not a mutation; make the choice stick
    aliases.modified = True
    return EXIT_OK


def _cmd_remove_context(args: argparse.Namespace, aliases: AliasDict, terminal: Terminal) -> int:
    if not aliases.remove_context(args.context):
        terminal.error(f"No context '{args.context}' found")
        return EXIT_NOOP
    return EXIT_OK


def _cmd_purge_instance(args: argparse.Namespace, aliases: AliasDict, terminal: Terminal) -> int:
    removed = aliases.remove_aliases_for_instance(args.instance)
    if not removed:
        terminal.print(f"No aliases for instance '{args.instance}'")
        return EXIT_OK
    for name in removed:
        terminal.print(f"Removed alias '{name}'")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alias-registry", description="Manage command aliases for remote instances"
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"alias-registry {__version__}",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("alias", help="Create an alias in the active context")
    p.add_argument("definition", help="INSTANCE:COMMAND")
    p.add_argument("name", help="Alias name")
    p.add_argument(
        "--no-map-working-directory",
        action="store_true",
        help="Run in the instance's default directory instead of the mapped one",
    )
    p.set_defaults(handler=_cmd_alias)

    p = sub.add_parser("unalias", help="Remove aliases from the active context")
    p.add_argument("names", nargs="+", help="Alias names")
    p.set_defaults(handler=_cmd_unalias)

    p = sub.add_parser("aliases", help="List aliases in every context")
    p.add_argument("--format", choices=sorted(_FORMATTERS), default="table")
    p.set_defaults(handler=_cmd_aliases)

    p = sub.add_parser("prefer", help="Switch the active context")
    p.add_argument("context")
    p.set_defaults(handler=_cmd_prefer)

    p = sub.add_parser("remove-context", help="Delete a context and its aliases")
    p.add_argument("context")
    p.set_defaults(handler=_cmd_remove_context)

    p = sub.add_parser("purge-instance", help="Remove every alias of an instance")
    p.add_argument("instance")
    p.set_defaults(handler=_cmd_purge_instance)

    return parser


def main(argv: list[str] | None = None, terminal: Terminal | None = None) -> int:
    """Run the alias registry CLI and return its exit status."""
    args = _build_parser().parse_args(argv)
    terminal = terminal or Terminal()

    settings = load_settings()
    if args.verbose:
        enable_verbose_logging()
    else:
        logger.setLevel(settings.log_level())

    path = settings.aliases_path()
    try:
        aliases = AliasDict(terminal, path=path)
    except AliasError as exc:
        terminal.error(f"Cannot load aliases from {abbreviate_home(str(path))}: {exc}")
        return EXIT_ERROR

    with aliases:
        return args.handler(args, aliases, terminal)


if __name__ == "__main__":
    sys.exit(main())
