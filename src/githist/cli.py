"""Command line entry point: built-in history commands plus git pass-through."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from . import __version__
from .config import GitHistSettings, get_settings
from .git import GitNotFoundError, GitRunner, GitRunnerError
from .history import HistoryRecord, HistoryRecordBuilder, RepositoryStateReader, filter_mutating
from .storage import HistoryStore, HistoryStoreError

logger = logging.getLogger(__name__)

BUILTIN_COMMANDS = frozenset({"init-history", "mutate-actions"})
_PARSER_FLAGS = frozenset({"-h", "--help", "--version"})


def configure_logging(level: str) -> None:
    """Configure root logging; records go to stderr so stdout mirrors git."""

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def load_store(settings: GitHistSettings) -> HistoryStore:
    return HistoryStore(settings.history_path, collection_name=settings.collection_name)


def load_runner(settings: GitHistSettings) -> GitRunner:
    return GitRunner(Path(settings.git_path) if settings.git_path else None)


def _store_failure(exc: HistoryStoreError) -> int:
    logger.error("History store failure", extra={"error": str(exc)})
    print(f"History store unavailable: {exc}", file=sys.stderr)
    return 1


def cmd_init_history(args: argparse.Namespace, settings: GitHistSettings) -> int:
    try:
        load_store(settings).init_schema()
    except HistoryStoreError as exc:
        return _store_failure(exc)
    return 0


def cmd_mutate_actions(args: argparse.Namespace, settings: GitHistSettings) -> int:
    try:
        records = filter_mutating(load_store(settings).scan())
    except HistoryStoreError as exc:
        return _store_failure(exc)

    if args.json:
        print(json.dumps([record.model_dump(mode="json") for record in records], indent=2))
    else:
        for record in records:
            print(record.format_line())
    return 0


def record_command(raw_command: str, runner: GitRunner, settings: GitHistSettings) -> HistoryRecord:
    """Capture repository state for ``raw_command`` and persist it.

    Only store errors escape; everything else degrades inside the builder.
    """

    builder = HistoryRecordBuilder(RepositoryStateReader(runner))
    state = asyncio.run(builder.build(raw_command))
    return load_store(settings).insert(state)


def forward(argv: Sequence[str], settings: GitHistSettings) -> int:
    """Run git with ``argv``, echo its output, then log the invocation.

    Returns git's exit status, or 1 when the history record could not be stored.
    """

    try:
        runner = load_runner(settings)
    except GitNotFoundError as exc:
        print(f"githist: {exc}", file=sys.stderr)
        return 127

    raw_command = " ".join(argv)
    try:
        result = asyncio.run(runner.forward(list(argv)))
    except GitRunnerError as exc:
        print(f"githist: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(result.stdout)
    sys.stdout.flush()
    if result.stderr:
        sys.stderr.write(result.stderr)
        sys.stderr.flush()

    try:
        record = record_command(raw_command, runner, settings)
    except HistoryStoreError as exc:
        return _store_failure(exc)

    logger.info(
        "Forwarded git command",
        extra={"id": record.id, "command_kind": record.command_kind.value, "returncode": result.returncode},
    )
    return result.returncode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="githist",
        description=(
            "Run git and keep a queryable history of every command. "
            "Anything other than the commands below is passed to git unchanged."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd")

    p_init = sub.add_parser("init-history", help="Create the history store if it does not exist")
    p_init.set_defaults(func=cmd_init_history)

    p_mutate = sub.add_parser(
        "mutate-actions",
        help="List recorded commands that changed repository state",
    )
    p_mutate.add_argument("--json", action="store_true", help="Output JSON")
    p_mutate.set_defaults(func=cmd_mutate_actions)

    return parser


def run(argv: Sequence[str], settings: GitHistSettings) -> int:
    if not argv:
        print("No subcommand was used")
        return 0

    if argv[0] not in BUILTIN_COMMANDS and argv[0] not in _PARSER_FLAGS:
        return forward(argv, settings)

    parser = build_parser()
    args = parser.parse_args(list(argv))
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return args.func(args, settings)


def load_settings() -> GitHistSettings:
    """Return configured settings, or defaults when the configuration is unreadable.

    A broken ``.env`` or environment value must not stop the command reaching git.
    """

    try:
        return get_settings()
    except (ValidationError, OSError, UnicodeDecodeError) as exc:
        print(f"githist: ignoring invalid configuration: {exc}", file=sys.stderr)
    try:
        return GitHistSettings(_env_file=None)
    except ValidationError:
        return GitHistSettings.model_construct()


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``githist`` console script."""

    settings = load_settings()
    configure_logging(settings.log_level)
    exit_code = run(sys.argv[1:] if argv is None else argv, settings)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
