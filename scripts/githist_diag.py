"""githist history diagnostics CLI."""

from __future__ import annotations

import argparse
import json

from githist.config import GitHistSettings
from githist.history import CommandKind, classify_command, is_mutating, known_verbs
from githist.storage import HistoryStore, HistoryStoreError


def load_store(settings: GitHistSettings) -> HistoryStore:
    return HistoryStore(settings.history_path, collection_name=settings.collection_name)


def _parse_kind(value: str) -> CommandKind:
    if value == CommandKind.UNRECOGNIZED.value:
        return CommandKind.UNRECOGNIZED
    if value not in known_verbs():
        raise argparse.ArgumentTypeError(f"unknown command kind: {value}")
    return classify_command(value)


def cmd_records(args: argparse.Namespace) -> None:
    settings = GitHistSettings()
    store = load_store(settings)
    try:
        records = store.scan(kind=args.kind, limit=args.limit)
    except HistoryStoreError as exc:
        print(f"History store unavailable: {exc}")
        raise SystemExit(1)
    if args.json:
        print(json.dumps([record.model_dump(mode="json") for record in records], indent=2))
    else:
        for record in records:
            files = ",".join(record.files_affected) or "-"
            print(
                f"{record.id} [{record.command_kind.value}] {record.raw_command} "
                f"-> {record.current_branch}@{record.current_commit[:12]} files={files}"
            )


def cmd_metrics(args: argparse.Namespace) -> None:
    settings = GitHistSettings()
    store = load_store(settings)
    try:
        records_total = store.count()
        records = store.scan()
    except HistoryStoreError as exc:
        print(f"History store unavailable: {exc}")
        raise SystemExit(1)

    kind_counts: dict[str, int] = {}
    mutating_total = 0
    for record in records:
        kind = record.command_kind.value
        kind_counts[kind] = kind_counts.get(kind, 0) + 1
        if is_mutating(record.command_kind):
            mutating_total += 1

    metrics = {
        "records_total": records_total,
        "mutating_total": mutating_total,
        "kind_counts": kind_counts,
    }
    print(json.dumps(metrics, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="githist history diagnostics")
    sub = parser.add_subparsers(dest="cmd")

    p_records = sub.add_parser("records", help="List recorded git commands")
    p_records.add_argument("--json", action="store_true", help="Output JSON")
    p_records.add_argument("--kind", type=_parse_kind, default=None, help="Only show one command kind")
    p_records.add_argument(
        "--limit",
        type=int,
        default=None,
        help="If provided, show only the latest N records",
    )
    p_records.set_defaults(func=cmd_records)

    p_metrics = sub.add_parser("metrics", help="Show record counts per command kind")
    p_metrics.set_defaults(func=cmd_metrics)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    args.func(args)


if __name__ == "__main__":
    main()
