from __future__ import annotations

import argparse
import importlib.util
import json
from pathlib import Path

import pytest

from githist.history import CommandKind, CommandState
from githist.storage import HistoryStoreUnavailableError


def _load_diag(name: str):
    module_path = Path(__file__).resolve().parents[1] / "scripts" / "githist_diag.py"
    spec = importlib.util.spec_from_file_location(name, module_path)
    assert spec and spec.loader
    diag = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(diag)
    return diag


@pytest.fixture
def populated_store(make_store):
    store = make_store()
    store.init_schema()
    for raw, kind in (
        ("add a.txt", CommandKind.ADD),
        ("log --oneline", CommandKind.LOG),
        ("commit -m wip", CommandKind.COMMIT),
        ("frobnicate", CommandKind.UNRECOGNIZED),
    ):
        store.insert(CommandState(command_kind=kind, raw_command=raw))
    return store


def test_metrics_counts_kinds(monkeypatch, capsys, populated_store) -> None:
    diag = _load_diag("githist_diag_metrics")
    monkeypatch.setattr(diag, "load_store", lambda _settings: populated_store)

    diag.cmd_metrics(argparse.Namespace())

    payload = json.loads(capsys.readouterr().out)
    assert payload["records_total"] == 4
    assert payload["mutating_total"] == 2
    assert payload["kind_counts"] == {"add": 1, "log": 1, "commit": 1, "unrecognized": 1}


def test_records_filters_by_kind(monkeypatch, capsys, populated_store) -> None:
    diag = _load_diag("githist_diag_records")
    monkeypatch.setattr(diag, "load_store", lambda _settings: populated_store)
    args = diag.build_parser().parse_args(["records", "--json", "--kind", "commit"])

    diag.cmd_records(args)

    payload = json.loads(capsys.readouterr().out)
    assert [item["raw_command"] for item in payload] == ["commit -m wip"]


def test_records_limit_shows_latest(monkeypatch, capsys, populated_store) -> None:
    diag = _load_diag("githist_diag_limit")
    monkeypatch.setattr(diag, "load_store", lambda _settings: populated_store)

    diag.cmd_records(argparse.Namespace(kind=None, limit=2, json=False))

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert "[commit] commit -m wip" in lines[0]
    assert "[unrecognized] frobnicate" in lines[1]


def test_unavailable_store_exits(monkeypatch, capsys, tmp_path: Path) -> None:
    diag = _load_diag("githist_diag_unavailable")

    def factory():
        raise HistoryStoreUnavailableError("chromadb missing")

    monkeypatch.setattr(
        diag,
        "load_store",
        lambda _settings: diag.HistoryStore(tmp_path, client_factory=factory),
    )

    with pytest.raises(SystemExit):
        diag.cmd_metrics(argparse.Namespace())
    assert "History store unavailable" in capsys.readouterr().out


def test_unknown_kind_is_rejected() -> None:
    diag = _load_diag("githist_diag_parser")

    with pytest.raises(SystemExit):
        diag.build_parser().parse_args(["records", "--kind", "teleport"])


def test_kind_accepts_git_spelling() -> None:
    diag = _load_diag("githist_diag_spelling")

    args = diag.build_parser().parse_args(["records", "--kind", "cherry-pick"])
    unknown = diag.build_parser().parse_args(["records", "--kind", "unrecognized"])

    assert args.kind is CommandKind.CHERRY_PICK
    assert unknown.kind is CommandKind.UNRECOGNIZED
