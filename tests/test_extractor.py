from __future__ import annotations

from pathlib import Path

import pytest

from githist.history import extract_affected_files


def test_existing_tokens_kept_in_order(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "README.md").write_text("hello", encoding="utf-8")
    (tmp_path / "src").mkdir()
    monkeypatch.chdir(tmp_path)

    files = extract_affected_files("add src missing.txt README.md src")

    assert files == ["src", "README.md", "src"]


def test_no_matches_yields_empty_list(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert extract_affected_files("push origin main") == []
    assert extract_affected_files("") == []


def test_tokens_are_not_normalized(tmp_path: Path) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("", encoding="utf-8")

    files = extract_affected_files("add ./docs/guide.md docs//guide.md", base=tmp_path)

    assert files == ["./docs/guide.md", "docs//guide.md"]


def test_branch_named_like_a_file_is_reported(tmp_path: Path) -> None:
    (tmp_path / "main").write_text("", encoding="utf-8")

    assert extract_affected_files("checkout main", base=tmp_path) == ["main"]


def test_unreadable_tokens_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "ok.txt").write_text("", encoding="utf-8")
    too_long = "x" * 5000

    files = extract_affected_files(f"add {too_long} bad\x00name ok.txt", base=tmp_path)

    assert files == ["ok.txt"]
