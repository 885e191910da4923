from __future__ import annotations

import itertools
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from githist.storage import HistoryStore


@dataclass
class _Record:
    document: str
    metadata: dict[str, Any]
    id: str
    embedding: list[float] | None = None


class StubCollection:
    def __init__(self) -> None:
        self.records: list[_Record] = []

    def add(self, *, documents, metadatas, ids, embeddings=None) -> None:  # type: ignore[override]
        vectors = list(embeddings) if embeddings is not None else [None] * len(ids)
        for document, metadata, record_id, vector in zip(documents, metadatas, ids, vectors):
            self.records.append(
                _Record(document=document, metadata=dict(metadata), id=record_id, embedding=vector)
            )

    def get(self, *, ids=None, where=None, limit=None):  # type: ignore[override]
        filtered = self.records
        if where:
            for key, value in where.items():
                filtered = [record for record in filtered if record.metadata.get(key) == value]
        if limit is not None:
            filtered = filtered[:limit]
        return {
            "ids": [record.id for record in filtered],
            "documents": [record.document for record in filtered],
            "metadatas": [record.metadata for record in filtered],
        }

    def count(self) -> int:
        return len(self.records)


class StubClient:
    def __init__(self) -> None:
        self.collections: dict[str, StubCollection] = {}

    def get_or_create_collection(self, name: str) -> StubCollection:
        return self.collections.setdefault(name, StubCollection())

    def get_collection(self, name: str) -> StubCollection:
        if name not in self.collections:
            raise ValueError(f"Collection {name} does not exist.")
        return self.collections[name]


def ticking_clock(start: datetime | None = None):
    base = start or datetime(2025, 1, 1, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: base + timedelta(seconds=next(ticks))


@pytest.fixture
def stub_client() -> StubClient:
    return StubClient()


@pytest.fixture
def make_store(tmp_path, stub_client):
    def factory() -> HistoryStore:
        return HistoryStore(
            tmp_path / ".git_command_history",
            client_factory=lambda: stub_client,
            clock=clock,
        )

    clock = ticking_clock()
    return factory
