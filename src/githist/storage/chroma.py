"""Chroma-backed history persistence."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Protocol

from pydantic import ValidationError

from ..config import DEFAULT_COLLECTION
from ..history.classifier import is_mutating
from ..history.models import CommandKind, CommandState, HistoryRecord

logger = logging.getLogger(__name__)

# Records are only scanned, never queried by similarity. Supplying a fixed vector
# keeps Chroma from loading its embedding model on every write.
PLACEHOLDER_EMBEDDING: list[float] = [0.0]


class HistoryStoreError(RuntimeError):
    """Raised when the history store cannot complete a read or write."""


class HistoryStoreUnavailableError(HistoryStoreError):
    """Raised when the Chroma client or collection cannot be obtained."""


class CollectionProtocol(Protocol):
    """Protocol for the minimal Chroma collection API used by githist."""

    def add(
        self,
        *,
        documents: Iterable[str],
        metadatas: Iterable[dict[str, Any]],
        ids: Iterable[str],
        embeddings: Iterable[list[float]] | None = None,
    ) -> None:
        ...

    def get(
        self,
        *,
        ids: Iterable[str] | None = None,
        where: dict[str, Any] | None = None,
        limit: int | None = None,
    ) -> dict[str, list[Any]]:
        ...

    def count(self) -> int:
        ...


class ClientProtocol(Protocol):
    """Protocol for the minimal Chroma client API used by githist."""

    def get_or_create_collection(self, name: str) -> CollectionProtocol:
        ...

    def get_collection(self, name: str) -> CollectionProtocol:
        ...


class HistoryStore:
    """Append-only store of :class:`HistoryRecord` entries in a Chroma collection.

    The collection has to be provisioned with :meth:`init_schema` before records
    can be inserted or scanned. Records come back in insertion order, tracked by
    a ``sequence`` metadata field.
    """

    def __init__(
        self,
        path: Path,
        *,
        collection_name: str = DEFAULT_COLLECTION,
        client_factory: Callable[[], ClientProtocol] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._path = Path(path)
        self._collection_name = collection_name
        self._client_factory = client_factory or self._default_client_factory
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._client: ClientProtocol | None = None
        self._collection: CollectionProtocol | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _default_client_factory(self) -> ClientProtocol:
        try:
            import chromadb
        except ImportError as exc:  # pragma: no cover - depends on environment
            raise HistoryStoreUnavailableError(
                "chromadb package is not installed; install githist with its storage dependencies"
            ) from exc

        try:
            return chromadb.PersistentClient(path=str(self._path))
        except Exception as exc:
            raise HistoryStoreUnavailableError(f"cannot open history store at {self._path}: {exc}") from exc

    def _get_client(self) -> ClientProtocol:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def _ensure_collection(self) -> CollectionProtocol:
        if self._collection is None:
            client = self._get_client()
            try:
                self._collection = client.get_collection(self._collection_name)
            except Exception as exc:
                raise HistoryStoreUnavailableError(
                    f"history collection '{self._collection_name}' not found in {self._path}; "
                    "run `githist init-history` first"
                ) from exc
        return self._collection

    def init_schema(self) -> None:
        """Create the history collection if it does not exist yet."""

        client = self._get_client()
        try:
            self._collection = client.get_or_create_collection(self._collection_name)
        except Exception as exc:
            raise HistoryStoreUnavailableError(
                f"cannot initialize history collection '{self._collection_name}': {exc}"
            ) from exc
        logger.info(
            "History store ready",
            extra={"path": str(self._path), "collection": self._collection_name},
        )

    def insert(self, state: CommandState) -> HistoryRecord:
        """Persist ``state`` under a fresh id and timestamp."""

        collection = self._ensure_collection()
        record = HistoryRecord(
            **state.model_dump(),
            id=uuid.uuid4().hex,
            created_at=self._clock(),
        )
        try:
            sequence = collection.count() + 1
            collection.add(
                documents=[state.model_dump_json()],
                metadatas=[
                    {
                        "command_kind": record.command_kind.value,
                        "raw_command": record.raw_command,
                        "current_branch": record.current_branch,
                        "current_commit": record.current_commit,
                        "mutating": is_mutating(record.command_kind),
                        "created_at": record.created_at.isoformat(),
                        "sequence": sequence,
                    }
                ],
                ids=[record.id],
                embeddings=[list(PLACEHOLDER_EMBEDDING)],
            )
        except Exception as exc:
            raise HistoryStoreError(f"failed to write history record: {exc}") from exc

        logger.debug(
            "Recorded git command",
            extra={"id": record.id, "command_kind": record.command_kind.value, "sequence": sequence},
        )
        return record

    def scan(self, *, kind: CommandKind | None = None, limit: int | None = None) -> list[HistoryRecord]:
        """Return stored records in insertion order, optionally for one command kind."""

        collection = self._ensure_collection()
        filters = {"command_kind": kind.value} if kind is not None else None
        try:
            result = collection.get(where=filters)
        except Exception as exc:
            raise HistoryStoreError(f"failed to read history records: {exc}") from exc
        records = self._convert_result(result)
        return records[-limit:] if limit else records

    def count(self) -> int:
        collection = self._ensure_collection()
        try:
            return collection.count()
        except Exception as exc:
            raise HistoryStoreError(f"failed to count history records: {exc}") from exc

    def _convert_result(self, result: dict[str, list[Any]]) -> list[HistoryRecord]:
        ids = result.get("ids") or []
        documents = result.get("documents") or []
        metadatas = result.get("metadatas") or []
        rows: list[tuple[int, datetime, HistoryRecord]] = []
        for record_id, document, metadata in zip(ids, documents, metadatas):
            metadata = metadata or {}
            created_raw = metadata.get("created_at")
            created_at = (
                datetime.fromisoformat(created_raw) if isinstance(created_raw, str) else self._clock()
            )
            try:
                state = CommandState.model_validate_json(document)
            except (ValidationError, TypeError, ValueError):
                logger.warning("Stored history document is unreadable", extra={"id": record_id})
                state = CommandState(
                    command_kind=metadata.get("command_kind", CommandKind.UNRECOGNIZED),
                    current_branch=metadata.get("current_branch", ""),
                    current_commit=metadata.get("current_commit", ""),
                    raw_command=metadata.get("raw_command", ""),
                )
            record = HistoryRecord(**state.model_dump(), id=record_id, created_at=created_at)
            rows.append((int(metadata.get("sequence", 0) or 0), created_at, record))
        rows.sort(key=lambda row: (row[0], row[1]))
        return [record for _, _, record in rows]


__all__ = ["PLACEHOLDER_EMBEDDING", "HistoryStore", "HistoryStoreError", "HistoryStoreUnavailableError"]
