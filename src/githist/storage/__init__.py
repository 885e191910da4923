"""Storage abstractions for githist."""

from .chroma import HistoryStore, HistoryStoreError, HistoryStoreUnavailableError

__all__ = [
    "HistoryStore",
    "HistoryStoreError",
    "HistoryStoreUnavailableError",
]
