"""Command classification and history record construction."""

from .builder import HistoryRecordBuilder
from .classifier import MUTATING_KINDS, classify_command, filter_mutating, is_mutating, known_verbs
from .extractor import extract_affected_files
from .models import CommandKind, CommandState, HistoryRecord
from .state import RepositoryStateReader

__all__ = [
    "CommandKind",
    "CommandState",
    "HistoryRecord",
    "HistoryRecordBuilder",
    "MUTATING_KINDS",
    "RepositoryStateReader",
    "classify_command",
    "extract_affected_files",
    "filter_mutating",
    "is_mutating",
    "known_verbs",
]
