"""Assemble a ``CommandState`` from a raw invocation."""

from __future__ import annotations

import logging
from pathlib import Path

from .classifier import classify_command
from .extractor import extract_affected_files
from .models import CommandState
from .state import RepositoryStateReader

logger = logging.getLogger(__name__)


class HistoryRecordBuilder:
    """Combine classification, file extraction and state capture.

    Each step degrades on its own: an unknown verb becomes ``UNRECOGNIZED``,
    an extraction failure an empty file list, a failed state query an empty
    string. :meth:`build` does not raise.
    """

    def __init__(self, state_reader: RepositoryStateReader, *, base: Path | None = None) -> None:
        self._state_reader = state_reader
        self._base = base

    async def build(self, raw_command: str) -> CommandState:
        kind = classify_command(raw_command)

        try:
            files_affected = extract_affected_files(raw_command, base=self._base)
        except Exception:
            logger.exception("Affected file extraction failed")
            files_affected = []

        branch = await self._read(self._state_reader.current_branch, "branch")
        commit = await self._read(self._state_reader.current_commit, "commit")

        return CommandState(
            command_kind=kind,
            files_affected=files_affected,
            current_branch=branch,
            current_commit=commit,
            raw_command=raw_command,
        )

    @staticmethod
    async def _read(query, label: str) -> str:
        try:
            return await query()
        except Exception:
            logger.exception("Repository state capture failed", extra={"field": label})
            return ""


__all__ = ["HistoryRecordBuilder"]
