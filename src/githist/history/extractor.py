"""Heuristic detection of files touched by an invocation."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def extract_affected_files(raw_command: str, *, base: Path | None = None) -> list[str]:
    """Return the tokens of ``raw_command`` that exist on disk, verbatim and in order.

    Tokens are resolved relative to ``base`` (the working directory by default).
    Any token that happens to name an existing entry counts, including branch or
    remote names that collide with a path. Tokens whose lookup raises are skipped.
    """

    files_affected: list[str] = []
    for token in raw_command.split():
        candidate = Path(token) if base is None else Path(base) / token
        try:
            exists = candidate.exists()
        except (OSError, ValueError) as exc:
            logger.debug("Skipping token during file extraction", extra={"token": token, "error": str(exc)})
            continue
        if exists:
            files_affected.append(token)
    return files_affected


__all__ = ["extract_affected_files"]
