"""Repository state capture via read-only git queries."""

from __future__ import annotations

import logging

from ..git import GitRunner, GitRunnerError

logger = logging.getLogger(__name__)


class RepositoryStateReader:
    """Ask git for the current branch and commit and keep whatever comes back.

    Output is trimmed but otherwise stored as-is: outside a repository git
    prints nothing on stdout and the recorded value is simply empty.
    """

    def __init__(self, runner: GitRunner) -> None:
        self._runner = runner

    async def current_branch(self) -> str:
        return await self._query("--abbrev-ref", "HEAD")

    async def current_commit(self) -> str:
        return await self._query("HEAD")

    async def _query(self, *args: str) -> str:
        try:
            result = await self._runner.rev_parse(*args)
        except GitRunnerError as exc:
            logger.warning("git rev-parse failed", extra={"query": " ".join(args), "error": str(exc)})
            return ""
        if not result.ok:
            logger.debug(
                "git rev-parse exited non-zero",
                extra={"query": " ".join(args), "returncode": result.returncode, "stderr": result.stderr.strip()},
            )
        return result.stdout.strip()


__all__ = ["RepositoryStateReader"]
