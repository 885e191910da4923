"""Map raw git invocations onto ``CommandKind`` and split out mutating ones."""

from __future__ import annotations

from typing import Iterable, TypeVar

from .models import CommandKind, CommandState

_VERBS: dict[str, CommandKind] = {
    "add": CommandKind.ADD,
    "apply": CommandKind.APPLY,
    "bisect": CommandKind.BISECT,
    "branch": CommandKind.BRANCH,
    "checkout": CommandKind.CHECKOUT,
    "cherry-pick": CommandKind.CHERRY_PICK,
    "clean": CommandKind.CLEAN,
    "clone": CommandKind.CLONE,
    "commit": CommandKind.COMMIT,
    "fetch": CommandKind.FETCH,
    "filter-branch": CommandKind.FILTER_BRANCH,
    "fsck": CommandKind.FSCK,
    "gc": CommandKind.GC,
    "init": CommandKind.INIT,
    "merge": CommandKind.MERGE,
    "mv": CommandKind.MV,
    "pull": CommandKind.PULL,
    "push": CommandKind.PUSH,
    "rebase": CommandKind.REBASE,
    "remote": CommandKind.REMOTE,
    "reset": CommandKind.RESET,
    "restore": CommandKind.RESTORE,
    "rm": CommandKind.RM,
    "stash": CommandKind.STASH,
    "submodule": CommandKind.SUBMODULE,
    "switch": CommandKind.SWITCH,
    "tag": CommandKind.TAG,
    "update-index": CommandKind.UPDATE_INDEX,
    "update-ref": CommandKind.UPDATE_REF,
    "write-tree": CommandKind.WRITE_TREE,
    "status": CommandKind.STATUS,
    "log": CommandKind.LOG,
    "diff": CommandKind.DIFF,
    "show": CommandKind.SHOW,
    "blame": CommandKind.BLAME,
    "grep": CommandKind.GREP,
    "describe": CommandKind.DESCRIBE,
    "shortlog": CommandKind.SHORTLOG,
    "ls-files": CommandKind.LS_FILES,
}

MUTATING_KINDS: frozenset[CommandKind] = frozenset(
    {
        CommandKind.ADD,
        CommandKind.APPLY,
        CommandKind.BISECT,
        CommandKind.BRANCH,
        CommandKind.CHECKOUT,
        CommandKind.CHERRY_PICK,
        CommandKind.CLEAN,
        CommandKind.CLONE,
        CommandKind.COMMIT,
        CommandKind.FETCH,
        CommandKind.FILTER_BRANCH,
        CommandKind.FSCK,
        CommandKind.GC,
        CommandKind.INIT,
        CommandKind.MERGE,
        CommandKind.MV,
        CommandKind.PULL,
        CommandKind.PUSH,
        CommandKind.REBASE,
        CommandKind.REMOTE,
        CommandKind.RESET,
        CommandKind.RESTORE,
        CommandKind.RM,
        CommandKind.STASH,
        CommandKind.SUBMODULE,
        CommandKind.SWITCH,
        CommandKind.TAG,
        CommandKind.UPDATE_INDEX,
        CommandKind.UPDATE_REF,
        CommandKind.WRITE_TREE,
    }
)

_StateT = TypeVar("_StateT", bound=CommandState)


def known_verbs() -> list[str]:
    """Return the git spellings recognised by :func:`classify_command`."""

    return sorted(_VERBS)


def classify_command(raw_command: str) -> CommandKind:
    """Classify an invocation by its first whitespace-separated token.

    Empty input and unknown verbs yield ``CommandKind.UNRECOGNIZED``.
    """

    tokens = raw_command.split(None, 1) if raw_command else []
    if not tokens:
        return CommandKind.UNRECOGNIZED
    return _VERBS.get(tokens[0], CommandKind.UNRECOGNIZED)


def is_mutating(kind: CommandKind) -> bool:
    return kind in MUTATING_KINDS


def filter_mutating(records: Iterable[_StateT]) -> list[_StateT]:
    """Keep the records whose command kind alters repository state, in order."""

    return [record for record in records if is_mutating(record.command_kind)]


__all__ = [
    "MUTATING_KINDS",
    "classify_command",
    "filter_mutating",
    "is_mutating",
    "known_verbs",
]
