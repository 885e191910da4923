"""Data models for recorded git invocations."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommandKind(str, Enum):
    """Known git verbs. Anything else classifies as ``UNRECOGNIZED``."""

    ADD = "add"
    APPLY = "apply"
    BISECT = "bisect"
    BRANCH = "branch"
    CHECKOUT = "checkout"
    CHERRY_PICK = "cherry_pick"
    CLEAN = "clean"
    CLONE = "clone"
    COMMIT = "commit"
    FETCH = "fetch"
    FILTER_BRANCH = "filter_branch"
    FSCK = "fsck"
    GC = "gc"
    INIT = "init"
    MERGE = "merge"
    MV = "mv"
    PULL = "pull"
    PUSH = "push"
    REBASE = "rebase"
    REMOTE = "remote"
    RESET = "reset"
    RESTORE = "restore"
    RM = "rm"
    STASH = "stash"
    SUBMODULE = "submodule"
    SWITCH = "switch"
    TAG = "tag"
    UPDATE_INDEX = "update_index"
    UPDATE_REF = "update_ref"
    WRITE_TREE = "write_tree"

    STATUS = "status"
    LOG = "log"
    DIFF = "diff"
    SHOW = "show"
    BLAME = "blame"
    GREP = "grep"
    DESCRIBE = "describe"
    SHORTLOG = "shortlog"
    LS_FILES = "ls_files"

    UNRECOGNIZED = "unrecognized"


class CommandState(BaseModel):
    """Snapshot of one invocation before the store assigns identity."""

    model_config = ConfigDict(frozen=True)

    command_kind: CommandKind = Field(
        default=CommandKind.UNRECOGNIZED,
        description="Verb classified from the first token of the invocation.",
    )
    files_affected: tuple[str, ...] = Field(
        default=(),
        description="Tokens that existed on disk at capture time, in token order.",
    )
    current_branch: str = Field(default="", description="Output of git rev-parse --abbrev-ref HEAD.")
    current_commit: str = Field(default="", description="Output of git rev-parse HEAD.")
    raw_command: str = Field(default="", description="The invocation as typed, arguments joined by spaces.")

    @field_validator("command_kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value):
        if isinstance(value, CommandKind):
            return value
        try:
            return CommandKind(value)
        except ValueError:
            return CommandKind.UNRECOGNIZED

    @field_validator("files_affected", mode="before")
    @classmethod
    def _ensure_tuple(cls, value):
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(value)
        raise TypeError("files_affected must be a sequence of paths")


class HistoryRecord(CommandState):
    """A persisted, immutable history entry."""

    id: str = Field(..., description="Unique identifier assigned by the store.")
    created_at: datetime = Field(..., description="Persistence timestamp assigned by the store.")

    def format_line(self) -> str:
        """Return the ``<id> <raw_command> <created_at>`` listing line."""

        return f"{self.id} {self.raw_command} {self.created_at.isoformat()}"


__all__ = ["CommandKind", "CommandState", "HistoryRecord"]
