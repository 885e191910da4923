"""Environment helpers for git subprocesses."""

from __future__ import annotations

import os
from typing import Mapping

# Leaking the wrapper's virtualenv into git would change which interpreter
# python-based hooks pick up.
_SANITIZED_VARS = {
    "PYTHONHOME",
    "PYTHONPATH",
    "VIRTUAL_ENV",
    "PIP_RESPECT_VIRTUALENV",
}

# Read-only queries must not take the index lock or prompt for credentials.
INTROSPECTION_ENV = {
    "GIT_OPTIONAL_LOCKS": "0",
    "GIT_TERMINAL_PROMPT": "0",
}


def sanitize_environment(additional: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return a copy of ``os.environ`` suitable for spawning git."""

    env = dict(os.environ)
    for key in _SANITIZED_VARS:
        env.pop(key, None)
    if additional:
        env.update(additional)
    return env


def introspection_environment() -> dict[str, str]:
    return sanitize_environment(INTROSPECTION_ENV)


__all__ = ["INTROSPECTION_ENV", "introspection_environment", "sanitize_environment"]
