"""Locating programs and small decisions shared by the executor."""

from __future__ import annotations

import os

from .libstr import split_fields
from .state import Command

_STATUS_MAP = {3: 1, 132: 130}


def _exists(path: str) -> bool:
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def find_command_path(path_value: str, cmd: str) -> str | None:
    """Return the path to run ``cmd``, or None.

    ``cmd`` itself is used when it names an existing file; otherwise each
    directory of the colon-separated ``path_value`` is tried in order.
    """
    if _exists(cmd):
        return cmd
    for directory in split_fields(path_value, ":"):
        candidate = directory + "/" + cmd
        if _exists(candidate):
            return candidate
    return None


def final_status(ret: int) -> int:
    """Map the last internal result of a command line to its exit status."""
    return _STATUS_MAP.get(ret, ret)


def is_piped(command: Command) -> bool:
    """True when the command reads from or writes to a pipe."""
    return command.pipes_to_next or command.after_pipe