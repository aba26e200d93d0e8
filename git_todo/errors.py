from __future__ import annotations

# git_todo/errors.py
# Storage faults are plain sqlite3.Error and are not wrapped here.


class TodoError(Exception):
    """Base class for faults reported to the user as a single message."""


class CommandError(TodoError, ValueError):
    """Malformed command line: missing/non-numeric ordinal, empty content or branch."""


class BranchResolutionError(TodoError):
    """git could not tell us the current branch or the metadata directory."""


class StoragePathError(TodoError):
    """The database location cannot be created (parent is a file, permission denied)."""
