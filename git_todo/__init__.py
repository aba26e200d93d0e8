"""Per-branch todo list for git working copies."""

__version__ = "0.1.0"
