from __future__ import annotations

import subprocess

from ..errors import BranchResolutionError


def _run_git(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git", *args],
        capture_output=True,
        text=True,
        check=False,
    )


def get_current_branch() -> str:
    """Name of the checked-out branch; fails on detached HEAD or outside a work tree."""
    try:
        out = _run_git("symbolic-ref", "--short", "HEAD")
    except OSError as e:
        raise BranchResolutionError(f"failed to get current branch: {e}") from e
    if out.returncode != 0:
        detail = out.stderr.strip() or f"exit status {out.returncode}"
        raise BranchResolutionError(
            f"failed to get current branch: 'git symbolic-ref --short HEAD': {detail}"
        )
    return out.stdout.strip()


def get_git_dir() -> str:
    try:
        out = _run_git("rev-parse", "--git-dir")
    except OSError as e:
        raise BranchResolutionError(f"failed to locate git directory: {e}") from e
    if out.returncode != 0:
        detail = out.stderr.strip() or f"exit status {out.returncode}"
        raise BranchResolutionError(f"failed to locate git directory: {detail}")
    return out.stdout.strip()
