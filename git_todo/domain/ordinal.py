from __future__ import annotations

from itertools import groupby
from typing import Iterable, Sequence

from .models import Todo


def resolve_ordinal(todos: Sequence[Todo], ordinal: int) -> Todo | None:
    """
    Map a 1-based ordinal onto the snapshot of one branch.

    `todos` must be the branch's records in ascending id order (as returned by
    todo_repo.list_by_branch). Ordinals are never stored; they only mean
    something against the snapshot they were computed from.
    Returns None when the ordinal is outside [1, len(todos)].
    """
    if ordinal < 1 or ordinal > len(todos):
        return None
    return todos[ordinal - 1]


def number(todos: Iterable[Todo]) -> list[tuple[int, Todo]]:
    return list(enumerate(todos, start=1))


def group_by_branch(todos: Iterable[Todo]) -> list[tuple[str, list[tuple[int, Todo]]]]:
    """
    Split a branch-sorted sequence into (branch, numbered todos) groups.

    Groups are detected by a change of branch value, so the input has to be
    pre-sorted by branch (todo_repo.list_all); numbering restarts at 1 per group.
    """
    return [(branch, number(items)) for branch, items in groupby(todos, key=lambda t: t.branch)]
