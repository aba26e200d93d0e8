from __future__ import annotations

# git_todo/services/todo_svc.py
import logging
from sqlite3 import Connection

from ..db import get_conn
from ..logs import OperationLogContext
from ..errors import CommandError
from ..domain.commands import (
    USAGE,
    AddCommand,
    Command,
    DoneCommand,
    HelpCommand,
    ListAllCommand,
    ListCommand,
)
from ..domain.ordinal import group_by_branch, number
from ..repository import todo_repo

logger = logging.getLogger(__name__)

ADDED_MSG = "Added it!"
NOTHING_ADDED_MSG = "Nothing is added!"
DONE_MSG = "DONE! Good Job!"
NOTHING_DONE_MSG = "Nothing is DONE!"


def ensure_todo_schema(conn: Connection):
    todo_repo.ensure_schema(conn)
    conn.commit()


def list_branch(conn: Connection, branch: str) -> list[str]:
    return [f"{n}  {t.content}" for n, t in number(todo_repo.list_by_branch(conn, branch))]


def list_all_branches(conn: Connection, current_branch: str) -> list[str]:
    lines: list[str] = []
    for branch, items in group_by_branch(todo_repo.list_all(conn)):
        marker = "*" if branch == current_branch else " "
        lines.append(f"{marker}{branch}")
        lines.extend(f"\t{n}  {t.content}" for n, t in items)
    return lines


def add_todo(conn: Connection, branch: str, content: str) -> int:
    branch = (branch or "").strip()
    content = (content or "").strip()
    if not branch:
        raise CommandError("missing branch")
    if not content:
        raise CommandError("empty todo content")
    affected = todo_repo.add(conn, branch, content)
    conn.commit()
    return affected


def done_todo(conn: Connection, branch: str, ordinal: int) -> int:
    if not (branch or "").strip():
        raise CommandError("missing branch")
    affected = todo_repo.delete_by_ordinal(conn, branch, ordinal)
    conn.commit()
    return affected


def execute(conn: Connection, command: Command, current_branch: str) -> list[str]:
    """Run one command against the store and return the lines to print."""
    if isinstance(command, HelpCommand):
        return USAGE.splitlines()

    log = OperationLogContext(command.kind.upper(), current_branch)
    log.set_payload(command.model_dump())
    try:
        if isinstance(command, ListCommand):
            lines = list_branch(conn, current_branch)
        elif isinstance(command, ListAllCommand):
            lines = list_all_branches(conn, current_branch)
        elif isinstance(command, AddCommand):
            affected = add_todo(conn, current_branch, command.content)
            log.set_after({"affected": affected})
            lines = [ADDED_MSG if affected > 0 else NOTHING_ADDED_MSG]
        elif isinstance(command, DoneCommand):
            branch = command.branch or current_branch
            log.set_entity("branch", branch)
            affected = done_todo(conn, branch, command.ordinal)
            log.set_after({"affected": affected})
            lines = [DONE_MSG if affected > 0 else NOTHING_DONE_MSG]
        else:
            raise CommandError(f"unsupported command: {command!r}")
    except Exception as e:
        log.write("ERROR", str(e))
        raise
    log.write("OK")
    return lines


def run(command: Command, current_branch: str, db_path: str | None = None) -> list[str]:
    """Open the store for this invocation, make sure the table exists, execute, close."""
    if isinstance(command, HelpCommand):
        return execute(None, command, current_branch)
    with get_conn(db_path) as conn:
        ensure_todo_schema(conn)
        logger.debug("store ready at %s", db_path or "default path")
        return execute(conn, command, current_branch)
