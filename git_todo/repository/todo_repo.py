from __future__ import annotations

from sqlite3 import Connection

from ..domain.models import Todo
from ..domain.ordinal import resolve_ordinal


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS todos (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            branch TEXT NOT NULL,
            content TEXT NOT NULL
        )
        """
    )


def add(conn: Connection, branch: str, content: str) -> int:
    cur = conn.execute(
        "INSERT INTO todos(branch, content) VALUES(?, ?)",
        (branch, content),
    )
    return cur.rowcount


def list_by_branch(conn: Connection, branch: str) -> list[Todo]:
    rows = conn.execute(
        "SELECT id, branch, content FROM todos WHERE branch=? ORDER BY id ASC",
        (branch,),
    ).fetchall()
    return [Todo.from_row(r) for r in rows]


def list_all(conn: Connection) -> list[Todo]:
    rows = conn.execute(
        "SELECT id, branch, content FROM todos ORDER BY branch ASC, id ASC"
    ).fetchall()
    return [Todo.from_row(r) for r in rows]


def delete_by_id(conn: Connection, todo_id: int) -> int:
    cur = conn.execute("DELETE FROM todos WHERE id=?", (todo_id,))
    return cur.rowcount


def delete_by_ordinal(conn: Connection, branch: str, ordinal: int) -> int:
    """Resolve `ordinal` against the branch's current snapshot, then delete by stable id."""
    todo = resolve_ordinal(list_by_branch(conn, branch), ordinal)
    if todo is None:
        return 0
    return delete_by_id(conn, todo.id)
