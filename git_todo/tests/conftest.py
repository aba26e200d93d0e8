import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "todo_test.sqlite"
    # Point git_todo to this temp DB
    os.environ["GIT_TODO_DB_PATH"] = str(path)
    from git_todo.db import get_conn
    from git_todo.repository import todo_repo
    with get_conn(str(path)) as conn:
        todo_repo.ensure_schema(conn)
    return str(path)


@pytest.fixture()
def conn(tmp_db_path):
    from git_todo.db import get_conn
    with get_conn(tmp_db_path) as c:
        yield c


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path, monkeypatch):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    monkeypatch.setenv("GIT_TODO_DB_PATH", tmp_db_path)
    monkeypatch.delenv("GIT_TODO_CONFIG", raising=False)
    c = sqlite3.connect(tmp_db_path)
    try:
        c.execute("DELETE FROM todos")
        c.commit()
    finally:
        c.close()
    yield


@pytest.fixture()
def on_branch(monkeypatch, tmp_path):
    """Pretend HEAD points at the given branch without running git."""
    from git_todo.providers import git_provider

    git_dir = tmp_path / "fake_git"
    git_dir.mkdir(exist_ok=True)
    monkeypatch.setattr(git_provider, "get_git_dir", lambda: str(git_dir))

    def _set(name: str):
        monkeypatch.setattr(git_provider, "get_current_branch", lambda: name)
        return git_dir
    return _set
