from __future__ import annotations

# git_todo/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator
import os
import yaml

from .errors import StoragePathError
from .providers import git_provider

# DB path resolution order:
# 1) explicit db_path argument (CLI --db-path)
# 2) env GIT_TODO_DB_PATH
# 3) db_path from the YAML config (--config, env GIT_TODO_CONFIG, <git-dir>/info/todo.yaml)
# 4) fallback: <git-dir>/info/todo.sqlite
DB_FILE_NAME = "todo.sqlite"
CONFIG_FILE_NAME = "todo.yaml"


def _default_config_path() -> str:
    return os.path.join(git_provider.get_git_dir(), "info", CONFIG_FILE_NAME)


def read_config_yaml(config_path: str | None = None) -> dict:
    cfg_path = config_path or os.environ.get("GIT_TODO_CONFIG") or _default_config_path()
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        out = {}
        for k in ("db_path", "log_level"):
            v = cfg.get(k)
            if isinstance(v, str) and v.strip():
                out[k] = v.strip()
        return out
    except Exception:
        return {}


def get_db_path(db_path: str | None = None, config_path: str | None = None) -> str:
    env_path = os.environ.get("GIT_TODO_DB_PATH")

    if db_path:
        path = db_path
    elif env_path:
        path = env_path
    else:
        cfg_db = read_config_yaml(config_path).get("db_path")
        path = cfg_db or os.path.join(git_provider.get_git_dir(), "info", DB_FILE_NAME)

    # make sure the parent directory exists (.git/info is optional in fresh clones)
    dirn = os.path.dirname(path) or "."
    try:
        os.makedirs(dirn, exist_ok=True)
    except OSError as e:
        raise StoragePathError(f"cannot create database directory {dirn}: {e.strerror or e}") from e
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open the todo database for one invocation and always close it.
    Uses the explicit db_path when given, otherwise get_db_path().
    Rows come back as sqlite3.Row.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        isolation_level=None,
    )
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()
