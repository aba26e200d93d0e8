#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
git-todo: per-branch todo list stored next to the git metadata (SQLite)

Usage:
  git todo                      list todos on the current branch
  git todo -a                   list todos on all branches
  git todo <text ...>           add a todo (no quoting needed)
  git todo done [branch:]<n>    remove todo number <n>
  git todo -h                   help

Notes:
- Numbers are positions in the current listing; they shift after every `done`.
- Two terminals working on the same repository are not coordinated: a number
  read before someone else's `done` may point at a different todo afterwards.
- Errors are printed as one line on stderr and the exit status is 1.
"""

import argparse
import logging
import os
import sqlite3
import sys

from .db import get_db_path, read_config_yaml
from .errors import TodoError
from .logs import setup_logging
from .domain.commands import HelpCommand, parse_command
from .providers import git_provider
from .services import todo_svc

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git todo",
        description="Per-branch todo list (SQLite)",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("--config", default=None, help="YAML config (default <git-dir>/info/todo.yaml)")
    parser.add_argument("--db-path", default=None, help="SQLite file (default <git-dir>/info/todo.sqlite)")
    parser.add_argument("--verbose", action="store_true", help="debug logging on stderr")
    parser.add_argument("words", nargs=argparse.REMAINDER)
    return parser


def _configure_logging(args):
    if args.verbose:
        setup_logging(logging.DEBUG)
        return
    level = None
    if args.config or os.environ.get("GIT_TODO_CONFIG"):
        level = read_config_yaml(args.config).get("log_level")
    setup_logging(level or logging.WARNING)


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    _configure_logging(args)

    command = parse_command(unknown + args.words)
    if isinstance(command, HelpCommand):
        for line in todo_svc.run(command, ""):
            print(line)
        return 0

    branch = git_provider.get_current_branch()
    if not args.verbose:
        # inside a work tree now, so the default <git-dir>/info/todo.yaml is reachable
        level = read_config_yaml(args.config).get("log_level")
        if level:
            setup_logging(level)
    logger.debug("current branch: %s, command: %s", branch, command.kind)
    db_path = get_db_path(args.db_path, args.config)
    logger.debug("database: %s", db_path)
    for line in todo_svc.run(command, branch, db_path):
        print(line)
    return 0


def main(argv: list[str] | None = None):
    try:
        return run(argv)
    except (TodoError, sqlite3.Error) as e:
        raise SystemExit(str(e))


if __name__ == "__main__":
    sys.exit(main())
