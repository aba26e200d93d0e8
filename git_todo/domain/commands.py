from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ..errors import CommandError

ALL_BRANCHES_FLAGS = ("-a", "--all", "--all-branches")
HELP_FLAGS = ("-h", "--help")
DONE_WORDS = ("done", "-")

_ORDINAL_RE = re.compile(r"[+-]?[0-9]+")

USAGE = """\
usage: git todo [--config PATH] [--db-path PATH] [--verbose] [<args>]

  git todo                       list todos on the current branch
  git todo -a | --all | --all-branches
                                 list todos on every branch (* marks the current one)
  git todo <some text ...>       add a todo to the current branch
  git todo done <n>              mark todo <n> of the current branch as done
  git todo done <branch>:<n>     mark todo <n> of <branch> as done
  git todo - <n>                 same as 'done <n>'
  git todo -h | --help           show this message

Ordinals are positions in the current listing and shift after every 'done'.
"""


class ListCommand(BaseModel):
    kind: Literal["list"] = "list"


class ListAllCommand(BaseModel):
    kind: Literal["list_all"] = "list_all"


class AddCommand(BaseModel):
    kind: Literal["add"] = "add"
    content: str


class DoneCommand(BaseModel):
    kind: Literal["done"] = "done"
    ordinal: int
    branch: str | None = None  # None = current branch


class HelpCommand(BaseModel):
    kind: Literal["help"] = "help"


Command = Annotated[
    Union[ListCommand, ListAllCommand, AddCommand, DoneCommand, HelpCommand],
    Field(discriminator="kind"),
]


def _parse_done_target(arg: str) -> DoneCommand:
    branch, sep, index = arg.partition(":")
    if not sep:
        branch, index = None, arg
    else:
        branch = branch.strip()
        if not branch:
            raise CommandError(f"missing branch in '{arg}'")
    if not _ORDINAL_RE.fullmatch(index):
        raise CommandError(f"invalid done index: '{index}'")
    ordinal = int(index)
    return DoneCommand(ordinal=ordinal, branch=branch)


def parse_command(words: list[str]) -> Command:
    """Decode the argument vector (program name already stripped) into one command."""
    if not words:
        return ListCommand()
    if len(words) == 1 and words[0] in ALL_BRANCHES_FLAGS:
        return ListAllCommand()
    if words[0] in DONE_WORDS:
        if len(words) < 2:
            raise CommandError("missing done index")
        return _parse_done_target(words[1])
    if words[0] in HELP_FLAGS:
        return HelpCommand()
    content = " ".join(words).strip()
    if not content:
        raise CommandError("empty todo content")
    return AddCommand(content=content)
