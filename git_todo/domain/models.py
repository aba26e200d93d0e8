from __future__ import annotations

from sqlite3 import Row

from pydantic import BaseModel


class Todo(BaseModel):
    id: int
    branch: str
    content: str

    @classmethod
    def from_row(cls, row: Row) -> "Todo":
        return cls(id=row["id"], branch=row["branch"], content=row["content"])
