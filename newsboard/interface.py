"""Switchable front to the memory and disk databases."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from .article import Article
from .database import Database, ListObject, MemoryDatabase
from .disk_database import DiskDatabase

MEMORY_STORAGE = 1
DISK_STORAGE = 2

_CHOICE_PROMPT = (
    "Enter which database you want to connect to : \n"
    "[1] Memory storage\n"
    "[2] Disk storage\n"
)


class Interface:
    """Holds a memory and a disk database and forwards calls to the active one."""

    def __init__(
        self, active_db: int = MEMORY_STORAGE, disk_root: Union[str, Path] = "Newsgroup"
    ) -> None:
        self._memory = MemoryDatabase()
        self._disk = DiskDatabase(disk_root)
        self._active = MEMORY_STORAGE if active_db == MEMORY_STORAGE else DISK_STORAGE

    @classmethod
    def prompt(
        cls,
        stream: Optional[TextIO] = None,
        out: Optional[TextIO] = None,
        disk_root: Union[str, Path] = "Newsgroup",
    ) -> "Interface":
        """Ask on ``out`` which database to use, reading the answer from ``stream``."""
        stream = sys.stdin if stream is None else stream
        out = sys.stdout if out is None else out
        while True:
            print(_CHOICE_PROMPT, end="", file=out, flush=True)
            line = stream.readline()
            if not line:
                raise EOFError("no database choice was given")
            tokens = line.split()
            try:
                choice = int(tokens[0]) if tokens else None
            except ValueError:
                choice = None
            if choice in (MEMORY_STORAGE, DISK_STORAGE):
                break
            print("Invalid input. Please enter 1 or 2.", file=out)
        if choice == MEMORY_STORAGE:
            print("Interface connected to DB 1 (Memory storage)", file=out)
        else:
            print("Interface connected to DB 2 (Disk storage)", file=out)
        return cls(choice, disk_root)

    @property
    def active_db(self) -> int:
        """Index of the database in use: 1 for memory, 2 for disk."""
        return self._active

    @property
    def database(self) -> Database:
        """The database in use."""
        return self._memory if self._active == MEMORY_STORAGE else self._disk

    def list_groups(self) -> list[ListObject]:
        return self.database.list_groups()

    def make_group(self, name: str) -> bool:
        return self.database.make_group(name)

    def remove_group(self, group_id: int) -> None:
        self.database.remove_group(group_id)

    def list_articles(self, group_id: int) -> list[ListObject]:
        return self.database.list_articles(group_id)

    def make_article(self, group_id: int, title: str, author: str, text: str) -> bool:
        return self.database.make_article(group_id, Article(title, author, text))

    def remove_article(self, group_id: int, article_id: int) -> None:
        self.database.remove_article(group_id, article_id)

    def get_article(self, group_id: int, article_id: int) -> Article:
        return self.database.get_article(group_id, article_id)

    def switch_database(self, index: int) -> bool:
        """Make database ``index`` active; return False if there is no such one."""
        if index not in (MEMORY_STORAGE, DISK_STORAGE):
            return False
        self._active = index
        return True