"""The newsgroup database interface and its in-memory implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import IntEnum

from .article import Article
from .logger import log


@dataclass(frozen=True)
class ListObject:
    """A name paired with its numeric id, as listed by a database."""

    name: str
    id: int

    def __str__(self) -> str:
        return f"{self.name} [{self.id}]"


class RemoveStatus(IntEnum):
    """Outcome of a database lookup or removal."""

    SUCCESS = 1
    GROUP_NOT_FOUND = 2
    ARTICLE_NOT_FOUND = 3
    UNKNOWN_ERROR = 4

    def __str__(self) -> str:
        return self.name


class DatabaseError(Exception):
    """Raised when a group or article cannot be found or changed."""

    def __init__(self, status: RemoveStatus, message: str = "") -> None:
        super().__init__(message or status.name)
        self.status = status


class Database(ABC):
    """Storage of newsgroups and the articles within them."""

    @abstractmethod
    def list_groups(self) -> list[ListObject]:
        """Return every group, ordered by id."""

    @abstractmethod
    def make_group(self, name: str) -> bool:
        """Create a group; return False if one with that name exists."""

    @abstractmethod
    def remove_group(self, group_id: int) -> None:
        """Remove a group and its articles; raise DatabaseError if it fails."""

    @abstractmethod
    def list_articles(self, group_id: int) -> list[ListObject]:
        """Return the titles and ids of a group's articles, ordered by id."""

    @abstractmethod
    def make_article(self, group_id: int, article: Article) -> bool:
        """Store a copy of ``article`` in a group; return False if it fails."""

    @abstractmethod
    def remove_article(self, group_id: int, article_id: int) -> None:
        """Remove an article; raise DatabaseError if it fails."""

    @abstractmethod
    def get_article(self, group_id: int, article_id: int) -> Article:
        """Return an article; raise DatabaseError if it cannot be found."""


@dataclass
class _Group:
    name: str
    articles: dict[int, Article] = field(default_factory=dict)


class MemoryDatabase(Database):
    """A database held in memory. Group and article ids are never reused."""

    def __init__(self) -> None:
        self._groups: dict[int, _Group] = {}
        self._next_group_id = 1
        self._next_article_id = 1

    def _group(self, group_id: int) -> _Group:
        try:
            return self._groups[group_id]
        except KeyError:
            log("DATABASE", f"Group with ID: {group_id} not found.")
            raise DatabaseError(
                RemoveStatus.GROUP_NOT_FOUND, f"Group with ID: {group_id} not found."
            ) from None

    def list_groups(self) -> list[ListObject]:
        return [
            ListObject(group.name, group_id)
            for group_id, group in sorted(self._groups.items())
        ]

    def make_group(self, name: str) -> bool:
        if any(group.name == name for group in self._groups.values()):
            log("DATABASE", "Group already exists")
            return False
        self._groups[self._next_group_id] = _Group(name)
        self._next_group_id += 1
        return True

    def remove_group(self, group_id: int) -> None:
        self._group(group_id)
        del self._groups[group_id]

    def list_articles(self, group_id: int) -> list[ListObject]:
        group = self._group(group_id)
        return [
            ListObject(article.title, article_id)
            for article_id, article in sorted(group.articles.items())
        ]

    def make_article(self, group_id: int, article: Article) -> bool:
        try:
            group = self._group(group_id)
        except DatabaseError:
            return False
        article_id = self._next_article_id
        group.articles[article_id] = replace(article, id=article_id)
        self._next_article_id += 1
        return True

    def remove_article(self, group_id: int, article_id: int) -> None:
        group = self._group(group_id)
        if article_id not in group.articles:
            message = (
                f"Article with ID: {article_id} not found in group with ID : {group_id}."
            )
            log("DATABASE", message)
            raise DatabaseError(RemoveStatus.ARTICLE_NOT_FOUND, message)
        del group.articles[article_id]

    def get_article(self, group_id: int, article_id: int) -> Article:
        group = self._group(group_id)
        try:
            return replace(group.articles[article_id])
        except KeyError:
            raise DatabaseError(RemoveStatus.ARTICLE_NOT_FOUND) from None