"""Newsgroup articles and their JSON form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass
class Article:
    """An article; ``id`` is -1 until a database assigns one."""

    title: str
    author: str
    body: str
    id: int = -1

    def to_json(self) -> dict[str, Any]:
        """Return the article as a JSON-ready dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "body": self.body,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Article":
        """Build an article from a dictionary made by :meth:`to_json`."""
        return cls(
            title=data["title"],
            author=data["author"],
            body=data["body"],
            id=data["id"],
        )