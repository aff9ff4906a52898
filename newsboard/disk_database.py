"""A database kept as folders and JSON files on disk."""

from __future__ import annotations

import json
import shutil
from dataclasses import replace
from pathlib import Path
from typing import Iterator, Optional, Union

from .article import Article
from .database import Database, DatabaseError, ListObject, RemoveStatus
from .logger import log

GROUP_ID_FILE = "groupId_number.txt"
ARTICLE_ID_FILE = "articleID_number.txt"


def _split_name(name: str) -> Optional[tuple[str, str]]:
    """Split ``name_id`` at the last underscore."""
    head, sep, tail = name.rpartition("_")
    if not sep:
        return None
    return head, tail


def _parse_id(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


class DiskDatabase(Database):
    """Groups are folders named ``name_id``; articles are ``title_id.json`` files."""

    def __init__(self, root: Union[str, Path] = "Newsgroup") -> None:
        self.root = Path(root)
        if self.root.is_dir():
            self._next_group_id = self._read_number(self.root / GROUP_ID_FILE)
        else:
            self.root.mkdir(parents=True)
            self._next_group_id = 1
            self._save_group_id()

    @staticmethod
    def _read_number(path: Path, default: int = 1) -> int:
        try:
            value = _parse_id(path.read_text().strip())
        except OSError:
            log("DATABASE", f"{path.name} was not found")
            return default
        return default if value is None else value

    @staticmethod
    def _write_number(path: Path, value: int) -> None:
        try:
            path.write_text(str(value))
        except OSError:
            log("DATABASE", f"There was a problem saving {path.name}")

    def _save_group_id(self) -> None:
        self._write_number(self.root / GROUP_ID_FILE, self._next_group_id)

    def _group_folders(self) -> Iterator[tuple[Path, str, str]]:
        for entry in self.root.iterdir():
            if not entry.is_dir():
                continue
            parts = _split_name(entry.name)
            if parts is not None:
                yield entry, parts[0], parts[1]

    def _article_files(self, folder: Path) -> Iterator[tuple[Path, str, str]]:
        for entry in folder.iterdir():
            if entry.suffix != ".json":
                continue
            parts = _split_name(entry.stem)
            if parts is not None:
                yield entry, parts[0], parts[1]

    def _find_group(self, group_id: int) -> Optional[Path]:
        wanted = str(group_id)
        return next(
            (folder for folder, _, id_text in self._group_folders() if id_text == wanted),
            None,
        )

    def _find_article(self, group_id: int, article_id: int) -> Optional[Path]:
        folder = self._find_group(group_id)
        if folder is None:
            log("DATABASE", "Couldn't find group")
            return None
        wanted = str(article_id)
        for path, _, id_text in self._article_files(folder):
            if id_text == wanted:
                return path
        log("DATABASE", "Didn't find the article in the given group")
        return None

    def list_groups(self) -> list[ListObject]:
        groups = [
            ListObject(name, group_id)
            for _, name, id_text in self._group_folders()
            if (group_id := _parse_id(id_text)) is not None
        ]
        return sorted(groups, key=lambda group: group.id)

    def make_group(self, name: str) -> bool:
        if any(existing == name for _, existing, _ in self._group_folders()):
            log("DATABASE", "Group already exist")
            return False
        folder = self.root / f"{name}_{self._next_group_id}"
        try:
            folder.mkdir()
        except OSError:
            log("DATABASE", f"Could not create {folder}")
            return False
        self._next_group_id += 1
        self._save_group_id()
        self._write_number(folder / ARTICLE_ID_FILE, 1)
        return True

    def remove_group(self, group_id: int) -> None:
        folder = self._find_group(group_id)
        if folder is None:
            log("DATABASE", "No group was found")
            raise DatabaseError(RemoveStatus.GROUP_NOT_FOUND)
        try:
            shutil.rmtree(folder)
        except OSError as exc:
            log("DATABASE", "Error removing group")
            raise DatabaseError(RemoveStatus.UNKNOWN_ERROR) from exc

    def list_articles(self, group_id: int) -> list[ListObject]:
        folder = self._find_group(group_id)
        if folder is None:
            log("DATABASE", "No group was found")
            raise DatabaseError(RemoveStatus.GROUP_NOT_FOUND)
        articles = [
            ListObject(title, article_id)
            for _, title, id_text in self._article_files(folder)
            if (article_id := _parse_id(id_text)) is not None
        ]
        return sorted(articles, key=lambda article: article.id)

    def make_article(self, group_id: int, article: Article) -> bool:
        folder = self._find_group(group_id)
        if folder is None:
            log("DATABASE", "No group was found")
            return False
        article_id = self._read_number(folder / ARTICLE_ID_FILE)
        stored = replace(article, id=article_id)
        path = folder / f"{stored.title}_{article_id}.json"
        try:
            path.write_text(json.dumps(stored.to_json(), indent=4))
        except OSError:
            log("DATABASE", f"Error couldn't open file {path}")
            return False
        self._write_number(folder / ARTICLE_ID_FILE, article_id + 1)
        return True

    def remove_article(self, group_id: int, article_id: int) -> None:
        path = self._find_article(group_id, article_id)
        if path is None:
            raise DatabaseError(RemoveStatus.ARTICLE_NOT_FOUND)
        try:
            path.unlink()
        except OSError as exc:
            log("DATABASE", "Error removing article")
            raise DatabaseError(RemoveStatus.UNKNOWN_ERROR) from exc

    def get_article(self, group_id: int, article_id: int) -> Article:
        path = self._find_article(group_id, article_id)
        if path is None:
            raise DatabaseError(RemoveStatus.ARTICLE_NOT_FOUND)
        try:
            data = json.loads(path.read_text())
        except OSError as exc:
            log("DATABASE", "File was not found")
            raise DatabaseError(RemoveStatus.UNKNOWN_ERROR) from exc
        return Article.from_json(data)