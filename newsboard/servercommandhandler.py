"""Server side of the news protocol: answers client commands from a database."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import suppress
from typing import Any, Callable, Optional

from .database import DatabaseError, RemoveStatus
from .interface import Interface
from .messagehandler import MessageError, MessageHandler, Status
from .protocol import Protocol, to_string


class CommandHandler(MessageHandler, ABC):
    """A message handler that serves each of the protocol's commands."""

    @abstractmethod
    def list_groups(self) -> None: ...

    @abstractmethod
    def create_group(self) -> None: ...

    @abstractmethod
    def delete_group(self) -> None: ...

    @abstractmethod
    def list_articles(self) -> None: ...

    @abstractmethod
    def create_article(self) -> None: ...

    @abstractmethod
    def delete_article(self) -> None: ...

    @abstractmethod
    def get_article(self) -> None: ...

    @abstractmethod
    def change_database(self) -> None: ...


class ServerCommandHandler(CommandHandler):
    """Reads one command from a connection and writes the answer.

    Every method raises MessageError when the exchange fails; the caller
    should then drop the connection.
    """

    def __init__(self, database: Interface, connection: Optional[Any] = None) -> None:
        super().__init__(connection)
        self.database = database

    def process_request(self, connection: Optional[Any] = None) -> None:
        """Serve one command, on ``connection`` if given."""
        if connection is not None:
            self.connection = connection
        protocol = self.receive_protocol()
        if protocol == Protocol.COM_CREATE_ART:
            # A failed article creation does not end the session.
            with suppress(MessageError):
                self.create_article()
            return
        actions: dict[Protocol, Callable[[], None]] = {
            Protocol.COM_LIST_NG: self.list_groups,
            Protocol.COM_CREATE_NG: self.create_group,
            Protocol.COM_DELETE_NG: self.delete_group,
            Protocol.COM_LIST_ART: self.list_articles,
            Protocol.COM_DELETE_ART: self.delete_article,
            Protocol.COM_GET_ART: self.get_article,
            Protocol.COM_CHANGE_DATABASE: self.change_database,
        }
        action = actions.get(protocol)
        if action is None:
            raise MessageError(
                Status.PROTOCOL_VIOLATION, f"unexpected command {to_string(protocol)}"
            )
        action()

    def _reject(self, error: Protocol) -> None:
        self.send_protocol(Protocol.ANS_NAK)
        self.send_protocol(error)

    def list_groups(self) -> None:
        self.receive_protocol(Protocol.COM_END)
        self.send_protocol(Protocol.ANS_LIST_NG)
        groups = self.database.list_groups()
        self.send_int_parameter(len(groups), "# of groups")
        for group in groups:
            self.send_int_parameter(group.id, "group ID")
            self.send_string_parameter(group.name, "group name")
        self.send_protocol(Protocol.ANS_END)

    def create_group(self) -> None:
        name = self.receive_string_parameter()
        self.receive_protocol(Protocol.COM_END)
        self.send_protocol(Protocol.ANS_CREATE_NG)
        if self.database.make_group(name):
            self.send_protocol(Protocol.ANS_ACK)
        else:
            self._reject(Protocol.ERR_NG_ALREADY_EXISTS)
        self.send_protocol(Protocol.ANS_END)

    def delete_group(self) -> None:
        group_id = self.receive_int_parameter()
        self.receive_protocol(Protocol.COM_END)
        self.send_protocol(Protocol.ANS_DELETE_NG)
        try:
            self.database.remove_group(group_id)
        except DatabaseError as exc:
            if exc.status is not RemoveStatus.GROUP_NOT_FOUND:
                raise MessageError(Status.DATABASE_ERROR, str(exc)) from exc
            self._reject(Protocol.ERR_NG_DOES_NOT_EXIST)
        else:
            self.send_protocol(Protocol.ANS_ACK)
        self.send_protocol(Protocol.ANS_END)

    def list_articles(self) -> None:
        group_id = self.receive_int_parameter()
        self.receive_protocol(Protocol.COM_END)
        self.send_protocol(Protocol.ANS_LIST_ART)
        try:
            articles = self.database.list_articles(group_id)
        except DatabaseError:
            self._reject(Protocol.ERR_NG_DOES_NOT_EXIST)
        else:
            self.send_protocol(Protocol.ANS_ACK)
            self.send_int_parameter(len(articles), "# of articles")
            for article in articles:
                self.send_int_parameter(article.id, "article ID")
                self.send_string_parameter(article.name, "article title")
        self.send_protocol(Protocol.ANS_END)

    def create_article(self) -> None:
        group_id = self.receive_int_parameter()
        title = self.receive_string_parameter()
        author = self.receive_string_parameter()
        text = self.receive_string_parameter()
        self.receive_protocol(Protocol.COM_END)
        self.send_protocol(Protocol.ANS_CREATE_ART)
        if self.database.make_article(group_id, title, author, text):
            self.send_protocol(Protocol.ANS_ACK)
        else:
            self._reject(Protocol.ERR_NG_DOES_NOT_EXIST)
        self.send_protocol(Protocol.ANS_END)

    def delete_article(self) -> None:
        group_id = self.receive_int_parameter()
        article_id = self.receive_int_parameter()
        self.receive_protocol(Protocol.COM_END)
        self.send_protocol(Protocol.ANS_DELETE_ART)
        try:
            self.database.remove_article(group_id, article_id)
        except DatabaseError as exc:
            if exc.status is RemoveStatus.GROUP_NOT_FOUND:
                self._reject(Protocol.ERR_NG_DOES_NOT_EXIST)
            elif exc.status is RemoveStatus.ARTICLE_NOT_FOUND:
                self._reject(Protocol.ERR_ART_DOES_NOT_EXIST)
        else:
            self.send_protocol(Protocol.ANS_ACK)
        self.send_protocol(Protocol.ANS_END)

    def get_article(self) -> None:
        group_id = self.receive_int_parameter()
        article_id = self.receive_int_parameter()
        self.receive_protocol(Protocol.COM_END)
        self.send_protocol(Protocol.ANS_GET_ART)
        try:
            article = self.database.get_article(group_id, article_id)
        except DatabaseError as exc:
            self._reject(Protocol.ERR_NG_DOES_NOT_EXIST)
            self.send_protocol(Protocol.ANS_END)
            raise MessageError(Status.DATABASE_ERROR, str(exc)) from exc
        self.send_protocol(Protocol.ANS_ACK)
        self.send_string_parameter(article.title, "article title")
        self.send_string_parameter(article.author, "article author")
        self.send_string_parameter(article.body, "article body")
        self.send_protocol(Protocol.ANS_END)

    def change_database(self) -> None:
        index = self.receive_int_parameter()
        self.receive_protocol(Protocol.COM_END)
        self.send_protocol(Protocol.ANS_CHANGE_DATABASE)
        if self.database.switch_database(index):
            self.send_protocol(Protocol.ANS_ACK)
        else:
            self._reject(Protocol.ERR_DATABASE_DOES_NOT_EXIST)
        self.send_protocol(Protocol.ANS_END)