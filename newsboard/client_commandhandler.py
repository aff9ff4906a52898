"""Client side of the news protocol: sends commands and turns answers into text."""

from __future__ import annotations

from .messagehandler import MessageError, MessageHandler, Status
from .protocol import Protocol, to_string

NO_NEWSGROUPS_MESSAGE = "Newsgroup does not exist"
NO_ARTICLES_MESSAGE = "No articles in newsgroups"


def _violation(message: str) -> MessageError:
    return MessageError(Status.PROTOCOL_VIOLATION, message)


class ClientCommandHandler(MessageHandler):
    """Sends each protocol command and returns the server's reply as lines of text.

    Every method raises MessageError when the exchange fails.
    """

    def _send_command(self, command: Protocol, *parameters: int | str) -> None:
        self.send_protocol(command)
        for parameter in parameters:
            if isinstance(parameter, str):
                self.send_string_parameter(parameter)
            else:
                self.send_int_parameter(parameter)
        self.send_protocol(Protocol.COM_END)

    def _acknowledged(self, answer: Protocol) -> bool:
        """Receive ``answer`` and then ACK (True) or NAK (False)."""
        self.receive_protocol(answer)
        reply = self.receive_protocol()
        if reply == Protocol.ANS_ACK:
            return True
        if reply == Protocol.ANS_NAK:
            return False
        raise _violation(f"expected ANS_ACK or ANS_NAK, got {to_string(reply)}")

    def _rejection(self, known: dict[Protocol, str]) -> str:
        """Receive the error code after a NAK and return its message."""
        try:
            error = self.receive_protocol()
        except MessageError as exc:
            raise _violation("no error code after ANS_NAK") from exc
        try:
            return known[error]
        except KeyError:
            raise _violation(f"unexpected error code {to_string(error)}") from None

    def _finish(self, reply: list[str]) -> list[str]:
        self.receive_protocol(Protocol.ANS_END)
        return reply

    def _receive_pairs(self, count: int, empty_message: str) -> list[str]:
        pairs = []
        for _ in range(count):
            item_id = self.receive_int_parameter()
            name = self.receive_string_parameter()
            pairs.append(f"{item_id} {name}")
        return pairs or [empty_message]

    def list_groups(self) -> list[str]:
        """List the newsgroups as ``"<id> <name>"`` lines."""
        self._send_command(Protocol.COM_LIST_NG)
        self.receive_protocol(Protocol.ANS_LIST_NG)
        count = self.receive_int_parameter()
        return self._finish(self._receive_pairs(count, NO_NEWSGROUPS_MESSAGE))

    def create_group(self, title: str) -> list[str]:
        """Create a newsgroup called ``title``."""
        self._send_command(Protocol.COM_CREATE_NG, title)
        if self._acknowledged(Protocol.ANS_CREATE_NG):
            reply = ["News group succesfully created"]
        else:
            reply = [
                self._rejection(
                    {Protocol.ERR_NG_ALREADY_EXISTS: "News group already exist "}
                )
            ]
        return self._finish(reply)

    def delete_group(self, group_id: int) -> list[str]:
        """Delete newsgroup ``group_id``."""
        self._send_command(Protocol.COM_DELETE_NG, group_id)
        if self._acknowledged(Protocol.ANS_DELETE_NG):
            reply = ["News group succesfully deleted"]
        else:
            reply = [
                self._rejection({Protocol.ERR_NG_DOES_NOT_EXIST: NO_NEWSGROUPS_MESSAGE})
            ]
        return self._finish(reply)

    def list_articles(self, group_id: int) -> list[str]:
        """List the articles of newsgroup ``group_id`` as ``"<id> <title>"`` lines."""
        self._send_command(Protocol.COM_LIST_ART, group_id)
        if self._acknowledged(Protocol.ANS_LIST_ART):
            count = self.receive_int_parameter()
            reply = self._receive_pairs(count, NO_ARTICLES_MESSAGE)
        else:
            reply = [
                self._rejection({Protocol.ERR_NG_DOES_NOT_EXIST: NO_NEWSGROUPS_MESSAGE})
            ]
        return self._finish(reply)

    def create_article(
        self, group_id: int, title: str, author: str, text: str
    ) -> list[str]:
        """Create an article in newsgroup ``group_id``."""
        self._send_command(Protocol.COM_CREATE_ART, group_id, title, author, text)
        if self._acknowledged(Protocol.ANS_CREATE_ART):
            reply = ["Article succesfully created"]
        else:
            reply = [
                self._rejection({Protocol.ERR_NG_DOES_NOT_EXIST: NO_NEWSGROUPS_MESSAGE})
            ]
        return self._finish(reply)

    def delete_article(self, group_id: int, article_id: int) -> list[str]:
        """Delete article ``article_id`` from newsgroup ``group_id``."""
        self._send_command(Protocol.COM_DELETE_ART, group_id, article_id)
        if self._acknowledged(Protocol.ANS_DELETE_ART):
            reply = ["Article succesfully Deleted"]
        else:
            reply = [
                self._rejection(
                    {
                        Protocol.ERR_NG_DOES_NOT_EXIST: NO_NEWSGROUPS_MESSAGE,
                        Protocol.ERR_ART_DOES_NOT_EXIST: NO_ARTICLES_MESSAGE,
                    }
                )
            ]
        return self._finish(reply)

    def get_article(self, group_id: int, article_id: int) -> list[str]:
        """Fetch an article as title, author, a blank line and its text."""
        self._send_command(Protocol.COM_GET_ART, group_id, article_id)
        if self._acknowledged(Protocol.ANS_GET_ART):
            title = self.receive_string_parameter()
            author = self.receive_string_parameter()
            text = self.receive_string_parameter()
            reply = [title, author, " ", text]
        else:
            reply = [
                self._rejection(
                    {
                        Protocol.ERR_NG_DOES_NOT_EXIST: NO_NEWSGROUPS_MESSAGE,
                        Protocol.ERR_ART_DOES_NOT_EXIST: NO_ARTICLES_MESSAGE,
                    }
                )
            ]
        return self._finish(reply)

    def change_database(self, index: int) -> list[str]:
        """Ask the server to switch to database ``index``."""
        self._send_command(Protocol.COM_CHANGE_DATABASE, index)
        if self._acknowledged(Protocol.ANS_CHANGE_DATABASE):
            reply = ["Database changed"]
        else:
            reply = [
                self._rejection(
                    {Protocol.ERR_DATABASE_DOES_NOT_EXIST: "Database does not exist "}
                )
            ]
        return self._finish(reply)