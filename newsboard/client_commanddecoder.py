"""Interactive command reader for the news client."""

from __future__ import annotations

import re
import sys
from enum import Enum
from typing import Callable, Optional, Sequence, TextIO

from .client_commandhandler import ClientCommandHandler
from .messagehandler import ONE_INDEXING, MessageError, Status

_INTEGER_PREFIX = re.compile(r"\s*[+-]?\d+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class InputStatus(Enum):
    """Why a value typed by the user was refused."""

    EMPTY_INPUT = "Error Empty Input, Type again"
    EXIT = "Exiting"
    ID_TOO_BIG_INDEX = f"Please input Id bigger than {ONE_INDEXING - 1}"
    ID_TOO_BIG = "Try inputing smaller number"
    ID_NOT_NUMBER = "Id needs to be a number"


class InputAborted(Exception):
    """Raised when the user types ``exit`` or the input ends while a value is read."""

    def __init__(self, status: InputStatus, message: str = "") -> None:
        super().__init__(message or status.value)
        self.status = status


_CONNECTION_ERRORS = {
    Status.PROTOCOL_VIOLATION: "Error protocol violation",
    Status.CONNECTION_CLOSED: "Error Connection is closed",
    Status.FAILED_TRANSFER: "Error Failed transfer",
    Status.INVALID_ARGUMENTS: "Error Invalid arguments",
    Status.SUCCESS: "Should not come here!!! ",
}

_HELP_LINES = (
    "List of commands: ",
    "List newsgroups: LIST_NG",
    "Create a newsgroup: CREATE_NG ",
    "Delete a newsgroup: DELETE_NG ",
    "List articles in newsgroup: LIST_ART",
    "Create an article in newsgroup: CREATE_ART",
    "Delete an article: DELETE_ART",
    "Get an article: GET_ART",
    "change database: CHANGE_DATABASE",
)


def _parse_int(text: str) -> Optional[int]:
    """Read a leading 32-bit integer, as the command line does; None if there is none."""
    match = _INTEGER_PREFIX.match(text)
    if match is None:
        return None
    value = int(match.group())
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


class CommandDecoder:
    """Reads commands and their arguments from a text stream and prints replies."""

    def __init__(
        self, handler: ClientCommandHandler, out: Optional[TextIO] = None
    ) -> None:
        self.handler = handler
        self.out = sys.stdout if out is None else out
        self._commands: dict[str, Callable[[TextIO], Sequence[str]]] = {
            "list_ng": self._list_groups,
            "create_ng": self._create_group,
            "delete_ng": self._delete_group,
            "list_art": self._list_articles,
            "create_art": self._create_article,
            "delete_art": self._delete_article,
            "get_art": self._get_article,
            "change_database": self._change_database,
        }

    def _say(self, text: str = "") -> None:
        print(text, file=self.out)

    def decode(self, stream: TextIO) -> bool:
        """Read and carry out one command; return False when the session should end."""
        line = stream.readline()
        if not line:
            self._say("STREAM FAIL")
            return False
        command = "".join(line.split()).lower()
        if command == "exit":
            return False
        if command == "help_com":
            self.help()
            return True
        action = self._commands.get(command)
        if action is None:
            self._say("FAIL! no such command exists, type help_com for command list")
            return True
        try:
            reply = action(stream)
        except InputAborted:
            return True
        except MessageError as exc:
            self._print_connection_error(exc.status)
            return True
        self.print_reply(reply)
        return True

    def read_input_string(self, stream: TextIO) -> str:
        """Read a non-empty line; raise InputAborted on ``exit`` or end of input."""
        while True:
            line = stream.readline()
            if not line:
                raise InputAborted(InputStatus.EXIT, "end of input")
            text = line[:-1] if line.endswith("\n") else line
            if not text:
                self._say(InputStatus.EMPTY_INPUT.value)
                continue
            if text == "exit":
                self._say(InputStatus.EXIT.value)
                raise InputAborted(InputStatus.EXIT)
            return text

    def read_input_id(self, stream: TextIO) -> int:
        """Read an index of at least one, asking again until one is given."""
        while True:
            value = _parse_int(self.read_input_string(stream))
            if value is None:
                self._say(InputStatus.ID_NOT_NUMBER.value)
                continue
            if value < ONE_INDEXING:
                self._say(InputStatus.ID_TOO_BIG_INDEX.value)
                continue
            return value

    def print_reply(self, reply: Sequence[str]) -> None:
        """Print the lines of a server reply."""
        self._say("Reply from server: ")
        for line in reply:
            self._say(line)
        self._say("")

    def help(self) -> None:
        """Print the list of commands."""
        for line in _HELP_LINES:
            self._say(line)

    def _print_connection_error(self, status: Status) -> None:
        message = _CONNECTION_ERRORS.get(status)
        if message is not None:
            self._say(message)

    def _ask_string(self, stream: TextIO, prompt: str) -> str:
        self._say(prompt)
        return self.read_input_string(stream)

    def _ask_id(self, stream: TextIO, prompt: str) -> int:
        self._say(prompt)
        return self.read_input_id(stream)

    def _list_groups(self, stream: TextIO) -> Sequence[str]:
        return self.handler.list_groups()

    def _create_group(self, stream: TextIO) -> Sequence[str]:
        title = self._ask_string(
            stream,
            "Type the name of the newsgroup you want to create (or type exit): ",
        )
        return self.handler.create_group(title)

    def _delete_group(self, stream: TextIO) -> Sequence[str]:
        group_id = self._ask_id(
            stream,
            "Type the Index number of the newsgroup you want to delete (or type exit): ",
        )
        return self.handler.delete_group(group_id)

    def _list_articles(self, stream: TextIO) -> Sequence[str]:
        group_id = self._ask_id(
            stream,
            "Type the Index number of the newsgroup you want to see (or type exit): ",
        )
        return self.handler.list_articles(group_id)

    def _create_article(self, stream: TextIO) -> Sequence[str]:
        group_id = self._ask_id(
            stream,
            "Type the Index number of the newsgroup, where you want your article "
            "created (or type exit): ",
        )
        title = self._ask_string(stream, "Type the Title (or type exit): ")
        author = self._ask_string(stream, "Type the author (or type exit): ")
        text = self._ask_string(stream, "Type the text (or type exit): ")
        return self.handler.create_article(group_id, title, author, text)

    def _delete_article(self, stream: TextIO) -> Sequence[str]:
        group_id = self._ask_id(
            stream,
            "Type the Index number of the newsgroup, where article is located "
            "(or type exit): ",
        )
        article_id = self._ask_id(
            stream,
            "Type the Index number of the article to be deleted (or type exit): ",
        )
        return self.handler.delete_article(group_id, article_id)

    def _get_article(self, stream: TextIO) -> Sequence[str]:
        group_id = self._ask_id(
            stream,
            "Type the Index number of the newsgroup, where article is located "
            "(or type exit): ",
        )
        article_id = self._ask_id(
            stream,
            "Type the Index number of the article to be retreived (or type exit): ",
        )
        return self.handler.get_article(group_id, article_id)

    def _change_database(self, stream: TextIO) -> Sequence[str]:
        index = self._ask_id(
            stream, "Type the Index number of the database you want to switch to "
        )
        return self.handler.change_database(index)