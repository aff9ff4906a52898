"""The news server: serves clients from a database, and its command."""

from __future__ import annotations

import re
import sys
from typing import Optional, Sequence

from .connection import Connection
from .interface import Interface
from .logger import set_log_level
from .messagehandler import MessageError
from .server import Server
from .servercommandhandler import ServerCommandHandler

USAGE = "Usage: newsserver port-number [logLevel]*"

_INTEGER_PREFIX = re.compile(r"\s*[+-]?\d+")


class _UsageError(ValueError):
    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class DatabaseServer(Server):
    """A server that answers every client command from an Interface."""

    def __init__(self, port: int, database: Optional[Interface] = None) -> None:
        """Listen on ``port``; without ``database``, ask on the console which to use."""
        super().__init__(port)
        self.database = Interface.prompt() if database is None else database
        self.handler = ServerCommandHandler(self.database)
        print(f"Database server initialized with port {port}")

    def start(self) -> None:
        """Serve connections until interrupted, if the server is ready."""
        if not self.is_ready():
            print("Database failed to start")
            return
        print("Database server is running")
        try:
            while True:
                self.serve_connection()
        except KeyboardInterrupt:
            pass
        print("Database server has closed")

    def serve_connection(self) -> None:
        """Wait for one event: a command from a client or a new client."""
        connection = self.wait_for_activity()
        if connection is not None:
            try:
                self.handler.process_request(connection)
            except MessageError:
                self.deregister_connection(connection)
                print("Client closed connection")
        else:
            self.register_connection(Connection.unopened())
            print("A new client connected")


def parse_arguments(argv: Sequence[str]) -> tuple[int, list[str]]:
    """Return the port and the log levels named on the command line."""
    if not argv:
        raise _UsageError(USAGE, 1)
    match = _INTEGER_PREFIX.match(argv[0])
    if match is None:
        raise _UsageError(f"Wrong port number. invalid value {argv[0]!r}", 2)
    port = int(match.group())
    if not -(2**31) <= port < 2**31:
        raise _UsageError(f"Wrong port number. {argv[0]} is out of range", 2)
    return port, list(argv[1:])


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the news server."""
    args = sys.argv[1:] if argv is None else argv
    try:
        port, levels = parse_arguments(args)
    except _UsageError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    for level in levels:
        print(level)
        set_log_level(level, True)
    with DatabaseServer(port) as server:
        server.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())