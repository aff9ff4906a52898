"""The news client command."""

from __future__ import annotations

import re
import sys
from typing import Optional, Sequence, TextIO

from .client_commanddecoder import CommandDecoder
from .client_commandhandler import ClientCommandHandler
from .connection import Connection, ConnectionClosedError

USAGE = "Usage: newsclient host-name port-number"

_INTEGER_PREFIX = re.compile(r"\s*[+-]?\d+")


def _fail(message: str, code: int) -> SystemExit:
    print(message, file=sys.stderr)
    return SystemExit(code)


def connect(argv: Sequence[str]) -> Connection:
    """Open a connection to the host and port given as ``[host, port]``.

    Raises SystemExit with code 1 for bad usage, 2 for a bad port and
    3 when the connection cannot be made.
    """
    if len(argv) != 2:
        raise _fail(USAGE, 1)
    host, port_text = argv
    match = _INTEGER_PREFIX.match(port_text)
    if match is None:
        raise _fail(f"Wrong port number. invalid value {port_text!r}", 2)
    port = int(match.group())
    if not -(2**31) <= port < 2**31:
        raise _fail(f"Wrong port number. {port_text} is out of range", 2)
    connection = Connection(host, port)
    if not connection.is_connected():
        raise _fail("Connection attempt failed", 3)
    return connection


def run(
    connection: Connection,
    stream: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Read commands from ``stream`` and send them over ``connection``."""
    stream = sys.stdin if stream is None else stream
    out = sys.stdout if out is None else out
    print("Connected to server, To see commands type help_com ", end="", file=out)
    decoder = CommandDecoder(ClientCommandHandler(connection), out)
    while True:
        print("Type a command: ", file=out)
        try:
            if not decoder.decode(stream):
                break
        except ConnectionClosedError:
            print(" no reply from server. Exiting.", file=out)
            return 1
    print("\nexiting.", file=out)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the news client."""
    args = sys.argv[1:] if argv is None else argv
    connection = connect(args)
    with connection:
        return run(connection)


if __name__ == "__main__":
    sys.exit(main())