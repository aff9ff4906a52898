"""A byte-oriented TCP connection."""

from __future__ import annotations

import socket
from typing import Optional


class ConnectionClosedError(Exception):
    """Raised when reading or writing on a closed connection."""


class ConnectionUsageError(Exception):
    """Raised when a connection that was never opened is used."""


class Connection:
    """A socket connection that reads and writes single bytes."""

    def __init__(self, host: str, port: int) -> None:
        """Connect to ``host`` on ``port``; on failure the connection is unopened."""
        self._sock: Optional[socket.socket] = None
        try:
            address = socket.gethostbyname(host)
        except OSError:
            return
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.connect((address, port))
        except (OSError, OverflowError):
            sock.close()
            return
        self._sock = sock

    @classmethod
    def from_socket(cls, sock: socket.socket) -> "Connection":
        """Wrap an already connected socket."""
        connection = cls.__new__(cls)
        connection._sock = sock
        return connection

    @classmethod
    def unopened(cls) -> "Connection":
        """Return a connection with no socket, to be attached later."""
        connection = cls.__new__(cls)
        connection._sock = None
        return connection

    def is_connected(self) -> bool:
        """Return True if the connection has a socket."""
        return self._sock is not None

    def write(self, value: int) -> None:
        """Write one byte."""
        if self._sock is None:
            raise ConnectionUsageError(
                "Write attempted on a not properly opened connection"
            )
        data = bytes([value])
        try:
            count = self._sock.send(data)
        except OSError as exc:
            raise ConnectionClosedError() from exc
        if count != 1:
            raise ConnectionClosedError()

    def read(self) -> int:
        """Read one byte."""
        if self._sock is None:
            raise ConnectionUsageError(
                "Read attempted on a not properly opened connection"
            )
        try:
            data = self._sock.recv(1)
        except OSError as exc:
            raise ConnectionClosedError() from exc
        if len(data) != 1:
            raise ConnectionClosedError()
        return data[0]

    def fileno(self) -> int:
        """Return the socket's file descriptor, or -1 when unopened."""
        return -1 if self._sock is None else self._sock.fileno()

    def attach(self, sock: socket.socket) -> None:
        """Give the connection a socket accepted by a server."""
        self._sock = sock

    def close(self) -> None:
        """Close the socket, if any."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()