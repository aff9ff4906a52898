"""A listening server that multiplexes several client connections."""

from __future__ import annotations

import select
import socket
from typing import Optional

from .connection import Connection


class ServerError(Exception):
    """Raised when the server is used in a way it does not allow."""


class Server:
    """Listens on a port and tracks registered client connections."""

    def __init__(self, port: int) -> None:
        """Bind and listen on ``port``; on failure the server is not ready."""
        self.connections: list[Connection] = []
        self._pending: Optional[socket.socket] = None
        self._sock: Optional[socket.socket] = None
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(("", port))
            if sock.getsockname()[1] != port:
                sock.close()
                return
            sock.listen(5)
        except (OSError, OverflowError):
            sock.close()
            return
        self._sock = sock

    def is_ready(self) -> bool:
        """Return True if the server is listening."""
        return self._sock is not None

    def wait_for_activity(self) -> Optional[Connection]:
        """Block until something happens.

        Returns the registered connection that has data to read, or None
        when a new client is waiting to be registered.
        """
        if self._sock is None:
            raise ServerError("waitForActivity: server not opened")
        readable, _, _ = select.select(
            [self._sock, *(conn.fileno() for conn in self.connections)], [], []
        )
        if self._sock in readable:
            try:
                new_socket, _ = self._sock.accept()
            except OSError as exc:
                raise ServerError("waitForActivity: accept returned error") from exc
            if self._pending is not None:
                new_socket.close()
                raise ServerError(
                    "waitForActivity: a previous connection is waiting to be registered"
                )
            self._pending = new_socket
            return None
        ready = set(readable)
        for conn in self.connections:
            if conn.fileno() in ready:
                return conn
        raise ServerError("waitForActivity: could not find registered connection")

    def register_connection(self, connection: Connection) -> None:
        """Attach the waiting client socket to ``connection`` and track it."""
        if connection.fileno() != -1:
            raise ServerError("registerConnection: connection is busy")
        if self._pending is None:
            raise ServerError("registerConnection: no client is trying to connect")
        connection.attach(self._pending)
        self.connections.append(connection)
        self._pending = None

    def deregister_connection(self, connection: Connection) -> None:
        """Stop tracking ``connection`` and close it."""
        self.connections = [c for c in self.connections if c is not connection]
        connection.close()

    def close(self) -> None:
        """Close the listening socket and every tracked connection."""
        for conn in self.connections:
            conn.close()
        self.connections = []
        if self._pending is not None:
            self._pending.close()
            self._pending = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "Server":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()