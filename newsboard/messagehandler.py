"""Sending and receiving protocol codes, numbers and strings over a connection."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Protocol as TypingProtocol

from .connection import ConnectionClosedError
from .logger import log
from .protocol import Protocol, from_code, to_code, to_string

ONE_INDEXING = 1


class Status(IntEnum):
    """Outcome of a protocol exchange."""

    PROTOCOL_VIOLATION = 0
    CONNECTION_CLOSED = 1
    FAILED_TRANSFER = 2
    INVALID_ARGUMENTS = 3
    DATABASE_ERROR = 4
    SUCCESS = 5


class MessageError(Exception):
    """Raised when a message cannot be sent or received; carries a Status."""

    def __init__(self, status: Status, message: str = "") -> None:
        super().__init__(message or status.name)
        self.status = status


class _ByteChannel(TypingProtocol):
    def is_connected(self) -> bool: ...

    def write(self, value: int) -> None: ...

    def read(self) -> int: ...


def _labelled(label: str) -> str:
    return "= " if label == "" else f"[{label}] = "


class MessageHandler:
    """Encodes and decodes protocol messages on a byte connection."""

    def __init__(self, connection: Optional[_ByteChannel] = None) -> None:
        self.connection = connection

    def send_protocol(self, protocol: Protocol) -> None:
        """Send a single protocol code."""
        log("NETWORK", f"Sent protocol {to_string(protocol)}")
        self.send_byte(to_code(protocol))

    def send_int_parameter(self, value: int, label: str = "") -> None:
        """Send a number parameter: PAR_NUM followed by four big-endian bytes."""
        self.send_protocol(Protocol.PAR_NUM)
        self._send_int(value, label)

    def send_string_parameter(self, value: str, label: str = "") -> None:
        """Send a string parameter: PAR_STRING, its byte length, then its bytes."""
        data = value.encode("utf-8")
        self.send_protocol(Protocol.PAR_STRING)
        self._send_int(len(data), "# of chars")
        for byte in data:
            self.send_byte(byte)
        log("NETWORK", f"Sent string {_labelled(label)}{value}")

    def receive_protocol(self, expected: Optional[Protocol] = None) -> Protocol:
        """Receive a protocol code; if ``expected`` is given, it must match."""
        protocol = from_code(self.receive_byte())
        log("NETWORK", f"Received protocol {to_string(protocol)}")
        if expected is not None and protocol != expected:
            raise MessageError(
                Status.PROTOCOL_VIOLATION,
                f"expected {to_string(expected)}, got {to_string(protocol)}",
            )
        return protocol

    def receive_int_parameter(self) -> int:
        """Receive a number parameter."""
        self.receive_protocol(Protocol.PAR_NUM)
        return self._receive_int()

    def receive_string_parameter(self) -> str:
        """Receive a string parameter of at least one byte."""
        self.receive_protocol(Protocol.PAR_STRING)
        length = self._receive_int()
        if length < 1:
            raise MessageError(Status.INVALID_ARGUMENTS, "empty string parameter")
        data = bytes(self.receive_byte() for _ in range(length))
        text = data.decode("utf-8", errors="replace")
        log("NETWORK", f"Received string {text}")
        return text

    def send_byte(self, value: int, tries: int = 1) -> None:
        """Write one byte, retrying up to ``tries`` times."""
        if self.connection is None or not self.connection.is_connected():
            raise MessageError(Status.CONNECTION_CLOSED)
        for _ in range(tries):
            try:
                self.connection.write(value & 0xFF)
                return
            except ConnectionClosedError:
                continue
        raise MessageError(Status.FAILED_TRANSFER)

    def receive_byte(self, tries: int = 1) -> int:
        """Read one byte, retrying up to ``tries`` times."""
        if self.connection is None or not self.connection.is_connected():
            raise MessageError(Status.CONNECTION_CLOSED)
        for _ in range(tries):
            try:
                return self.connection.read()
            except ConnectionClosedError:
                continue
        raise MessageError(Status.FAILED_TRANSFER)

    def _send_int(self, value: int, label: str = "") -> None:
        value &= 0xFFFFFFFF
        for byte in value.to_bytes(4, "big"):
            self.send_byte(byte)
        log("NETWORK", f"Sent int {_labelled(label)}{value}")

    def _receive_int(self) -> int:
        value = int.from_bytes(bytes(self.receive_byte() for _ in range(4)), "big")
        log("NETWORK", f"Received int {value}")
        return value