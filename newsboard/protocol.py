"""Command, answer, parameter and error codes of the news protocol."""

from __future__ import annotations

from enum import IntEnum


class Protocol(IntEnum):
    """Every code that can appear on the wire."""

    UNDEFINED = 0

    # Command codes, client -> server
    COM_LIST_NG = 1
    COM_CREATE_NG = 2
    COM_DELETE_NG = 3
    COM_LIST_ART = 4
    COM_CREATE_ART = 5
    COM_DELETE_ART = 6
    COM_GET_ART = 7
    COM_END = 8
    COM_CHANGE_DATABASE = 9

    # Answer codes, server -> client
    ANS_LIST_NG = 20
    ANS_CREATE_NG = 21
    ANS_DELETE_NG = 22
    ANS_LIST_ART = 23
    ANS_CREATE_ART = 24
    ANS_DELETE_ART = 25
    ANS_GET_ART = 26
    ANS_END = 27
    ANS_ACK = 28
    ANS_NAK = 29
    ANS_CHANGE_DATABASE = 30

    # Parameters
    PAR_STRING = 40
    PAR_NUM = 41

    # Error codes
    ERR_NG_ALREADY_EXISTS = 50
    ERR_NG_DOES_NOT_EXIST = 51
    ERR_ART_DOES_NOT_EXIST = 52
    ERR_DATABASE_DOES_NOT_EXIST = 53


def to_code(protocol: Protocol) -> int:
    """Return the byte value sent on the wire for ``protocol``."""
    return int(protocol)


def from_code(code: int) -> Protocol:
    """Return the protocol for a byte value, or UNDEFINED if none matches."""
    try:
        return Protocol(code)
    except ValueError:
        return Protocol.UNDEFINED


def to_string(protocol: Protocol) -> str:
    """Return the symbolic name of ``protocol``."""
    return protocol.name


def from_string(name: str) -> Protocol:
    """Return the protocol with the given name, or UNDEFINED if none matches."""
    return Protocol.__members__.get(name, Protocol.UNDEFINED)