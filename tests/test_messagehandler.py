import pytest

from newsboard import logger
from newsboard.connection import ConnectionClosedError
from newsboard.messagehandler import MessageError, MessageHandler, Status
from newsboard.protocol import Protocol


class FakeConnection:
    def __init__(self, incoming=b"", connected=True, failing_writes=0, failing_reads=0):
        self.incoming = list(incoming)
        self.written = bytearray()
        self.connected = connected
        self.failing_writes = failing_writes
        self.failing_reads = failing_reads

    def is_connected(self):
        return self.connected

    def write(self, value):
        if self.failing_writes:
            self.failing_writes -= 1
            raise ConnectionClosedError()
        self.written.append(value)

    def read(self):
        if self.failing_reads:
            self.failing_reads -= 1
            raise ConnectionClosedError()
        if not self.incoming:
            raise ConnectionClosedError()
        return self.incoming.pop(0)


def transfer(send):
    out = FakeConnection()
    send(MessageHandler(out))
    return MessageHandler(FakeConnection(bytes(out.written)))


def test_send_protocol_writes_code():
    conn = FakeConnection()
    MessageHandler(conn).send_protocol(Protocol.COM_LIST_NG)
    assert bytes(conn.written) == bytes([Protocol.COM_LIST_NG])


def test_send_int_parameter_wire_format():
    conn = FakeConnection()
    MessageHandler(conn).send_int_parameter(1)
    assert bytes(conn.written) == bytes([Protocol.PAR_NUM, 0, 0, 0, 1])


def test_send_string_parameter_wire_format():
    conn = FakeConnection()
    MessageHandler(conn).send_string_parameter("ab")
    assert bytes(conn.written) == bytes([Protocol.PAR_STRING, 0, 0, 0, 2]) + b"ab"


@pytest.mark.parametrize("value", [0, 7, 300, 70000, 123456789])
def test_int_round_trip(value):
    receiver = transfer(lambda h: h.send_int_parameter(value, "id"))
    assert receiver.receive_int_parameter() == value


@pytest.mark.parametrize("text", ["x", "hello world", "åäö news"])
def test_string_round_trip(text):
    receiver = transfer(lambda h: h.send_string_parameter(text))
    assert receiver.receive_string_parameter() == text


def test_protocol_round_trip():
    receiver = transfer(lambda h: h.send_protocol(Protocol.ANS_END))
    assert receiver.receive_protocol(Protocol.ANS_END) is Protocol.ANS_END


def test_receive_protocol_without_expectation():
    handler = MessageHandler(FakeConnection(bytes([Protocol.ANS_NAK])))
    assert handler.receive_protocol() is Protocol.ANS_NAK


def test_unknown_code_is_undefined():
    handler = MessageHandler(FakeConnection(bytes([99])))
    assert handler.receive_protocol() is Protocol.UNDEFINED


def test_unexpected_protocol_is_violation():
    handler = MessageHandler(FakeConnection(bytes([Protocol.ANS_ACK])))
    with pytest.raises(MessageError) as info:
        handler.receive_protocol(Protocol.ANS_END)
    assert info.value.status is Status.PROTOCOL_VIOLATION


def test_int_parameter_needs_par_num():
    receiver = transfer(lambda h: h.send_string_parameter("abc"))
    with pytest.raises(MessageError) as info:
        receiver.receive_int_parameter()
    assert info.value.status is Status.PROTOCOL_VIOLATION


def test_empty_string_parameter_is_invalid():
    receiver = transfer(lambda h: h.send_string_parameter(""))
    with pytest.raises(MessageError) as info:
        receiver.receive_string_parameter()
    assert info.value.status is Status.INVALID_ARGUMENTS


def test_reading_past_end_fails_transfer():
    handler = MessageHandler(FakeConnection(bytes([Protocol.PAR_NUM, 0, 0])))
    with pytest.raises(MessageError) as info:
        handler.receive_int_parameter()
    assert info.value.status is Status.FAILED_TRANSFER


def test_disconnected_send_reports_closed():
    handler = MessageHandler(FakeConnection(connected=False))
    with pytest.raises(MessageError) as info:
        handler.send_protocol(Protocol.COM_END)
    assert info.value.status is Status.CONNECTION_CLOSED


def test_disconnected_receive_reports_closed():
    handler = MessageHandler(FakeConnection(b"\x01", connected=False))
    with pytest.raises(MessageError) as info:
        handler.receive_byte()
    assert info.value.status is Status.CONNECTION_CLOSED


def test_missing_connection_reports_closed():
    with pytest.raises(MessageError) as info:
        MessageHandler().send_byte(1)
    assert info.value.status is Status.CONNECTION_CLOSED


def test_send_byte_retries():
    conn = FakeConnection(failing_writes=1)
    handler = MessageHandler(conn)
    with pytest.raises(MessageError) as info:
        handler.send_byte(5)
    assert info.value.status is Status.FAILED_TRANSFER
    conn.failing_writes = 1
    handler.send_byte(5, tries=2)
    assert bytes(conn.written) == b"\x05"


def test_receive_byte_retries():
    handler = MessageHandler(FakeConnection(b"\x09", failing_reads=1))
    assert handler.receive_byte(tries=2) == 9


def test_connection_can_be_replaced():
    handler = MessageHandler(FakeConnection(b"\x01"))
    handler.connection = FakeConnection(b"\x02")
    assert handler.receive_byte() == 2


def test_logging_of_sent_protocol(capsys):
    logger.set_log_level("NETWORK", True)
    try:
        MessageHandler(FakeConnection()).send_protocol(Protocol.COM_END)
    finally:
        logger.set_log_level("NETWORK", False)
    assert "[NETWORK]" in capsys.readouterr().out