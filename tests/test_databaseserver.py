import io
import socket

import pytest

from newsboard.databaseserver import DatabaseServer, main, parse_arguments
from newsboard.interface import Interface


def free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def recv_exactly(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def test_parse_arguments_port_and_levels():
    assert parse_arguments(["8080", "NETWORK", "SERVER"]) == (8080, ["NETWORK", "SERVER"])


def test_parse_arguments_takes_leading_digits():
    assert parse_arguments(["12ab"]) == (12, [])


def test_parse_arguments_rejects_bad_port():
    with pytest.raises(ValueError):
        parse_arguments(["abc"])


def test_parse_arguments_requires_port():
    with pytest.raises(ValueError):
        parse_arguments([])


def test_main_exit_codes(capsys):
    assert main([]) == 1
    assert main(["abc"]) == 2
    assert "Wrong port number." in capsys.readouterr().err


def test_main_reports_failed_start(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n"))
    assert main(["0"]) == 0
    assert "Database failed to start" in capsys.readouterr().out


def test_start_on_unusable_port_returns(tmp_path, capsys):
    server = DatabaseServer(0, Interface(1, tmp_path / "disk"))
    try:
        assert not server.is_ready()
        server.start()
    finally:
        server.close()
    out = capsys.readouterr().out
    assert "Database server initialized with port 0" in out
    assert "Database failed to start" in out


def test_serve_client_session(tmp_path):
    port = free_port()
    server = DatabaseServer(port, Interface(1, tmp_path / "disk"))
    try:
        assert server.is_ready()
        client = socket.create_connection(("127.0.0.1", port), timeout=5)
        try:
            server.serve_connection()
            assert len(server.connections) == 1

            client.sendall(bytes([1, 8]))
            server.serve_connection()
            assert recv_exactly(client, 7) == bytes([20, 41, 0, 0, 0, 0, 27])
        finally:
            client.close()
        server.serve_connection()
        assert server.connections == []
    finally:
        server.close()


def test_protocol_violation_drops_client(tmp_path, capsys):
    port = free_port()
    server = DatabaseServer(port, Interface(1, tmp_path / "disk"))
    try:
        client = socket.create_connection(("127.0.0.1", port), timeout=5)
        try:
            server.serve_connection()
            client.sendall(bytes([8]))
            server.serve_connection()
            assert server.connections == []
        finally:
            client.close()
    finally:
        server.close()
    assert "Client closed connection" in capsys.readouterr().out