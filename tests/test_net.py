import socket

import pytest

from labkit.net import ltoa, open_clientfd, open_listenfd, sio_putl, sio_puts


@pytest.mark.parametrize("value", [0, 1, 7, 10, 255, 123456789, -1, -42, -99999])
@pytest.mark.parametrize("base", [2, 8, 10, 16, 36])
def test_ltoa_round_trips_through_int(value, base):
    assert int(ltoa(value, base), base) == value


def test_ltoa_decimal_matches_str():
    for value in (0, 5, -5, 2**40, -(2**40)):
        assert ltoa(value) == str(value)


def test_ltoa_uses_lower_case_letters():
    assert ltoa(255, 16) == "ff"
    assert ltoa(-255, 16) == "-ff"


@pytest.mark.parametrize("base", [0, 1, 37])
def test_ltoa_rejects_bad_base(base):
    with pytest.raises(ValueError):
        ltoa(10, base)


def test_sio_puts_writes_to_stdout(capfd):
    count = sio_puts("hello")
    assert count == 5
    assert capfd.readouterr().out == "hello"


def test_sio_putl_writes_decimal(capfd):
    count = sio_putl(-42)
    assert count == len("-42")
    assert capfd.readouterr().out == "-42"


def test_listen_and_connect_round_trip():
    with open_listenfd("0") as listener:
        assert listener.getsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR)
        port = listener.getsockname()[1]
        with open_clientfd("127.0.0.1", str(port)) as client:
            conn, _ = listener.accept()
            with conn:
                client.sendall(b"ping")
                assert conn.recv(4) == b"ping"
                conn.sendall(b"pong")
                assert client.recv(4) == b"pong"


def test_connect_to_closed_port_fails():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(OSError):
        open_clientfd("127.0.0.1", port)


def test_client_rejects_non_numeric_port():
    with pytest.raises(socket.gaierror):
        open_clientfd("127.0.0.1", "http")


def test_listen_rejects_non_numeric_port():
    with pytest.raises(socket.gaierror):
        open_listenfd("notaport")