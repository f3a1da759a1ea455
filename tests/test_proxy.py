import socket
import threading

import pytest

import dictclient
from dictclient.net.proxy import ClientProxy
from dictclient.session import DictSession
from dictclient.utils import DictConnectionError


def test_line_transport():
    ours, theirs = socket.socketpair()
    proxy = ClientProxy(ours)
    try:
        theirs.sendall(b'220 ready\r\nlf only\n\xc3\xa9t\xc3\xa9\r\n')
        assert proxy.read_line() == '220 ready'
        assert proxy.read_line() == 'lf only'
        assert proxy.read_line() == 'été'
        proxy.write_line('SHOW DATABASES')
        assert theirs.recv(64) == b'SHOW DATABASES\r\n'
        theirs.close()
        assert proxy.read_line() is None
    finally:
        proxy.close()
    assert proxy.closed
    proxy.close()


def test_close_when_peer_hung_up():
    ours, theirs = socket.socketpair()
    theirs.sendall(b'220 ready\r\n')
    session = DictSession('localhost', proxy=ClientProxy(ours))
    theirs.close()
    session.close()
    assert not session.is_open


def _serve_once(server: socket.socket, replies: dict, received: list):
    """Accept one client, greet it and answer each known command."""
    conn, _ = server.accept()
    with conn:
        rfile = conn.makefile('rb')
        conn.sendall(b'220 test.server dictd <mime> <1@test.server>\r\n')
        for raw in rfile:
            command = raw.decode('utf-8').rstrip('\r\n')
            received.append(command)
            if command == 'QUIT':
                conn.sendall(b'221 bye\r\n')
                break
            conn.sendall(replies.get(command, b'500 unknown command\r\n'))
        rfile.close()


def test_connect_round_trip():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(('127.0.0.1', 0))
    server.listen(1)
    port = server.getsockname()[1]
    replies = {
        'SHOW DATABASES': b'110 2 databases present\r\nwn "WordNet"\r\njargon "Jargon File"\r\n.\r\n250 ok\r\n',
        'DEFINE wn "ice cream"': b'552 no match\r\n',
    }
    received = []
    worker = threading.Thread(target=_serve_once, args=(server, replies, received))
    worker.start()
    try:
        with dictclient.connect('127.0.0.1', port, timeout=5) as session:
            assert session.msg_id == '1@test.server'
            assert sorted(session.get_database_list()) == ['jargon', 'wn']
            assert session.get_definitions('ice cream', 'wn') == []
    finally:
        worker.join(5)
        server.close()
    assert received == ['SHOW DATABASES', 'DEFINE wn "ice cream"', 'QUIT']


def test_connect_refused():
    spare = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    spare.bind(('127.0.0.1', 0))
    port = spare.getsockname()[1]
    spare.close()
    with pytest.raises(DictConnectionError):
        DictSession('127.0.0.1', port, timeout=5)


def test_connect_unknown_host():
    with pytest.raises(DictConnectionError):
        DictSession('no-such-host.invalid', timeout=5)


def test_connect_rejects_unknown_arguments():
    with pytest.raises(TypeError):
        dictclient.connect('127.0.0.1', retries=3)
    with pytest.raises(ValueError):
        dictclient.connect('127.0.0.1', log='tcp')


def test_connect_checks_log_mode_before_connecting():
    spare = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    spare.bind(('127.0.0.1', 0))
    port = spare.getsockname()[1]
    spare.close()
    # a refused connection would raise DictConnectionError instead
    with pytest.raises(ValueError):
        dictclient.connect('127.0.0.1', port, log='syslog')
