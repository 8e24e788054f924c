import socket
import struct
import threading

import pytest

import zbxsender


def frame(payload):
    """ Build a reply frame by hand, independent of zbxsender.protocol.
    """

    if isinstance(payload, str):
        payload = payload.encode()
    return b'ZBXD\x01' + struct.pack('<Q', len(payload)) + payload


def recv_exact(sock, size):
    data = b''
    while len(data) < size:
        try:
            chunk = sock.recv(size - len(data))
        except OSError:
            break
        if not chunk:
            break
        data += chunk
    return data


class Trapper:
    """ A one-shot stand-in for a Zabbix trapper. It accepts one connection,
        reads a complete request frame, then writes *reply* verbatim and
        closes the connection. If *reply* is None it never answers, holding
        the connection open until stopped.
    """

    def __init__(self, reply):
        self.reply = reply
        self.request = None
        self.done = threading.Event()
        self.stopping = threading.Event()

        self.socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.socket.bind(('127.0.0.1', 0))
        self.socket.listen(1)
        self.socket.settimeout(5)

        self.address, self.port = self.socket.getsockname()

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def run(self):
        try:
            connection, _ = self.socket.accept()
        except OSError:
            return

        with connection:
            connection.settimeout(5)
            prefix = recv_exact(connection, 13)
            if len(prefix) == 13:
                length, = struct.unpack('<Q', prefix[5:])
                self.request = (prefix, recv_exact(connection, length))

            if self.request is None:
                # The client hung up without sending a whole frame.
                pass
            elif self.reply is None:
                self.stopping.wait(5)
            else:
                try:
                    connection.sendall(self.reply)
                except OSError:
                    pass

        self.done.set()


    def stop(self):
        self.stopping.set()
        self.socket.close()
        self.thread.join(5)


class FakeSocket:
    """ Stands in for a connected socket: accepts at most *send_limit*
        bytes per send() and returns at most *recv_limit* bytes per recv(),
        reporting end-of-stream once *incoming* is exhausted.
    """

    def __init__(self, incoming=b'', recv_limit=1, send_limit=1):
        self.incoming = bytes(incoming)
        self.recv_limit = recv_limit
        self.send_limit = send_limit
        self.sent = bytearray()
        self.recv_calls = 0
        self.send_calls = 0
        self.closed = 0
        self.timeouts = list()

    def settimeout(self, timeout):
        self.timeouts.append(timeout)

    def send(self, data):
        self.send_calls += 1
        accepted = bytes(data[:self.send_limit])
        self.sent.extend(accepted)
        return len(accepted)

    def recv(self, size):
        self.recv_calls += 1
        size = min(size, self.recv_limit)
        chunk = self.incoming[:size]
        self.incoming = self.incoming[size:]
        return chunk

    def close(self):
        self.closed += 1


@pytest.fixture
def trapper():
    """ Factory fixture: ``trapper(reply)`` starts a :class:`Trapper` and
        returns it; every server started is stopped after the test.
    """

    servers = list()

    def start(reply):
        server = Trapper(reply)
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.stop()


@pytest.fixture
def fake_socket(monkeypatch):
    """ Factory fixture: ``fake_socket(incoming, ...)`` returns a
        :class:`FakeSocket` that the next TCP connection attempt will use.
    """

    def install(*args, **kwargs):
        fake = FakeSocket(*args, **kwargs)

        def create_connection(address, timeout=None):
            return fake

        monkeypatch.setattr(zbxsender.transport.tcp.socket, 'create_connection', create_connection)
        return fake

    return install


@pytest.fixture
def success_reply():
    info = 'processed: 1; failed: 0; total: 1; seconds spent: 0.000030'
    return frame('{"response":"success","info":"%s"}' % (info))


@pytest.fixture
def make_frame():
    return frame


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for variable in zbxsender.config.environment.values():
        monkeypatch.delenv(variable, raising=False)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
