import socket
import threading

import pytest


class LoopbackServer:
    """
    Listens on 127.0.0.1 and runs `handler(conn)` for every accepted connection.
    """

    def __init__(self, handler=None, accept=True):
        self.handler = handler
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.listen(16)
        self.port = self.sock.getsockname()[1]
        self.peer_closed = threading.Event()
        self._threads = []
        self._stop = threading.Event()
        if accept:
            t = threading.Thread(target=self._serve, daemon=True)
            t.start()
            self._threads.append(t)

    def _serve(self):
        self.sock.settimeout(0.1)
        while not self._stop.is_set():
            try:
                conn, _ = self.sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            t = threading.Thread(target=self._handle, args=(conn,), daemon=True)
            t.start()
            self._threads.append(t)

    def _handle(self, conn):
        with conn:
            if self.handler:
                try:
                    self.handler(conn)
                except OSError:
                    return
            # wait for the prober to hang up
            conn.settimeout(5)
            try:
                while conn.recv(1024):
                    pass
                self.peer_closed.set()
            except OSError:
                pass

    def close(self):
        self._stop.set()
        self.sock.close()
        for t in self._threads:
            t.join(timeout=2)


@pytest.fixture
def loopback_server():
    servers = []

    def _make(handler=None, accept=True):
        srv = LoopbackServer(handler, accept=accept)
        servers.append(srv)
        return srv

    yield _make
    for srv in servers:
        srv.close()


@pytest.fixture
def closed_port():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
