"""Blocking TCP transport.

One instance owns at most one connection. Reads and writes loop until the
requested number of bytes has moved, since a stream socket is free to accept
or deliver fewer bytes per call than asked for.
"""

from __future__ import annotations

import logging
import socket
import time
from typing import Optional

from .base import (
    Deadline,
    Transport,
    TransportClosed,
    TransportConnectionError,
    TransportError,
    TransportTimeout,
)


logger = logging.getLogger(__name__)

# Upper bound on a single recv() call, so that a large declared length does
# not turn into a single large allocation.

chunk_size = 65536


class TcpTransport(Transport):
    """Connect to *address*:*port*; timeouts are in seconds."""

    clock = staticmethod(time.monotonic)

    def __init__(self, address: str, port: int,
                 connection_timeout: Optional[float] = None,
                 socket_timeout: Optional[float] = None):
        self.address = address
        self.port = int(port)
        self.connection_timeout = connection_timeout
        self.socket_timeout = socket_timeout
        self.socket: Optional[socket.socket] = None

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<{type(self).__name__} {self.address}:{self.port} {state}>"

    @property
    def is_open(self) -> bool:
        return self.socket is not None

    def open(self) -> None:
        if self.socket is not None:
            return

        endpoint = (self.address, self.port)
        logger.debug("connecting to %s:%d", *endpoint)

        try:
            sock = socket.create_connection(endpoint, self.connection_timeout)
        except (socket.timeout, TimeoutError) as e:
            raise TransportTimeout(
                f"connect to {self.address}:{self.port} timed out after {self.connection_timeout} sec"
            ) from e
        except OSError as e:
            raise TransportConnectionError(
                f"cannot connect to {self.address}:{self.port}: {e}"
            ) from e

        self.socket = sock

    def close(self) -> None:
        sock = self.socket
        if sock is None:
            return

        self.socket = None
        logger.debug("closing connection to %s:%d", self.address, self.port)
        sock.close()

    def _connected(self) -> socket.socket:
        if self.socket is None:
            raise TransportConnectionError("transport is not open")
        return self.socket

    def send(self, data: bytes) -> None:
        sock = self._connected()
        deadline = Deadline(self.socket_timeout, self.clock)
        view = memoryview(data)
        total = len(view)
        sent = 0

        while sent < total:
            sock.settimeout(deadline.remaining())

            try:
                count = sock.send(view[sent:])
            except (socket.timeout, TimeoutError) as e:
                raise TransportTimeout(
                    f"send timed out after {sent} of {total} bytes"
                ) from e
            except OSError as e:
                raise TransportError(f"send failed: {e}") from e

            if count == 0:
                raise TransportClosed(total, sent)

            sent += count

        logger.debug("sent %d bytes to %s:%d", total, self.address, self.port)

    def recv(self, size: int) -> bytes:
        sock = self._connected()
        deadline = Deadline(self.socket_timeout, self.clock)
        buffer = bytearray()

        while len(buffer) < size:
            sock.settimeout(deadline.remaining())
            wanted = min(size - len(buffer), chunk_size)

            try:
                chunk = sock.recv(wanted)
            except (socket.timeout, TimeoutError) as e:
                raise TransportTimeout(
                    f"receive timed out after {len(buffer)} of {size} bytes"
                ) from e
            except OSError as e:
                raise TransportError(f"receive failed: {e}") from e

            if not chunk:
                raise TransportClosed(size, len(buffer))

            buffer.extend(chunk)

        return bytes(buffer)
