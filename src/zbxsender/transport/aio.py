"""asyncio TCP transport.

The coroutine counterpart of :class:`~zbxsender.transport.tcp.TcpTransport`,
for callers running many sends concurrently on one event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .base import (
    TransportClosed,
    TransportConnectionError,
    TransportError,
    TransportTimeout,
)


logger = logging.getLogger(__name__)


class AsyncTransport:
    """Connect to *address*:*port*; timeouts are in seconds."""

    def __init__(self, address: str, port: int,
                 connection_timeout: Optional[float] = None,
                 socket_timeout: Optional[float] = None):
        self.address = address
        self.port = int(port)
        self.connection_timeout = connection_timeout
        self.socket_timeout = socket_timeout
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None

    async def __aenter__(self) -> "AsyncTransport":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self.writer is not None

    async def open(self) -> None:
        if self.writer is not None:
            return

        logger.debug("connecting to %s:%d", self.address, self.port)
        connect = asyncio.open_connection(self.address, self.port)

        try:
            reader, writer = await asyncio.wait_for(connect, self.connection_timeout)
        except asyncio.TimeoutError as e:
            raise TransportTimeout(
                f"connect to {self.address}:{self.port} timed out after {self.connection_timeout} sec"
            ) from e
        except OSError as e:
            raise TransportConnectionError(
                f"cannot connect to {self.address}:{self.port}: {e}"
            ) from e

        self.reader = reader
        self.writer = writer

    async def close(self) -> None:
        writer = self.writer
        if writer is None:
            return

        self.reader = None
        self.writer = None
        logger.debug("closing connection to %s:%d", self.address, self.port)
        writer.close()

        try:
            await writer.wait_closed()
        except OSError as e:
            # The connection is gone either way.
            logger.debug("error while closing connection: %s", e)

    def _connected(self):
        if self.writer is None:
            raise TransportConnectionError("transport is not open")
        return self.reader, self.writer

    async def send(self, data: bytes) -> None:
        _reader, writer = self._connected()

        # write() buffers everything it is given; drain() suspends until the
        # buffer has been handed to the kernel.

        writer.write(data)

        try:
            await asyncio.wait_for(writer.drain(), self.socket_timeout)
        except asyncio.TimeoutError as e:
            raise TransportTimeout(f"send of {len(data)} bytes timed out") from e
        except OSError as e:
            raise TransportError(f"send failed: {e}") from e

        logger.debug("sent %d bytes to %s:%d", len(data), self.address, self.port)

    async def recv(self, size: int) -> bytes:
        reader, _writer = self._connected()

        try:
            return await asyncio.wait_for(reader.readexactly(size), self.socket_timeout)
        except asyncio.IncompleteReadError as e:
            raise TransportClosed(size, len(e.partial)) from e
        except asyncio.TimeoutError as e:
            raise TransportTimeout(f"receive of {size} bytes timed out") from e
        except OSError as e:
            raise TransportError(f"receive failed: {e}") from e
