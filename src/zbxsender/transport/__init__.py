"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportClosed,
)

from .tcp import TcpTransport
from .aio import AsyncTransport
