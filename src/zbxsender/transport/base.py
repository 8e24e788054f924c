"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`zbxsender.protocol` so the protocol remains
transport-agnostic: a transport moves bytes and knows nothing about frames.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..errors import (
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportClosed,
)


class Transport(ABC):
    """Minimal contract for a blocking, single-connection transport."""

    def __enter__(self) -> "Transport":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection; safe to call repeatedly."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Write all of *data*, or raise."""

    @abstractmethod
    def recv(self, size: int) -> bytes:
        """Read exactly *size* bytes, or raise."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False


class Deadline:
    """Track the time remaining for one bounded operation."""

    def __init__(self, timeout: Optional[float], clock) -> None:
        self.clock = clock
        if timeout is None:
            self.expires = None
        else:
            self.expires = clock() + timeout

    def remaining(self) -> Optional[float]:
        """Seconds left, or None if unbounded; raise once expired."""
        if self.expires is None:
            return None

        remaining = self.expires - self.clock()
        if remaining <= 0:
            raise TransportTimeout("operation timed out")
        return remaining
