""" Exception classes raised by :mod:`zbxsender`. Transport failures and
    protocol failures are kept apart so that callers can branch on the kind
    of failure without parsing error text; everything derives from
    :class:`SenderError`.
"""


class SenderError(Exception):
    """Base class for all zbxsender errors."""


# Transport errors

class TransportError(SenderError):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish a connection."""


class TransportTimeout(TransportError, TimeoutError):
    """A connect, send, or receive did not complete in time."""


class TransportClosed(TransportError):
    """ The peer closed the connection before the expected number of bytes
        arrived. The *expected* and *received* byte counts are retained for
        inspection.
    """

    def __init__(self, expected, received):
        self.expected = expected
        self.received = received
        message = 'connection closed after %d of %d bytes' % (received, expected)
        TransportError.__init__(self, message)


# Protocol errors

class ProtocolError(SenderError, ValueError):
    """Base class for malformed or unexpected frames."""


class InvalidMagic(ProtocolError):
    """ The response did not begin with the expected header; either the peer
        is not a trapper or the stream is out of step.
    """

    def __init__(self, received):
        self.received = bytes(received)
        ProtocolError.__init__(self, 'invalid response header: ' + repr(self.received))


class InvalidLength(ProtocolError):
    """The declared payload length is zero or otherwise unusable."""


class MalformedPayload(ProtocolError):
    """The payload is not the expected JSON document."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
