""" The :class:`Sender` is the principal entry point: it submits one or more
    :class:`~zbxsender.protocol.message.Measurement` values to a trapper and
    returns the decoded :class:`~zbxsender.protocol.message.Result`.

    Every call is a complete exchange on its own connection::

        connect, send frame, read header, read length, read payload, close

    Nothing is shared between calls, so a single :class:`Sender` can be used
    from many threads at once. :class:`AsyncSender` offers the same methods
    as coroutines for use on an :mod:`asyncio` event loop. Failures are raised
    to the caller as the exception classes in :mod:`zbxsender.errors`; there
    are no retries.
"""

import logging

from . import config
from .protocol import frame
from .protocol.message import Measurement, Result, encode_request
from .transport.aio import AsyncTransport
from .transport.tcp import TcpTransport


logger = logging.getLogger(__name__)


class Sender:
    """ Submit measurements to the trapper at *address* and *port*. The
        *connection_timeout* bounds establishing the connection, the
        *socket_timeout* bounds each send and receive; both are expressed
        in milliseconds. Any argument left as None is taken from
        :mod:`zbxsender.config`.
    """

    transport = TcpTransport

    def __init__(self, address=None, port=None, connection_timeout=None, socket_timeout=None):

        if address is None:
            address = config.get('host')
        if port is None:
            port = config.get('port')
        if connection_timeout is None:
            connection_timeout = config.get('connection_timeout')
        if socket_timeout is None:
            socket_timeout = config.get('socket_timeout')

        self.address = address
        self.port = int(port)
        self.connection_timeout = int(connection_timeout)
        self.socket_timeout = int(socket_timeout)

        # Validate now rather than on the first send.

        config.timeout(self.connection_timeout, 'connection_timeout')
        config.timeout(self.socket_timeout, 'socket_timeout')


    def __repr__(self):
        name = type(self).__name__
        return '%s(%r, %d, %d, %d)' % (name, self.address, self.port, self.connection_timeout, self.socket_timeout)


    def _transport(self):
        """ Return a new, unopened transport for a single exchange.
        """

        connection_timeout = config.timeout(self.connection_timeout)
        socket_timeout = config.timeout(self.socket_timeout)
        return self.transport(self.address, self.port, connection_timeout, socket_timeout)


    def send(self, host, key, value, clock=None):
        """ Submit a single *value* for the item *key* on *host*.
        """

        measurement = Measurement(host, key, value, clock)
        return self.send_many((measurement,))


    def send_many(self, measurements):
        """ Submit an ordered sequence of :class:`Measurement` instances in
            a single request.
        """

        payload = encode_request(measurements)
        return self.send_raw(payload)


    def send_raw(self, payload):
        """ Submit an already-serialized JSON *payload* (str or bytes) and
            return the decoded :class:`Result`.
        """

        outbound = frame.encode(payload)

        with self._transport() as transport:
            transport.send(outbound)

            header = transport.recv(frame.HEADER_SIZE)
            frame.decode_header(header)

            length = transport.recv(frame.LENGTH_SIZE)
            length = frame.decode_length(length)

            payload = transport.recv(length)
            document = frame.decode_payload(payload, length)

        return _result(document)


# end of class Sender



class AsyncSender(Sender):
    """ The :mod:`asyncio` flavor of :class:`Sender`. The methods are the
        same, but are coroutines.
    """

    transport = AsyncTransport

    async def send(self, host, key, value, clock=None):
        measurement = Measurement(host, key, value, clock)
        return await self.send_many((measurement,))


    async def send_many(self, measurements):
        payload = encode_request(measurements)
        return await self.send_raw(payload)


    async def send_raw(self, payload):
        outbound = frame.encode(payload)

        async with self._transport() as transport:
            await transport.send(outbound)

            header = await transport.recv(frame.HEADER_SIZE)
            frame.decode_header(header)

            length = await transport.recv(frame.LENGTH_SIZE)
            length = frame.decode_length(length)

            payload = await transport.recv(length)
            document = frame.decode_payload(payload, length)

        return _result(document)


# end of class AsyncSender



def _result(document):

    result = Result.from_document(document)

    if result.success:
        logger.debug('trapper response: %s', result.raw_info)
    else:
        logger.warning('trapper reported %r: %s', result.response, result.raw_info)

    return result


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
