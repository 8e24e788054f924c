""" Encoding and decoding of the trapper frame. A frame is laid out as
    follows, with the length in little-endian byte order::

        offset  size  field
        0       4     b'ZBXD'
        4       1     protocol version, 0x01
        5       8     payload length, unsigned
        13      N     JSON payload

    The functions here are pure; they neither read nor write sockets.
"""

import struct

from .. import json
from ..errors import InvalidLength, InvalidMagic, MalformedPayload


# The header is fixed for the protocol version implemented here.

HEADER = b'ZBXD\x01'
HEADER_SIZE = len(HEADER)

_length = struct.Struct('<Q')
LENGTH_SIZE = _length.size

PREFIX_SIZE = HEADER_SIZE + LENGTH_SIZE

# The full 64 bits of the length are decoded before this bound is applied;
# nothing a trapper sends back comes anywhere near it.

MAXIMUM_LENGTH = 1 << 30


def encode(payload):
    """ Return the complete frame for *payload*. A :class:`str` payload is
        encoded as UTF-8 first, so that the declared length is a byte count.
    """

    try:
        payload = payload.encode('utf-8')
    except AttributeError:
        payload = bytes(payload)

    if len(payload) == 0:
        raise InvalidLength('refusing to frame an empty payload')

    return HEADER + _length.pack(len(payload)) + payload


def decode_header(data):
    """ Raise :class:`InvalidMagic` if *data* is not exactly the frame header.
    """

    if bytes(data) != HEADER:
        raise InvalidMagic(data)


def decode_length(data):
    """ Interpret the eight bytes following the header as an unsigned
        little-endian integer and return it. A zero length, or one beyond
        :data:`MAXIMUM_LENGTH`, raises :class:`InvalidLength`.
    """

    if len(data) != LENGTH_SIZE:
        raise InvalidLength('length field must be %d bytes, got %d' % (LENGTH_SIZE, len(data)))

    length, = _length.unpack(data)

    if length == 0:
        raise InvalidLength('frame declares an empty payload')

    if length > MAXIMUM_LENGTH:
        raise InvalidLength('frame declares %d bytes, maximum is %d' % (length, MAXIMUM_LENGTH))

    return length


def decode_payload(data, length):
    """ Parse exactly *length* bytes of *data* as JSON and return the
        resulting document.
    """

    if len(data) != length:
        raise InvalidLength('expected %d payload bytes, got %d' % (length, len(data)))

    try:
        return json.loads(data)
    except json.DecodeError as e:
        raise MalformedPayload('payload is not valid JSON: ' + str(e)) from e


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
