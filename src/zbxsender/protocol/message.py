""" The structures exchanged with a trapper: the :class:`Measurement`
    values submitted by a client, the :class:`Request` envelope carrying
    them, and the :class:`Result` decoded from the acknowledgement.
"""

import re
from typing import List, Optional

import msgspec

from .. import json
from ..errors import MalformedPayload


SENDER_DATA = 'sender data'
SUCCESS = 'success'


class Measurement(msgspec.Struct, frozen=True, omit_defaults=True, rename='camel'):
    """ One sample for the item *key* on the monitored *host*. The *clock*
        is an optional UNIX timestamp in whole seconds; when omitted the
        trapper stamps the value on arrival.

        The *host*, *key*, and *value* always go on the wire as strings;
        anything else is converted with :func:`str` on construction, and a
        fractional *clock* is truncated to whole seconds.
    """

    host: str
    key: str
    value: str
    clock: Optional[int] = None

    def __post_init__(self):

        # The struct is frozen, hence force_setattr.

        for field in ('host', 'key', 'value'):
            value = getattr(self, field)
            if not isinstance(value, str):
                msgspec.structs.force_setattr(self, field, str(value))

        clock = self.clock
        if clock is not None and type(clock) is not int:
            msgspec.structs.force_setattr(self, 'clock', int(clock))


class Request(msgspec.Struct, kw_only=True, rename='camel'):
    request: str = SENDER_DATA
    data: List[Measurement]


class Response(msgspec.Struct, rename='camel'):
    """ The acknowledgement document as the trapper sends it. """

    response: str
    info: str = ''


class ResultInfo(msgspec.Struct, frozen=True):
    processed: int = 0
    failed: int = 0
    total: int = 0
    spent_seconds: float = 0.0


class Result(msgspec.Struct, frozen=True):
    """ The decoded acknowledgement for one send.

        :ivar success: True if the trapper reported success.
        :ivar info: Counters parsed out of the trapper's info text.
        :ivar response: The response word exactly as received.
        :ivar raw_info: The info text exactly as received.
    """

    success: bool
    info: ResultInfo
    response: str = ''
    raw_info: str = ''

    @classmethod
    def from_document(cls, document):
        """ Build a :class:`Result` from a decoded JSON *document*, raising
            :class:`MalformedPayload` if it is not a trapper response.
        """

        try:
            response = json.convert(document, Response)
        except json.ValidationError as e:
            raise MalformedPayload('unexpected response document: ' + str(e)) from e

        info = parse_info(response.info)
        success = response.response == SUCCESS
        return cls(success, info, response.response, response.info)


def encode_request(measurements):
    """ Return the JSON bytes for a 'sender data' request carrying the
        given *measurements*, preserving their order.
    """

    measurements = list(measurements)

    if len(measurements) == 0:
        raise ValueError('at least one measurement is required')

    for measurement in measurements:
        if not isinstance(measurement, Measurement):
            raise TypeError('expected a Measurement, got ' + type(measurement).__name__)

    request = Request(data=measurements)
    return json.dumps(request)


# The info text varies between trapper versions, for example:
#
#   processed: 1; failed: 0; total: 1; seconds spent: 0.000030
#
#   Processed 1 Failed 0 Total 1 Seconds spent 0.000055
#
# Rather than depend on the delimiters, pick out every 'name number' pair,
# with or without a colon between them, and keep the ones we recognize.

_info_pair = re.compile(r'([a-z_][a-z_ ]*?)\s*:?\s*([-+]?\d+(?:\.\d*)?(?:[eE][-+]?\d+)?)', re.IGNORECASE)

_info_fields = dict()
_info_fields['processed'] = ('processed', int)
_info_fields['failed'] = ('failed', int)
_info_fields['total'] = ('total', int)
_info_fields['seconds spent'] = ('spent_seconds', float)
_info_fields['spent seconds'] = ('spent_seconds', float)


def parse_info(text):
    """ Parse the free-form *text* reported by the trapper into a
        :class:`ResultInfo`. Unrecognized fields are ignored, and missing
        fields are left at zero.
    """

    fields = dict()

    for name, number in _info_pair.findall(text or ''):
        name = name.replace('_', ' ').strip().lower()
        name = ' '.join(name.split())

        try:
            attribute, cast = _info_fields[name]
        except KeyError:
            continue

        if cast is int:
            number = int(float(number))
        else:
            number = float(number)

        fields[attribute] = number

    return ResultInfo(**fields)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
