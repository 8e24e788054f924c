''' Wrapper module around :mod:`msgspec` to handle the equivalent of
    :func:`json.loads` and :func:`json.dumps`, along with validation
    of decoded documents against the protocol structures.
'''

import msgspec


# The msgspec 'encode' operation returns bytes; everything that goes on the
# wire is bytes, so 'dumps' returns bytes as well.

encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()

dumps = encoder.encode
loads = decoder.decode

DecodeError = msgspec.DecodeError
ValidationError = msgspec.ValidationError


def convert(document, type):
    """ Convert an already-decoded JSON *document* (dicts, lists, and so on)
        into an instance of *type*, validating it along the way.
    """

    return msgspec.convert(document, type=type)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
