""" Python client for the Zabbix trapper ("sender") protocol. Measurements
    are packed into a single binary frame, sent over TCP, and the trapper's
    acknowledgement is decoded into a :class:`Result`.
"""

# Utility components.

from . import json
from . import errors
from . import config

# Submodules used by multiple other components.

from . import protocol
from . import transport

# Primary public-facing interfaces.

from .protocol.message import Measurement, Result, ResultInfo
from .sender import Sender, AsyncSender
from .errors import (
    SenderError,
    TransportError,
    TransportConnectionError,
    TransportTimeout,
    TransportClosed,
    ProtocolError,
    InvalidMagic,
    InvalidLength,
    MalformedPayload,
)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
