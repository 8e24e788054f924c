""" The trapper protocol: frame layout (:mod:`.frame`) and the structures
    carried inside a frame (:mod:`.message`). Nothing in this package touches
    a socket; moving bytes is the job of :mod:`zbxsender.transport`.
"""

from . import frame
from . import message

from .frame import HEADER
from .message import Measurement, Request, Response, Result, ResultInfo


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
