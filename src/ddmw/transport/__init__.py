"""Transport layer: addresses, frame codec, and framed connections."""

from .address import HAVE_UDS, ProtAddr
from .codec import Codec, Input, InputKind
from .connection import Connection, open_connection


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
