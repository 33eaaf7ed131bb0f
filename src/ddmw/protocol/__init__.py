"""
ddmw Protocol Layer
===================

This package defines the telegram envelope spoken on ddmw client
interfaces. It provides the envelope data structures and their on-the-wire
encoding.

The protocol layer MUST NOT depend on the transport (sockets, asyncio).

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Client operations (conn, auth, msg, probe, mgmt)
    High-level semantic API
    - sendrecv()
    - authenticate()
    - send() / recv()

    │
    ▼
Envelope Model (telegram.py, params.py)
    - Telegram: topic + parameters
    - Params: key/value parameters
    - KVLines: ordered key/value lines

    │
    ▼
Wire Encoding (wire.py)
    Maps Telegram/Params/KVLines <-> bytes
    Line oriented, blank-line terminated

    │
    ▼
Field Vocabulary (fields.py)
    Canonical names for topics and parameter keys
    Prevents string drift across the client

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Codec / Framing Layer (ddmw.transport.codec)
    Decides, frame by frame, whether the next frame is a telegram,
    a fixed-length blob, parsed parameters, or a file write

Transport Layer (ddmw.transport.connection)
    Moves bytes over TCP or a local domain socket

---------------------------------------------------------------------
"""

from . import fields
from .params import KVLines, Params
from .telegram import Telegram
from .wire import (
    pack_kvlines,
    pack_params,
    pack_telegram,
    unpack_kvlines,
    unpack_params,
    unpack_telegram,
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
