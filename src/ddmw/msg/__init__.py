"""Message sending and receiving functions."""

from . import inbound
from . import outbound

from .inbound import (
    Msg,
    Storage,
    StorageNegotiator,
    StoreKind,
    StoreType,
    SubInfo,
    recv,
    recvloop,
    subscribe,
)
from .outbound import Content, MsgInfo, Xfer, connsend, send


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
