"""Core node inspection functions."""

from __future__ import annotations

from .conn import sendrecv
from .errors import MissingDataError
from .protocol import fields
from .protocol.params import Params
from .protocol.telegram import Telegram
from .transport import Connection
from .types.node import LinkProtocol, NodeType, ProtImpl


class DDLinkInfo:

    def __init__(self, engine: str, protocol: LinkProtocol, protimpl: ProtImpl):
        self.engine = engine
        self.protocol = protocol
        self.protimpl = protimpl

    def __repr__(self) -> str:
        return f"DDLinkInfo(engine={self.engine!r}, protocol={self.protocol}, protimpl={self.protimpl})"


class NodeInfo:

    def __init__(self, version: str, os_name: str, nodetype: NodeType, ddlnk: DDLinkInfo):
        self.version = version
        self.os_name = os_name
        self.nodetype = nodetype
        self.ddlnk = ddlnk

    def __repr__(self) -> str:
        return (f"NodeInfo(version={self.version!r}, os_name={self.os_name!r}, "
                f"nodetype={self.nodetype}, ddlnk={self.ddlnk!r})")


def _required(params: Params, key: str) -> str:
    value = params.get_str(key)
    if value is None:
        raise MissingDataError(f"{key} not found")
    return value


async def get_nodeinfo(conn: Connection) -> NodeInfo:
    """Query the server for static information about the node it runs on."""

    params = await sendrecv(conn, Telegram(fields.GETNODEINFO))

    nodetype = NodeType.parse(_required(params, fields.NODE_TYPE))
    version = _required(params, fields.NODE_VERSION)
    os_name = _required(params, fields.NODE_OS)
    engine = _required(params, fields.LINK_ENGINE)
    protocol = LinkProtocol.parse(_required(params, fields.LINK_PROTOCOL))
    protimpl = ProtImpl.parse(_required(params, fields.LINK_PROTIMPL))

    return NodeInfo(version, os_name, nodetype, DDLinkInfo(engine, protocol, protimpl))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
