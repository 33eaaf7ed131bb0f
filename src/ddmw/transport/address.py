"""Protocol address selection."""

from __future__ import annotations

import os
import socket
from typing import Tuple, Union

from ..errors import BadInputError


# Local domain sockets are not available on every platform. Where they are
# missing every address is treated as a TCP address.
HAVE_UDS = hasattr(socket, "AF_UNIX")


class ProtAddr:
    """ Address of a ddmw client interface: either a TCP/IP socket address
        in the form ``<host>:<port>``, or the file system path of a local
        domain socket.
    """

    TCP = "tcp"
    UDS = "uds"

    def __init__(self, kind: str, addr: Union[str, "os.PathLike[str]"]):
        if kind == self.UDS and not HAVE_UDS:
            raise BadInputError("local domain sockets are not supported on this platform")
        if kind not in (self.TCP, self.UDS):
            raise BadInputError(f"unknown address kind: {kind!r}")

        self.kind = kind
        self.addr = os.fspath(addr)

    @classmethod
    def tcp(cls, addr: str) -> "ProtAddr":
        return cls(cls.TCP, addr)

    @classmethod
    def uds(cls, path: Union[str, "os.PathLike[str]"]) -> "ProtAddr":
        return cls(cls.UDS, path)

    @classmethod
    def parse(cls, text: str) -> "ProtAddr":
        """ If *text* contains one or more slashes it is assumed to be a
            local domain socket path, otherwise it is assumed to be an IP
            socket address.
        """

        if HAVE_UDS and "/" in text:
            return cls.uds(text)
        return cls.tcp(text)

    @property
    def is_tcp(self) -> bool:
        return self.kind == self.TCP

    @property
    def is_uds(self) -> bool:
        return self.kind == self.UDS

    def host_port(self) -> Tuple[str, int]:
        """Split a TCP address into its host and port."""

        if not self.is_tcp:
            raise BadInputError(f"not a TCP address: {self.addr}")

        host, sep, port = self.addr.rpartition(":")
        if not sep or host == "":
            raise BadInputError(f"expected <host>:<port>, got {self.addr!r}")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]

        try:
            port = int(port)
        except ValueError:
            raise BadInputError(f"invalid port in address {self.addr!r}") from None
        if not 0 < port < 65536:
            raise BadInputError(f"port out of range in address {self.addr!r}")

        return host, port

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProtAddr):
            return self.kind == other.kind and self.addr == other.addr
        return NotImplemented

    def __repr__(self) -> str:
        return f"ProtAddr.{self.kind}({self.addr!r})"

    def __str__(self) -> str:
        return self.addr


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
