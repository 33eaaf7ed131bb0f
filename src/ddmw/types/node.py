"""Types that are used to describe server properties."""

from __future__ import annotations

import enum

from ..errors import BadInputError


class _Named(enum.Enum):
    """Enumerations whose values are the strings used on the wire."""

    @classmethod
    def parse(cls, text: str):
        try:
            return cls(text)
        except ValueError:
            raise BadInputError(f"Unknown {cls.__name__} {text!r}") from None

    def __str__(self) -> str:
        return self.value


class NodeType(_Named):
    """Whether a node is on the sender or receiver side of the data diode."""

    SENDER = "sender"
    RECEIVER = "receiver"


class LinkProtocol(_Named):
    """Protocol used across the data diode link."""

    ETHERNET = "ethernet"
    UDP = "udp"


class ProtImpl(_Named):
    """Implementation of the data diode link protocol."""

    PCAP = "pcap"
    GENERIC = "generic"


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
