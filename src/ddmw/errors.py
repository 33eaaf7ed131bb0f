"""Exception hierarchy.

Every public operation raises a subclass of :class:`Error`, so callers can
tell "the server rejected this" apart from "the local input was invalid"
and "the connection dropped" without inspecting message text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .protocol.params import Params


class Error(Exception):
    """Base class for all ddmw client errors."""


class CodecError(Error):
    """A telegram, parameter buffer or content frame could not be encoded
    or decoded."""


class TransportError(Error):
    """An I/O error occurred on the socket or on a local file."""


class ServerError(Error):
    """The server replied ``Fail``.

    The server's error description is kept in :attr:`params`.
    """

    def __init__(self, params: Params):
        self.params = params
        super().__init__(f"Server replied: {params}")


class BadStateError(Error):
    """Something other than what the protocol allows for at this point was
    received from the server."""


class DisconnectedError(Error):
    """The server disconnected, or the connection is not established."""

    def __init__(self, text: str = "Disconnected"):
        super().__init__(text)


class BadInputError(Error):
    """A function was called with invalid or unknown input."""


class BadParamsError(Error):
    """A function was called with incomplete or ambiguous parameters."""


class InvalidCredentialsError(Error):
    """Authentication was requested but the credentials are missing or
    could not be loaded."""


class MissingDataError(Error):
    """Expected data is missing from a server reply."""


class ParseError(Error):
    """A value could not be parsed into the requested type."""


class ConfigError(Error):
    """An application configuration file could not be loaded."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
