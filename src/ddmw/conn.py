""" Establish connections to ddmw core servers' client interfaces, and the
    request/reply primitive every higher level operation is built on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from .errors import BadStateError, DisconnectedError, ServerError
from .protocol import fields
from .protocol.params import Params
from .protocol.telegram import Telegram
from .transport import Connection, InputKind, ProtAddr, open_connection

if TYPE_CHECKING:
    from .auth import Auth


logger = logging.getLogger(__name__)


async def connect(addr: Union[ProtAddr, str], auth: Optional[Auth] = None) -> Connection:
    """ Connect to one of the ddmw core's client interfaces, and optionally
        authenticate.

        The *addr* is either a :class:`ProtAddr` or an address string, which
        is interpreted by :meth:`ProtAddr.parse`.

        If *auth* is supplied an authentication is attempted immediately
        after the connection is established. If the authentication fails
        the connection is closed and the error is raised; to keep the
        connection up in that case, pass no *auth* and call
        :meth:`Auth.authenticate` explicitly.
    """

    if not isinstance(addr, ProtAddr):
        addr = ProtAddr.parse(addr)

    conn = await open_connection(addr)

    if auth is not None:
        try:
            await auth.authenticate(conn)
        except BaseException:
            await conn.close()
            raise

    return conn


async def sendrecv(conn: Connection, tg: Telegram) -> Params:
    """ Send a telegram then wait for and return the server's reply. A
        ``Fail`` reply is raised as :class:`ServerError`.
    """

    await conn.send(tg)
    return await expect_okfail(conn)


async def expect_okfail(conn: Connection) -> Params:
    """ Wait for a reply and ensure that it's ``Ok`` or ``Fail``. Returns
        the ``Ok`` parameters; ``Fail`` is raised as :class:`ServerError`.
    """

    frame = await conn.next()
    if frame is None:
        raise DisconnectedError()

    if frame.kind is not InputKind.TELEGRAM:
        raise BadStateError(f"unexpected {frame.kind.value} frame while waiting for a reply")

    tg: Telegram = frame.value
    topic = tg.get_topic()
    if topic == fields.OK:
        return tg.into_params()
    if topic == fields.FAIL:
        logger.debug("server replied Fail: %s", tg.params)
        raise ServerError(tg.into_params())

    raise BadStateError(f"unexpected reply from server: {topic!r}")


class WhoAmI:

    def __init__(self, id: int, name: str):
        self.id = id
        self.name = name

    def __repr__(self) -> str:
        return f"WhoAmI(id={self.id!r}, name={self.name!r})"


async def whoami(conn: Connection) -> WhoAmI:
    """Return the current owner of a connection."""

    params = await sendrecv(conn, Telegram(fields.WHOAMI))
    return WhoAmI(params.get_int(fields.ID), params.get_param(fields.NAME))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
