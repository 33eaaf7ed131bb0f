""" Functions for sending messages.

    A message transfer is a strict sequence, with no pipelining:

    1. A ``Msg`` telegram announcing the channel, command and the lengths
       of the metadata and payload; the server replies with a transfer
       identifier.
    2. The metadata, if any, followed by its own ``Ok``/``Fail``.
    3. The payload, if any, followed by its own ``Ok``/``Fail``.

    A failure at any step aborts the transfer; the payload is never sent if
    the metadata was rejected.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from ..conn import connect, expect_okfail, sendrecv
from ..errors import BadInputError, BadStateError, MissingDataError, TransportError
from ..protocol import fields
from ..protocol.params import Params
from ..protocol.telegram import Telegram
from ..transport import Connection, ProtAddr
from ..types import AppChannel


logger = logging.getLogger(__name__)

META_MAX = 0xFFFFFFFF
PAYLOAD_MAX = 0xFFFFFFFFFFFFFFFF
CMD_MAX = 0xFFFFFFFF


class Content:
    """ Message metadata or payload to be sent: a :class:`Params` buffer,
        a file reference, or a bytes-like buffer.
    """

    PARAMS = 'params'
    FILE = 'file'
    BUF = 'buf'

    def __init__(self, kind: str, value):
        if kind not in (self.PARAMS, self.FILE, self.BUF):
            raise BadInputError(f'unknown content kind: {kind!r}')
        self.kind = kind
        self.value = value

    @classmethod
    def params(cls, params: Params) -> 'Content':
        if not isinstance(params, Params):
            raise BadInputError('expected a Params buffer')
        return cls(cls.PARAMS, params)

    @classmethod
    def file(cls, path: Union[str, 'os.PathLike[str]']) -> 'Content':
        return cls(cls.FILE, os.fspath(path))

    @classmethod
    def buf(cls, data: Union[bytes, bytearray, memoryview]) -> 'Content':
        """ Both owned (bytes) and borrowed (bytearray, memoryview) buffers
            are sent as-is, without copying them first.
        """

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise BadInputError('expected a bytes-like buffer')
        return cls(cls.BUF, data)

    def size(self) -> int:
        if self.kind == self.PARAMS:
            return self.value.calc_buf_size()

        if self.kind == self.FILE:
            try:
                return os.stat(self.value).st_size
            except OSError as exc:
                raise TransportError(f'unable to stat {self.value}: {exc}') from exc

        return memoryview(self.value).nbytes

    def __repr__(self) -> str:
        if self.kind == self.FILE:
            return f'Content.file({self.value!r})'
        if self.kind == self.PARAMS:
            return f'Content.params({self.value!r})'
        return f'Content.buf(<{memoryview(self.value).nbytes} bytes>)'


class Xfer:
    """Transmission context: the application channel messages are sent on."""

    def __init__(self, ch: Union[AppChannel, int, str]):
        if not isinstance(ch, AppChannel):
            ch = AppChannel(ch)
        self.ch = ch


class MsgInfo:
    """ Description of one message to send. A *cmd* of 0 means no command
        number. Consumed by a single :func:`send` call.
    """

    def __init__(self, cmd: int = 0, meta: Optional[Content] = None, payload: Optional[Content] = None):
        if isinstance(cmd, bool) or not isinstance(cmd, int) or not 0 <= cmd <= CMD_MAX:
            raise BadInputError(f'command must be an unsigned 32-bit integer, got {cmd!r}')
        self.cmd = cmd
        self.meta = meta
        self.payload = payload

    def get_meta_size(self) -> int:
        if self.meta is None:
            return 0

        size = self.meta.size()
        if size > META_MAX:
            raise BadInputError(f'metadata size {size} exceeds the maximum of {META_MAX} bytes')
        return size

    def get_payload_size(self) -> int:
        if self.payload is None:
            return 0

        size = self.payload.size()
        if size > PAYLOAD_MAX:
            raise BadInputError(f'payload size {size} exceeds the maximum of {PAYLOAD_MAX} bytes')
        return size


async def send(conn: Connection, xfer: Xfer, mi: MsgInfo) -> str:
    """ Send a message, including (if applicable) its metadata and
        payload. Returns the transfer identifier assigned by the server,
        once every section has been acknowledged.
    """

    metalen = mi.get_meta_size()
    payloadlen = mi.get_payload_size()

    tg = Telegram(fields.MSG)
    tg.add_param(fields.CHANNEL, str(xfer.ch))
    if mi.cmd != 0:
        tg.add_param(fields.CMD, mi.cmd)
    if metalen != 0:
        tg.add_param(fields.METALEN, metalen)
    if payloadlen != 0:
        tg.add_param(fields.LEN, payloadlen)

    params = await sendrecv(conn, tg)

    xferid = params.get_str(fields.XFERID)
    if xferid is None:
        raise MissingDataError('Missing expected transfer identifier from server reply')

    logger.debug('transfer %s accepted (cmd=%d, metalen=%d, len=%d)', xferid, mi.cmd, metalen, payloadlen)

    # An empty section is not announced, so it is neither sent nor
    # acknowledged.
    if metalen != 0:
        await _send_content(conn, mi.meta, metalen)
        await expect_okfail(conn)
        logger.debug('transfer %s: metadata acknowledged', xferid)

    if payloadlen != 0:
        await _send_content(conn, mi.payload, payloadlen)
        await expect_okfail(conn)
        logger.debug('transfer %s: payload acknowledged', xferid)

    logger.info('sent message %s on channel %s', xferid, xfer.ch)
    return xferid


async def _send_content(conn: Connection, data: Content, declared: int) -> None:

    if data.kind == Content.FILE:
        sent = await conn.send_file(data.value, declared)
        if sent != declared:
            raise BadStateError(f'{data.value} shrank during transfer ({declared} declared, {sent} sent)')
    else:
        await conn.send(data.value)


async def connsend(addr: Union[ProtAddr, str], auth, xfer: Xfer, mi: MsgInfo) -> str:
    """ Connect, optionally authenticate, send a message and disconnect.
        This is a convenience function for applications that only send a
        message occasionally.
    """

    conn = await connect(addr, auth)
    async with conn:
        return await send(conn, xfer, mi)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
