""" Functions for receiving messages.

    An incoming message is announced by a ``Msg`` telegram carrying the
    command number and the lengths of the metadata and payload that
    follow. Before any content is read the application is asked, through a
    :class:`StorageNegotiator`, how each section should be materialized:
    discarded, kept in memory, parsed, or written to a file.

    The negotiated choice is a *request*:

    - A section whose declared length is zero is never read, and its
      member of :class:`Msg` is None, whatever was requested for it.
    - A section requested as :meth:`StoreType.none` is read and discarded;
      its member of :class:`Msg` is a :class:`Storage` of kind
      ``StoreKind.NONE``, signalling completion rather than content.
"""

from __future__ import annotations

import asyncio
import enum
import inspect
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

from ..conn import sendrecv
from ..errors import BadInputError, BadStateError, DisconnectedError, ParseError, ServerError
from ..protocol import fields
from ..protocol.params import Params
from ..protocol.telegram import Telegram
from ..transport import Connection, Input, InputKind
from ..types import AppChannel


logger = logging.getLogger(__name__)


class StoreKind(enum.Enum):
    NONE = 'none'
    BYTES = 'bytes'
    BYTESMUT = 'bytesmut'
    PARAMS = 'params'
    KVLINES = 'kvlines'
    FILE = 'file'

    # A file whose location was chosen by the server rather than the
    # application. Never produced by a StoreType request.
    LOCALFILE = 'localfile'


class StoreType:
    """ How the application requests a message's metadata or payload to be
        stored. Construct with one of the class methods.
    """

    def __init__(self, kind: StoreKind, path: Optional[Path] = None):
        if kind is StoreKind.LOCALFILE:
            raise BadInputError('local file storage can not be requested')
        if (kind is StoreKind.FILE) != (path is not None):
            raise BadInputError('a file path is required for, and only for, file storage')
        self.kind = kind
        self.path = path

    @classmethod
    def none(cls) -> 'StoreType':
        """Read and discard the content."""
        return cls(StoreKind.NONE)

    @classmethod
    def bytes(cls) -> 'StoreType':
        """Keep the content as an immutable ``bytes`` buffer."""
        return cls(StoreKind.BYTES)

    @classmethod
    def bytesmut(cls) -> 'StoreType':
        """Keep the content as a mutable ``bytearray`` buffer."""
        return cls(StoreKind.BYTESMUT)

    @classmethod
    def params(cls) -> 'StoreType':
        """Parse the content into a :class:`Params` buffer."""
        return cls(StoreKind.PARAMS)

    @classmethod
    def kvlines(cls) -> 'StoreType':
        """Parse the content into a :class:`KVLines` buffer."""
        return cls(StoreKind.KVLINES)

    @classmethod
    def file(cls, path: Union[str, 'os.PathLike[str]']) -> 'StoreType':
        """Write the content to the file at *path*."""
        return cls(StoreKind.FILE, Path(path))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StoreType):
            return self.kind is other.kind and self.path == other.path
        return NotImplemented

    def __repr__(self) -> str:
        if self.path is not None:
            return f'StoreType.{self.kind.value}({str(self.path)!r})'
        return f'StoreType.{self.kind.value}()'


class Storage:
    """ The materialized metadata or payload of a received message.

        :ivar kind: A :class:`StoreKind`.
        :ivar value: ``bytes``, ``bytearray``, :class:`Params`,
            :class:`KVLines` or a :class:`pathlib.Path`, depending on the
            kind; None for ``StoreKind.NONE``.

        For ``StoreKind.LOCALFILE`` it is the application's responsibility
        to move the file to its own storage, or remove it.
    """

    def __init__(self, kind: StoreKind, value: Any = None):
        self.kind = kind
        self.value = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Storage):
            return self.kind is other.kind and self.value == other.value
        return NotImplemented

    def __repr__(self) -> str:
        return f'Storage({self.kind.name}, {self.value!r})'


class MsgInfo:
    """ Information about an incoming message, as declared by the server,
        passed to the storage negotiator.
    """

    def __init__(self, cmd: int, metalen: int, payloadlen: int):
        self.cmd = cmd
        self.metalen = metalen
        self.payloadlen = payloadlen

    def __repr__(self) -> str:
        return f'MsgInfo(cmd={self.cmd}, metalen={self.metalen}, payloadlen={self.payloadlen})'


class Msg:
    """A received message with its optional metadata and payload."""

    def __init__(self, cmd: int, meta: Optional[Storage] = None, payload: Optional[Storage] = None):
        self.cmd = cmd
        self.meta = meta
        self.payload = payload

    def __repr__(self) -> str:
        return f'Msg(cmd={self.cmd}, meta={self.meta!r}, payload={self.payload!r})'


class StorageNegotiator(ABC):
    """ Strategy deciding how the metadata and payload of each incoming
        message are stored.
    """

    @abstractmethod
    def negotiate(self, mi: MsgInfo) -> Tuple[StoreType, StoreType]:
        """ Return the requested storage for the metadata and for the
            payload, in that order. Raising aborts the reception.
        """


NegotiateFn = Callable[[MsgInfo], Tuple[StoreType, StoreType]]


def _negotiate_fn(negotiator: Union[StorageNegotiator, NegotiateFn]) -> NegotiateFn:
    """Accept either a :class:`StorageNegotiator` or a plain callable."""

    if isinstance(negotiator, StorageNegotiator):
        return negotiator.negotiate
    if callable(negotiator):
        return negotiator
    raise BadInputError('expected a StorageNegotiator or a callable')


class SubInfo:
    """Subscription request for an application message channel."""

    def __init__(self, ch: Union[AppChannel, int, str]):
        if not isinstance(ch, AppChannel):
            ch = AppChannel(ch)
        self.ch = ch


async def subscribe(conn: Connection, subinfo: SubInfo) -> None:
    """Subscribe to an application message channel."""

    tg = Telegram(fields.SUB)
    tg.add_param(fields.CH, subinfo.ch.ch)
    await sendrecv(conn, tg)
    logger.info('subscribed to channel %s', subinfo.ch)


def _unsigned(bits: int) -> Callable[[str], int]:
    limit = (1 << bits) - 1

    def convert(text: str) -> int:
        value = int(text)
        if not 0 <= value <= limit:
            raise ParseError(f'{value} does not fit in an unsigned {bits}-bit integer')
        return value

    return convert


_u32 = _unsigned(32)
_u64 = _unsigned(64)


async def _wait_msg(conn: Connection) -> Params:
    """ Wait for the next frame and require it to be a ``Msg`` telegram.
        Returns the telegram's parameters.
    """

    frame = await conn.next()
    if frame is None:
        raise DisconnectedError()

    if frame.kind is not InputKind.TELEGRAM:
        raise BadStateError('Unexpected codec input type.')

    tg: Telegram = frame.value
    topic = tg.get_topic()
    if topic == fields.MSG:
        return tg.into_params()
    if topic == fields.FAIL:
        raise ServerError(tg.into_params())

    raise BadStateError(f'Unexpected telegram from server: {topic!r}')


def _expect(conn: Connection, store: StoreType, size: int) -> None:
    """Configure the codec for the section about to arrive."""

    codec = conn.codec
    kind = store.kind

    if kind is StoreKind.NONE:
        codec.skip(size)
    elif kind is StoreKind.BYTES:
        codec.expect_bytes(size)
    elif kind is StoreKind.BYTESMUT:
        codec.expect_bytesmut(size)
    elif kind is StoreKind.PARAMS:
        codec.expect_params()
    elif kind is StoreKind.KVLINES:
        codec.expect_kvlines()
    elif kind is StoreKind.FILE:
        codec.expect_file(store.path, size)
    else:
        raise BadInputError(f'unsupported storage request: {store!r}')


_INPUT_STORAGE = {
    InputKind.SKIPDONE: StoreKind.NONE,
    InputKind.BYTES: StoreKind.BYTES,
    InputKind.BYTESMUT: StoreKind.BYTESMUT,
    InputKind.PARAMS: StoreKind.PARAMS,
    InputKind.KVLINES: StoreKind.KVLINES,
    InputKind.FILE: StoreKind.FILE,
}


async def _get_content(conn: Connection) -> Storage:
    """Translate the next frame from the codec into a :class:`Storage`."""

    frame: Optional[Input] = await conn.next()
    if frame is None:
        raise DisconnectedError()

    try:
        kind = _INPUT_STORAGE[frame.kind]
    except KeyError:
        raise BadStateError('Unexpected codec input type.') from None

    return Storage(kind, frame.value)


async def _get_section(conn: Connection, store: StoreType, size: int) -> Storage:
    if not isinstance(store, StoreType):
        raise BadInputError(f'storage negotiation returned {store!r}, expected a StoreType')
    _expect(conn, store, size)
    return await _get_content(conn)


async def _proc_inbound_msg(conn: Connection, mp: Params, negotiate: NegotiateFn) -> Msg:

    metalen = mp.get_param(fields.METALEN, _u32) if mp.have(fields.METALEN) else 0
    payloadlen = mp.get_param(fields.LEN, _u64) if mp.have(fields.LEN) else 0
    cmd = mp.get_param(fields.CMD, _u32) if mp.have(fields.CMD) else 0

    if metalen == 0 and payloadlen == 0:
        logger.debug('received message (cmd=%d) without content', cmd)
        return Msg(cmd)

    mi = MsgInfo(cmd, metalen, payloadlen)
    meta_store, payload_store = negotiate(mi)
    logger.debug('negotiated %r: meta=%r payload=%r', mi, meta_store, payload_store)

    meta = None
    if metalen != 0:
        meta = await _get_section(conn, meta_store, metalen)

    payload = None
    if payloadlen != 0:
        payload = await _get_section(conn, payload_store, payloadlen)

    return Msg(cmd, meta, payload)


async def recv(conn: Connection, negotiator: Union[StorageNegotiator, NegotiateFn]) -> Msg:
    """ Receive a single message.

        The *negotiator* is consulted, at most once, when the message has
        metadata and/or payload; it returns a tuple of two
        :class:`StoreType` values, the first for the metadata and the
        second for the payload. It is not consulted at all if the message
        has neither.

        Example::

            def negotiate(mi):
                if mi.payloadlen > 256 * 1024:
                    return StoreType.bytes(), StoreType.file('msg.payload')
                return StoreType.bytes(), StoreType.bytes()

            msg = await recv(conn, negotiate)
    """

    negotiate = _negotiate_fn(negotiator)
    mp = await _wait_msg(conn)
    return await _proc_inbound_msg(conn, mp, negotiate)


async def _wait_msg_or_kill(conn: Connection, kill: asyncio.Event) -> Optional[Params]:
    """ Race the arrival of the next ``Msg`` telegram against *kill*. The
        message wins a tie. Returns None if *kill* fired first.
    """

    msg_task = asyncio.ensure_future(_wait_msg(conn))
    kill_task = asyncio.ensure_future(kill.wait())

    try:
        await asyncio.wait((msg_task, kill_task), return_when=asyncio.FIRST_COMPLETED)
    except BaseException:
        msg_task.cancel()
        kill_task.cancel()
        raise

    kill_task.cancel()

    if msg_task.done():
        return msg_task.result()

    msg_task.cancel()
    await asyncio.wait((msg_task,))
    if not msg_task.cancelled():
        # The read finished (or failed) while being cancelled; the loop is
        # stopping regardless.
        msg_task.exception()
    return None


async def recvloop(conn: Connection, kill: Optional[asyncio.Event],
                   negotiator: Union[StorageNegotiator, NegotiateFn],
                   procmsg: Callable[[Msg], Optional[Awaitable[None]]]) -> None:
    """ Keep receiving messages, handing each one to *procmsg*, until the
        connection is closed or *kill* is set.

        *procmsg* may be a plain function or a coroutine function. Errors
        raised by it, or by the reception, end the loop and propagate.

        The *kill* event is only raced against the arrival of the next
        message. A message whose announcement has arrived is always fully
        received and delivered to *procmsg* before *kill* is looked at
        again.

        Returns normally only when *kill* is set. Without *kill* the loop
        runs until the server disconnects, which raises
        :class:`DisconnectedError`.
    """

    negotiate = _negotiate_fn(negotiator)

    while True:
        if kill is None:
            mp = await _wait_msg(conn)
        else:
            if kill.is_set():
                break
            mp = await _wait_msg_or_kill(conn, kill)
            if mp is None:
                break

        msg = await _proc_inbound_msg(conn, mp, negotiate)

        result = procmsg(msg)
        if inspect.isawaitable(result):
            await result

    logger.debug('reception loop on %r stopped', conn)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
