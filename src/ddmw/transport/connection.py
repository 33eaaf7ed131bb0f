"""Framed duplex connection over TCP or a local domain socket."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Optional, Union

from ..errors import TransportError
from .address import ProtAddr
from .codec import Codec, Input


logger = logging.getLogger(__name__)

# Upper bound on the size of a single telegram or parameter block.
MAX_HEADER_SIZE = 1024 * 1024


class Connection:
    """ A :class:`Connection` pairs an asyncio stream with a :class:`Codec`.
        Exactly one logical request/reply exchange may be in flight at a
        time; there is no internal synchronization, the owner of the
        connection is responsible for not interleaving operations.
    """

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 address: Optional[ProtAddr] = None, codec: Optional[Codec] = None):
        self.reader = reader
        self.writer = writer
        self.address = address
        self.codec = codec if codec is not None else Codec()

    async def send(self, item: Any) -> None:
        """Encode and transmit a telegram, a parameter buffer, or raw bytes."""

        data = self.codec.encode(item)
        await self._write(data)
        logger.debug("sent %s (%d bytes)", type(item).__name__, len(data))

    async def send_file(self, path: Union[str, "os.PathLike[str]"], size: Optional[int] = None) -> int:
        """ Stream the contents of the file at *path* without buffering the
            whole file in memory. If *size* is given no more than *size*
            bytes are sent, even if the file has grown since its length was
            announced. Returns the number of bytes written.
        """

        total = 0
        try:
            with open(path, "rb") as f:
                while size is None or total < size:
                    want = self.codec.chunk_size
                    if size is not None:
                        want = min(want, size - total)
                    chunk = f.read(want)
                    if not chunk:
                        break
                    await self._write(chunk)
                    total += len(chunk)
        except OSError as exc:
            raise TransportError(f"unable to read {path}: {exc}") from exc

        logger.debug("streamed %d bytes from %s", total, path)
        return total

    async def _write(self, data: bytes) -> None:
        try:
            self.writer.write(data)
            await self.writer.drain()
        except (ConnectionError, OSError) as exc:
            raise TransportError(f"write failed: {exc}") from exc

    async def next(self) -> Optional[Input]:
        """ Return the next decoded frame, or None if the peer closed the
            connection on a frame boundary.
        """

        try:
            frame = await self.codec.decode(self.reader)
        except (ConnectionError, OSError) as exc:
            raise TransportError(f"read failed: {exc}") from exc

        if frame is None:
            logger.debug("end of stream from %s", self.address)
        return frame

    async def close(self) -> None:
        if self.writer.is_closing():
            return
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError):
            # The peer may already have torn the connection down.
            pass

    async def __aenter__(self) -> "Connection":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"Connection({self.address!r})"


async def open_connection(addr: ProtAddr) -> Connection:
    """Establish a TCP/IP or a local domain socket connection."""

    try:
        if addr.is_uds:
            reader, writer = await asyncio.open_unix_connection(addr.addr, limit=MAX_HEADER_SIZE)
        else:
            host, port = addr.host_port()
            reader, writer = await asyncio.open_connection(host, port, limit=MAX_HEADER_SIZE)
    except OSError as exc:
        raise TransportError(f"unable to connect to {addr}: {exc}") from exc

    logger.info("connected to %s", addr)
    return Connection(reader, writer, addr)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
