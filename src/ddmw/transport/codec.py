"""Frame codec.

The codec expects a telegram by default. The caller may ask for the single
next frame to be something else: a fixed number of bytes to discard, to
keep in memory, or to write to a file, or a parsed key/value block. Once
that frame has been decoded the codec goes back to expecting telegrams.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from ..errors import BadInputError, CodecError, DisconnectedError, TransportError
from ..protocol.params import KVLines, Params
from ..protocol.telegram import Telegram
from ..protocol import wire


logger = logging.getLogger(__name__)


class InputKind(enum.Enum):
    TELEGRAM = "telegram"
    PARAMS = "params"
    KVLINES = "kvlines"
    BYTES = "bytes"
    BYTESMUT = "bytesmut"
    FILE = "file"
    SKIPDONE = "skipdone"


class Input:
    """One decoded frame: its *kind* and the decoded *value*."""

    __slots__ = ("kind", "value")

    def __init__(self, kind: InputKind, value: Any = None):
        self.kind = kind
        self.value = value

    def __repr__(self) -> str:
        return f"Input({self.kind.name}, {self.value!r})"


class Codec:

    chunk_size = 64 * 1024

    def __init__(self):
        self._kind = InputKind.TELEGRAM
        self._size = 0
        self._path: Optional[Path] = None

    def _expect(self, kind: InputKind, size: int = 0, path: Optional[Path] = None) -> None:
        self._kind = kind
        self._size = size
        self._path = path

    def _reset(self) -> None:
        self._expect(InputKind.TELEGRAM)

    @staticmethod
    def _check_size(size: int) -> int:
        size = int(size)
        if size <= 0:
            raise BadInputError(f"expected frame length must be positive, got {size}")
        return size

    # --- one-shot expectations ---
    def skip(self, size: int) -> None:
        self._expect(InputKind.SKIPDONE, self._check_size(size))

    def expect_bytes(self, size: int) -> None:
        self._expect(InputKind.BYTES, self._check_size(size))

    def expect_bytesmut(self, size: int) -> None:
        self._expect(InputKind.BYTESMUT, self._check_size(size))

    def expect_params(self) -> None:
        self._expect(InputKind.PARAMS)

    def expect_kvlines(self) -> None:
        self._expect(InputKind.KVLINES)

    def expect_file(self, path: Union[str, "os.PathLike[str]"], size: int) -> None:
        self._expect(InputKind.FILE, self._check_size(size), Path(path))

    # --- encoding ---
    @staticmethod
    def encode(item: Any) -> Union[bytes, bytearray, memoryview]:
        if isinstance(item, Telegram):
            return wire.pack_telegram(item)
        if isinstance(item, Params):
            return wire.pack_params(item)
        if isinstance(item, KVLines):
            return wire.pack_kvlines(item)
        if isinstance(item, (bytes, bytearray, memoryview)):
            return item
        raise BadInputError(f"cannot encode {type(item).__name__}")

    # --- decoding ---
    async def decode(self, reader: asyncio.StreamReader) -> Optional[Input]:
        """ Decode the next frame from *reader*. Returns None if the stream
            ended cleanly on a frame boundary while a telegram was expected.
        """

        kind = self._kind
        try:
            if kind is InputKind.TELEGRAM:
                return await self._decode_telegram(reader)

            # Anything other than a telegram is a one-shot expectation.
            self._reset()

            if kind is InputKind.PARAMS:
                block = await self._read_block(reader)
                return Input(kind, wire.unpack_params(block))
            if kind is InputKind.KVLINES:
                block = await self._read_block(reader)
                return Input(kind, wire.unpack_kvlines(block))
            if kind is InputKind.BYTES:
                return Input(kind, await self._read_exactly(reader, self._size))
            if kind is InputKind.BYTESMUT:
                return Input(kind, bytearray(await self._read_exactly(reader, self._size)))
            if kind is InputKind.SKIPDONE:
                await self._discard(reader, self._size)
                return Input(kind)
            if kind is InputKind.FILE:
                path = await self._write_file(reader, self._path, self._size)
                return Input(kind, path)
        except asyncio.LimitOverrunError as exc:
            raise CodecError(f"frame exceeds the maximum header size: {exc}") from exc

        raise CodecError(f"unknown codec state: {kind!r}")

    async def _decode_telegram(self, reader: asyncio.StreamReader) -> Optional[Input]:
        while True:
            try:
                block = await reader.readuntil(wire.TERMINATOR)
            except asyncio.IncompleteReadError as exc:
                if exc.partial.strip(b"\n") == b"":
                    return None
                raise DisconnectedError("connection closed in the middle of a telegram") from exc

            # Stray blank lines between frames carry nothing.
            if block.strip(b"\n") == b"":
                continue

            return Input(InputKind.TELEGRAM, wire.unpack_telegram(block.lstrip(b"\n")))

    async def _read_block(self, reader: asyncio.StreamReader) -> bytes:
        lines = []
        while True:
            try:
                line = await reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as exc:
                raise DisconnectedError("connection closed in the middle of a parameter block") from exc
            if line == b"\n":
                break
            lines.append(line)
        lines.append(b"\n")
        return b"".join(lines)

    async def _read_exactly(self, reader: asyncio.StreamReader, size: int) -> bytes:
        try:
            return await reader.readexactly(size)
        except asyncio.IncompleteReadError as exc:
            raise DisconnectedError(
                f"connection closed after {len(exc.partial)} of {size} content bytes"
            ) from exc

    async def _discard(self, reader: asyncio.StreamReader, size: int) -> None:
        remaining = size
        while remaining > 0:
            chunk = await self._read_exactly(reader, min(remaining, self.chunk_size))
            remaining -= len(chunk)
        logger.debug("discarded %d content bytes", size)

    async def _write_file(self, reader: asyncio.StreamReader, path: Path, size: int) -> Path:
        remaining = size
        try:
            with open(path, "wb") as f:
                while remaining > 0:
                    chunk = await self._read_exactly(reader, min(remaining, self.chunk_size))
                    f.write(chunk)
                    remaining -= len(chunk)
        except OSError as exc:
            raise TransportError(f"unable to write {path}: {exc}") from exc

        logger.debug("wrote %d content bytes to %s", size, path)
        return path


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
