from __future__ import annotations

from typing import Iterable, List, Tuple

from ..errors import CodecError
from .params import KVLines, Params, validate_key
from .telegram import Telegram


# Lines end with a bare LF; a CR is not accepted anywhere in a frame. A
# blank line terminates every telegram and parameter block.
TERMINATOR = b"\n\n"

_ENCODING = "utf-8"


def _pack_lines(lines: Iterable[Tuple[str, str]]) -> bytes:
    out = [f"{key} {value}\n" for key, value in lines]
    out.append("\n")
    return "".join(out).encode(_ENCODING)


def pack_telegram(tg: Telegram) -> bytes:
    """
    Serialize Telegram -> bytes

    Layout:
        Topic\\n
        Key Value\\n
        ...
        \\n
    """

    topic = tg.get_topic()
    if topic is None:
        raise CodecError("telegram has no topic")

    return topic.encode(_ENCODING) + b"\n" + _pack_lines(tg.params.items())


def pack_params(params: Params) -> bytes:
    return _pack_lines(params.items())


def pack_kvlines(kvlines: KVLines) -> bytes:
    return _pack_lines(kvlines)


def _split_lines(block: bytes) -> List[str]:
    """Decode a terminated block into its non-empty lines."""

    try:
        text = block.decode(_ENCODING)
    except UnicodeDecodeError as exc:
        raise CodecError(f"frame is not valid UTF-8: {exc}") from exc

    lines = text.split("\n")
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def _parse_line(line: str) -> Tuple[str, str]:
    if " " in line:
        key, value = line.split(" ", 1)
    else:
        key, value = line, ""
    return validate_key(key), value


def unpack_telegram(block: bytes) -> Telegram:
    lines = _split_lines(block)
    if not lines:
        raise CodecError("empty telegram")

    tg = Telegram(lines[0])
    for line in lines[1:]:
        key, value = _parse_line(line)
        tg.params.add_param(key, value)
    return tg


def unpack_params(block: bytes) -> Params:
    params = Params()
    for line in _split_lines(block):
        key, value = _parse_line(line)
        params.add_param(key, value)
    return params


def unpack_kvlines(block: bytes) -> KVLines:
    kvlines = KVLines()
    for line in _split_lines(block):
        key, value = _parse_line(line)
        kvlines.append(key, value)
    return kvlines


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
