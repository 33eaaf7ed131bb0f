"""Key/value parameter buffers.

A :class:`Params` buffer is the body of every telegram, and can also be sent
on its own as message metadata. A :class:`KVLines` buffer is the ordered,
duplicate-friendly sibling used for line-oriented key/value text.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple, TypeVar

from ..errors import CodecError, MissingDataError, ParseError


T = TypeVar("T")

_TRUE = frozenset(("true", "t", "yes", "y", "on", "1"))
_FALSE = frozenset(("false", "f", "no", "n", "off", "0"))


def validate_key(key: str) -> str:
    """Keys are non-empty strings without whitespace."""

    if not isinstance(key, str) or key == "":
        raise CodecError(f"invalid parameter key: {key!r}")
    if any(ch.isspace() for ch in key):
        raise CodecError(f"parameter key may not contain whitespace: {key!r}")
    return key


def validate_value(value: Any) -> str:
    """Values are rendered to strings and may not span lines."""

    if isinstance(value, bool):
        value = "True" if value else "False"
    elif isinstance(value, (bytes, bytearray)):
        raise CodecError("parameter values must be text, not bytes")
    value = str(value)
    if "\n" in value or "\r" in value:
        raise CodecError("parameter value may not contain line breaks")
    return value


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ParseError(f"not a boolean value: {value!r}")


class Params:
    """Ordered mapping of parameter keys to string values."""

    def __init__(self, items: Optional[Dict[str, Any]] = None):
        self._hm: Dict[str, str] = {}
        if items:
            for key, value in items.items():
                self.add_param(key, value)

    # --- adders ---
    def add_param(self, key: str, value: Any) -> "Params":
        self._hm[validate_key(key)] = validate_value(value)
        return self

    def add_str(self, key: str, value: str) -> "Params":
        if not isinstance(value, str):
            raise CodecError(f"expected a string value for {key!r}")
        return self.add_param(key, value)

    def add_bool(self, key: str, flag: bool) -> "Params":
        return self.add_param(key, bool(flag))

    def add_strit(self, key: str, values: Iterable[str]) -> "Params":
        """Add a collection of strings as a single comma-separated value."""

        values = [validate_value(v) for v in values]
        for value in values:
            if "," in value:
                raise CodecError(f"list element may not contain a comma: {value!r}")
        return self.add_param(key, ",".join(values))

    # --- getters ---
    def have(self, key: str) -> bool:
        return key in self._hm

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._hm.get(key, default)

    def get_param(self, key: str, convert: Callable[[str], T] = str) -> T:
        """Return the value of *key* converted with *convert*.

        A missing key raises :class:`MissingDataError`; a value *convert*
        rejects raises :class:`ParseError`.
        """

        try:
            raw = self._hm[key]
        except KeyError:
            raise MissingDataError(f"parameter {key!r} not found") from None

        try:
            return convert(raw)
        except ParseError:
            raise
        except (TypeError, ValueError) as exc:
            raise ParseError(f"unable to parse parameter {key!r}: {exc}") from exc

    def get_int(self, key: str) -> int:
        return self.get_param(key, int)

    def get_bool(self, key: str) -> bool:
        return self.get_param(key, parse_bool)

    def get_hashset(self, key: str) -> Set[str]:
        raw = self.get_param(key)
        return set(v for v in raw.split(",") if v != "")

    # --- misc ---
    def calc_buf_size(self) -> int:
        """Number of bytes this buffer occupies when encoded on the wire."""

        size = 1
        for key, value in self._hm.items():
            size += len(key.encode()) + 1 + len(value.encode()) + 1
        return size

    def items(self):
        return self._hm.items()

    def keys(self):
        return self._hm.keys()

    def to_dict(self) -> Dict[str, str]:
        return dict(self._hm)

    def __contains__(self, key: object) -> bool:
        return key in self._hm

    def __iter__(self) -> Iterator[str]:
        return iter(self._hm)

    def __len__(self) -> int:
        return len(self._hm)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Params):
            return self._hm == other._hm
        return NotImplemented

    def __repr__(self) -> str:
        return f"Params({self._hm!r})"

    def __str__(self) -> str:
        return ", ".join(f"{k}={v}" for k, v in self._hm.items())


class KVLines:
    """Ordered key/value lines; the same key may occur more than once."""

    def __init__(self, lines: Optional[Iterable[Tuple[str, Any]]] = None):
        self._lines: List[Tuple[str, str]] = []
        for key, value in lines or ():
            self.append(key, value)

    def append(self, key: str, value: Any) -> "KVLines":
        self._lines.append((validate_key(key), validate_value(value)))
        return self

    def get_all(self, key: str) -> List[str]:
        return [v for k, v in self._lines if k == key]

    def calc_buf_size(self) -> int:
        size = 1
        for key, value in self._lines:
            size += len(key.encode()) + 1 + len(value.encode()) + 1
        return size

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KVLines):
            return self._lines == other._lines
        return NotImplemented

    def __repr__(self) -> str:
        return f"KVLines({self._lines!r})"


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
