"""Various types used when communicating with core servers."""

from __future__ import annotations

from typing import Union

from ..errors import BadInputError
from . import node


class ObjRef:
    """ Reference an object (typically an account), either by numeric
        identifier or by name.
    """

    def __init__(self, ref: Union[int, str]):
        if isinstance(ref, bool) or not isinstance(ref, (int, str)):
            raise BadInputError(f"object reference must be an id or a name, not {ref!r}")
        if isinstance(ref, str) and ref == "":
            raise BadInputError("object reference name may not be empty")
        self.ref = ref

    @classmethod
    def parse(cls, text: str) -> "ObjRef":
        """Strings that parse as integers are identifiers, anything else is a name."""

        try:
            return cls(int(text))
        except ValueError:
            return cls(text)

    @property
    def is_id(self) -> bool:
        return isinstance(self.ref, int)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObjRef):
            return self.ref == other.ref
        return NotImplemented

    def __repr__(self) -> str:
        return f"ObjRef({self.ref!r})"

    def __str__(self) -> str:
        return str(self.ref)


class OptObjRef(ObjRef):
    """ Same as :class:`ObjRef`, with the option to implicitly reference
        the current connection's owner (``OptObjRef.current()``).
    """

    def __init__(self, ref: Union[int, str, None] = None):
        if ref is None:
            self.ref = None
        else:
            super().__init__(ref)

    @classmethod
    def current(cls) -> "OptObjRef":
        return cls(None)

    @property
    def is_current(self) -> bool:
        return self.ref is None

    @property
    def is_id(self) -> bool:
        return self.ref is not None and isinstance(self.ref, int)

    def __repr__(self) -> str:
        return f"OptObjRef({self.ref!r})"


class AppChannel:
    """ An application message channel, referenced either by number
        (0-255) or by name.
    """

    def __init__(self, ch: Union[int, str]):
        if isinstance(ch, bool):
            raise BadInputError(f"invalid application channel: {ch!r}")
        if isinstance(ch, int):
            if not 0 <= ch <= 255:
                raise BadInputError(f"application channel number out of range: {ch}")
        elif not isinstance(ch, str) or ch == "":
            raise BadInputError(f"invalid application channel: {ch!r}")
        self.ch = ch

    @classmethod
    def parse(cls, text: str) -> "AppChannel":
        """Strings that parse as an 8-bit number are channel numbers, anything else is a name."""

        try:
            num = int(text)
        except ValueError:
            return cls(text)
        if 0 <= num <= 255:
            return cls(num)
        return cls(text)

    @property
    def is_num(self) -> bool:
        return isinstance(self.ch, int)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AppChannel):
            return self.ch == other.ch
        return NotImplemented

    def __repr__(self) -> str:
        return f"AppChannel({self.ch!r})"

    def __str__(self) -> str:
        return str(self.ch)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
