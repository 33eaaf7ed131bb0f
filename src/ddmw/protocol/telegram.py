from __future__ import annotations

from typing import Any, Dict, Optional

from ..errors import CodecError
from .params import Params


class Telegram:
    """ A :class:`Telegram` is the unit of every request and reply on a
        ddmw connection: a *topic* naming what the telegram is about, and a
        :class:`Params` buffer of key/value parameters.

        The topic is a non-empty string without whitespace. Replies are
        classified solely by topic (``Ok`` or ``Fail``).
    """

    def __init__(self, topic: Optional[str] = None, params: Optional[Params] = None):
        self._topic: Optional[str] = None
        self.params = params if params is not None else Params()
        if topic is not None:
            self.set_topic(topic)

    @classmethod
    def new_topic(cls, topic: str, **fields: Any) -> "Telegram":
        tg = cls(topic)
        for key, value in fields.items():
            tg.add_param(key, value)
        return tg

    @property
    def topic(self) -> Optional[str]:
        return self._topic

    def get_topic(self) -> Optional[str]:
        return self._topic

    def set_topic(self, topic: str) -> "Telegram":
        if not isinstance(topic, str) or topic == "":
            raise CodecError("telegram topic must be a non-empty string")
        if any(ch.isspace() for ch in topic):
            raise CodecError(f"telegram topic may not contain whitespace: {topic!r}")
        self._topic = topic
        return self

    def add_param(self, key: str, value: Any) -> "Telegram":
        self.params.add_param(key, value)
        return self

    def add_str(self, key: str, value: str) -> "Telegram":
        self.params.add_str(key, value)
        return self

    def add_bool(self, key: str, flag: bool) -> "Telegram":
        self.params.add_bool(key, flag)
        return self

    def add_strit(self, key: str, values) -> "Telegram":
        self.params.add_strit(key, values)
        return self

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.params.get_str(key, default)

    def into_params(self) -> Params:
        return self.params

    def to_dict(self) -> Dict[str, str]:
        return self.params.to_dict()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Telegram):
            return self._topic == other._topic and self.params == other.params
        return NotImplemented

    def __repr__(self) -> str:
        return f"Telegram({self._topic!r}, {self.params.to_dict()!r})"


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
