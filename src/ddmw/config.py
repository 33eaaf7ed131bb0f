""" Load and parse ddmw application configuration files.

    Most ddmw applications need the same handful of configuration
    parameters: the application channel, where to reach the sender and
    receiver nodes, and how to authenticate. The file format is TOML::

        channel = "telemetry"

        [auth]
        name = "sensor"
        pass-file = "/etc/ddmw/sensor.pass"
        token-file = "/var/lib/ddmw/sensor.token"

        [sender]
        msgif = "127.0.0.1:8001"

    The configuration file is entirely optional.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import msgspec
import msgspec.toml

from .auth import Auth
from .errors import BadInputError, ConfigError, ParseError
from .transport import ProtAddr
from .types import AppChannel


logger = logging.getLogger(__name__)

ENVIRONMENT = 'DDMW_APPCONF'
DEFAULT_FILENAME = 'ddmwapp.toml'


class Sender(msgspec.Struct, kw_only=True):
    mgmtif: Optional[str] = None
    msgif: Optional[str] = None


class Receiver(msgspec.Struct, kw_only=True, rename='kebab'):
    mgmtif: Optional[str] = None
    subif: Optional[str] = None
    sub_retries: Optional[int] = None
    sub_retry_delay: Optional[str] = None
    push_listenif: Optional[str] = None


class Config(msgspec.Struct, kw_only=True):
    """ A ddmw application configuration. Every section is optional; the
        setters create missing sections on demand and return the instance,
        so calls can be chained.
    """

    channel: Optional[str] = None
    auth: Optional[Auth] = None
    sender: Optional[Sender] = None
    receiver: Optional[Receiver] = None


    def set_appch(self, appch: AppChannel) -> 'Config':
        self.channel = str(appch)
        return self

    def get_appch(self) -> Optional[AppChannel]:
        if self.channel is None:
            return None
        try:
            return AppChannel.parse(self.channel)
        except BadInputError as exc:
            raise ParseError(f'AppChannel, {exc}') from exc

    def set_sender_msgif(self, pa: ProtAddr) -> 'Config':
        if self.sender is None:
            self.sender = Sender()
        self.sender.msgif = str(pa)
        return self

    def get_sender_msgif(self) -> Optional[ProtAddr]:
        if self.sender is None or self.sender.msgif is None:
            return None
        try:
            return ProtAddr.parse(self.sender.msgif)
        except BadInputError as exc:
            raise ParseError(f'ProtAddr, {exc}') from exc

    def _auth(self) -> Auth:
        if self.auth is None:
            self.auth = Auth()
        return self.auth

    def set_auth_account(self, name: str) -> 'Config':
        self._auth().name = name
        return self

    def set_auth_pass(self, passphrase: str) -> 'Config':
        self._auth().passphrase = passphrase
        return self

    def set_auth_pass_file(self, pass_file: str) -> 'Config':
        self._auth().pass_file = pass_file
        return self

    def set_auth_token(self, token: str) -> 'Config':
        self._auth().token = token
        return self

    def set_auth_token_file(self, token_file: str) -> 'Config':
        self._auth().token_file = token_file
        return self


def filename(fname=None):
    """ Return the configuration file name to use:

        1. *fname*, if it is not None.
        2. The value of the ``DDMW_APPCONF`` environment variable, if set.
        3. ``ddmwapp.toml`` in the current working directory.
    """

    if fname is not None:
        return os.fspath(fname)

    return os.environ.get(ENVIRONMENT, DEFAULT_FILENAME)


def loads(text) -> Config:
    """Parse the contents of a configuration file."""

    try:
        return msgspec.toml.decode(text, type=Config)
    except (msgspec.DecodeError, msgspec.ValidationError) as exc:
        raise ConfigError(str(exc)) from exc


def load(fname=None) -> Optional[Config]:
    """ Load a ddmw application configuration file, choosing the file as
        described in :func:`filename`. Returns None if the file does not
        exist.
    """

    fname = filename(fname)

    if not os.path.exists(fname):
        logger.debug('no configuration file at %s', fname)
        return None

    try:
        with open(fname, 'rb') as f:
            text = f.read()
    except OSError as exc:
        raise ConfigError(f'unable to read {fname}: {exc}') from exc

    config = loads(text)
    logger.debug('loaded configuration from %s', fname)
    return config


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
