""" Authentication and unauthentication.

    The :class:`Auth` record describes how a connection should be
    authenticated. It is typically loaded as the ``[auth]`` table of an
    application configuration file, see :mod:`ddmw.config`.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

import msgspec

from . import utils
from .conn import sendrecv
from .errors import InvalidCredentialsError, TransportError
from .protocol import fields
from .protocol.telegram import Telegram
from .transport import Connection


logger = logging.getLogger(__name__)


class Auth(msgspec.Struct, kw_only=True, rename={'passphrase': 'pass', 'pass_file': 'pass-file', 'token_file': 'token-file'}):
    """ Authentication context used to signal how to authenticate a
        connection. Every field is optional:

        :ivar name: Account name used to authenticate.
        :ivar pass_file: Load the raw account passphrase from this file.
        :ivar passphrase: Raw account passphrase; ``pass`` in configuration
            files. Only used if *name* has been set.
        :ivar token_file: Authentication token storage file.
        :ivar token: Raw authentication token.
    """

    name: Optional[str] = None
    pass_file: Optional[str] = None
    passphrase: Optional[str] = None
    token_file: Optional[str] = None
    token: Optional[str] = None


    def have_pass(self) -> bool:
        """ Return True if either a raw passphrase or a passphrase file has
            been set. The passphrase file is not checked for existence.
        """

        return self.passphrase is not None or self.pass_file is not None


    def get_pass(self) -> str:
        """ Return the raw passphrase if set. Otherwise load the passphrase
            file if set. Raise :class:`InvalidCredentialsError` if the
            passphrase can not be acquired.
        """

        if self.passphrase is not None:
            return self.passphrase

        if self.pass_file is not None:
            passphrase = utils.read_single_line(self.pass_file)
            if passphrase is None:
                raise InvalidCredentialsError('Unable to read passphrase from file')
            return passphrase

        raise InvalidCredentialsError('Missing passphrase')


    def get_token(self) -> Optional[str]:
        """ Return the raw token if set. Otherwise, if a token file has been
            set and it exists, load the token from it.

            If the token file does not exist, None is returned when both an
            account name and a passphrase (or passphrase file) are set,
            meaning the caller should request a new token and store it in
            the token file. Without an account name and passphrase a
            missing token file can not be recovered from, and
            :class:`InvalidCredentialsError` is raised.

            None is also returned if neither a token nor a token file is
            set.
        """

        if self.token is not None:
            return self.token

        if self.token_file is None:
            return None

        if os.path.exists(self.token_file):
            token = utils.read_single_line(self.token_file)
            if token is None:
                raise InvalidCredentialsError('Unable to read token from file')
            return token

        if self.name is None:
            raise InvalidCredentialsError('Unable to read token from file')

        if not self.have_pass():
            raise InvalidCredentialsError('Missing passphrase for token request')

        return None


    async def authenticate(self, conn: Connection) -> Optional[str]:
        """ Authenticate the connection *conn* using these credentials:

            1. If a token can be resolved (see :meth:`get_token`),
               authenticate with it. Token authentications never yield a
               new token, so None is returned.
            2. Otherwise require an account name and a passphrase, and
               authenticate with those. If a token file has been set a new
               token is requested as well.
            3. If the server issued a token, write it as the sole line of
               the token file and return it.
        """

        tkn = self.get_token()

        if tkn is not None:
            logger.debug('authenticating using token')
            await token(conn, CredStore.buf(tkn))
            return None

        if self.name is None:
            raise InvalidCredentialsError('Missing credentials')

        passphrase = self.get_pass()
        reqtkn = self.token_file is not None

        logger.debug('authenticating account %r (request token: %s)', self.name, reqtkn)
        newtkn = await accpass(conn, self.name, CredStore.buf(passphrase), reqtkn)

        if newtkn is None:
            return None

        if self.token_file is not None:
            try:
                utils.write_single_line(self.token_file, newtkn)
            except OSError as exc:
                raise TransportError(f'unable to write token file {self.token_file}: {exc}') from exc
            logger.info('stored new authentication token in %s', self.token_file)

        return newtkn


class CredStore:
    """ Where a token or passphrase is fetched from: either a string
        buffer, or the first line of a file.
    """

    BUF = 'buf'
    FILE = 'file'

    def __init__(self, kind: str, value: Union[str, 'os.PathLike[str]']):
        self.kind = kind
        self.value = value

    @classmethod
    def buf(cls, value: str) -> 'CredStore':
        return cls(cls.BUF, value)

    @classmethod
    def file(cls, path: Union[str, 'os.PathLike[str]']) -> 'CredStore':
        return cls(cls.FILE, path)

    def resolve(self, what: str) -> str:
        if self.kind == self.BUF:
            return self.value

        value = utils.read_single_line(self.value)
        if value is None:
            raise InvalidCredentialsError(f'Unable to read {what} from file')
        return value

    def __repr__(self) -> str:
        # Never expose the secret itself.
        if self.kind == self.FILE:
            return f'CredStore.file({os.fspath(self.value)!r})'
        return 'CredStore.buf(...)'


async def token(conn: Connection, tkn: CredStore) -> None:
    """Authenticate using an authentication token."""

    tkn = tkn.resolve('token')

    tg = Telegram(fields.AUTH)
    tg.add_param(fields.TKN, tkn)
    await sendrecv(conn, tg)


async def accpass(conn: Connection, accname: str, passphrase: CredStore, reqtkn: bool) -> Optional[str]:
    """ Authenticate using an account name and a passphrase, optionally
        requesting an authentication token.

        Returns the token issued by the server if one was requested and
        returned, otherwise None.
    """

    tg = Telegram(fields.AUTH)
    tg.add_param(fields.ACCNAME, accname)
    tg.add_param(fields.PASS, passphrase.resolve('passphrase'))

    if reqtkn:
        tg.add_param(fields.REQTKN, True)

    params = await sendrecv(conn, tg)

    if reqtkn:
        return params.get_str(fields.TKN)
    return None


async def unauthenticate(conn: Connection) -> None:
    """ Return ownership of a connection to the built-in unauthenticated
        account.
    """

    await sendrecv(conn, Telegram(fields.UNAUTH))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
