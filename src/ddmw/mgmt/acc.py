"""Account management."""

from __future__ import annotations

from typing import List, Optional, Set

from ..conn import sendrecv
from ..errors import BadInputError
from ..protocol import fields
from ..protocol.telegram import Telegram
from ..transport import Connection
from ..types import ObjRef


class Account:

    def __init__(self, id: int, name: str, lock: bool, perms: Set[str]):
        self.id = id
        self.name = name
        self.lock = lock
        self.perms = perms

    def __repr__(self) -> str:
        return f"Account(id={self.id}, name={self.name!r}, lock={self.lock}, perms={sorted(self.perms)!r})"


class LsEntry:

    def __init__(self, id: int, name: str):
        self.id = id
        self.name = name

    def __repr__(self) -> str:
        return f"LsEntry(id={self.id}, name={self.name!r})"


def _add_ref(tg: Telegram, acc: ObjRef) -> None:
    if acc.is_id:
        tg.add_param(fields.ID, acc.ref)
    else:
        tg.add_str(fields.NAME, acc.ref)


async def rd(conn: Connection, acc: Optional[ObjRef] = None) -> Account:
    """ Get information about an account. If *acc* is None the current
        connection's owner is returned.
    """

    tg = Telegram(fields.RDACC)
    if acc is not None:
        _add_ref(tg, acc)

    params = await sendrecv(conn, tg)

    return Account(
        params.get_int(fields.ID),
        params.get_param(fields.NAME),
        params.get_bool(fields.LOCK),
        params.get_hashset(fields.PERMS),
    )


async def ls(conn: Connection, inclock: bool = False) -> List[LsEntry]:
    """ Get a list of accounts.

        Only the numeric account identifiers and the associated unique
        account names are retrieved; call :func:`rd` for each entry for
        detailed information. Locked accounts are included if *inclock* is
        True.
    """

    tg = Telegram(fields.LSACC)
    if inclock:
        tg.add_bool(fields.ALL, True)

    params = await sendrecv(conn, tg)

    count = params.get_int(fields.COUNT)
    entries = list()
    for i in range(count):
        entries.append(LsEntry(params.get_int(f"{i}.Id"), params.get_param(f"{i}.Name")))

    return entries


class ModPerms:
    """ Account permission change. Use :meth:`set` to replace the
        permissions outright, or :meth:`grant` and/or :meth:`revoke` to
        adjust them; revoking a permission the account doesn't have, or
        granting one it already has, is silently ignored by the server.
    """

    def __init__(self, set: Optional[Set[str]] = None, grant: Optional[Set[str]] = None,
                 revoke: Optional[Set[str]] = None):
        if set is not None and (grant is not None or revoke is not None):
            raise BadInputError("permissions can either be set, or granted/revoked, not both")
        if set is None and grant is None and revoke is None:
            raise BadInputError("no permission change specified")
        self.set = set
        self.grant = grant
        self.revoke = revoke

    def apply(self, tg: Telegram) -> None:
        if self.set is not None:
            tg.add_strit(fields.PERMS, sorted(self.set))
        if self.grant is not None:
            tg.add_strit(fields.GRANT, sorted(self.grant))
        if self.revoke is not None:
            tg.add_strit(fields.REVOKE, sorted(self.revoke))


class WrAccount:
    """ Account fields to update. Fields left as None are not changed.

        :ivar name: New account name (not currently supported by servers).
        :ivar username: New real name; an empty string removes it.
        :ivar lock: Whether the account should be locked.
        :ivar perms: A :class:`ModPerms` permission change.
    """

    def __init__(self, name: Optional[str] = None, username: Optional[str] = None,
                 lock: Optional[bool] = None, perms: Optional[ModPerms] = None):
        self.name = name
        self.username = username
        self.lock = lock
        self.perms = perms


async def wr(conn: Connection, acc: ObjRef, ai: WrAccount) -> None:
    """Update an account."""

    tg = Telegram(fields.WRACC)
    _add_ref(tg, acc)

    if ai.name is not None:
        tg.add_str(fields.NEWNAME, ai.name)
    if ai.username is not None:
        tg.add_str(fields.USERNAME, ai.username)
    if ai.lock is not None:
        tg.add_bool(fields.LOCK, ai.lock)
    if ai.perms is not None:
        ai.perms.apply(tg)

    await sendrecv(conn, tg)


async def rm(conn: Connection, acc: ObjRef) -> None:
    """Remove an account."""

    tg = Telegram(fields.RMACC)
    _add_ref(tg, acc)
    await sendrecv(conn, tg)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
