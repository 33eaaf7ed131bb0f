import ddmw
import pytest

from ddmw.mgmt.acc import ModPerms, WrAccount
from ddmw.types import ObjRef


def run_client(serve, server, operation):

    async def client(addr):
        async with await ddmw.connect(addr) as conn:
            return await operation(conn)

    return serve(server, client)


def test_rd(serve):

    async def server(peer):
        params = await peer.expect('RdAcc')
        assert params == {'Name': 'frank'}
        await peer.ok(Id=4, Name='frank', Lock=False, Perms='mgmt,msg')
        await peer.expect_eof()

    account, log = run_client(serve, server, lambda conn: ddmw.mgmt.acc.rd(conn, ObjRef('frank')))

    assert account.id == 4
    assert account.name == 'frank'
    assert account.lock is False
    assert account.perms == set(('mgmt', 'msg'))


def test_rd_current(serve):

    async def server(peer):
        params = await peer.expect('RdAcc')
        assert params == {}
        await peer.ok(Id=1, Name='admin', Lock=False, Perms='')
        await peer.expect_eof()

    account, log = run_client(serve, server, ddmw.mgmt.acc.rd)
    assert account.perms == set()


def test_ls(serve):

    async def server(peer):
        params = await peer.expect('LsAcc')
        assert params == {'All': 'True'}
        await peer.ok(**{'#': 2, '0.Id': 1, '0.Name': 'admin', '1.Id': 4, '1.Name': 'frank'})
        await peer.expect_eof()

    entries, log = run_client(serve, server, lambda conn: ddmw.mgmt.acc.ls(conn, inclock=True))

    assert [(entry.id, entry.name) for entry in entries] == [(1, 'admin'), (4, 'frank')]


def test_wr(serve):

    async def server(peer):
        params = await peer.expect('WrAcc')
        assert params == {'Id': '4', 'UserName': 'Frank Smith', 'Lock': 'True', 'Grant': 'a,b', 'Revoke': 'c'}
        await peer.ok()
        await peer.expect_eof()

    ai = WrAccount(username='Frank Smith', lock=True, perms=ModPerms(grant=set(('b', 'a')), revoke=set(('c',))))
    result, log = run_client(serve, server, lambda conn: ddmw.mgmt.acc.wr(conn, ObjRef(4), ai))

    assert result is None


def test_rm(serve):

    async def server(peer):
        await peer.expect('RmAcc')
        await peer.fail(Err='Account not found')
        await peer.expect_eof()

    async def operation(conn):
        with pytest.raises(ddmw.errors.ServerError):
            await ddmw.mgmt.acc.rm(conn, ObjRef.parse('17'))

    result, log = run_client(serve, server, operation)
    assert log == [('RmAcc', {'Id': '17'})]


def test_modperms():

    with pytest.raises(ddmw.errors.BadInputError):
        ModPerms(set=set(('a',)), grant=set(('b',)))

    with pytest.raises(ddmw.errors.BadInputError):
        ModPerms()

    tg = ddmw.protocol.Telegram('WrAcc')
    ModPerms(set=set(('z', 'x'))).apply(tg)
    assert tg.to_dict() == {'Perms': 'x,z'}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
