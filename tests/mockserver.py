""" A scripted stand-in for a ddmw core server, used to exercise the client
    against a real socket. Each test supplies a server script, which is
    handed a :class:`Peer` for the one accepted connection, and a client
    coroutine; :func:`run` runs both on the same event loop.

    Every frame the server receives is recorded in ``Peer.log`` in arrival
    order, as ``(topic, params_dict)`` for telegrams and ``('content',
    bytes)`` for content, so tests can assert on exactly what went over the
    wire.
"""

import asyncio
import os
import shutil
import tempfile

import ddmw
from ddmw.protocol import fields
from ddmw.transport import InputKind


class Peer:

    def __init__(self, conn):
        self.conn = conn
        self.log = list()


    async def expect(self, topic):
        """ Wait for the next telegram, check its topic, and return its
            parameters as a dictionary.
        """

        frame = await self.conn.next()
        assert frame is not None, 'client disconnected while %s was expected' % (topic,)
        assert frame.kind is InputKind.TELEGRAM

        tg = frame.value
        self.log.append((tg.topic, tg.to_dict()))
        assert tg.topic == topic, 'expected %s, got %s' % (topic, tg.topic)
        return tg.to_dict()


    async def content(self, size):
        self.conn.codec.expect_bytes(size)
        frame = await self.conn.next()
        self.log.append(('content', frame.value))
        return frame.value


    async def expect_eof(self):
        """ Wait for the client to hang up without sending anything
            further.
        """

        frame = await self.conn.next()
        if frame is not None:
            self.log.append((frame.kind.value, frame.value))
        assert frame is None, 'unexpected frame: %r' % (frame,)


    async def reply(self, topic, **params):
        await self.conn.send(ddmw.protocol.Telegram.new_topic(topic, **params))

    async def ok(self, **params):
        await self.reply(fields.OK, **params)

    async def fail(self, **params):
        await self.reply(fields.FAIL, **params)


    async def send_msg(self, cmd=0, meta=b'', payload=b''):
        """ Push an incoming message to a subscriber: the announcement,
            then the raw metadata and payload.
        """

        tg = ddmw.protocol.Telegram(fields.MSG)
        if cmd:
            tg.add_param(fields.CMD, cmd)
        if meta:
            tg.add_param(fields.METALEN, len(meta))
        if payload:
            tg.add_param(fields.LEN, len(payload))

        await self.conn.send(tg)
        if meta:
            await self.conn.send(meta)
        if payload:
            await self.conn.send(payload)


class MockServer:

    def __init__(self, script, uds=False):
        self.script = script
        self.uds = uds
        self.peer = None
        self.address = None
        self.error = None

        self._server = None
        self._tmpdir = None
        self._done = None


    async def start(self):

        self._done = asyncio.get_running_loop().create_future()

        if self.uds:
            # Socket paths are length limited; keep this one short.
            self._tmpdir = tempfile.mkdtemp(prefix='ddmw')
            path = os.path.join(self._tmpdir, 's')
            self._server = await asyncio.start_unix_server(self._accept, path)
            self.address = ddmw.transport.ProtAddr.uds(path)
        else:
            self._server = await asyncio.start_server(self._accept, '127.0.0.1', 0)
            port = self._server.sockets[0].getsockname()[1]
            self.address = ddmw.transport.ProtAddr.tcp('127.0.0.1:%d' % (port,))


    async def _accept(self, reader, writer):

        conn = ddmw.transport.Connection(reader, writer)
        self.peer = Peer(conn)

        try:
            await self.script(self.peer)
        except Exception as e:
            self.error = e
        finally:
            await conn.close()
            if not self._done.done():
                self._done.set_result(None)


    def raise_for_error(self):
        if self.error is not None:
            raise self.error


    async def finished(self):
        await self._done
        self.raise_for_error()


    async def stop(self):
        self._server.close()
        await self._server.wait_closed()
        if self._tmpdir is not None:
            shutil.rmtree(self._tmpdir, ignore_errors=True)


    @property
    def log(self):
        if self.peer is None:
            return list()
        return self.peer.log


def run(script, client, uds=False, timeout=10):
    """ Start a server running *script*, run ``client(address)`` against
        it, and wait for the script to finish. Returns the client's result
        and the server's frame log.

        A failure in the server script takes precedence over the client
        failure it most likely caused.
    """

    async def main():
        server = MockServer(script, uds)
        await server.start()

        try:
            try:
                result = await client(server.address)
            except BaseException:
                server.raise_for_error()
                raise

            await server.finished()
        finally:
            await server.stop()

        return result, server.log

    return asyncio.run(asyncio.wait_for(main(), timeout))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
