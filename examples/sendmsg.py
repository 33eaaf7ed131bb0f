#!/usr/bin/env python3
""" Send a single message through a ddmw sender node. The connection and
    authentication parameters are taken from the application configuration
    file (see :mod:`ddmw.config`), and can be overridden on the command
    line.
"""

import argparse
import asyncio
import logging
import sys

import ddmw
from ddmw.msg import Content, MsgInfo, Xfer


def parse_arguments():

    parser = argparse.ArgumentParser(description='Send a message through ddmw.')
    parser.add_argument('--config', help='Application configuration file.')
    parser.add_argument('--msgif', help='Message interface address, host:port or socket path.')
    parser.add_argument('--channel', help='Application channel, by number or name.')
    parser.add_argument('--cmd', type=int, default=0, help='Command number.')
    parser.add_argument('--meta', action='append', default=list(), metavar='KEY=VALUE',
                        help='Metadata parameter; may be given more than once.')
    parser.add_argument('--verbose', '-v', action='store_true')
    parser.add_argument('payload', nargs='?', help='File to send as the payload.')

    return parser.parse_args()


async def main(arguments):

    config = ddmw.config.load(arguments.config) or ddmw.Config()

    if arguments.msgif is not None:
        config.set_sender_msgif(ddmw.transport.ProtAddr.parse(arguments.msgif))
    if arguments.channel is not None:
        config.set_appch(ddmw.types.AppChannel.parse(arguments.channel))

    addr = config.get_sender_msgif()
    channel = config.get_appch()

    if addr is None or channel is None:
        raise ddmw.errors.BadParamsError('both a message interface and a channel are required')

    meta = None
    if arguments.meta:
        params = ddmw.protocol.Params()
        for pair in arguments.meta:
            key, _, value = pair.partition('=')
            params.add_param(key, value)
        meta = Content.params(params)

    payload = None
    if arguments.payload is not None:
        payload = Content.file(arguments.payload)

    mi = MsgInfo(cmd=arguments.cmd, meta=meta, payload=payload)
    xferid = await ddmw.msg.connsend(addr, config.auth, Xfer(channel), mi)
    print(xferid)


if __name__ == '__main__':
    arguments = parse_arguments()

    level = logging.DEBUG if arguments.verbose else logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        asyncio.run(main(arguments))
    except ddmw.Error as e:
        sys.stderr.write('sendmsg: %s\n' % (e,))
        sys.exit(1)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
