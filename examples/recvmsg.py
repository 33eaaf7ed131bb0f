#!/usr/bin/env python3
""" Subscribe to an application channel and print every message received
    on it until interrupted. Payloads larger than a threshold are written
    to files in the current directory instead of being kept in memory.
"""

import argparse
import asyncio
import logging
import signal
import sys

import ddmw
from ddmw.msg import StoreType


class Negotiator(ddmw.msg.StorageNegotiator):

    def __init__(self, threshold):
        self.threshold = threshold
        self.count = 0


    def negotiate(self, mi):

        self.count += 1

        if mi.payloadlen > self.threshold:
            payload = StoreType.file('msg-%d.payload' % (self.count,))
        else:
            payload = StoreType.bytes()

        return StoreType.params(), payload


def show(msg):

    print('cmd %d' % (msg.cmd,))
    if msg.meta is not None:
        for key, value in msg.meta.value.items():
            print('  %s = %s' % (key, value))
    if msg.payload is not None:
        print('  payload: %r' % (msg.payload.value,))


async def main(arguments):

    config = ddmw.config.load(arguments.config) or ddmw.Config()

    subif = arguments.subif
    if subif is None and config.receiver is not None:
        subif = config.receiver.subif
    if subif is None:
        raise ddmw.errors.BadParamsError('no subscriber interface configured')

    channel = arguments.channel
    if channel is None:
        channel = config.get_appch()
    if channel is None:
        raise ddmw.errors.BadParamsError('no application channel configured')

    kill = asyncio.Event()
    asyncio.get_running_loop().add_signal_handler(signal.SIGINT, kill.set)

    async with await ddmw.connect(subif, config.auth) as conn:
        await ddmw.msg.subscribe(conn, ddmw.msg.SubInfo(channel))
        await ddmw.msg.recvloop(conn, kill, Negotiator(arguments.threshold), show)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Receive messages from ddmw.')
    parser.add_argument('--config', help='Application configuration file.')
    parser.add_argument('--subif', help='Subscriber interface address.')
    parser.add_argument('--channel', type=ddmw.types.AppChannel.parse)
    parser.add_argument('--threshold', type=int, default=256 * 1024,
                        help='Payloads larger than this many bytes go to files.')
    arguments = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        asyncio.run(main(arguments))
    except ddmw.Error as e:
        sys.stderr.write('recvmsg: %s\n' % (e,))
        sys.exit(1)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
