import ddmw
import pytest

from ddmw.transport import ProtAddr


def test_parse():

    addr = ProtAddr.parse('127.0.0.1:8001')
    assert addr.is_tcp
    assert addr.host_port() == ('127.0.0.1', 8001)
    assert str(addr) == '127.0.0.1:8001'

    addr = ProtAddr.parse('[::1]:9000')
    assert addr.host_port() == ('::1', 9000)


@pytest.mark.skipif(not ddmw.transport.HAVE_UDS, reason='no local domain sockets')
def test_parse_uds():

    addr = ProtAddr.parse('/var/run/ddmw/msg.sock')
    assert addr.is_uds
    assert addr == ProtAddr.uds('/var/run/ddmw/msg.sock')

    with pytest.raises(ddmw.errors.BadInputError):
        addr.host_port()


def test_bad_addresses():

    for text in ('localhost', ':8001', 'localhost:http', 'localhost:0', 'localhost:70000'):
        with pytest.raises(ddmw.errors.BadInputError):
            ProtAddr.tcp(text).host_port()

    with pytest.raises(ddmw.errors.BadInputError):
        ProtAddr('carrier-pigeon', 'coop')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
