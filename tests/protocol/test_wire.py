import ddmw
import pytest


def test_telegram():

    tg = ddmw.protocol.Telegram('Auth')
    tg.add_param('AccName', 'frank')
    tg.add_param('Pass', 'secret word')

    encoded = ddmw.protocol.pack_telegram(tg)
    assert encoded == b'Auth\nAccName frank\nPass secret word\n\n'

    decoded = ddmw.protocol.unpack_telegram(encoded)
    assert decoded == tg
    assert decoded.get_str('Pass') == 'secret word'


def test_new_topic():

    tg = ddmw.protocol.Telegram.new_topic('Ok', XferId='X1', Len=5)
    assert tg.topic == 'Ok'
    assert tg.to_dict() == {'XferId': 'X1', 'Len': '5'}

    params = tg.into_params()
    assert params.get_int('Len') == 5


def test_topic():

    tg = ddmw.protocol.Telegram()
    assert tg.get_topic() is None

    with pytest.raises(ddmw.errors.CodecError):
        ddmw.protocol.pack_telegram(tg)

    with pytest.raises(ddmw.errors.CodecError):
        tg.set_topic('')

    with pytest.raises(ddmw.errors.CodecError):
        tg.set_topic('Two words')

    tg.set_topic('WhoAmI')
    assert ddmw.protocol.pack_telegram(tg) == b'WhoAmI\n\n'


def test_unpack_edges():

    # A key without a value is empty.
    tg = ddmw.protocol.unpack_telegram(b'Fail\nErr\nLine a b c\n\n')
    assert tg.topic == 'Fail'
    assert tg.get_str('Err') == ''
    assert tg.get_str('Line') == 'a b c'

    with pytest.raises(ddmw.errors.CodecError):
        ddmw.protocol.unpack_telegram(b'\n\n')

    with pytest.raises(ddmw.errors.CodecError):
        ddmw.protocol.unpack_telegram(b'Ok\nKey \xff\n\n')


def test_crlf_rejected():

    for block in (b'Fail\r\n\n', b'Ok\nErr nope\r\n\n', b'Ok\nErr\r\n\n'):
        with pytest.raises(ddmw.errors.CodecError):
            ddmw.protocol.unpack_telegram(block)

    with pytest.raises(ddmw.errors.CodecError):
        ddmw.protocol.unpack_params(b'Id 1\r\n\n')


def test_params_and_kvlines():

    params = ddmw.protocol.unpack_params(b'Id 1\nName x\n\n')
    assert params.to_dict() == {'Id': '1', 'Name': 'x'}

    kvlines = ddmw.protocol.unpack_kvlines(b'A 1\nA 2\n\n')
    assert kvlines.get_all('A') == ['1', '2']

    assert ddmw.protocol.unpack_params(b'\n').to_dict() == {}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
