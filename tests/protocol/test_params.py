import ddmw
import pytest


def test_basics():

    params = ddmw.protocol.Params()
    params.add_param('Id', 42)
    params.add_str('Name', 'frank')
    params.add_bool('Lock', True)

    assert len(params) == 3
    assert params.have('Id')
    assert not params.have('Missing')
    assert 'Name' in params
    assert list(params) == ['Id', 'Name', 'Lock']

    assert params.get_str('Id') == '42'
    assert params.get_int('Id') == 42
    assert params.get_bool('Lock') is True
    assert params.get_str('Missing') is None
    assert params.get_str('Missing', 'default') == 'default'


def test_replace():

    params = ddmw.protocol.Params()
    params.add_param('Key', 'one')
    params.add_param('Key', 'two')

    assert len(params) == 1
    assert params.get_str('Key') == 'two'


def test_get_param():

    params = ddmw.protocol.Params({'Num': '17', 'Text': 'abc'})

    assert params.get_param('Num', int) == 17
    assert params.get_param('Text') == 'abc'

    with pytest.raises(ddmw.errors.MissingDataError):
        params.get_param('Missing', int)

    with pytest.raises(ddmw.errors.ParseError):
        params.get_int('Text')


def test_bools():

    params = ddmw.protocol.Params()
    for value in ('true', 'T', 'yes', 'on', '1'):
        params.add_param('Flag', value)
        assert params.get_bool('Flag') is True

    for value in ('false', 'F', 'no', 'off', '0'):
        params.add_param('Flag', value)
        assert params.get_bool('Flag') is False

    params.add_param('Flag', 'maybe')
    with pytest.raises(ddmw.errors.ParseError):
        params.get_bool('Flag')

    params.add_bool('Flag', False)
    assert params.get_str('Flag') == 'False'


def test_strit():

    params = ddmw.protocol.Params()
    params.add_strit('Perms', ('read', 'write'))

    assert params.get_str('Perms') == 'read,write'
    assert params.get_hashset('Perms') == set(('read', 'write'))

    params.add_param('Empty', '')
    assert params.get_hashset('Empty') == set()

    with pytest.raises(ddmw.errors.CodecError):
        params.add_strit('Perms', ('a,b',))


def test_bad_keys_and_values():

    params = ddmw.protocol.Params()

    with pytest.raises(ddmw.errors.CodecError):
        params.add_param('', 'value')

    with pytest.raises(ddmw.errors.CodecError):
        params.add_param('has space', 'value')

    with pytest.raises(ddmw.errors.CodecError):
        params.add_param('Key', 'two\nlines')

    with pytest.raises(ddmw.errors.CodecError):
        params.add_param('Key', b'bytes')

    with pytest.raises(ddmw.errors.CodecError):
        params.add_str('Key', 5)

    assert len(params) == 0


def test_buf_size():

    params = ddmw.protocol.Params()
    assert params.calc_buf_size() == 1

    params.add_param('Foo', 'bar')
    params.add_param('Id', 7)

    encoded = ddmw.protocol.pack_params(params)
    assert encoded == b'Foo bar\nId 7\n\n'
    assert params.calc_buf_size() == len(encoded)

    # Sizes are in bytes, not characters.
    params = ddmw.protocol.Params({'Name': 'Käse'})
    assert params.calc_buf_size() == len(ddmw.protocol.pack_params(params))


def test_str():

    params = ddmw.protocol.Params({'Err': 'denied', 'Code': 3})
    assert str(params) == 'Err=denied, Code=3'
    assert params == ddmw.protocol.Params({'Err': 'denied', 'Code': '3'})


def test_kvlines():

    kvlines = ddmw.protocol.KVLines()
    kvlines.append('Host', 'alpha')
    kvlines.append('Host', 'beta')
    kvlines.append('Port', 80)

    assert len(kvlines) == 3
    assert kvlines.get_all('Host') == ['alpha', 'beta']
    assert kvlines.get_all('Port') == ['80']
    assert list(kvlines)[0] == ('Host', 'alpha')

    encoded = ddmw.protocol.pack_kvlines(kvlines)
    assert encoded == b'Host alpha\nHost beta\nPort 80\n\n'
    assert kvlines.calc_buf_size() == len(encoded)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
