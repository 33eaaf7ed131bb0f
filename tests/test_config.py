import ddmw
import pytest


EXAMPLE = """
channel = "telemetry"

[auth]
name = "sensor"
pass-file = "/etc/ddmw/sensor.pass"
token-file = "/var/lib/ddmw/sensor.token"

[sender]
msgif = "127.0.0.1:8001"

[receiver]
subif = "/var/run/ddmw/sub.sock"
sub-retries = 5
sub-retry-delay = "2s"
"""


def test_loads():

    config = ddmw.config.loads(EXAMPLE)

    assert config.get_appch() == ddmw.types.AppChannel('telemetry')
    assert config.get_sender_msgif() == ddmw.transport.ProtAddr.tcp('127.0.0.1:8001')

    assert config.auth.name == 'sensor'
    assert config.auth.pass_file == '/etc/ddmw/sensor.pass'
    assert config.auth.token_file == '/var/lib/ddmw/sensor.token'
    assert config.auth.passphrase is None

    assert config.receiver.sub_retries == 5
    assert config.receiver.sub_retry_delay == '2s'
    assert config.receiver.mgmtif is None


def test_numeric_channel():

    config = ddmw.config.loads('channel = "12"\n')
    assert config.get_appch().is_num
    assert config.get_appch() == ddmw.types.AppChannel(12)


def test_empty():

    config = ddmw.config.loads('')

    assert config.get_appch() is None
    assert config.get_sender_msgif() is None
    assert config.auth is None


def test_bad_config():

    with pytest.raises(ddmw.errors.ConfigError):
        ddmw.config.loads('channel = [')

    with pytest.raises(ddmw.errors.ConfigError):
        ddmw.config.loads('channel = 5\n')

    config = ddmw.config.loads('[sender]\nmsgif = "nowhere"\n')
    with pytest.raises(ddmw.errors.BadInputError):
        config.get_sender_msgif().host_port()

    config = ddmw.config.loads('channel = ""\n')
    with pytest.raises(ddmw.errors.ParseError):
        config.get_appch()


def test_setters():

    config = ddmw.Config()
    config.set_appch(ddmw.types.AppChannel(7)).set_auth_account('frank').set_auth_pass('pw')
    config.set_sender_msgif(ddmw.transport.ProtAddr.tcp('10.0.0.1:4000'))

    assert config.channel == '7'
    assert config.auth.name == 'frank'
    assert config.auth.get_pass() == 'pw'
    assert config.sender.msgif == '10.0.0.1:4000'

    config.set_auth_token('T').set_auth_token_file('/tmp/t').set_auth_pass_file('/tmp/p')
    assert config.auth.get_token() == 'T'


def test_load(tmp_path, monkeypatch):

    path = tmp_path / 'app.toml'
    path.write_text(EXAMPLE)

    assert ddmw.config.load(path).channel == 'telemetry'
    assert ddmw.config.load(tmp_path / 'missing.toml') is None

    monkeypatch.setenv(ddmw.config.ENVIRONMENT, str(path))
    assert ddmw.config.filename() == str(path)
    assert ddmw.config.load().channel == 'telemetry'

    monkeypatch.delenv(ddmw.config.ENVIRONMENT)
    monkeypatch.chdir(tmp_path)
    assert ddmw.config.filename() == 'ddmwapp.toml'
    assert ddmw.config.load() is None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
