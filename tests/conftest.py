import pytest

import ddmw
import mockserver


@pytest.fixture
def serve():
    """ Run a scripted server against a client coroutine; see
        :func:`mockserver.run`.
    """

    return mockserver.run


@pytest.fixture
def token_auth():
    return ddmw.Auth(token='T1')


@pytest.fixture
def pass_file(tmp_path):

    path = tmp_path / 'secret.pass'
    path.write_text('s3cr3t\n')
    return path


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
