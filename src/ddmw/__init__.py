""" Python client library for creating integrations against DDMW. This
    includes establishing (and authenticating) connections to a core
    server's client interfaces, sending and receiving messages, probing the
    server, and account management.
"""

# Submodules used by multiple other components.

from . import errors
from . import protocol
from . import transport
from . import types

# Primary public-facing interfaces.

from . import conn
from . import auth
from . import msg
from . import probe
from . import mgmt
from . import config

from .errors import Error
from .conn import connect, expect_okfail, sendrecv
from .auth import Auth
from .config import Config

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
