"""Helper functions for management commands."""

from . import acc


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
