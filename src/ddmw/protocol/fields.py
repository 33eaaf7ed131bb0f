"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Reply topics
OK = "Ok"
FAIL = "Fail"

# Request topics
AUTH = "Auth"
UNAUTH = "Unauth"
WHOAMI = "WhoAmI"
MSG = "Msg"
SUB = "Sub"
GETNODEINFO = "GetNodeInfo"
RDACC = "RdAcc"
LSACC = "LsAcc"
WRACC = "WrAcc"
RMACC = "RmAcc"

# Authentication
TKN = "Tkn"
ACCNAME = "AccName"
PASS = "Pass"
REQTKN = "ReqTkn"

# Message transfers
CHANNEL = "_Ch"
CMD = "Cmd"
METALEN = "MetaLen"
LEN = "Len"
XFERID = "XferId"

# Subscriptions
CH = "Ch"

# Objects
ID = "Id"
NAME = "Name"
COUNT = "#"

# Accounts
LOCK = "Lock"
PERMS = "Perms"
GRANT = "Grant"
REVOKE = "Revoke"
NEWNAME = "NewName"
USERNAME = "UserName"
ALL = "All"

# Node information
NODE_TYPE = "ddmw.node"
NODE_VERSION = "ddmw.version"
NODE_OS = "os.name"
LINK_ENGINE = "ddmw.ddlnk.engine"
LINK_PROTOCOL = "ddmw.ddlink.protocol"
LINK_PROTIMPL = "ddmw.ddlink.protimpl"


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
