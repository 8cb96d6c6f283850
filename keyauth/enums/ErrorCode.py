"""
Closed set of error kinds produced by the request dispatcher.
"""
from enum import Enum


class ErrorCode(Enum):
    """
    Error kinds reported on the `error` event.
    Values match the codes published by the KeyAuth client libraries.
    """
    SESSION_KILLED = "seesionKilled"
    NO_SESSION_ID = "noSessionID"
    NOT_INITIALIZED = "notInitialized"
    NOT_LOGGED_IN = "notLoggedIn"
    UNSUPPORTED_VAR_TYPE = "unsupportedVarType"
    UNKNOWN = "unknown"
    NO_CHAT_CHANNEL = "noChatChannel"
    INVALID_CLIENT_API = "invalidClientApi"
