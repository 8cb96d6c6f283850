"""
Event types for KeyAuth operations and client notifications.
"""
from enum import Enum


class EventType(Enum):
    """
    Operation tags sent as the `type` request field, plus the
    cross-cutting notifications emitted by the client.
    """
    INIT = "init"
    LOG_IN = "login"
    LOG_OUT = "logout"
    REGISTER = "register"
    LICENSE = "license"
    FETCH_STATS = "fetchStats"
    BAN = "ban"
    CHANGE_USERNAME = "changeUsername"
    CHECK_BLACKLIST = "checkblacklist"
    CHECK = "check"
    DOWNLOAD = "file"
    FETCH_ONLINE = "fetchOnline"
    FORGOT_PASSWORD = "forgot"
    CHAT_GET = "chatget"
    GET_VAR = "getvar"
    LOG = "log"
    CHAT_SEND = "chatsend"
    SET_VAR = "setvar"
    UPGRADE = "upgrade"
    WEBHOOK = "webhook"
    VAR = "var"

    # Client notifications
    REQUEST = "request"
    RESPONSE = "response"
    METADATA = "metadata"
    ERROR = "error"
    SESSION = "session"
    INSTANCE = "instance"
    RATE_LIMIT = "ratelimit"

    @classmethod
    def getNotificationTypes(cls):
        """Event types that never go over the wire"""
        return [
            cls.REQUEST, cls.RESPONSE, cls.METADATA, cls.ERROR,
            cls.SESSION, cls.INSTANCE, cls.RATE_LIMIT,
        ]

    def isOperation(self) -> bool:
        """Check if this type is a remote operation tag"""
        return self not in self.getNotificationTypes()

    @classmethod
    def fromValue(cls, value):
        """Accept either an EventType or its string value"""
        if isinstance(value, cls):
            return value
        return cls(value)
