"""Custom exceptions for the KeyAuth client.

Business failures reported by the remote service are never raised; they come
back as `success: False` results and `error` events. These exceptions cover
local precondition violations only.
"""


class KeyauthError(Exception):
    """Base class for KeyAuth client exceptions."""

    def __init__(self, message: str = "KeyAuth client error"):
        self.message = message
        super().__init__(message)


class InvalidConfiguration(KeyauthError, ValueError):
    """Raised when the rate limiter or client options are out of range."""

    def __init__(self, detail: str = "Refill rate and max tokens must be greater than zero."):
        super().__init__(detail)


class ClientNotConfigured(KeyauthError):
    """Raised when a client method runs on an object missing a required part.

    `component` names the missing piece (app, session, rateLimiter, logger).
    """

    def __init__(self, component: str):
        self.component = component
        super().__init__(
            f"API client is not properly initialized. Missing '{component}' configuration."
        )


class NotLoggedInError(KeyauthError):
    """Raised by session-scoped operations when the session check fails."""

    def __init__(self, sessionId: str = "", detail: str | None = None):
        self.sessionId = sessionId
        super().__init__(
            detail or "User Not Logged In: Please login before accessing user data."
        )
