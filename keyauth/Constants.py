"""
Global constants for the KeyAuth client.
"""

# API endpoint
BASE_URL = "https://keyauth.win/api/1.2/"

HEADERS = {
    'accept': 'application/json',
    'Host': 'keyauth.win',
    'Content-Type': 'application/x-www-form-urlencoded',
}

# Rate limit defaults (10 tokens, one token per 5000 ms)
DEFAULT_MAX_TOKENS = 10
DEFAULT_REFILL_RATE_MS = 5000

DEFAULT_APP_VERSION = "1.0"
DEFAULT_LOGGER_NAME = "Keyauth API"

# Remote sentinel for a misconfigured application
INVALID_CLIENT_SENTINEL = "KeyAuth_Invalid"

# Messages
MSG_CLIENT_NOT_SET_UP = "Keyauth API client not set up correctly!"
MSG_LOG_SENT = "Log successfully sent."
MSG_ALREADY_INITIALIZED = "Already initialized"
MSG_INIT_REQUIRED = "API Initialization Required: Please initialize the API first."
MSG_NOT_LOGGED_IN = "User Not Logged In: Please login before accessing user data."
MSG_SESSION_KILLED = "The session was killed!"
MSG_RATE_LIMIT_HIT = "Client Api rate limit hit please wait {}"
MSG_METADATA_RETRIEVED = "MetaData Successfully retrieved"
MSG_METADATA_UPDATED = "MetaData Successfully updated"
MSG_METADATA_MISSING = "Failed to retrieve metaData. Try setting metaData first"
MSG_METADATA_UNSUPPORTED = "Stored metaData is not valid JSON"

# Remote message patterns used for error classification
PATTERN_SESSION_NOT_FOUND = "Session not found."
PATTERN_CHAT_CHANNEL_NOT_FOUND = "Chat channel not found"
PATTERN_INVALID_CLIENT = "Keyauth API client"

METADATA_VAR_ID = "metaData"

# Logging
LOG_PREFIX = "KEYAUTH"
