"""
Centralized client configuration with environment variable support.
"""
import os


class RateLimitConfig:
    """Centralized client configuration with environment variable support."""

    BASE_URL = os.getenv('KEYAUTH_BASE_URL', 'https://keyauth.win/api/1.2/')

    # Token bucket: capacity and milliseconds needed to regenerate one token
    MAX_TOKENS = int(os.getenv('KEYAUTH_RATELIMIT_MAX_TOKENS', '10'))
    REFILL_RATE_MS = int(os.getenv('KEYAUTH_RATELIMIT_REFILL_RATE_MS', '5000'))

    # Retry configuration for transient transport failures
    MAX_RETRY_ATTEMPTS = int(os.getenv('KEYAUTH_MAX_RETRY_ATTEMPTS', '3'))
    RETRY_MIN_WAIT_SECONDS = int(os.getenv('KEYAUTH_RETRY_MIN_WAIT_SECONDS', '1'))
    RETRY_MAX_WAIT_SECONDS = int(os.getenv('KEYAUTH_RETRY_MAX_WAIT_SECONDS', '10'))

    # Connection pooling configuration
    POOL_CONNECTIONS = int(os.getenv('KEYAUTH_HTTP_POOL_CONNECTIONS', '10'))
    POOL_MAXSIZE = int(os.getenv('KEYAUTH_HTTP_POOL_MAXSIZE', '10'))

    # Timeout configuration
    DEFAULT_TIMEOUT_SECONDS = int(os.getenv('KEYAUTH_REQUEST_TIMEOUT_SECONDS', '30'))
