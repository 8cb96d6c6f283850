"""
Per-instance client options.
Unset values fall back to the process-wide RateLimitConfig defaults.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from keyauth.Constants import DEFAULT_LOGGER_NAME
from keyauth.framework.RateLimitConfig import RateLimitConfig


@dataclass
class RateLimitOptions:
    """Token bucket sizing: `refillRate` is milliseconds per token."""
    maxTokens: float = field(default_factory=lambda: RateLimitConfig.MAX_TOKENS)
    refillRate: float = field(default_factory=lambda: RateLimitConfig.REFILL_RATE_MS)


@dataclass
class LoggerOptions:
    active: bool = False
    level: str = "error"
    name: str = DEFAULT_LOGGER_NAME


@dataclass
class ClientOptions:
    ratelimit: RateLimitOptions = field(default_factory=RateLimitOptions)
    convertTimes: bool = False
    baseUrl: Optional[str] = None
    logger: LoggerOptions = field(default_factory=LoggerOptions)
    maxRetryAttempts: int = field(default_factory=lambda: RateLimitConfig.MAX_RETRY_ATTEMPTS)
    timeout: int = field(default_factory=lambda: RateLimitConfig.DEFAULT_TIMEOUT_SECONDS)

    @property
    def resolvedBaseUrl(self) -> str:
        return self.baseUrl or RateLimitConfig.BASE_URL

    @staticmethod
    def fromDict(data: Optional[Dict[str, Any]]) -> 'ClientOptions':
        """
        Build options from the camelCase mapping form, e.g.
        {"ratelimit": {"maxTokens": 5, "refillRate": 1000}, "convertTimes": True}.

        Args:
            data: Options mapping, may be None or partial

        Returns:
            ClientOptions instance
        """
        if data is None:
            return ClientOptions()
        if isinstance(data, ClientOptions):
            return data

        options = ClientOptions(
            convertTimes=bool(data.get('convertTimes', False)),
            baseUrl=data.get('baseUrl'),
        )

        ratelimit = data.get('ratelimit')
        if ratelimit:
            options.ratelimit = RateLimitOptions(
                maxTokens=ratelimit.get('maxTokens', RateLimitConfig.MAX_TOKENS),
                refillRate=ratelimit.get('refillRate', RateLimitConfig.REFILL_RATE_MS),
            )

        loggerOptions = data.get('logger')
        if loggerOptions:
            options.logger = LoggerOptions(
                active=loggerOptions.get('active', False),
                level=loggerOptions.get('level', 'error'),
                name=loggerOptions.get('name', DEFAULT_LOGGER_NAME),
            )

        if 'maxRetryAttempts' in data:
            options.maxRetryAttempts = int(data['maxRetryAttempts'])
        if 'timeout' in data:
            options.timeout = int(data['timeout'])

        return options
