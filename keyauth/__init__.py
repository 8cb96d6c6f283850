"""
Python client for the KeyAuth licensing and authentication API.

Features:
- Typed client for every KeyAuth operation
- Token bucket rate limiting in front of every request
- Retries of transient transport failures with tenacity
- Pooled HTTP sessions with requests
- Prometheus metrics for requests, rate-limit hits and errors
- Event subscriptions for operations, responses and classified errors
"""
from keyauth.client.ClientAPI import ClientAPI
from keyauth.enums.ErrorCode import ErrorCode
from keyauth.enums.EventType import EventType
from keyauth.exceptions import ClientNotConfigured, InvalidConfiguration, KeyauthError, NotLoggedInError
from keyauth.framework.EventEmitter import EventEmitter
from keyauth.framework.RateLimiter import RateLimiter
from keyauth.framework.RequestDispatcher import RequestDispatcher
from keyauth.pojos import App, ClassifiedError, ClientOptions, LoggerOptions, RateLimitOptions, RequestEnvelope
from keyauth.utils import Helpers
from keyauth.utils.EmbedBuilder import Embed, EmbedBuilder

__version__ = "0.1.0"

__all__ = [
    'ClientAPI',
    'App',
    'ClientOptions',
    'RateLimitOptions',
    'LoggerOptions',
    'RequestEnvelope',
    'ClassifiedError',
    'EventType',
    'ErrorCode',
    'EventEmitter',
    'RateLimiter',
    'RequestDispatcher',
    'Embed',
    'EmbedBuilder',
    'Helpers',
    'KeyauthError',
    'InvalidConfiguration',
    'ClientNotConfigured',
    'NotLoggedInError',
]
