from keyauth.pojos.App import App
from keyauth.pojos.ClientOptions import ClientOptions, RateLimitOptions, LoggerOptions
from keyauth.pojos.RequestEnvelope import RequestEnvelope
from keyauth.pojos.ClassifiedError import ClassifiedError

__all__ = [
    'App',
    'ClientOptions',
    'RateLimitOptions',
    'LoggerOptions',
    'RequestEnvelope',
    'ClassifiedError',
]
