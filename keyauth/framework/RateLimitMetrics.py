"""
Centralized metrics collection for KeyAuth requests and rate limiting.
"""
from prometheus_client import Counter, Histogram, Gauge

from keyauth.enums.ErrorCode import ErrorCode
from keyauth.enums.EventType import EventType


class RateLimitMetrics:
    """Centralized metrics collection for KeyAuth requests and rate limiting."""

    # Request metrics
    apiRequestsTotal = Counter(
        'keyauth_requests_total',
        'Total number of KeyAuth API requests',
        ['operation_type', 'status']
    )

    apiRequestDuration = Histogram(
        'keyauth_request_duration_seconds',
        'KeyAuth API request duration in seconds',
        ['operation_type']
    )

    rateLimitHits = Counter(
        'keyauth_rate_limit_hits_total',
        'Number of times the client-side rate limit was hit',
        ['operation_type']
    )

    classifiedErrors = Counter(
        'keyauth_errors_total',
        'Number of classified errors emitted',
        ['operation_type', 'error_code']
    )

    activeRequests = Gauge(
        'keyauth_active_requests',
        'Number of in-flight KeyAuth requests',
        ['operation_type']
    )

    @classmethod
    def recordSuccess(cls, operationType: EventType, duration: float):
        """Record a request the remote service reported as successful."""
        cls.apiRequestsTotal.labels(
            operation_type=operationType.value,
            status='success'
        ).inc()
        cls.apiRequestDuration.labels(operation_type=operationType.value).observe(duration)

    @classmethod
    def recordFailure(cls, operationType: EventType, duration: float):
        """Record a request the remote service answered with success=false."""
        cls.apiRequestsTotal.labels(
            operation_type=operationType.value,
            status='failure'
        ).inc()
        cls.apiRequestDuration.labels(operation_type=operationType.value).observe(duration)

    @classmethod
    def recordTransportError(cls, operationType: EventType):
        """Record a request that never produced a usable response."""
        cls.apiRequestsTotal.labels(
            operation_type=operationType.value,
            status='error'
        ).inc()

    @classmethod
    def recordRateLimitHit(cls, operationType: EventType):
        """Record a rejected admission."""
        cls.rateLimitHits.labels(operation_type=operationType.value).inc()

    @classmethod
    def recordClassifiedError(cls, operationType: EventType, errorCode: ErrorCode):
        """Record an emitted error event."""
        cls.classifiedErrors.labels(
            operation_type=operationType.value,
            error_code=errorCode.value
        ).inc()

    @classmethod
    def incrementActiveRequests(cls, operationType: EventType):
        """Increment in-flight request gauge."""
        cls.activeRequests.labels(operation_type=operationType.value).inc()

    @classmethod
    def decrementActiveRequests(cls, operationType: EventType):
        """Decrement in-flight request gauge."""
        cls.activeRequests.labels(operation_type=operationType.value).dec()
