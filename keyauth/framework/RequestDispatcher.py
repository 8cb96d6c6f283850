"""
Single choke point between client operations and the KeyAuth API.
"""
import logging
import time
from typing import Any, Dict, Optional

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

from keyauth.Constants import MSG_RATE_LIMIT_HIT
from keyauth.enums.EventType import EventType
from keyauth.framework import ErrorClassifier
from keyauth.framework.ClientLogger import ClientLogger
from keyauth.framework.EventEmitter import EventEmitter
from keyauth.framework.HTTPSessionManager import HTTPSessionManager
from keyauth.framework.RateLimitConfig import RateLimitConfig
from keyauth.framework.RateLimitMetrics import RateLimitMetrics
from keyauth.framework.RateLimiter import RateLimiter
from keyauth.framework.ResponseNormalizer import UnexpectedPayload, normalize
from keyauth.pojos.App import App
from keyauth.pojos.RequestEnvelope import RequestEnvelope

logger = logging.getLogger(__name__)


class RetryableStatusError(requests.exceptions.HTTPError):
    """HTTP 429 or 5xx; retried before being reported."""


class RequestDispatcher:
    """
    Runs one envelope through admission, execution, normalization,
    notification and error classification.

    Business failures (success=false) and transport failures are returned
    as results and reported on the `error` event; neither is raised.
    """

    def __init__(
        self,
        app: App,
        rateLimiter: RateLimiter,
        eventEmitter: EventEmitter,
        clientLogger: ClientLogger,
        baseUrl: str = RateLimitConfig.BASE_URL,
        timeout: int = RateLimitConfig.DEFAULT_TIMEOUT_SECONDS,
        maxRetryAttempts: int = RateLimitConfig.MAX_RETRY_ATTEMPTS,
        session: Optional[requests.Session] = None,
        retryWait=None,
    ):
        """
        Initialize dispatcher.

        Args:
            app: Application identity attached to every request
            rateLimiter: Limiter shared by every call of the owning client
            eventEmitter: Registry receiving request/response/error events
            clientLogger: Tagged per-client logger
            baseUrl: KeyAuth API base URL
            timeout: Request timeout in seconds
            maxRetryAttempts: Attempts for transient transport failures (1 disables retries)
            session: HTTP session, pooled per base URL when omitted
            retryWait: tenacity wait strategy, exponential backoff when omitted
        """
        self.app = app
        self.rateLimiter = rateLimiter
        self.eventEmitter = eventEmitter
        self.clientLogger = clientLogger
        self.baseUrl = baseUrl
        self.timeout = timeout
        self.maxRetryAttempts = max(1, maxRetryAttempts)
        self.session = session or HTTPSessionManager.getSession(baseUrl)
        self.retryWait = retryWait or wait_exponential(
            multiplier=1,
            min=RateLimitConfig.RETRY_MIN_WAIT_SECONDS,
            max=RateLimitConfig.RETRY_MAX_WAIT_SECONDS
        )

    def dispatch(self, envelope: RequestEnvelope) -> Dict[str, Any]:
        """
        Send one request to the KeyAuth API.

        Args:
            envelope: Operation type, parameters and event suppression flags

        Returns:
            Normalized response dict with `time` in milliseconds.
            Transport failures return {success: False, message, time}.
        """
        operationType = envelope.operationType
        self.clientLogger.debug(EventType.REQUEST, "Making a request to keyauth API.")

        self._admit(envelope)

        params = envelope.toParams()
        outboundParams = {**params, **self.app.identityFields()}
        startTime = time.time()

        RateLimitMetrics.incrementActiveRequests(operationType)
        try:
            statusCode, payload = self._execute(outboundParams)
            result = normalize(operationType, statusCode, payload)
        except (requests.exceptions.RequestException, UnexpectedPayload) as e:
            return self._handleTransportError(envelope, e, self._elapsedMs(startTime))
        finally:
            RateLimitMetrics.decrementActiveRequests(operationType)

        responseTime = self._elapsedMs(startTime)
        result['time'] = responseTime

        if result.get('success') is False:
            RateLimitMetrics.recordFailure(operationType, responseTime / 1000)
        else:
            RateLimitMetrics.recordSuccess(operationType, responseTime / 1000)

        if not envelope.skipResponseEvent:
            self.eventEmitter.emit(EventType.RESPONSE, {**result, 'type': operationType.value})

        self.eventEmitter.emit(EventType.REQUEST, {
            'type': operationType.value,
            'request': {
                'url': self.baseUrl,
                'params': params,
            },
            'response': dict(result),
        })

        if result.get('success') is False and not envelope.skipErrorEvent:
            classified = ErrorClassifier.classify(
                operationType,
                result.get('message'),
                envelope.sessionId
            )
            self._emitError(classified)

        return result

    def _admit(self, envelope: RequestEnvelope) -> None:
        """Block until the rate limiter admits this request."""
        waitStart = time.time()

        while not self.rateLimiter.tryAdmit():
            waitText = self.rateLimiter.timeUntilNextTokenString()
            message = MSG_RATE_LIMIT_HIT.format(waitText)
            notification = {
                'type': EventType.RATE_LIMIT.value,
                'operation': envelope.operationType.value,
                'success': False,
                'message': message,
                'time': self._elapsedMs(waitStart),
            }

            RateLimitMetrics.recordRateLimitHit(envelope.operationType)
            logger.warning(
                "RATE_LIMITER :: Rate limit hit | Type: %s | Wait: %s",
                envelope.operationType.value,
                waitText
            )
            self.clientLogger.debug(EventType.REQUEST, f"Rate limit hit please wait {waitText}")

            self.eventEmitter.emit(EventType.RATE_LIMIT, notification)
            self.eventEmitter.emit(EventType.RESPONSE, notification)

            self.rateLimiter.awaitAdmission()

    def _execute(self, params: Dict[str, Any]):
        """
        Perform the HTTP call, retrying transient failures.

        Returns:
            Tuple of (status code, decoded payload)
        """
        @retry(
            stop=stop_after_attempt(self.maxRetryAttempts),
            wait=self.retryWait,
            retry=retry_if_exception_type((
                requests.exceptions.Timeout,
                requests.exceptions.ConnectionError,
                RetryableStatusError
            )),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        def _executeRequest():
            response = self.session.get(self.baseUrl, params=params, timeout=self.timeout)
            return self._handleResponse(response)

        return _executeRequest()

    def _handleResponse(self, response: requests.Response):
        """
        Decode a response.

        Raises:
            RetryableStatusError: For 429 and 5xx responses
            requests.exceptions.HTTPError: For any other non-2xx response
        """
        statusCode = response.status_code

        if statusCode == 429 or 500 <= statusCode < 600:
            logger.warning(
                "KEYAUTH_DISPATCHER :: Retryable status | Status: %d | Retrying...",
                statusCode
            )
            raise RetryableStatusError(f"Request failed with status code {statusCode}", response=response)

        if not 200 <= statusCode < 300:
            raise requests.exceptions.HTTPError(
                f"Request failed with status code {statusCode}",
                response=response
            )

        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        return statusCode, payload

    def _handleTransportError(self, envelope: RequestEnvelope, error: Exception, responseTime: int) -> Dict[str, Any]:
        operationType = envelope.operationType
        message = str(error)

        RateLimitMetrics.recordTransportError(operationType)
        logger.error(
            "KEYAUTH_DISPATCHER :: Request failed | Type: %s | Error: %s",
            operationType.value,
            message
        )
        self.clientLogger.error(EventType.ERROR, message)

        if not envelope.skipErrorEvent:
            classified = ErrorClassifier.classify(operationType, message, envelope.sessionId, rules=[])
            self._emitError(classified)

        return {'success': False, 'message': message, 'time': responseTime}

    def _emitError(self, classified) -> None:
        RateLimitMetrics.recordClassifiedError(classified.operationType, classified.errorKind)
        self.eventEmitter.emit(EventType.ERROR, classified.toEvent())

    @staticmethod
    def _elapsedMs(startTime: float) -> int:
        return int((time.time() - startTime) * 1000)
