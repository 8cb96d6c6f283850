"""
Token bucket rate limiter guarding every outbound KeyAuth request.
"""
import logging
import threading
import time
from typing import Callable, Optional

from keyauth.exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)


def _monotonicMs() -> float:
    return time.monotonic() * 1000


def _sleepMs(ms: float) -> None:
    time.sleep(ms / 1000)


class RateLimiter:
    """
    Token bucket limiter with whole-token refill.

    Refill adds floor(elapsed / refillRate) tokens and always moves the
    refill timestamp to now, so elapsed time shorter than one interval is
    discarded at every refill check rather than carried forward.
    After waiting in awaitAdmission() the bucket is reset to full capacity.

    Bucket state is only touched under an internal lock. The lock is not
    held while sleeping.
    """

    def __init__(
        self,
        maxTokens: float,
        refillRate: float,
        clock: Optional[Callable[[], float]] = None,
        sleeper: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize the bucket full.

        Args:
            maxTokens: Bucket capacity
            refillRate: Milliseconds needed to regenerate one token
            clock: Millisecond clock, defaults to time.monotonic
            sleeper: Sleep function taking milliseconds, defaults to time.sleep

        Raises:
            InvalidConfiguration: If either value is not greater than zero
        """
        if maxTokens <= 0 or refillRate <= 0:
            raise InvalidConfiguration()

        self.maxTokens = maxTokens
        self.refillRate = refillRate
        self._clock = clock or _monotonicMs
        self._sleep = sleeper or _sleepMs
        self._lock = threading.Lock()
        self.tokens = maxTokens
        self.lastRefillTime = self._clock()

    def _refill(self) -> None:
        # Caller holds self._lock
        now = self._clock()
        elapsed = now - self.lastRefillTime
        tokensToAdd = int(elapsed // self.refillRate)
        self.tokens = min(self.tokens + tokensToAdd, self.maxTokens)
        self.lastRefillTime = now

    def tryAdmit(self) -> bool:
        """
        Take one token if available.

        Returns:
            True if the call is admitted, False if the bucket is empty
        """
        with self._lock:
            self._refill()
            if self.tokens > 0:
                self.tokens -= 1
                return True
            return False

    def _timeUntilNextTokenLocked(self) -> float:
        self._refill()
        if self.tokens > 0:
            return 0
        elapsed = self._clock() - self.lastRefillTime
        return max(0, self.refillRate - elapsed)

    def timeUntilNextTokenMs(self) -> float:
        """Minimum wait in milliseconds before a token is available, 0 if one is available now."""
        with self._lock:
            return self._timeUntilNextTokenLocked()

    def awaitAdmission(self) -> None:
        """
        Sleep until the next token is due, then reset the bucket to capacity.
        """
        waitMs = self.timeUntilNextTokenMs()

        if waitMs > 0:
            logger.debug("RATE_LIMITER :: Waiting %.0f ms for admission", waitMs)
            self._sleep(waitMs)

        with self._lock:
            self.tokens = self.maxTokens

    def timeUntilNextTokenString(self) -> str:
        """Human-readable form of timeUntilNextTokenMs()"""
        return formatWait(self.timeUntilNextTokenMs())


def formatWait(waitMs: float) -> str:
    """
    Format a wait in milliseconds.

    Examples:
        0 -> Now
        250 -> 250 milliseconds
        1500 -> 1 second
        125000 -> 2 minutes
        7200000 -> 2 hours
    """
    if waitMs <= 0:
        return "Now"
    if waitMs < 1000:
        return f"{int(waitMs)} milliseconds"

    seconds = int(waitMs // 1000)
    if seconds < 60:
        return f"{seconds} second{'' if seconds == 1 else 's'}"

    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} minute{'' if minutes == 1 else 's'}"

    hours = minutes // 60
    return f"{hours} hour{'' if hours == 1 else 's'}"
