"""
Manager for HTTP sessions with connection pooling.
"""
import logging
import threading
from typing import Dict
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from keyauth.Constants import HEADERS
from keyauth.framework.RateLimitConfig import RateLimitConfig

logger = logging.getLogger(__name__)


class HTTPSessionManager:
    """
    Manager for HTTP sessions with connection pooling.
    One session per base URL, shared by every client pointed at it.
    """

    _sessions: Dict[str, requests.Session] = {}
    _lock = threading.Lock()

    @classmethod
    def getSession(cls, baseUrl: str) -> requests.Session:
        """
        Get or create a session for a base URL.

        Args:
            baseUrl: KeyAuth API base URL

        Returns:
            Configured requests.Session instance
        """
        with cls._lock:
            if baseUrl not in cls._sessions:
                cls._sessions[baseUrl] = cls._createSession(baseUrl)
            return cls._sessions[baseUrl]

    @classmethod
    def buildHeaders(cls, baseUrl: str) -> Dict[str, str]:
        """
        Fixed KeyAuth headers. Host follows the base URL so custom
        deployments are routed correctly; for the default URL it is keyauth.win.
        """
        headers = dict(HEADERS)
        host = urlparse(baseUrl).netloc
        if host:
            headers['Host'] = host
        return headers

    @classmethod
    def closeAll(cls) -> None:
        """Close and forget every pooled session."""
        with cls._lock:
            for session in cls._sessions.values():
                session.close()
            cls._sessions.clear()

    @classmethod
    def _createSession(cls, baseUrl: str) -> requests.Session:
        session = requests.Session()
        session.headers.update(cls.buildHeaders(baseUrl))

        adapter = HTTPAdapter(
            pool_connections=RateLimitConfig.POOL_CONNECTIONS,
            pool_maxsize=RateLimitConfig.POOL_MAXSIZE,
            max_retries=Retry(
                total=0,  # We handle retries with tenacity
                connect=0,
                read=0,
                redirect=5,
                raise_on_status=False
            )
        )

        session.mount('http://', adapter)
        session.mount('https://', adapter)

        logger.info(
            "HTTP_SESSION :: Created HTTP session | Base URL: %s | Pool: %d connections | Max: %d",
            baseUrl,
            RateLimitConfig.POOL_CONNECTIONS,
            RateLimitConfig.POOL_MAXSIZE
        )

        return session
