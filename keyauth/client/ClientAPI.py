"""
KeyAuth API client.

Each operation builds a request envelope, hands it to the RequestDispatcher
and emits its own event. Results are plain dicts carrying `success`,
`message`, `time` and the operation's fields.
"""
import logging
from typing import Any, Callable, Dict, Optional, Union

import requests

from keyauth.Constants import (
    MSG_ALREADY_INITIALIZED,
    MSG_INIT_REQUIRED,
    MSG_NOT_LOGGED_IN,
)
from keyauth.client.ChatAPI import ChatAPI
from keyauth.client.MetaDataAPI import MetaDataAPI
from keyauth.client.VarAPI import VarAPI
from keyauth.enums.ErrorCode import ErrorCode
from keyauth.enums.EventType import EventType
from keyauth.exceptions import ClientNotConfigured, NotLoggedInError
from keyauth.framework.ClientLogger import ClientLogger
from keyauth.framework.EventEmitter import EventEmitter
from keyauth.framework.RateLimiter import RateLimiter
from keyauth.framework.RequestDispatcher import RequestDispatcher
from keyauth.pojos.App import App
from keyauth.pojos.ClassifiedError import ClassifiedError
from keyauth.pojos.ClientOptions import ClientOptions
from keyauth.pojos.RequestEnvelope import RequestEnvelope
from keyauth.utils.EmbedBuilder import EmbedBuilder
from keyauth.utils.Helpers import convertTimestampsToLocalDates

logger = logging.getLogger(__name__)


class ClientAPI:
    """
    Client for the KeyAuth licensing API.

    Usage:
        client = ClientAPI(App(name="app", ownerid="abc123"))
        client.on("error", handleError)
        sessionId = client.init()["sessionid"]
        client.login(username="user", password="pass", sessionId=sessionId)
    """

    def __init__(
        self,
        app: Union[App, Dict[str, str]],
        options: Union[ClientOptions, Dict[str, Any], None] = None,
        session: Optional[requests.Session] = None,
        rateLimiter: Optional[RateLimiter] = None,
        retryWait=None,
    ):
        """
        Initialize client.

        Args:
            app: Application identity (name, ownerid, ver)
            options: ClientOptions or its mapping form
            session: HTTP session to use instead of the pooled one
            rateLimiter: Limiter to use instead of one built from options.ratelimit
            retryWait: tenacity wait strategy for transport retries
        """
        self.options = ClientOptions.fromDict(options)
        self._app = App(**app) if isinstance(app, dict) else app
        self._initializedClient = False
        self._convertTimes = self.options.convertTimes

        self._eventEmitter = EventEmitter()
        self._logger = ClientLogger(self.options.logger)

        if self.options.baseUrl:
            self._logger.info(EventType.INSTANCE, "Using custom base url")

        self._rateLimiter = rateLimiter or RateLimiter(
            maxTokens=self.options.ratelimit.maxTokens,
            refillRate=self.options.ratelimit.refillRate,
        )

        self._dispatcher = RequestDispatcher(
            app=self._app,
            rateLimiter=self._rateLimiter,
            eventEmitter=self._eventEmitter,
            clientLogger=self._logger,
            baseUrl=self.options.resolvedBaseUrl,
            timeout=self.options.timeout,
            maxRetryAttempts=self.options.maxRetryAttempts,
            session=session,
            retryWait=retryWait,
        )

        self.metaData = MetaDataAPI(self)
        self.var = VarAPI(self)
        self.chat = ChatAPI(self)

        logger.info("KEYAUTH_CLIENT :: Client created | App: %s | Base URL: %s", self._app.name, self.options.resolvedBaseUrl)
        self._logger.debug(EventType.INSTANCE, "Keyauth instance created.")

    # ------------------------------------------
    # Events
    # ------------------------------------------

    def on(self, event: Union[EventType, str], callback: Callable[[Dict[str, Any]], Any]):
        """Subscribe to an event."""
        return self._eventEmitter.subscribe(event, callback)

    def once(self, event: Union[EventType, str], callback: Callable[[Dict[str, Any]], Any]):
        """Subscribe to the next occurrence of an event."""
        return self._eventEmitter.subscribeOnce(event, callback)

    def off(self, event: Union[EventType, str], callback: Callable[[Dict[str, Any]], Any]) -> bool:
        """Remove a subscription."""
        return self._eventEmitter.off(event, callback)

    @property
    def initialized(self) -> bool:
        return self._initializedClient

    @property
    def rateLimiter(self) -> RateLimiter:
        return self._rateLimiter

    # ------------------------------------------
    # Internals
    # ------------------------------------------

    def _makeRequest(
        self,
        operationType: EventType,
        params: Dict[str, Any],
        skipResponse: bool = False,
        skipError: bool = False,
    ) -> Dict[str, Any]:
        envelope = RequestEnvelope(
            operationType=operationType,
            parameters=params,
            skipResponseEvent=skipResponse,
            skipErrorEvent=skipError,
        )
        return self._dispatcher.dispatch(envelope)

    def _emit(self, event: EventType, data: Dict[str, Any]) -> None:
        self._eventEmitter.emit(event, data)

    def _emitError(self, operationType: EventType, errorKind: ErrorCode, message: str) -> None:
        self._emit(EventType.ERROR, ClassifiedError(operationType, errorKind, message).toEvent())

    def _checkInitialization(self) -> bool:
        """
        Verify the client is usable.

        Reports a NotInitialized error when init() has not completed, then lets
        the operation proceed.

        Raises:
            ClientNotConfigured: If a required component is missing
        """
        for component, value in (
            ('app', getattr(self, '_app', None)),
            ('session', getattr(getattr(self, '_dispatcher', None), 'session', None)),
            ('rateLimiter', getattr(self, '_rateLimiter', None)),
            ('logger', getattr(self, '_logger', None)),
        ):
            if value is None:
                raise ClientNotConfigured(component)

        if not self._initializedClient:
            self._logger.error(EventType.INIT, MSG_INIT_REQUIRED)
            self._emitError(EventType.INIT, ErrorCode.NOT_INITIALIZED, MSG_INIT_REQUIRED)

        return True

    def _checkUserLogin(self, sessionId: str) -> bool:
        """Run a silent session check; report NotLoggedIn when it fails."""
        if not self._checkInitialization():
            return False

        response = self.check(sessionId=sessionId, skipResponse=True)
        if response.get('success'):
            return True

        self._logger.error(EventType.ERROR, MSG_NOT_LOGGED_IN)
        self._emitError(EventType.LOG_IN, ErrorCode.NOT_LOGGED_IN, MSG_NOT_LOGGED_IN)
        return False

    def _requireLogin(self, sessionId: str) -> None:
        if not self._checkUserLogin(sessionId):
            raise NotLoggedInError(sessionId)

    # ------------------------------------------
    # Operations
    # ------------------------------------------

    def init(self) -> Dict[str, Any]:
        """
        Open a session with the KeyAuth API.

        Returns:
            Response with `sessionid` on success. Calling again after a
            successful init returns "Already initialized" without a request.
        """
        self._logger.debug(EventType.INIT, "Initializing the API.")

        if self._initializedClient:
            self._logger.debug(EventType.INIT, "API is already initialized.")
            return {'success': True, 'message': MSG_ALREADY_INITIALIZED, 'time': 0}

        params = {
            'ver': self._app.ver,
            'name': self._app.name,
            'ownerid': self._app.ownerid,
        }

        self._logger.debug(EventType.INIT, "Sending initialization request.")
        response = self._makeRequest(EventType.INIT, params)

        if response.get('success') is not False:
            self._initializedClient = True

        self._emit(EventType.INIT, dict(response))
        self._logger.debug(EventType.INIT, "Initialization complete. Returning response.")

        return response

    def login(self, username: str, password: str, sessionId: str, hwid: Optional[str] = None) -> Dict[str, Any]:
        """
        Log a user in.

        On success the stored user metadata is fetched and returned as `metaData`.
        """
        self._logger.debug(EventType.LOG_IN, "Logging in user.")
        self._checkInitialization()

        params = {
            'pass': password,
            'sessionid': sessionId,
            'username': username,
            'hwid': hwid,
        }

        self._logger.debug(EventType.LOG_IN, "Sending login request.")
        response = self._makeRequest(EventType.LOG_IN, params)

        if not response.get('success'):
            self._logger.debug(EventType.LOG_IN, "Login complete. Returning response.")
            return response

        if self._convertTimes and response.get('info'):
            response['info'] = convertTimestampsToLocalDates(response['info'])

        try:
            metaData = self.metaData.get(sessionId=sessionId, skipResponse=True, skipError=True).get('metaData')
        except NotLoggedInError:
            metaData = None

        response['metaData'] = metaData
        if response.get('info'):
            self._emit(EventType.LOG_IN, dict(response))

        self._logger.debug(EventType.LOG_IN, "Login complete. Returning response.")
        return response

    def logout(self, sessionId: str) -> Dict[str, Any]:
        """
        Log the session's user out.

        Raises:
            NotLoggedInError: If the session is not logged in
        """
        self._logger.debug(EventType.LOG_OUT, "Logging out user.")
        self._requireLogin(sessionId)

        self._logger.debug(EventType.LOG_OUT, "Sending logout request.")
        response = self._makeRequest(EventType.LOG_OUT, {'sessionid': sessionId})

        self._emit(EventType.LOG_OUT, {**response, 'sessionId': sessionId})
        self._logger.debug(EventType.LOG_OUT, "Logout complete. Returning response.")

        return response

    def register(
        self,
        username: str,
        password: str,
        key: str,
        sessionId: str,
        email: Optional[str] = None,
        metaData: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Register a user with a license key, optionally storing metadata."""
        self._logger.debug(EventType.REGISTER, "Registering a new user.")
        self._checkInitialization()

        params = {
            'username': username,
            'pass': password,
            'key': key,
            'sessionid': sessionId,
            'email': email,
        }

        self._logger.debug(EventType.REGISTER, "Sending registration request.")
        response = self._makeRequest(EventType.REGISTER, params)

        if response.get('info'):
            self._emit(EventType.REGISTER, dict(response))

        if metaData and response.get('success'):
            self.metaData.set(sessionId=sessionId, metaData=metaData, skipResponse=True)

        self._logger.debug(EventType.REGISTER, "Registration complete. Returning response.")
        return response

    def license(self, license: str, sessionId: str) -> Dict[str, Any]:
        """Log in or register using only a license key."""
        self._logger.debug(EventType.LICENSE, "Logging in or registering a user via license.")
        self._checkInitialization()

        self._logger.debug(EventType.LICENSE, "Sending license request.")
        response = self._makeRequest(EventType.LICENSE, {'key': license, 'sessionid': sessionId})

        if response.get('info'):
            self._emit(EventType.LICENSE, dict(response))

        self._logger.debug(EventType.LICENSE, "License request complete. Returning response.")
        return response

    def ban(self, reason: str, sessionId: str) -> Dict[str, Any]:
        """Ban the session's user."""
        self._logger.debug(EventType.BAN, "Initiating user ban.")
        self._checkUserLogin(sessionId)

        self._logger.debug(EventType.BAN, "Sending ban request.")
        response = self._makeRequest(EventType.BAN, {'sessionid': sessionId, 'reason': reason})

        self._emit(EventType.BAN, {**response, 'sessionId': sessionId})
        self._logger.debug(EventType.BAN, "Ban request complete. Returning response.")

        return response

    def check(self, sessionId: str, skipResponse: bool = False) -> Dict[str, Any]:
        """Check whether the session is validated."""
        self._logger.debug(EventType.CHECK, "Checking if current session is validated.")
        self._checkInitialization()

        self._logger.debug(EventType.CHECK, "Sending check request.")
        response = self._makeRequest(EventType.CHECK, {'sessionid': sessionId}, skipResponse=skipResponse)

        self._logger.debug(EventType.CHECK, "Check complete, Returning response.")
        return response

    def checkBlacklist(self, hwid: str, sessionId: str) -> Dict[str, Any]:
        """Check whether a hardware id (or the caller's IP) is blacklisted."""
        self._logger.debug(EventType.CHECK_BLACKLIST, "Checking if user is blacklisted.")
        self._checkUserLogin(sessionId)

        self._logger.debug(EventType.CHECK_BLACKLIST, "Sending check blacklist request.")
        response = self._makeRequest(EventType.CHECK_BLACKLIST, {'hwid': hwid, 'sessionid': sessionId})

        self._logger.debug(EventType.CHECK_BLACKLIST, "Check blacklist complete, Returning response.")
        return response

    def changeUsername(self, newUsername: str, sessionId: str) -> Dict[str, Any]:
        """
        Change the session user's username.

        Raises:
            NotLoggedInError: If the session is not logged in
        """
        self._logger.debug(EventType.CHANGE_USERNAME, "Changing users username.")
        self._requireLogin(sessionId)

        self._logger.debug(EventType.CHANGE_USERNAME, "Sending change username request.")
        response = self._makeRequest(EventType.CHANGE_USERNAME, {'newUsername': newUsername, 'sessionid': sessionId})

        self._emit(EventType.CHANGE_USERNAME, {'newUsername': newUsername, **response})
        self._logger.debug(EventType.CHANGE_USERNAME, "Change username complete, Returning response.")

        return response

    def forgotPassword(self, email: str, username: str, sessionId: str) -> Dict[str, Any]:
        """Send a password reset email."""
        self._logger.debug(EventType.FORGOT_PASSWORD, "Running forgot password for user.")
        self._checkInitialization()

        params = {'sessionid': sessionId, 'email': email, 'username': username}

        self._logger.debug(EventType.FORGOT_PASSWORD, "Sending forgot password request.")
        response = self._makeRequest(EventType.FORGOT_PASSWORD, params)

        self._logger.debug(EventType.FORGOT_PASSWORD, "Forgot password request complete, Returning response.")
        self._emit(EventType.FORGOT_PASSWORD, {'username': username, **response})

        return response

    def upgrade(self, username: str, key: str, sessionId: str) -> Dict[str, Any]:
        """Upgrade a user's subscription with a key."""
        self._logger.debug(EventType.UPGRADE, "Running upgrade on user.")
        self._checkInitialization()

        params = {'sessionid': sessionId, 'username': username, 'key': key}

        self._logger.debug(EventType.UPGRADE, "Sending upgrade request.")
        response = self._makeRequest(EventType.UPGRADE, params)

        self._logger.debug(EventType.UPGRADE, "Upgrade request complete, Returning response.")
        self._emit(EventType.UPGRADE, dict(response))

        return response

    def fetchOnlineUsers(self, sessionId: str) -> Dict[str, Any]:
        """List online users; the result carries `count`."""
        self._logger.debug(EventType.FETCH_ONLINE, "Fetching all current online users.")
        self._checkInitialization()

        self._logger.debug(EventType.FETCH_ONLINE, "Sending fetch online users request.")
        response = self._makeRequest(EventType.FETCH_ONLINE, {'sessionid': sessionId})

        self._emit(EventType.FETCH_ONLINE, dict(response))
        self._logger.debug(EventType.FETCH_ONLINE, "Fetch online users complete, Returning response.")

        return {**response, 'count': len(response.get('users') or [])}

    def fetchStats(self, sessionId: str) -> Dict[str, Any]:
        """Fetch application statistics (`appinfo`)."""
        self._logger.debug(EventType.FETCH_STATS, "Fetching application information.")
        self._checkInitialization()

        self._logger.debug(EventType.FETCH_STATS, "Sending fetchStats request.")
        response = self._makeRequest(EventType.FETCH_STATS, {'sessionid': sessionId})

        self._emit(EventType.FETCH_STATS, dict(response))
        self._logger.debug(EventType.FETCH_STATS, "Fetchstats request complete. Returning response.")

        return response

    def log(self, msg: str, pcUser: str, sessionId: str) -> Dict[str, Any]:
        """Send a log line to the application's log webhook."""
        self._logger.debug(EventType.LOG, "Running log.")
        self._checkInitialization()

        params = {'sessionid': sessionId, 'message': msg, 'pcuser': pcUser}

        self._logger.debug(EventType.LOG, "Sending log request.")
        response = self._makeRequest(EventType.LOG, params)

        self._emit(EventType.LOG, {'msg': msg, 'pcUser': pcUser, **response})
        self._logger.debug(EventType.LOG, "Log request complete, Returning response.")

        return response

    def webhook(
        self,
        webId: str,
        sessionId: str,
        params: Optional[str] = None,
        body: Union[str, EmbedBuilder, None] = None,
        contType: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Call a webhook configured on the application.

        Args:
            webId: Webhook id
            sessionId: Session id
            params: Query string appended to the webhook URL
            body: Request body; an EmbedBuilder is serialized to JSON
            contType: Content type of `body`

        Returns:
            Response with the webhook's answer under `data`
        """
        self._logger.debug(EventType.WEBHOOK, "Running webhook on user.")
        self._checkInitialization()

        if isinstance(body, EmbedBuilder):
            body = body.toString()
            contType = contType or 'application/json'

        webhookParams = {
            'sessionid': sessionId,
            'webid': webId,
            'params': params,
            'body': body,
            'conttype': contType,
        }

        self._logger.debug(EventType.WEBHOOK, "Sending webhook request.")
        response = self._makeRequest(EventType.WEBHOOK, webhookParams)

        self._emit(EventType.WEBHOOK, dict(response))
        self._logger.debug(EventType.WEBHOOK, "Webhook request complete, Returning response.")

        return response

    def download(self, fileId: str, sessionId: str) -> Dict[str, Any]:
        """Download a file; `contents` is hex encoded (see Helpers.downloadToString)."""
        self._logger.debug(EventType.DOWNLOAD, "Running download file.")
        self._checkInitialization()

        self._logger.debug(EventType.DOWNLOAD, "Sending download request.")
        response = self._makeRequest(EventType.DOWNLOAD, {'sessionid': sessionId, 'fileid': fileId})

        self._logger.debug(EventType.DOWNLOAD, "Download request complete, Returning response.")
        return response
