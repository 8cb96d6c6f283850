"""
Global and per-user variables.
"""
from typing import Any, Dict

from keyauth.enums.EventType import EventType


class UserVarAPI:
    """Variables stored on the logged-in user."""

    def __init__(self, client):
        self._client = client

    def get(self, varId: str, sessionId: str, skipResponse: bool = False, skipError: bool = False) -> Dict[str, Any]:
        """Read a user variable; the value is returned under `response`."""
        client = self._client
        client._logger.debug(EventType.GET_VAR, "Running get user var.")
        client._checkInitialization()

        client._logger.debug(EventType.GET_VAR, "Sending get user var request.")
        response = client._makeRequest(
            EventType.GET_VAR,
            {'sessionid': sessionId, 'var': varId},
            skipResponse=skipResponse,
            skipError=skipError,
        )

        client._logger.debug(EventType.GET_VAR, "Get user var request complete, Returning response.")
        return response

    def set(
        self,
        varId: str,
        varData: str,
        sessionId: str,
        skipResponse: bool = False,
        skipError: bool = False,
    ) -> Dict[str, Any]:
        """Write a user variable."""
        client = self._client
        client._logger.debug(EventType.SET_VAR, "Running Set user var.")
        client._checkInitialization()

        client._logger.debug(EventType.SET_VAR, "Sending set user var request.")
        response = client._makeRequest(
            EventType.SET_VAR,
            {'sessionid': sessionId, 'data': varData, 'var': varId},
            skipResponse=skipResponse,
            skipError=skipError,
        )

        client._logger.debug(EventType.SET_VAR, "Set user var request complete, Returning response.")
        return response


class VarAPI:
    """Global application variables; user variables live under `user`."""

    def __init__(self, client):
        self._client = client
        self.user = UserVarAPI(client)

    def get(self, varId: str, sessionId: str, skipResponse: bool = False, skipError: bool = False) -> Dict[str, Any]:
        """Read a global variable."""
        client = self._client
        client._logger.debug(EventType.VAR, "Running var.")
        client._checkInitialization()

        client._logger.debug(EventType.VAR, "Sending var request.")
        response = client._makeRequest(
            EventType.VAR,
            {'var': varId, 'sessionid': sessionId},
            skipResponse=skipResponse,
            skipError=skipError,
        )

        client._logger.debug(EventType.VAR, "VAR request complete, Returning response.")
        return response
