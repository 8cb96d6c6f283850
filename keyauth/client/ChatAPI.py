"""
Chat channels.
"""
from typing import Any, Dict

from keyauth.enums.EventType import EventType


class ChatAPI:

    def __init__(self, client):
        self._client = client

    def get(self, channel: str, sessionId: str) -> Dict[str, Any]:
        """Fetch the messages of a channel."""
        client = self._client
        client._logger.debug(EventType.CHAT_GET, "Running get chat.")
        client._checkInitialization()

        client._logger.debug(EventType.CHAT_GET, "Sending get chat request.")
        response = client._makeRequest(EventType.CHAT_GET, {'sessionid': sessionId, 'channel': channel})

        if response.get('success'):
            client._emit(EventType.CHAT_GET, dict(response))

        client._logger.debug(EventType.CHAT_GET, "Get chat request complete, Returning response.")
        return response

    def send(self, channel: str, message: str, username: str, sessionId: str) -> Dict[str, Any]:
        """Post a message to a channel."""
        client = self._client
        client._logger.debug(EventType.CHAT_SEND, "Running set chat.")
        client._checkInitialization()

        client._logger.debug(EventType.CHAT_SEND, "Sending set chat request.")
        response = client._makeRequest(
            EventType.CHAT_SEND,
            {'sessionid': sessionId, 'channel': channel, 'message': message},
        )

        if response.get('success'):
            client._emit(EventType.CHAT_SEND, {'author': username, 'sentMsg': message, **response})

        client._logger.debug(EventType.CHAT_SEND, "Set chat request complete, Returning response.")
        return response
