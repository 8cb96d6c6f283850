"""
User metadata stored as a JSON user variable.
"""
import json
from typing import Any, Dict

from keyauth.Constants import (
    METADATA_VAR_ID,
    MSG_METADATA_MISSING,
    MSG_METADATA_RETRIEVED,
    MSG_METADATA_UNSUPPORTED,
    MSG_METADATA_UPDATED,
)
from keyauth.enums.ErrorCode import ErrorCode
from keyauth.enums.EventType import EventType


class MetaDataAPI:

    def __init__(self, client):
        self._client = client

    def get(self, sessionId: str, skipResponse: bool = False, skipError: bool = False) -> Dict[str, Any]:
        """
        Read the session user's metadata.

        Raises:
            NotLoggedInError: If the session is not logged in
        """
        client = self._client
        client._checkInitialization()
        client._requireLogin(sessionId)

        response = client.var.user.get(
            varId=METADATA_VAR_ID,
            sessionId=sessionId,
            skipResponse=skipResponse,
            skipError=skipError,
        )

        if not response.get('success'):
            return {
                'message': MSG_METADATA_MISSING,
                'success': response.get('success', False),
                'time': response.get('time'),
            }

        try:
            metaData = json.loads(response.get('response'))
        except (TypeError, ValueError):
            if not skipError:
                client._emitError(EventType.METADATA, ErrorCode.UNSUPPORTED_VAR_TYPE, MSG_METADATA_UNSUPPORTED)
            return {
                'message': MSG_METADATA_UNSUPPORTED,
                'success': False,
                'time': response.get('time'),
            }

        result = {
            'message': MSG_METADATA_RETRIEVED,
            'success': True,
            'time': response.get('time'),
            'metaData': metaData,
        }
        client._emit(EventType.METADATA, dict(result))

        return result

    def set(
        self,
        sessionId: str,
        metaData: Dict[str, Any],
        skipResponse: bool = False,
        skipError: bool = False,
    ) -> Dict[str, Any]:
        """
        Replace the session user's metadata.

        Raises:
            NotLoggedInError: If the session is not logged in
        """
        client = self._client
        client._checkInitialization()
        client._requireLogin(sessionId)

        response = client.var.user.set(
            varId=METADATA_VAR_ID,
            varData=json.dumps(metaData),
            sessionId=sessionId,
            skipResponse=skipResponse,
            skipError=skipError,
        )

        client._emit(EventType.METADATA, {
            'message': MSG_METADATA_UPDATED,
            'success': response.get('success'),
            'time': response.get('time'),
            'metaData': metaData,
        })

        return {
            'message': MSG_METADATA_UPDATED,
            'success': response.get('success'),
            'time': response.get('time'),
            'nonce': response.get('nonce'),
        }
