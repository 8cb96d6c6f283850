"""
Reshapes raw KeyAuth payloads into the caller-facing response shape.
"""
from typing import Any, Dict

from keyauth.Constants import INVALID_CLIENT_SENTINEL, MSG_CLIENT_NOT_SET_UP, MSG_LOG_SENT
from keyauth.enums.EventType import EventType


class UnexpectedPayload(ValueError):
    """Raised when the transport returns something that is not a response object."""


def normalize(operationType: EventType, statusCode: int, payload: Any) -> Dict[str, Any]:
    """
    Normalize a raw payload.

    - `log` returns no meaningful payload; HTTP 200 becomes a fixed success,
      even for the sentinel.
    - The "KeyAuth_Invalid" sentinel becomes a failed result.
    - `webhook` moves `response` to `data`.

    Args:
        operationType: Operation the payload answers
        statusCode: HTTP status code
        payload: Decoded JSON body, or the text body when it was not JSON

    Returns:
        Normalized response dict (without `time`)

    Raises:
        UnexpectedPayload: If the payload is neither the sentinel nor a mapping
    """
    if operationType == EventType.LOG and statusCode == 200:
        return {'success': True, 'message': MSG_LOG_SENT}

    if payload == INVALID_CLIENT_SENTINEL:
        return {'success': False, 'message': MSG_CLIENT_NOT_SET_UP}

    if not isinstance(payload, dict):
        raise UnexpectedPayload(
            f"Unexpected response payload for {operationType.value}: {str(payload)[:100]!r}"
        )

    if operationType == EventType.WEBHOOK and statusCode == 200:
        return {
            'success': payload.get('success'),
            'message': payload.get('message'),
            'nonce': payload.get('nonce'),
            'data': payload.get('response'),
        }

    return dict(payload)
