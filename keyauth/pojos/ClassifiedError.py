"""
Normalized failure record emitted on the `error` event.
"""
from dataclasses import dataclass
from typing import Any, Dict

from keyauth.enums.ErrorCode import ErrorCode
from keyauth.enums.EventType import EventType


@dataclass
class ClassifiedError:
    operationType: EventType
    errorKind: ErrorCode
    message: str

    def toEvent(self) -> Dict[str, Any]:
        """Payload for the `error` event"""
        return {
            'type': self.operationType.value,
            'success': False,
            'message': self.message,
            'errorCode': self.errorKind.value,
        }
