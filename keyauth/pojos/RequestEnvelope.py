"""
Request envelope passed into the dispatcher.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from keyauth.enums.EventType import EventType


@dataclass
class RequestEnvelope:
    operationType: EventType
    parameters: Dict[str, Any] = field(default_factory=dict)
    skipResponseEvent: bool = False
    skipErrorEvent: bool = False

    def __post_init__(self):
        self.operationType = EventType.fromValue(self.operationType)
        if not self.operationType.isOperation():
            raise ValueError(f"'{self.operationType.value}' is a client notification, not an operation")

    @property
    def sessionId(self):
        """Session id carried by the request, None when the operation has none"""
        return self.parameters.get('sessionid')

    def toParams(self) -> Dict[str, Any]:
        """Outbound payload: operation tag first, unset fields dropped"""
        params = {'type': self.operationType.value}
        for key, value in self.parameters.items():
            if value is not None:
                params[key] = value
        return params
