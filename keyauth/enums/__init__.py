from keyauth.enums.EventType import EventType
from keyauth.enums.ErrorCode import ErrorCode

__all__ = ['EventType', 'ErrorCode']
