"""
Maps failure messages from the KeyAuth service to a closed set of error kinds.

All knowledge of the remote service's wording lives in RULES. Rules are
evaluated in order and the first match wins.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from keyauth.Constants import (
    MSG_SESSION_KILLED,
    PATTERN_CHAT_CHANNEL_NOT_FOUND,
    PATTERN_INVALID_CLIENT,
    PATTERN_SESSION_NOT_FOUND,
)
from keyauth.enums.ErrorCode import ErrorCode
from keyauth.enums.EventType import EventType
from keyauth.pojos.ClassifiedError import ClassifiedError


@dataclass(frozen=True)
class ClassificationRule:
    """
    predicate(message, sessionId) selects the rule; `message` replaces the
    remote text on the emitted error when set.
    """
    errorKind: ErrorCode
    predicate: Callable[[str, Optional[str]], bool]
    message: Optional[str] = None


RULES: List[ClassificationRule] = [
    ClassificationRule(
        ErrorCode.NO_SESSION_ID,
        lambda message, sessionId: sessionId == "" and message.startswith(PATTERN_SESSION_NOT_FOUND),
    ),
    ClassificationRule(
        ErrorCode.SESSION_KILLED,
        lambda message, sessionId: message.startswith(PATTERN_SESSION_NOT_FOUND),
        message=MSG_SESSION_KILLED,
    ),
    ClassificationRule(
        ErrorCode.NO_CHAT_CHANNEL,
        lambda message, sessionId: message == PATTERN_CHAT_CHANNEL_NOT_FOUND,
    ),
    ClassificationRule(
        ErrorCode.INVALID_CLIENT_API,
        lambda message, sessionId: message.startswith(PATTERN_INVALID_CLIENT),
    ),
]


def classify(
    operationType: EventType,
    message,
    sessionId: Optional[str] = None,
    rules: Optional[List[ClassificationRule]] = None,
) -> ClassifiedError:
    """
    Classify a failure message.

    Args:
        operationType: Operation that failed
        message: Failure text from the remote service or transport
        sessionId: Session id sent with the failed request, None if the operation has none
        rules: Rule list to use instead of RULES

    Returns:
        ClassifiedError, ErrorCode.UNKNOWN when no rule matches
    """
    text = "" if message is None else str(message)

    for rule in RULES if rules is None else rules:
        if rule.predicate(text, sessionId):
            return ClassifiedError(
                operationType=operationType,
                errorKind=rule.errorKind,
                message=rule.message or text,
            )

    return ClassifiedError(
        operationType=operationType,
        errorKind=ErrorCode.UNKNOWN,
        message=text,
    )
