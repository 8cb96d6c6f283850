"""Tests for error message classification."""

import pytest

from keyauth.enums.ErrorCode import ErrorCode
from keyauth.enums.EventType import EventType
from keyauth.framework import ErrorClassifier
from keyauth.framework.ErrorClassifier import ClassificationRule


class TestClassify:

    def test_session_not_found_with_empty_session_id(self):
        result = ErrorClassifier.classify(EventType.CHECK, "Session not found.", "")
        assert result.errorKind == ErrorCode.NO_SESSION_ID
        assert result.message == "Session not found."

    def test_session_not_found_with_session_id(self):
        result = ErrorClassifier.classify(EventType.CHECK, "Session not found.", "abc")
        assert result.errorKind == ErrorCode.SESSION_KILLED
        assert result.message == "The session was killed!"

    def test_session_not_found_prefix_match(self):
        result = ErrorClassifier.classify(EventType.LOG_IN, "Session not found. Use latest code", "abc")
        assert result.errorKind == ErrorCode.SESSION_KILLED

    def test_missing_session_id_is_not_empty(self):
        result = ErrorClassifier.classify(EventType.INIT, "Session not found.", None)
        assert result.errorKind == ErrorCode.SESSION_KILLED

    def test_chat_channel_exact_match(self):
        result = ErrorClassifier.classify(EventType.CHAT_GET, "Chat channel not found", "abc")
        assert result.errorKind == ErrorCode.NO_CHAT_CHANNEL

        partial = ErrorClassifier.classify(EventType.CHAT_GET, "Chat channel not found!", "abc")
        assert partial.errorKind == ErrorCode.UNKNOWN

    def test_invalid_client(self):
        result = ErrorClassifier.classify(EventType.INIT, "Keyauth API client not set up correctly!", None)
        assert result.errorKind == ErrorCode.INVALID_CLIENT_API
        assert result.message == "Keyauth API client not set up correctly!"

    @pytest.mark.parametrize("message", ["Invalid username", "", None])
    def test_falls_back_to_unknown(self, message):
        result = ErrorClassifier.classify(EventType.LOG_IN, message, "abc")
        assert result.errorKind == ErrorCode.UNKNOWN

    def test_custom_rules_replace_defaults(self):
        rules = [ClassificationRule(ErrorCode.NOT_LOGGED_IN, lambda message, sessionId: "login" in message)]

        result = ErrorClassifier.classify(EventType.BAN, "please login", "abc", rules=rules)
        assert result.errorKind == ErrorCode.NOT_LOGGED_IN

        fallback = ErrorClassifier.classify(EventType.BAN, "Session not found.", "", rules=rules)
        assert fallback.errorKind == ErrorCode.UNKNOWN

    def test_event_payload(self):
        result = ErrorClassifier.classify(EventType.CHECK, "Session not found.", "")
        assert result.toEvent() == {
            'type': 'check',
            'success': False,
            'message': 'Session not found.',
            'errorCode': 'noSessionID',
        }
