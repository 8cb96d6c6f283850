"""Tests for request envelopes."""

import pytest

from keyauth.enums.EventType import EventType
from keyauth.pojos.RequestEnvelope import RequestEnvelope


class TestRequestEnvelope:

    def test_accepts_string_tag(self):
        envelope = RequestEnvelope("fetchStats", {'sessionid': 's'})
        assert envelope.operationType is EventType.FETCH_STATS
        assert envelope.sessionId == 's'

    @pytest.mark.parametrize("tag", ["request", "ratelimit", EventType.ERROR])
    def test_rejects_notification_types(self, tag):
        with pytest.raises(ValueError):
            RequestEnvelope(tag)

    def test_unknown_tag(self):
        with pytest.raises(ValueError):
            RequestEnvelope("teleport")

    def test_to_params_drops_none(self):
        envelope = RequestEnvelope(EventType.REGISTER, {'username': 'u', 'email': None})
        assert envelope.toParams() == {'type': 'register', 'username': 'u'}
        assert envelope.sessionId is None
