"""Shared fixtures for ghttp tests."""

import pytest

from ghttp.security.audit import SecurityEvent, set_security_event_sink


@pytest.fixture
def security_events():
    """Collect security events emitted during a test."""
    events: list[SecurityEvent] = []
    set_security_event_sink(events.append)
    yield events
    set_security_event_sink(None)
