"""Security helpers: audit events emitted by the authentication middleware."""

from ghttp.security.audit import (
    SecurityEvent,
    SecurityEventSink,
    emit_security_event,
    set_security_event_sink,
)

__all__ = [
    "SecurityEvent",
    "SecurityEventSink",
    "emit_security_event",
    "set_security_event_sink",
]
