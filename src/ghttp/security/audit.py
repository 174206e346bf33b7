"""Security audit events.

Small opt-in event channel for authentication telemetry. Applications can
register a sink to forward events to metrics or a SIEM. Without a sink,
events are logged on the ``ghttp.security`` logger.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any

logger = logging.getLogger("ghttp.security")


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """A structured security event."""

    name: str
    timestamp: float = field(default_factory=time)
    path: str | None = None
    method: str | None = None
    client: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


type SecurityEventSink = Callable[[SecurityEvent], None]


_sink_lock = threading.Lock()
_sink: SecurityEventSink | None = None


def set_security_event_sink(sink: SecurityEventSink | None) -> None:
    """Set a process-wide sink for security events.

    Pass ``None`` to fall back to logging.
    """
    global _sink
    with _sink_lock:
        _sink = sink


def emit_security_event(
    name: str,
    *,
    request: Any | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """Emit a security event to the configured sink (or the log)."""
    with _sink_lock:
        sink = _sink

    path = None
    method = None
    client = None
    if request is not None:
        path = getattr(request, "path", None)
        method = getattr(request, "method", None)
        peer = getattr(request, "client", None)
        if peer:
            client = peer[0]

    event = SecurityEvent(
        name=name,
        path=path,
        method=method,
        client=client,
        details=details or {},
    )
    if sink is None:
        logger.warning("%s %s %s client=%s", event.name, method, path, client)
        return
    sink(event)
