"""Server runner — serves a ghttp app with pounce.

Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``), but a
``Ghttp`` facade is usually a live object, so ``pounce.Server`` is used
directly with the ASGI callable.
"""

import logging

from ghttp.errors import ConfigurationError, ServerStartError

logger = logging.getLogger("ghttp.server")


def parse_address(port: str | int, default_host: str) -> tuple[str, int]:
    """Resolve a listen address into ``(host, port)``.

    Accepts ``8080``, ``"8080"``, ``":8080"`` and ``"0.0.0.0:8080"``.
    """
    if isinstance(port, int):
        return default_host, port

    host, sep, port_str = port.rpartition(":")
    if not sep:
        host = ""
    try:
        number = int(port_str)
    except ValueError:
        msg = f"Invalid listen address {port!r}: port must be a number."
        raise ConfigurationError(msg) from None
    if not 0 <= number <= 65535:
        msg = f"Invalid listen address {port!r}: port out of range."
        raise ConfigurationError(msg)
    return host or default_host, number


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
) -> None:
    """Serve *app* until the server stops.

    Blocks the calling thread. Any failure to bind or to keep serving is
    raised as ``ServerStartError``; the caller decides whether that ends
    the process.

    Args:
        app: ASGI callable (a ``Ghttp`` instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count (0 = auto-detect from CPU count).
        reload: Restart on source changes (development only).
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "Serving requires pounce. "
            "Install it with: pip install ghttp[server]"
        )
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
    )
    server = Server(config, app)
    try:
        server.run()
    except Exception as exc:
        logger.error("server on %s:%d failed: %s", host, port, exc)
        raise ServerStartError(f"server on {host}:{port} failed: {exc}") from exc
