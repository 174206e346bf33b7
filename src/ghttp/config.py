"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(host="0.0.0.0", port=3000, log_level="debug")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Debug mode forces DEBUG logging when served through the CLI
    debug: bool = False

    # Development mode: restart the worker when source files change
    reload: bool = False

    # Worker count handed to pounce (0 = auto-detect from CPU count)
    workers: int = 1

    # Logging (debug, info, warning, error, critical)
    log_level: str = "info"
