"""``ghttp run`` — serve an app from an import string."""

import argparse
import dataclasses
import logging
import sys

from ghttp.cli._resolve import resolve_app
from ghttp.errors import ConfigurationError, ServerStartError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it until interrupted.

    CLI flags override the app's ``AppConfig``. Startup failures are
    reported on stderr and end the process with status 1.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.reload:
        overrides["reload"] = True
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.debug:
        overrides["debug"] = True
    if overrides:
        app.config = dataclasses.replace(app.config, **overrides)

    level = "DEBUG" if app.config.debug else app.config.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app.start(args.port)
    except (ConfigurationError, ServerStartError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
