"""ghttp CLI — serve an app or list its routes.

Entry point registered as ``ghttp`` in ``pyproject.toml``::

    [project.scripts]
    ghttp = "ghttp.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``ghttp`` command."""
    parser = argparse.ArgumentParser(
        prog="ghttp",
        description="ghttp — handlers that return errors, for JSON HTTP APIs.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- ghttp run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an app")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", default=None, help="Bind port (8080 or :8080)")
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect)",
    )
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on source changes (development)",
    )
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode: log at DEBUG regardless of --log-level",
    )
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=("debug", "info", "warning", "error", "critical"),
        help="Logging level (defaults to the app's config)",
    )

    # -- ghttp routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from ghttp.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from ghttp.cli._routes import run_routes

        run_routes(args)
