"""Waypost CLI — inspect and validate menu trees.

Entry point registered as ``waypost`` in ``pyproject.toml``::

    [project.scripts]
    waypost = "waypost.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypost`` command."""
    parser = argparse.ArgumentParser(
        prog="waypost",
        description="Waypost — menu-driven routing for admin consoles.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- waypost routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Print the compiled route table")
    routes_parser.add_argument("tree", help="Menu tree JSON file or URL")

    # -- waypost check ----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Report duplicate route names and paths")
    check_parser.add_argument("tree", help="Menu tree JSON file or URL")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waypost.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from waypost.cli._check import run_check

        run_check(args)
