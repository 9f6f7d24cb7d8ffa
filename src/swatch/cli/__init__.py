"""Swatch CLI: render, list, and inspect a component library.

Entry point registered as ``swatch`` in ``pyproject.toml``::

    [project.scripts]
    swatch = "swatch.cli:main"
"""

import argparse
import logging
import sys


def _add_library_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", help="Component library directory")
    parser.add_argument("--ext", default=None, help="View template extension (default: .html)")
    parser.add_argument("--splitter", default=None, help="Variant splitter token (default: --)")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``swatch`` command."""
    parser = argparse.ArgumentParser(
        prog="swatch",
        description="Swatch: render component libraries for previews and documentation.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- swatch render ----------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render a component or variant")
    _add_library_options(render_parser)
    render_parser.add_argument("target", help="Handle to render (e.g. @button or @large)")
    render_parser.add_argument(
        "--preview",
        action="store_true",
        help="Wrap the output in the preview layout",
    )
    render_parser.add_argument("--layout", default=None, help="Preview layout handle")
    render_parser.add_argument(
        "--context",
        default=None,
        help="JSON object used as the render context",
    )

    # -- swatch list ------------------------------------------------------
    list_parser = subparsers.add_parser("list", help="List components with their status")
    _add_library_options(list_parser)

    # -- swatch assets ----------------------------------------------------
    assets_parser = subparsers.add_parser("assets", help="List component assets")
    _add_library_options(assets_parser)
    assets_parser.add_argument("--type", dest="ext_filter", default=None, help="Only this extension")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "render":
        from swatch.cli._commands import render_command

        render_command(args)
    elif args.command == "list":
        from swatch.cli._commands import list_command

        list_command(args)
    elif args.command == "assets":
        from swatch.cli._commands import assets_command

        assets_command(args)
