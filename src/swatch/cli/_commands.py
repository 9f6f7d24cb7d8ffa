"""``swatch render`` / ``list`` / ``assets`` command implementations.

Each command builds a catalog from the library directory, waits for the
tree to load, and prints to stdout.  Failures print to stderr and exit
with status 1.
"""

import argparse
import json
import sys
from typing import Any

import anyio

from swatch.catalog import ComponentCatalog
from swatch.config import CatalogConfig
from swatch.errors import SwatchError


def _build_config(args: argparse.Namespace, **overrides: Any) -> CatalogConfig:
    options: dict[str, Any] = {}
    if args.ext:
        options["ext"] = args.ext
    if args.splitter:
        options["splitter"] = args.splitter
    options.update(overrides)
    return CatalogConfig(**options)


def _open_catalog(args: argparse.Namespace, **overrides: Any) -> ComponentCatalog:
    try:
        catalog = ComponentCatalog.from_directory(args.root, _build_config(args, **overrides))
        anyio.run(catalog.load)
    except (FileNotFoundError, SwatchError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return catalog


def render_command(args: argparse.Namespace) -> None:
    """Render one entity and print the markup."""
    context = None
    if args.context:
        try:
            context = json.loads(args.context)
        except ValueError as exc:
            print(f"Error: --context is not valid JSON: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc

    overrides: dict[str, Any] = {"render_errors": "raise"}
    if args.layout:
        overrides["preview_layout"] = args.layout
    catalog = _open_catalog(args, **overrides)

    entity = catalog.find(args.target)
    if entity is None:
        print(f"Error: nothing matches {args.target!r}", file=sys.stderr)
        raise SystemExit(1)

    async def _render() -> str | None:
        if args.preview:
            if context is not None:
                return await catalog.render(entity, context, use_layout=True)
            return await catalog.render_preview(entity)
        return await catalog.render(entity, context)

    try:
        markup = anyio.run(_render)
    except (SwatchError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(markup or "")


def list_command(args: argparse.Namespace) -> None:
    """Print ``handle  status  variants`` for every component."""
    catalog = _open_catalog(args)
    for component in catalog.flatten():
        status = catalog.component_status(component)
        label = status.label if status is not None else "-"
        variants = ", ".join(v.handle for v in component.variants)
        print(f"{component.handle}\t{label}\t{variants}")


def assets_command(args: argparse.Namespace) -> None:
    """Print every owned asset path in aggregation order."""
    catalog = _open_catalog(args)
    assets = catalog.assets()
    if args.ext_filter:
        assets = assets.filter_by_ext(args.ext_filter)
    for asset in assets:
        print(asset.path)
