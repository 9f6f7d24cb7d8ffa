"""One-shot filesystem loader for component libraries.

Walks a directory and builds the entity tree the catalog renders.

Conventions (``ext=".html"``, ``splitter="--"``)::

    components/
      _drafts/               # skipped (leading "_" or ".")
      forms/                 # no view named after it -> Collection "forms"
        button/              # component directory: button/button.html exists
          button.html        # default variant
          button--large.html # variant "large"
          button.config.yaml # label, status, context, variants, ...
          README.md          # component notes
          button.css         # asset owned by the component
        input.html           # loose view -> component "input"
        input.config.json

Component config keys: ``handle``, ``label``, ``status``, ``collated``,
``preview``, ``context``, ``default`` (name of the default variant) and
``variants`` (a list of ``{name, label, status, context, preview, view}``).
A variant's context is the component context with the variant's own
context deep-merged on top.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import anyio
import yaml

from swatch.config import CatalogConfig
from swatch.entities import Asset, Component, Variant
from swatch.errors import ConfigurationError
from swatch.files import FileClassifier
from swatch.tree import Collection, TreeItem

logger = logging.getLogger("swatch.loader")

_DEFAULT_VARIANT = "default"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge *override* into a copy of *base*; nested dicts merge recursively."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def read_config(path: Path) -> dict[str, Any]:
    """Parse a ``.config.json`` / ``.config.yaml`` file.

    ``.config.js`` files cannot be evaluated and yield an empty config.
    """
    suffix = path.suffix.lower()
    if suffix == ".js":
        logger.warning("Skipping %s: JavaScript config files are not supported", path)
        return {}
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text) if suffix == ".json" else yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid component config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Component config {path} must be a mapping")
    return data


def _visible(path: Path) -> bool:
    return not path.name.startswith(("_", "."))


class DirectoryLoader:
    """Build catalog items from a directory tree.

    Instances are callables usable as a ``ComponentCatalog`` loader; the
    walk runs in a worker thread.
    """

    def __init__(self, root: str | os.PathLike[str], config: CatalogConfig | None = None) -> None:
        self.root = Path(root)
        self.config = config if config is not None else CatalogConfig()
        self.files = FileClassifier(ext=self.config.ext, splitter=self.config.splitter)

    async def __call__(self) -> list[TreeItem]:
        return await anyio.to_thread.run_sync(self.load)

    def load(self) -> list[TreeItem]:
        """Walk the root directory and return the top-level items."""
        root = self.root.resolve()
        if not root.is_dir():
            raise FileNotFoundError(f"Component directory not found: {root}")
        return self._walk(root)

    def _walk(self, directory: Path) -> list[TreeItem]:
        # Files are classified by name, so dot directories above the root do not count
        entries = sorted(p for p in directory.iterdir() if _visible(p))
        files = [p for p in entries if p.is_file()]
        items: list[TreeItem] = []

        for view in files:
            if self.files.is_view(view.name):
                items.append(self._build_component(view, files, owns_directory=False))

        for sub in entries:
            if not sub.is_dir():
                continue
            main_view = sub / f"{sub.name}{self.config.ext}"
            if main_view.is_file():
                sub_files = sorted(p for p in sub.iterdir() if p.is_file() and _visible(p))
                items.append(self._build_component(main_view, sub_files, owns_directory=True))
                continue
            children = self._walk(sub)
            if children:
                items.append(Collection(sub.name, children, path=str(sub)))

        seen: set[str] = set()
        for item in items:
            if item.handle in seen:
                raise ConfigurationError(f"Duplicate handle {item.handle!r} in {directory}")
            seen.add(item.handle)
        return items

    def _build_component(self, view: Path, siblings: list[Path], *, owns_directory: bool) -> Component:
        stem = view.name[: -len(self.config.ext)]
        config = self._component_config(stem, siblings)
        var_views = {
            p.name[len(stem) + len(self.config.splitter) : -len(self.config.ext)]: p
            for p in siblings
            if self.files.is_var_view(p.name) and p.name.startswith(f"{stem}{self.config.splitter}")
        }

        handle = str(config.get("handle") or stem)
        if self.config.prefix:
            handle = f"{self.config.prefix}-{handle}"
        status = config.get("status") or self.config.status
        preview = config.get("preview", self.config.preview_layout)
        context = config.get("context") or {}
        default_name = config.get("default", _DEFAULT_VARIANT)

        entries: dict[str, dict[str, Any]] = {_DEFAULT_VARIANT: {}}
        for entry in config.get("variants") or []:
            if not isinstance(entry, dict) or not entry.get("name"):
                raise ConfigurationError(f"Variant without a name in component {handle!r}")
            entries[str(entry["name"])] = entry
        for name in sorted(var_views):
            entries.setdefault(name, {})

        variants = []
        for name, entry in entries.items():
            if name in var_views:
                view_path = var_views[name]
            elif entry.get("view"):
                view_path = view.parent / entry["view"]
            else:
                view_path = view
            variants.append(
                Variant(
                    handle=name,
                    component=handle,
                    view_path=str(view_path),
                    context=deep_merge(context, entry.get("context") or {}),
                    label=entry.get("label", ""),
                    status=entry.get("status") or status,
                    preview=entry.get("preview", preview),
                    is_default=name == default_name,
                )
            )

        notes = None
        assets: list[Asset] = []
        if owns_directory:
            for path in sorted(view.parent.rglob("*")):
                rel = path.relative_to(view.parent)
                if not path.is_file() or any(p.startswith(("_", ".")) for p in rel.parts):
                    continue
                if self.files.is_readme(rel) and path.parent == view.parent:
                    notes = path.read_text(encoding="utf-8")
                elif self.files.is_asset(rel):
                    assets.append(Asset.from_path(path))

        logger.debug("Loaded component %s with %d variants", handle, len(variants))
        return Component(
            handle=handle,
            variants=variants,
            path=str(view.parent if owns_directory else view),
            label=config.get("label", ""),
            status=status,
            collated=bool(config.get("collated", self.config.collated)),
            preview=preview,
            notes=notes,
            assets=tuple(assets),
        )

    def _component_config(self, stem: str, siblings: list[Path]) -> dict[str, Any]:
        prefix = f"{stem}.config."
        for path in siblings:
            if path.name.lower().startswith(prefix.lower()) and self.files.is_config(path.name):
                return read_config(path)
        return {}
