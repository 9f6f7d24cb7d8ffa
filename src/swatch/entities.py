"""Catalog entities: components, their variants, and owned assets.

Entities are plain dataclasses tagged with an ``EntityKind``.  Dispatch
sites ``match`` on ``entity.kind`` instead of probing attributes.

A variant points back at its component by handle only; the catalog owns
the tree and is the place to look the component up.
"""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import PurePath
from typing import Any, ClassVar, overload

from swatch._internal.once import AsyncOnce
from swatch.errors import ConfigurationError, EntityError

# Reads a template source from disk: ``await read_text(path)``
type ReadText = Callable[[str], Awaitable[str]]


class EntityKind(StrEnum):
    COMPONENT = "component"
    VARIANT = "variant"
    COLLECTION = "collection"


@dataclass(frozen=True, slots=True)
class Asset:
    """A file owned by a component: stylesheet, script, image, ..."""

    path: str
    name: str
    ext: str

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> Asset:
        p = PurePath(path)
        return cls(path=os.fspath(path), name=p.name, ext=p.suffix.lower())

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "name": self.name, "ext": self.ext}


@dataclass(slots=True, eq=False)
class Variant:
    """One renderable form of a component.

    Attributes:
        handle: Identifier, unique within the owning component.
        component: Handle of the owning component.
        view_path: Template file this variant renders.
        context: Data merged into the template context.
        source: Preset template source; skips reading ``view_path``.
        is_default: Marks the component's default variant explicitly.
    """

    kind: ClassVar[EntityKind] = EntityKind.VARIANT

    handle: str
    component: str = ""
    view_path: str | None = None
    context: dict[str, Any] = field(default_factory=dict)
    label: str = ""
    status: str | None = None
    preview: str | None = None
    is_default: bool = False
    source: str | None = None
    _content: AsyncOnce[str] = field(init=False, repr=False, default_factory=AsyncOnce)

    def __post_init__(self) -> None:
        if not self.label:
            self.label = _titleize(self.handle)
        if self.source is not None:
            self._content.set(self.source)

    @property
    def content(self) -> str | None:
        """The loaded template source, or ``None`` before the first load."""
        return self._content.value

    async def get_content(self, read_text: ReadText) -> str:
        """Load the template source once and reuse it afterwards.

        Concurrent first loads share a single read.
        """
        view_path = self.view_path
        if view_path is None and not self._content.done:
            raise EntityError(f"Variant {self.handle!r} has no view to load")
        return await self._content.get(lambda: read_text(view_path))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "handle": self.handle,
            "component": self.component,
            "label": self.label,
            "status": self.status,
            "view_path": self.view_path,
            "preview": self.preview,
            "is_default": self.is_default,
            "context": dict(self.context),
        }


class VariantCollection(Sequence[Variant]):
    """Ordered variants.  Declaration order is significant.

    A component's variants have unique handles.  Pass ``unique=False`` for
    a cross-component listing such as ``EntityTree.variants()``, where
    every component may have its own ``"default"``.
    """

    __slots__ = ("_items",)

    def __init__(self, variants: Iterable[Variant] = (), *, unique: bool = True) -> None:
        items = tuple(variants)
        if unique:
            seen: set[str] = set()
            for variant in items:
                if variant.handle in seen:
                    raise ConfigurationError(f"Duplicate variant handle {variant.handle!r}")
                seen.add(variant.handle)
        self._items = items

    @overload
    def __getitem__(self, index: int) -> Variant: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Variant, ...]: ...
    def __getitem__(self, index: int | slice) -> Variant | tuple[Variant, ...]:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"VariantCollection({[v.handle for v in self._items]!r})"

    def default(self) -> Variant:
        """The variant flagged ``is_default``, otherwise the first one."""
        if not self._items:
            raise EntityError("Component has no variants")
        for variant in self._items:
            if variant.is_default:
                return variant
        return self._items[0]

    def find(self, handle: str) -> Variant | None:
        """Find by handle; a leading ``@`` is ignored.  The first match wins."""
        handle = handle.removeprefix("@")
        for variant in self._items:
            if variant.handle == handle:
                return variant
        return None

    def to_list(self) -> list[Variant]:
        return list(self._items)


@dataclass(slots=True, eq=False)
class Component:
    """A named unit of the catalog owning one or more variants.

    Variants without an explicit component handle or preview layout take
    them from the component.
    """

    kind: ClassVar[EntityKind] = EntityKind.COMPONENT

    handle: str
    variants: VariantCollection = field(default_factory=VariantCollection)
    path: str | None = None
    label: str = ""
    status: str | None = None
    collated: bool = False
    preview: str | None = None
    notes: str | None = None
    assets: tuple[Asset, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.variants, VariantCollection):
            self.variants = VariantCollection(self.variants)
        if not self.label:
            self.label = _titleize(self.handle)
        self.assets = tuple(self.assets)
        for variant in self.variants:
            if not variant.component:
                variant.component = self.handle
            if variant.preview is None:
                variant.preview = self.preview

    @property
    def context(self) -> dict[str, Any]:
        """The default variant's context (empty without variants)."""
        if not self.variants:
            return {}
        return self.variants.default().context

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "handle": self.handle,
            "label": self.label,
            "status": self.status,
            "path": self.path,
            "collated": self.collated,
            "preview": self.preview,
            "notes": self.notes,
            "variants": [v.to_dict() for v in self.variants],
            "assets": [a.to_dict() for a in self.assets],
        }


def _titleize(handle: str) -> str:
    return handle.replace("-", " ").replace("_", " ").strip().capitalize()
