"""Entity tree navigation.

``EntityTree`` is the shared base of the catalog root and of every
``Collection`` node.  It holds an ordered list of components and nested
collections and knows how to flatten and search them.

Search rules for ``find()``:

- ``find("@button")`` looks up a component by handle anywhere in the
  tree and, failing that, a variant of a direct component by handle.
- ``find("button")`` matches a component handle.
- ``find("path", "components/button")`` matches an attribute value.
- ``find(lambda c: c.status == "wip")`` uses the predicate directly.

Traversal is depth-first in declaration order and the first match wins.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, ClassVar

from swatch.entities import Component, EntityKind, Variant, VariantCollection

type TreeItem = Component | Collection
type Entity = Component | Variant | Collection


def make_predicate(*args: Any) -> Callable[[Any], bool]:
    """Build a matcher from ``find()`` arguments."""
    if len(args) == 1:
        (arg,) = args
        if callable(arg):
            return arg
        return lambda item: getattr(item, "handle", None) == arg
    if len(args) == 2:
        key, value = args
        return lambda item: getattr(item, key, None) == value
    raise TypeError(f"find() takes a handle, a predicate, or a key/value pair, got {args!r}")


class EntityTree:
    """An ordered, nestable set of components and collections."""

    def __init__(self, items: Iterable[TreeItem] = ()) -> None:
        self._items: list[TreeItem] = list(items)

    def __iter__(self) -> Iterator[TreeItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[TreeItem, ...]:
        return tuple(self._items)

    def set_items(self, items: Iterable[TreeItem]) -> None:
        """Replace the tree contents (used by loaders)."""
        self._items = list(items)

    def components(self) -> list[Component]:
        """Direct children that are components."""
        return [item for item in self._items if item.kind is EntityKind.COMPONENT]

    def collections(self) -> list[Collection]:
        return [item for item in self._items if item.kind is EntityKind.COLLECTION]

    def flatten(self) -> list[Component]:
        """Every component in the tree, depth-first pre-order."""
        flat: list[Component] = []
        for item in self._items:
            match item.kind:
                case EntityKind.COLLECTION:
                    flat.extend(item.flatten())
                case EntityKind.COMPONENT:
                    flat.append(item)
        return flat

    def variants(self) -> VariantCollection:
        """Every variant of every component, component order then variant order.

        Built fresh on each call.
        """
        return VariantCollection(
            (variant for component in self.flatten() for variant in component.variants),
            unique=False,
        )

    def find(self, *args: Any) -> Component | Variant | None:
        if not self._items or not args:
            return None
        is_handle_find = len(args) == 1 and isinstance(args[0], str) and args[0].startswith("@")
        if is_handle_find:
            matcher = make_predicate("handle", args[0][1:])
        else:
            matcher = make_predicate(*args)
        for item in self._items:
            match item.kind:
                case EntityKind.COLLECTION:
                    found = item.find(*args)
                    if found is not None:
                        return found
                case EntityKind.COMPONENT:
                    if matcher(item):
                        return item
        if is_handle_find:
            for component in self.components():
                variant = component.variants.find(args[0])
                if variant is not None:
                    return variant
        return None


class Collection(EntityTree):
    """A named grouping of components and nested collections."""

    kind: ClassVar[EntityKind] = EntityKind.COLLECTION

    def __init__(
        self,
        handle: str,
        items: Iterable[TreeItem] = (),
        *,
        path: str | None = None,
        label: str = "",
    ) -> None:
        super().__init__(items)
        self.handle = handle
        self.path = path
        self.label = label or handle.replace("-", " ").capitalize()

    def __repr__(self) -> str:
        return f"Collection({self.handle!r}, {len(self)} items)"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "handle": self.handle,
            "label": self.label,
            "path": self.path,
            "items": [item.to_dict() for item in self._items],
        }
