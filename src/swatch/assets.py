"""Asset aggregation across the component tree."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from swatch.entities import Asset, Component


class AssetCollection(Sequence[Asset]):
    """An immutable, ordered sequence of assets."""

    __slots__ = ("_items",)

    def __init__(self, assets: Iterable[Asset] = ()) -> None:
        self._items = tuple(assets)

    @overload
    def __getitem__(self, index: int) -> Asset: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Asset, ...]: ...
    def __getitem__(self, index: int | slice) -> Asset | tuple[Asset, ...]:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Asset]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"AssetCollection({[a.path for a in self._items]!r})"

    def filter_by_ext(self, ext: str) -> AssetCollection:
        """Assets with extension *ext* (``".css"`` or ``"css"``), order kept."""
        ext = ext.lower() if ext.startswith(".") else f".{ext.lower()}"
        return AssetCollection(a for a in self._items if a.ext == ext)

    def to_list(self) -> list[Asset]:
        return list(self._items)


def collect_assets(components: Iterable[Component]) -> AssetCollection:
    """Concatenate each component's assets in component order.

    Recomputed on every call; nothing is cached.
    """
    return AssetCollection(asset for component in components for asset in component.assets)
